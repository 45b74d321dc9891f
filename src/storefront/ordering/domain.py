"""Ordering bounded context: Shopping Cart and Order Management.

Handles the per-customer shopping cart, the order lifecycle state machine,
and the checkout flow that converts carts to orders while reserving stock
in the catalogue.
"""

from storefront.shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)
