"""Catalogue bounded context: products and their stock counters.

The catalogue is the single source of truth for what can be sold, at what
price, and how many units remain. Ordering reads it live and is the only
writer of stock counters during checkout and cancellation.
"""

from storefront.shared.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)
