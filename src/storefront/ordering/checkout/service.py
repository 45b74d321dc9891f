"""Order service: converts carts into orders and drives their lifecycle.

The service is the only writer of catalogue stock during checkout and
cancellation. Both run as one critical section: the catalogue lock is taken
first, then the service's own lock, and held until every stock counter and
the order store agree. Cart lines are copied before either lock is taken, so
a cart lock is never requested while they are held.

Flow:
    1. create_order → validate every line, assign id, store PENDING order,
       debit stock
    2. confirm → ship → deliver
    3. cancel (from PENDING, CONFIRMED or SHIPPED) → credit stock back from
       the order's frozen lines
"""

import threading

from storefront.catalogue.product.management import Catalogue
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.domain import logger
from storefront.ordering.order.order import Order, OrderItem
from storefront.ordering.order.repository import OrderRepository
from storefront.shared.config import get_settings
from storefront.shared.exceptions import InvalidArgumentError, InvalidStateError, NotFoundError, StorefrontError


class OrderService:
    def __init__(self, catalogue: Catalogue, settings=None):
        settings = settings or get_settings()
        self._catalogue = catalogue
        self._repository = OrderRepository()
        self._lock = threading.RLock()
        self._order_counter = 0
        self._id_prefix = settings.order_id_prefix
        self._id_width = settings.order_id_width

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def create_order(self, cart: ShoppingCart | None, shipping_address: str | None) -> Order:
        """Create a PENDING order from ``cart`` and reserve its stock."""
        if cart is None or cart.is_empty():
            raise InvalidArgumentError({"cart": ["Cannot create order from empty cart"]})
        if shipping_address is None or not shipping_address.strip():
            raise InvalidArgumentError({"shipping_address": ["Shipping address is required"]})
        if cart.customer_id is None or not str(cart.customer_id).strip():
            raise InvalidArgumentError({"customer_id": ["Customer ID is required"]})

        lines = cart.items
        if not lines:
            raise InvalidArgumentError({"cart": ["Cannot create order from empty cart"]})

        with self._catalogue.locked(), self._lock:
            # Validate stock availability
            for line in lines:
                if not self._catalogue.is_available(line.product_id, line.quantity):
                    product = self._catalogue.get_item(line.product_id)
                    raise InvalidStateError({"product_id": [f"Insufficient stock for product: {product.name}"]})

            order_items = []
            for line in lines:
                product = self._catalogue.get_item(line.product_id)
                order_items.append(
                    OrderItem(
                        product_id=product.id,
                        name=product.name,
                        unit_price=product.price,
                        quantity=line.quantity,
                    )
                )

            order = Order.create(
                order_id=self._next_order_id(),
                customer_id=cart.customer_id,
                items=order_items,
                shipping_address=shipping_address,
            )
            self._repository.add(order)
            self._debit_all(order)

            logger.info(
                "Order created",
                order_id=order.id,
                customer_id=order.customer_id,
                line_count=len(order.items),
                total=str(order.total),
            )
            return order.model_copy()

    def _debit_all(self, order: Order) -> None:
        """Debit every line, undoing earlier debits if one fails."""
        debited = []
        try:
            for item in order.items:
                self._catalogue.debit_stock(item.product_id, item.quantity)
                debited.append(item)
        except StorefrontError:
            for item in debited:
                self._catalogue.credit_stock(item.product_id, item.quantity)
            self._repository.discard(order.id)
            logger.error("Order rolled back after failed stock debit", order_id=order.id)
            raise

    def _next_order_id(self) -> str:
        self._order_counter += 1
        return f"{self._id_prefix}{self._order_counter:0{self._id_width}d}"

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_order(self, order_id: str) -> Order:
        with self._lock:
            return self._get(order_id).model_copy()

    def orders_for_customer(self, customer_id: str) -> list[Order]:
        with self._lock:
            return [order.model_copy() for order in self._repository.find_by_customer(customer_id)]

    def list_all(self) -> list[Order]:
        with self._lock:
            return [order.model_copy() for order in self._repository.all()]

    def order_count(self) -> int:
        with self._lock:
            return self._repository.count()

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def confirm(self, order_id: str) -> Order:
        return self._apply(order_id, Order.confirm)

    def ship(self, order_id: str) -> Order:
        return self._apply(order_id, Order.ship)

    def deliver(self, order_id: str) -> Order:
        return self._apply(order_id, Order.deliver)

    def cancel(self, order_id: str, reason: str | None = None) -> Order:
        """Cancel the order and return its frozen quantities to stock."""
        with self._catalogue.locked(), self._lock:
            order = self._get(order_id)
            previous = order.status
            order.cancel(reason)

            # Restore stock
            for item in order.items:
                if not self._catalogue.contains(item.product_id):
                    logger.warning(
                        "Product no longer in catalogue, stock not restored",
                        order_id=order.id,
                        product_id=item.product_id,
                        quantity=item.quantity,
                    )
                    continue
                self._catalogue.credit_stock(item.product_id, item.quantity)

            logger.info("Order cancelled", order_id=order.id, previous_status=previous.value, reason=reason)
            return order.model_copy()

    def _apply(self, order_id, transition) -> Order:
        with self._lock:
            order = self._get(order_id)
            previous = order.status
            transition(order)
            logger.info(
                "Order status changed",
                order_id=order.id,
                previous_status=previous.value,
                status=order.status.value,
            )
            return order.model_copy()

    def _get(self, order_id: str) -> Order:
        order = self._repository.get(order_id)
        if order is None:
            raise NotFoundError({"order_id": [f"Order not found: {order_id}"]})
        return order
