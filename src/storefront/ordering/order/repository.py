"""In-memory store for Order records."""

from storefront.ordering.order.order import Order


class OrderRepository:
    """Orders keyed by id, kept in creation order. Orders are never deleted."""

    def __init__(self):
        self._orders: dict[str, Order] = {}

    def add(self, order: Order) -> None:
        self._orders[order.id] = order

    def get(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    def discard(self, order_id: str) -> None:
        """Forget an order that was never handed out (failed checkout)."""
        self._orders.pop(order_id, None)

    def find_by_customer(self, customer_id: str) -> list[Order]:
        return [order for order in self._orders.values() if order.customer_id == customer_id]

    def all(self) -> list[Order]:
        return list(self._orders.values())

    def count(self) -> int:
        return len(self._orders)
