"""Order: an immutable line-item snapshot plus a mutable fulfillment status.

Lines and total are fixed when the order is created from a cart; later
catalogue price or stock changes never reach them. Only the status moves,
and only forward along the state machine below.

State Machine:
    PENDING → CONFIRMED → SHIPPED → DELIVERED
    CANCELLED (from PENDING, CONFIRMED, SHIPPED)
    DELIVERED and CANCELLED are terminal.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.shared.exceptions import InvalidStateError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Line items
# ---------------------------------------------------------------------------
class OrderItem(BaseModel):
    """A frozen copy of a product line taken at order-creation time."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    unit_price: Decimal = Field(ge=0, allow_inf_nan=False)
    quantity: int = Field(ge=1)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------
class Order(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    customer_id: str
    items: tuple[OrderItem, ...] = Field(min_length=1)
    total: Decimal
    status: OrderStatus = OrderStatus.PENDING
    shipping_address: str = Field(min_length=1)
    cancellation_reason: str | None = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def total_must_match_items(self):
        expected = sum((item.subtotal for item in self.items), Decimal("0"))
        if self.total != expected:
            raise ValueError(f"Order total {self.total} does not match line subtotals {expected}")
        return self

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order_id, customer_id, items, shipping_address):
        """Create a PENDING order whose total is fixed from ``items``."""
        items = tuple(items)
        now = datetime.now(UTC)
        return cls(
            id=order_id,
            customer_id=customer_id,
            items=items,
            total=sum((item.subtotal for item in items), Decimal("0")),
            status=OrderStatus.PENDING,
            shipping_address=shipping_address,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def can_transition_to(self, target_status: OrderStatus) -> bool:
        return target_status in _VALID_TRANSITIONS.get(self.status, set())

    def _transition(self, target_status: OrderStatus) -> None:
        if not self.can_transition_to(target_status):
            raise InvalidStateError(
                {"status": [f"Cannot transition from {self.status.value} to {target_status.value}"]}
            )
        self.status = target_status
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def confirm(self):
        """Confirm a pending order."""
        self._transition(OrderStatus.CONFIRMED)

    def ship(self):
        """Ship a confirmed order."""
        self._transition(OrderStatus.SHIPPED)

    def deliver(self):
        """Record delivery of a shipped order."""
        self._transition(OrderStatus.DELIVERED)

    def cancel(self, reason=None):
        """Cancel the order. Delivered and already-cancelled orders cannot be cancelled."""
        if not self.can_transition_to(OrderStatus.CANCELLED):
            raise InvalidStateError(
                {"status": [f"Cannot cancel order in {self.status.value} state"]}
            )
        self.cancellation_reason = reason
        self._transition(OrderStatus.CANCELLED)

    @property
    def is_terminal(self) -> bool:
        return not _VALID_TRANSITIONS[self.status]

    def __str__(self):
        return (
            f"Order(id={self.id!r}, customer_id={self.customer_id!r}, total={self.total}, "
            f"status={self.status.value}, created_at={self.created_at.isoformat()})"
        )
