"""Product: a sellable catalogue item and its stock counter.

Prices are exact decimals; stock is a non-negative integer. Stock is only
changed through ``reduce_stock``/``add_stock``/``set_stock`` so that every
mutation passes the same guards.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from storefront.shared.exceptions import InvalidArgumentError


class Product(BaseModel):
    """A catalogue item identified by ``id``."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    name: str
    description: str = ""
    price: Decimal = Field(ge=0, allow_inf_nan=False)
    stock_quantity: int = Field(default=0, ge=0)
    category: str = ""

    @property
    def is_in_stock(self) -> bool:
        return self.stock_quantity > 0

    def reduce_stock(self, quantity: int) -> None:
        """Take ``quantity`` units out of stock."""
        if quantity < 0:
            raise InvalidArgumentError({"quantity": ["Quantity cannot be negative"]})
        if quantity > self.stock_quantity:
            raise InvalidArgumentError(
                {"quantity": [f"Insufficient stock for {self.id}. Available: {self.stock_quantity}"]}
            )
        self.stock_quantity -= quantity

    def add_stock(self, quantity: int) -> None:
        """Put ``quantity`` units back into stock."""
        if quantity < 0:
            raise InvalidArgumentError({"quantity": ["Quantity cannot be negative"]})
        self.stock_quantity += quantity

    def set_stock(self, quantity: int) -> None:
        """Overwrite the stock counter (administrative correction)."""
        if quantity < 0:
            raise InvalidArgumentError({"quantity": ["Stock cannot be negative"]})
        self.stock_quantity = quantity

    def matches(self, keyword: str) -> bool:
        """Case-insensitive substring match over name or description."""
        needle = keyword.lower()
        return needle in self.name.lower() or needle in (self.description or "").lower()

    def __str__(self):
        return f"Product(id={self.id!r}, name={self.name!r}, price={self.price}, stock_quantity={self.stock_quantity})"
