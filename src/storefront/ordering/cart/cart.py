"""Shopping Cart: a customer's pre-checkout selection of products.

The cart never copies product data. Each line holds a product id and a
quantity; price and stock are looked up in the catalogue every time they are
needed, so validation always runs against live stock and the cart total
always reflects live prices. Checkout freezes a snapshot into an Order.
"""

import threading
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from storefront.catalogue.product.management import Catalogue
from storefront.catalogue.product.product import Product
from storefront.shared.exceptions import InvalidArgumentError, InvalidStateError, NotFoundError


class CartItem(BaseModel):
    """One cart line: a product reference and the requested quantity."""

    model_config = ConfigDict(validate_assignment=True)

    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)


class ShoppingCart:
    """Cart for a single customer. Mutations are serialised per cart."""

    def __init__(self, customer_id: str, catalogue: Catalogue):
        if customer_id is None or not str(customer_id).strip():
            raise InvalidArgumentError({"customer_id": ["Customer ID is required"]})

        self.customer_id = customer_id
        self._catalogue = catalogue
        self._items: list[CartItem] = []
        self._lock = threading.RLock()

    @property
    def items(self) -> list[CartItem]:
        """Snapshot of the cart lines, in the order they were added."""
        with self._lock:
            return [item.model_copy() for item in self._items]

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product: Product | None, quantity: int) -> None:
        """Add a product to the cart (or increase quantity if already present)."""
        if product is None:
            raise InvalidArgumentError({"product": ["Product cannot be empty"]})
        if quantity <= 0:
            raise InvalidArgumentError({"quantity": ["Quantity must be positive"]})

        with self._lock:
            live = self._catalogue.get_item(product.id)
            if not live.is_in_stock:
                raise InvalidStateError({"product_id": [f"Product is out of stock: {live.name}"]})
            if quantity > live.stock_quantity:
                raise InvalidArgumentError({"quantity": ["Requested quantity exceeds available stock"]})

            existing = self._find(live.id)
            if existing:
                new_quantity = existing.quantity + quantity
                if new_quantity > live.stock_quantity:
                    raise InvalidArgumentError({"quantity": ["Total quantity exceeds available stock"]})
                existing.quantity = new_quantity
            else:
                self._items.append(CartItem(product_id=live.id, quantity=quantity))

    def remove_item(self, product_id: str) -> None:
        """Drop the line for ``product_id``; nothing happens if there is none."""
        with self._lock:
            self._items = [item for item in self._items if item.product_id != product_id]

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set the quantity of an existing line."""
        with self._lock:
            item = self._find(product_id)
            if item is None:
                raise NotFoundError({"product_id": [f"Product not found in cart: {product_id}"]})
            if quantity < 1:
                raise InvalidArgumentError({"quantity": ["Quantity must be positive"]})

            live = self._catalogue.get_item(product_id)
            if quantity > live.stock_quantity:
                raise InvalidArgumentError({"quantity": ["Requested quantity exceeds available stock"]})
            item.quantity = quantity

    def clear(self) -> None:
        with self._lock:
            self._items = []

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def total(self) -> Decimal:
        """Sum of quantity × current catalogue price over all lines."""
        with self._lock:
            return sum(
                (self._catalogue.get_item(item.product_id).price * item.quantity for item in self._items),
                Decimal("0"),
            )

    def item_count(self) -> int:
        with self._lock:
            return sum(item.quantity for item in self._items)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def _find(self, product_id: str) -> CartItem | None:
        return next((item for item in self._items if item.product_id == product_id), None)
