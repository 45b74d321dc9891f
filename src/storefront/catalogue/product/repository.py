"""In-memory store for Product records."""

from collections.abc import Callable

from storefront.catalogue.product.product import Product


class ProductRepository:
    """Maps product id to the live Product record.

    Callers outside the catalogue never see the records held here; the
    catalogue hands out copies.
    """

    def __init__(self):
        self._products: dict[str, Product] = {}

    def add(self, product: Product) -> None:
        self._products[product.id] = product

    def get(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def remove(self, product_id: str) -> Product | None:
        return self._products.pop(product_id, None)

    def contains(self, product_id: str) -> bool:
        return product_id in self._products

    def all(self) -> list[Product]:
        return list(self._products.values())

    def filter(self, predicate: Callable[[Product], bool]) -> list[Product]:
        return [product for product in self._products.values() if predicate(product)]

    def count(self) -> int:
        return len(self._products)
