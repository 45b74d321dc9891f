"""Catalogue service: product management and stock counters.

All reads and writes go through one re-entrant lock, so a stock mutation is
observed by the next caller immediately and never interleaves with another.
The ordering context borrows the same lock through ``locked()`` when it has
to validate and debit several products as one unit.
"""

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from storefront.catalogue.domain import logger
from storefront.catalogue.product.initialization import seed_catalogue
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.repository import ProductRepository
from storefront.shared.exceptions import InvalidArgumentError, NotFoundError


class Catalogue:
    def __init__(self, products: Iterable[Product] = ()):
        self._repository = ProductRepository()
        self._lock = threading.RLock()
        for product in products:
            self.add_item(product)

    @classmethod
    def with_defaults(cls) -> "Catalogue":
        """Build a catalogue holding the default product seed.

        The catalogue comes back empty when seeding is switched off in settings.
        """
        catalogue = cls()
        seed_catalogue(catalogue)
        return catalogue

    @contextmanager
    def locked(self) -> Iterator["Catalogue"]:
        """Hold the catalogue's exclusive section for a multi-step operation."""
        with self._lock:
            yield self

    # -------------------------------------------------------------------
    # Product management
    # -------------------------------------------------------------------
    def add_item(self, product: Product | None) -> None:
        """Insert a product, replacing any product with the same id."""
        self._require_identity(product)
        with self._lock:
            self._repository.add(product.model_copy())
        logger.debug("Product added", product_id=product.id, stock=product.stock_quantity)

    def update_item(self, product: Product | None) -> None:
        """Replace an existing product's record."""
        self._require_identity(product)
        with self._lock:
            if not self._repository.contains(product.id):
                raise NotFoundError({"product_id": [f"Product not found: {product.id}"]})
            self._repository.add(product.model_copy())
        logger.debug("Product updated", product_id=product.id)

    def remove_item(self, product_id: str) -> None:
        with self._lock:
            if self._repository.remove(product_id) is None:
                raise NotFoundError({"product_id": [f"Product not found: {product_id}"]})
        logger.debug("Product removed", product_id=product_id)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_item(self, product_id: str) -> Product:
        """Return a snapshot of the product."""
        with self._lock:
            return self._get(product_id).model_copy()

    def contains(self, product_id: str) -> bool:
        with self._lock:
            return self._repository.contains(product_id)

    def list_all(self) -> list[Product]:
        with self._lock:
            return [product.model_copy() for product in self._repository.all()]

    def list_by_category(self, category: str) -> list[Product]:
        """Products whose category equals ``category``, ignoring case."""
        if not category:
            return []
        wanted = category.lower()
        with self._lock:
            matches = self._repository.filter(lambda p: (p.category or "").lower() == wanted)
            return [product.model_copy() for product in matches]

    def search(self, keyword: str) -> list[Product]:
        """Products whose name or description contains ``keyword``, ignoring case."""
        if not keyword:
            return []
        with self._lock:
            return [product.model_copy() for product in self._repository.filter(lambda p: p.matches(keyword))]

    def count(self) -> int:
        with self._lock:
            return self._repository.count()

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def is_available(self, product_id: str, quantity: int) -> bool:
        with self._lock:
            return self._get(product_id).stock_quantity >= quantity

    def debit_stock(self, product_id: str, quantity: int) -> None:
        with self._lock:
            product = self._get(product_id)
            product.reduce_stock(quantity)
            remaining = product.stock_quantity
        logger.info("Stock debited", product_id=product_id, quantity=quantity, remaining=remaining)

    def credit_stock(self, product_id: str, quantity: int) -> None:
        with self._lock:
            product = self._get(product_id)
            product.add_stock(quantity)
            remaining = product.stock_quantity
        logger.info("Stock credited", product_id=product_id, quantity=quantity, remaining=remaining)

    def set_stock(self, product_id: str, quantity: int) -> None:
        with self._lock:
            product = self._get(product_id)
            previous = product.stock_quantity
            product.set_stock(quantity)
        logger.info("Stock overwritten", product_id=product_id, previous=previous, current=quantity)

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _get(self, product_id: str) -> Product:
        product = self._repository.get(product_id)
        if product is None:
            raise NotFoundError({"product_id": [f"Product not found: {product_id}"]})
        return product

    @staticmethod
    def _require_identity(product: Product | None) -> None:
        if product is None:
            raise InvalidArgumentError({"product": ["Product cannot be empty"]})
        if not product.id:
            raise InvalidArgumentError({"product_id": ["Product id cannot be empty"]})
