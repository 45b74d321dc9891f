"""Catalogue initialization: the default product seed."""

from decimal import Decimal

from storefront.catalogue.product.product import Product
from storefront.shared.config import get_settings

# (id, name, description, price, stock, category)
DEFAULT_PRODUCTS = (
    ("P001", "Laptop", "High-performance laptop", "999.99", 10, "Electronics"),
    ("P002", "Smartphone", "Latest smartphone", "699.99", 25, "Electronics"),
    ("P003", "Headphones", "Wireless headphones", "149.99", 50, "Electronics"),
    ("P004", "Book", "Programming guide", "39.99", 100, "Books"),
    ("P005", "Mouse", "Wireless mouse", "29.99", 75, "Electronics"),
)


def build_products(rows):
    """Turn seed rows into Product records."""
    return [
        Product(
            id=product_id,
            name=name,
            description=description,
            price=Decimal(price),
            stock_quantity=stock,
            category=category,
        )
        for product_id, name, description, price, stock, category in rows
    ]


def seed_catalogue(catalogue, rows=DEFAULT_PRODUCTS):
    """Load seed rows into ``catalogue``.

    Skipped when seeding is switched off in settings. Returns the number of
    products added.
    """
    if not get_settings().seed_catalogue:
        return 0

    products = build_products(rows)
    for product in products:
        catalogue.add_item(product)
    return len(products)
