import pytest
from storefront.catalogue.product.management import Catalogue
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.checkout.service import OrderService


@pytest.fixture
def catalogue():
    return Catalogue.with_defaults()


@pytest.fixture
def order_service(catalogue):
    return OrderService(catalogue)


@pytest.fixture
def make_cart(catalogue):
    """Factory for carts bound to the test catalogue."""

    def _make_cart(customer_id="cust-001"):
        return ShoppingCart(customer_id=customer_id, catalogue=catalogue)

    return _make_cart
