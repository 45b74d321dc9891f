"""Tests for Product stock guards and derived properties."""

from decimal import Decimal

import pydantic
import pytest
from storefront.catalogue.product.product import Product
from storefront.shared.exceptions import InvalidArgumentError


def _make_product(**overrides):
    defaults = {
        "id": "P100",
        "name": "Keyboard",
        "description": "Mechanical keyboard",
        "price": Decimal("89.50"),
        "stock_quantity": 5,
        "category": "Electronics",
    }
    defaults.update(overrides)
    return Product(**defaults)


class TestProductConstruction:
    def test_price_is_exact_decimal(self):
        product = _make_product(price="999.99")
        assert product.price == Decimal("999.99")
        assert isinstance(product.price, Decimal)

    def test_negative_stock_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            _make_product(stock_quantity=-1)

    def test_negative_price_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            _make_product(price="-1.00")

    def test_is_in_stock(self):
        assert _make_product(stock_quantity=1).is_in_stock
        assert not _make_product(stock_quantity=0).is_in_stock

    def test_str_includes_identity_and_stock(self):
        text = str(_make_product())
        assert "P100" in text
        assert "stock_quantity=5" in text


class TestReduceStock:
    def test_reduce_stock(self):
        product = _make_product()
        product.reduce_stock(3)
        assert product.stock_quantity == 2

    def test_reduce_to_zero(self):
        product = _make_product()
        product.reduce_stock(5)
        assert product.stock_quantity == 0
        assert not product.is_in_stock

    def test_reduce_more_than_available(self):
        product = _make_product()
        with pytest.raises(InvalidArgumentError) as exc:
            product.reduce_stock(6)
        assert "Available: 5" in exc.value.messages["quantity"][0]
        assert product.stock_quantity == 5

    def test_reduce_negative_quantity(self):
        product = _make_product()
        with pytest.raises(InvalidArgumentError):
            product.reduce_stock(-1)


class TestAddStock:
    def test_add_stock(self):
        product = _make_product()
        product.add_stock(10)
        assert product.stock_quantity == 15

    def test_add_zero_is_allowed(self):
        product = _make_product()
        product.add_stock(0)
        assert product.stock_quantity == 5

    def test_add_negative_quantity(self):
        product = _make_product()
        with pytest.raises(InvalidArgumentError) as exc:
            product.add_stock(-1)
        assert exc.value.messages == {"quantity": ["Quantity cannot be negative"]}


class TestSetStock:
    def test_set_stock(self):
        product = _make_product()
        product.set_stock(42)
        assert product.stock_quantity == 42

    def test_set_negative_stock(self):
        product = _make_product()
        with pytest.raises(InvalidArgumentError):
            product.set_stock(-3)
        assert product.stock_quantity == 5


class TestMatches:
    def test_matches_name_ignoring_case(self):
        assert _make_product().matches("KEYB")

    def test_matches_description(self):
        assert _make_product().matches("mechanical")

    def test_no_match(self):
        assert not _make_product().matches("monitor")
