import pytest
from storefront.catalogue.product.management import Catalogue


@pytest.fixture
def catalogue():
    """A catalogue holding the default five-product seed."""
    return Catalogue.with_defaults()


@pytest.fixture
def empty_catalogue():
    return Catalogue()
