import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Point the settings at the requested environment before any storefront
    module configures logging at import time.
    """
    os.environ["STOREFRONT_ENV"] = session.config.option.env

    from storefront.shared.config import get_settings

    get_settings.cache_clear()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Forget cached settings so tests that patch the environment stay isolated."""
    from storefront.shared.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
