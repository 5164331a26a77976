"""
Pytest configuration and fixtures.
"""

import os

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

# Load test environment variables
load_dotenv(".env.local")


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment."""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "DEBUG"

    yield


@pytest.fixture
def mock_menu():
    """The packaged sample menu."""
    from storefront.config.settings import DEFAULT_MENU_PATH
    from storefront.models.menu import load_menu
    return load_menu(DEFAULT_MENU_PATH)


@pytest.fixture
def brand_config():
    """The built-in brand configuration."""
    from storefront.config.brand import load_brand_config
    return load_brand_config()


@pytest.fixture
def mock_cart(mock_menu):
    """A cart holding two large bubble waffles and a strawberry shake."""
    from storefront.models.cart import Cart

    cart = Cart(branch_id="kilimani")
    waffle = mock_menu.find_item("waffles", "Bubble Waffle")
    cart.add(waffle, "waffles", quantity=2, selected_option=waffle.find_option("Large"))
    cart.add(mock_menu.find_item("milkshakes", "Strawberry Shake"), "milkshakes")
    return cart


@pytest.fixture
def app(mock_menu, brand_config):
    """Storefront application with test settings."""
    from storefront.app import create_app
    from storefront.config.settings import Settings
    from monitoring.metrics import get_metrics_collector

    get_metrics_collector().reset()
    settings = Settings(environment="test", session_secret="test-secret")
    return create_app(settings, brand=brand_config, menu=mock_menu)


@pytest_asyncio.fixture
async def client(app):
    """HTTP client bound to the app; keeps the session cookie between requests."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
