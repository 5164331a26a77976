"""
Restaurant menu data configuration.
Edit data/menu.json, or point MENU_DATA_PATH at your own menu document.
"""

from functools import lru_cache

from storefront.config.settings import get_settings
from storefront.models.menu import Menu, load_menu


@lru_cache(maxsize=1)
def get_restaurant_menu() -> Menu:
    """
    Get the restaurant menu with all categories and items.

    The catalog is static, so it is read once per process.
    """
    return load_menu(get_settings().menu_data_path)
