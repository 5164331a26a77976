"""
Configuration module for the restaurant storefront.
"""

from storefront.config.settings import Settings, get_settings
from storefront.config.brand import BrandConfig, get_brand_config, load_brand_config
from storefront.config.menu_data import get_restaurant_menu

__all__ = [
    "Settings",
    "get_settings",
    "BrandConfig",
    "get_brand_config",
    "load_brand_config",
    "get_restaurant_menu",
]
