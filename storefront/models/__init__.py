"""
Data models for the restaurant storefront.
"""

from storefront.models.menu import (
    ItemOption,
    Menu,
    MenuCategory,
    MenuItem,
    ModifierGroup,
    ModifierOption,
    PriceSort,
)
from storefront.models.cart import Cart, CartLine

__all__ = [
    "ItemOption",
    "Menu",
    "MenuCategory",
    "MenuItem",
    "ModifierGroup",
    "ModifierOption",
    "PriceSort",
    "Cart",
    "CartLine",
]
