"""
Menu data models for categories, items, size options and modifier groups.
"""

import json
from collections import OrderedDict
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from storefront.errors import MenuDataError
from monitoring.logger import get_logger

logger = get_logger(__name__)


class PriceSort(str, Enum):
    """Price ordering applied to a category listing."""
    DEFAULT = "default"
    LOW_HIGH = "low-high"
    HIGH_LOW = "high-low"


class ItemOption(BaseModel):
    """A size or variant of an item; its price replaces the item's base price."""

    name: str = Field(..., description="Option name")
    name_ar: Optional[str] = Field(None, description="Arabic option name")
    price: float = Field(0, description="Price of the item in this variant")


class ModifierOption(BaseModel):
    """A single add-on choice; its price is added on top of the item price."""

    name: str = Field(..., description="Choice name")
    name_ar: Optional[str] = Field(None, description="Arabic choice name")
    price: float = Field(0, description="Price delta")


class ModifierGroup(BaseModel):
    """A named set of add-on choices attached to an item."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Group label")
    name_ar: Optional[str] = Field(None, description="Arabic group label")
    required: bool = Field(False, description="Whether at least one choice must be selected")
    max_selections: int = Field(1, ge=1, alias="maxSelections", description="Choice limit")
    options: List[ModifierOption] = Field(default_factory=list, description="Available choices")

    def find_option(self, name: str) -> Optional[ModifierOption]:
        """Find a choice by exact name."""
        for option in self.options:
            if option.name == name:
                return option
        return None


class MenuItem(BaseModel):
    """Represents a single menu item."""

    name: str = Field(..., description="Name of the item, unique within the menu")
    name_ar: Optional[str] = Field(None, description="Arabic name")
    description: Optional[str] = Field(None, description="Description of the item")
    description_ar: Optional[str] = Field(None, description="Arabic description")
    price: Union[float, List[float], None] = Field(None, description="Price, or a list of prices")
    image: Optional[str] = Field(None, description="Image file name inside the category folder")

    # Customization
    options: List[ItemOption] = Field(default_factory=list, description="Size/variant options")
    modifiers: Dict[str, ModifierGroup] = Field(
        default_factory=dict,
        description="Add-on modifier groups keyed by group name",
    )

    @field_validator("price")
    @classmethod
    def prices_not_negative(cls, v):
        """Reject negative prices."""
        values = v if isinstance(v, list) else [v]
        if any(p is not None and p < 0 for p in values):
            raise ValueError("Price must not be negative")
        return v

    @property
    def base_price(self) -> float:
        """First price of a price list, the scalar price, or 0."""
        if isinstance(self.price, list):
            return self.price[0] if self.price else 0
        return self.price or 0

    @property
    def price_range(self) -> Tuple[float, float]:
        """Lowest and highest listed price."""
        if isinstance(self.price, list):
            if not self.price:
                return (0, 0)
            return (min(self.price), max(self.price))
        price = self.price or 0
        return (price, price)

    def find_option(self, name: Optional[str]) -> Optional[ItemOption]:
        """Find a size/variant option by exact name."""
        for option in self.options:
            if option.name == name:
                return option
        return None

    def matches(self, query: str) -> bool:
        """
        Text search over names and descriptions.

        Latin fields are compared case-insensitively, Arabic fields as-is.
        """
        query_lower = query.lower()
        return (
            query_lower in self.name.lower()
            or bool(self.name_ar and query in self.name_ar)
            or bool(self.description and query_lower in self.description.lower())
            or bool(self.description_ar and query in self.description_ar)
        )


class MenuCategory(BaseModel):
    """Represents a category of menu items."""

    id: str = Field(..., description="Category key in the menu document")
    name: str = Field(..., description="Category name")
    name_ar: Optional[str] = Field(None, description="Arabic category name")
    image: Optional[str] = Field(None, description="Category banner image")
    items: List[MenuItem] = Field(default_factory=list, description="Items in document order")

    def find_item(self, name: str) -> Optional[MenuItem]:
        """Find an item by exact name."""
        for item in self.items:
            if item.name == name:
                return item
        return None


class Menu(BaseModel):
    """The complete catalog, categories kept in document order."""

    categories: List[MenuCategory] = Field(default_factory=list, description="Menu categories")

    @property
    def category_order(self) -> List[str]:
        return [category.id for category in self.categories]

    def get_category(self, category_id: str) -> Optional[MenuCategory]:
        """Get a category by id."""
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def find_item(self, category_id: str, item_name: str) -> Optional[MenuItem]:
        """Find an item inside a category."""
        category = self.get_category(category_id)
        if category is None:
            return None
        return category.find_item(item_name)

    def get_all_items(self) -> List[MenuItem]:
        """All items across categories."""
        items = []
        for category in self.categories:
            items.extend(category.items)
        return items

    def filtered_sorted_items(
        self,
        category_id: str,
        query: str = "",
        sort: Union[PriceSort, str] = PriceSort.DEFAULT,
        enable_search: bool = True,
        enable_sorting: bool = True,
    ) -> List[MenuItem]:
        """
        Items of one category after search filtering and price sorting.

        Args:
            category_id: Category to list
            query: Search text; ignored when empty or search is disabled
            sort: One of PriceSort; unknown values keep document order
            enable_search: Feature toggle for search
            enable_sorting: Feature toggle for price sorting

        Returns:
            A new list; the catalog itself is never reordered
        """
        category = self.get_category(category_id)
        if category is None:
            return []

        items = list(category.items)

        if enable_search and query:
            items = [item for item in items if item.matches(query)]

        if enable_sorting:
            if sort == PriceSort.LOW_HIGH:
                items = sorted(items, key=lambda item: item.price_range[0])
            elif sort == PriceSort.HIGH_LOW:
                items = sorted(items, key=lambda item: item.price_range[1], reverse=True)

        return items


def parse_menu(document: Dict) -> Menu:
    """
    Build a Menu from the decoded JSON document.

    Raises:
        MenuDataError: If the document does not describe a valid catalog
    """
    if not isinstance(document, dict):
        raise MenuDataError("Menu document must be an object keyed by category id")

    categories = []
    for category_id, data in document.items():
        if not isinstance(data, dict):
            raise MenuDataError(f"Category '{category_id}' must be an object")
        try:
            categories.append(MenuCategory(id=category_id, **data))
        except (ValidationError, TypeError) as e:
            raise MenuDataError(f"Invalid category '{category_id}'", detail=str(e)) from e

    return Menu(categories=categories)


def load_menu(path: Union[str, Path]) -> Menu:
    """
    Load the menu catalog from a JSON file.

    Args:
        path: Location of the menu document

    Returns:
        Parsed Menu, categories in document order

    Raises:
        MenuDataError: If the file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f, object_pairs_hook=OrderedDict)
    except OSError as e:
        raise MenuDataError(f"Cannot read menu file: {path}", detail=str(e)) from e
    except json.JSONDecodeError as e:
        raise MenuDataError(f"Menu file is not valid JSON: {path}", detail=str(e)) from e

    menu = parse_menu(document)
    logger.info(
        f"Loaded menu with {len(menu.categories)} categories",
        extra={"path": str(path), "items": len(menu.get_all_items())},
    )
    return menu
