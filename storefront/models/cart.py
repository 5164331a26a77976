"""
Cart data models for the visitor's in-progress order.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from storefront.models.menu import ItemOption, MenuItem
from storefront.pricing import (
    ModifierSelection,
    get_cart_item_id,
    get_item_display_name,
    get_item_price,
)
from monitoring.logger import get_logger

logger = get_logger(__name__)


class CartLine(BaseModel):
    """One entry in the cart: an item with a specific customization."""

    id: str = Field(..., description="Cart-line identity derived from item and choices")
    item_name: str = Field(..., description="Catalog item name")
    category_id: str = Field(..., description="Category the item was picked from")
    display_name: str = Field(..., description="Name shown in the cart and the order message")
    unit_price: float = Field(..., ge=0, description="Price per unit captured when added")
    quantity: int = Field(..., gt=0, description="Quantity ordered")

    # Customizations
    selected_option: Optional[str] = Field(None, description="Chosen size/variant")
    selected_modifiers: ModifierSelection = Field(
        default_factory=dict,
        description="Chosen add-ons by modifier group",
    )

    @property
    def subtotal(self) -> float:
        """Calculate subtotal for this line."""
        return self.unit_price * self.quantity


class Cart(BaseModel):
    """The visitor's in-progress order."""

    lines: List[CartLine] = Field(default_factory=list, description="Lines in insertion order")
    notes: str = Field("", description="Special instructions for the whole order")
    branch_id: Optional[str] = Field(None, description="Branch chosen to receive the order")
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def total_items(self) -> int:
        """Sum of quantities across lines."""
        return sum(line.quantity for line in self.lines)

    @property
    def total_price(self) -> float:
        """Sum of line subtotals."""
        return sum(line.subtotal for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get_line(self, line_id: str) -> Optional[CartLine]:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def quantity_of(self, line_id: str) -> int:
        """Quantity of a line, 0 when it is not in the cart."""
        line = self.get_line(line_id)
        return line.quantity if line else 0

    def add(
        self,
        item: MenuItem,
        category_id: str,
        quantity: int = 1,
        selected_option: Optional[ItemOption] = None,
        selected_modifiers: Optional[ModifierSelection] = None,
        language: str = "en",
    ) -> CartLine:
        """
        Add an item to the cart.

        A line with the same identity gains the quantity; otherwise a new
        line is appended with the unit price and display name as of now.

        Returns:
            The created or updated CartLine
        """
        if quantity <= 0:
            raise ValueError("Quantity must be positive")

        selected_modifiers = selected_modifiers or {}
        line_id = get_cart_item_id(item, selected_option, selected_modifiers)

        line = self.get_line(line_id)
        if line is not None:
            line.quantity += quantity
        else:
            line = CartLine(
                id=line_id,
                item_name=item.name,
                category_id=category_id,
                display_name=get_item_display_name(item, selected_option, language),
                unit_price=get_item_price(item, selected_option, selected_modifiers),
                quantity=quantity,
                selected_option=selected_option.name if selected_option else None,
                selected_modifiers=selected_modifiers,
            )
            self.lines.append(line)

        self.updated_at = datetime.now()
        logger.info(
            f"Cart line {line_id} now at quantity {line.quantity}",
            extra={"line_id": line_id, "added": quantity},
        )
        return line

    def update_quantity(self, line_id: str, new_quantity: int) -> bool:
        """
        Set the quantity of a line; zero or less removes it.

        Returns:
            True if the line existed
        """
        if new_quantity <= 0:
            return self.remove(line_id)

        line = self.get_line(line_id)
        if line is None:
            return False
        line.quantity = new_quantity
        self.updated_at = datetime.now()
        return True

    def remove(self, line_id: str) -> bool:
        """
        Remove a line.

        Returns:
            True if a line was removed
        """
        remaining = [line for line in self.lines if line.id != line_id]
        removed = len(remaining) != len(self.lines)
        self.lines = remaining
        if removed:
            self.updated_at = datetime.now()
        return removed

    def clear(self) -> None:
        """Remove all lines and the order notes."""
        self.lines = []
        self.notes = ""
        self.updated_at = datetime.now()
