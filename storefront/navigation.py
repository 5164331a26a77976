"""
Active-category tracking for the sticky category bar.

All geometry is in document pixels: a section's ``top`` is where it starts
relative to the document, already shifted up by the sticky header.
"""

import math
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

# Offsets tuned for the sticky category bar
SECTION_LEAD = 50
VIEWPORT_LEAD = 100
MIDDLE_SNAP = 200


class CategoryPosition(BaseModel):
    """Vertical extent of a rendered category section."""

    top: float
    height: float = Field(..., ge=0)

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def middle(self) -> float:
        return self.top + self.height / 2


def measure(rect_top: float, rect_height: float, scroll_top: float, header_height: float) -> CategoryPosition:
    """Document position of a section from its viewport rectangle."""
    return CategoryPosition(
        top=scroll_top + rect_top - header_height - SECTION_LEAD,
        height=rect_height,
    )


class CategoryTracker:
    """Follows scrolling and reports which category the visitor is reading."""

    def __init__(self, category_order: List[str], active: Optional[str] = None, last_scroll_top: float = 0):
        self.category_order = list(category_order)
        self.active = active or (self.category_order[0] if self.category_order else None)
        self.last_scroll_top = last_scroll_top
        self.positions: Dict[str, CategoryPosition] = {}

    def update_positions(self, positions: Dict[str, CategoryPosition]) -> None:
        """Replace measured positions, e.g. after a resize or a new search."""
        self.positions = dict(positions)

    def on_scroll(self, scroll_top: float, header_height: float = 0) -> Optional[str]:
        """
        Re-evaluate the active category after a scroll event.

        The nearest section top inside a window around the viewport anchor
        wins; the window leans forward when scrolling down and backward when
        scrolling up. A section whose middle is even closer, and within
        MIDDLE_SNAP pixels, overrides it.
        """
        scrolling_down = scroll_top > self.last_scroll_top
        self.last_scroll_top = scroll_top

        anchor = scroll_top + header_height + VIEWPORT_LEAD
        current = self.active
        min_distance = math.inf

        for category_id, position in self.positions.items():
            distance = abs(position.top - anchor)
            if scrolling_down:
                in_window = position.top <= anchor and position.bottom > anchor - VIEWPORT_LEAD
            else:
                in_window = position.top <= anchor + VIEWPORT_LEAD and position.bottom > anchor - MIDDLE_SNAP
            if in_window and distance < min_distance:
                min_distance = distance
                current = category_id

        for category_id, position in self.positions.items():
            distance = abs(position.middle - anchor)
            if distance < min_distance and distance < MIDDLE_SNAP:
                min_distance = distance
                current = category_id

        if current:
            self.active = current
        return self.active
