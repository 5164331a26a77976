"""
JSON endpoints for client scripts.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from storefront.models.cart import Cart
from storefront.navigation import CategoryTracker, measure
from storefront.pricing import format_price
from storefront.web import session

router = APIRouter(prefix="/api", tags=["api"])


class SectionRect(BaseModel):
    """A category section's bounding box relative to the viewport."""

    rect_top: float
    rect_height: float = Field(..., ge=0)


class ActiveCategoryRequest(BaseModel):
    """Section geometry measured in the browser after a scroll event."""

    sections: Dict[str, SectionRect] = Field(..., description="Section rectangles by category id")
    scroll_top: float = Field(..., description="Current scroll offset")
    previous_scroll_top: float = Field(0, description="Scroll offset of the previous event")
    header_height: float = Field(0, ge=0, description="Height of the sticky category bar")
    active: Optional[str] = Field(None, description="Category currently highlighted")


def _summarize_lines(cart: Cart) -> List[str]:
    return [f"{line.quantity}x {line.display_name}" for line in cart.lines]


@router.get("/menu")
async def get_menu(request: Request) -> Dict[str, Any]:
    """The catalog in document order."""
    menu = session.get_menu(request)
    return {
        "categories": [category.model_dump(by_alias=True, exclude_none=True) for category in menu.categories],
    }


@router.get("/cart")
async def get_cart(request: Request) -> Dict[str, Any]:
    brand = session.get_brand(request)
    language = session.get_language(request)
    cart = session.load_cart(request)
    return {
        "lines": [line.model_dump() for line in cart.lines],
        "summary": _summarize_lines(cart),
        "notes": cart.notes,
        "branch_id": cart.branch_id,
        "total_items": cart.total_items,
        "total_price": cart.total_price,
        "total_display": format_price(cart.total_price, language, brand.currency),
        "order_mode": session.is_order_mode(request),
    }


@router.post("/navigation/active-category")
async def active_category(request: Request, body: ActiveCategoryRequest) -> Dict[str, Optional[str]]:
    """Which category the sticky bar should highlight for the given scroll state."""
    menu = session.get_menu(request)
    tracker = CategoryTracker(menu.category_order, active=body.active, last_scroll_top=body.previous_scroll_top)
    tracker.update_positions({
        category_id: measure(rect.rect_top, rect.rect_height, body.scroll_top, body.header_height)
        for category_id, rect in body.sections.items()
        if category_id in menu.category_order
    })
    return {"active": tracker.on_scroll(body.scroll_top, body.header_height)}
