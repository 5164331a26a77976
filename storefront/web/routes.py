"""
Page routes: menu, item customization, cart and order handoff.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from storefront.config.brand import BrandConfig, get_branch_text
from storefront.errors import (
    FeatureDisabledError,
    InvalidSelectionError,
    OrderingDisabledError,
    UnknownItemError,
)
from storefront.models.cart import Cart
from storefront.models.menu import Menu, MenuItem, PriceSort
from storefront.ordering.handoff import create_order_handoff
from storefront.pricing import (
    ModifierSelection,
    get_cart_item_id,
    get_item_price,
    is_option_price_different,
)
from storefront.selection import (
    default_modifiers,
    default_option,
    parse_modifier_fields,
    toggle_modifier,
    validate_selection,
)
from storefront.seo import generate_structured_data
from storefront.web import session
from storefront.web.templating import templates
from monitoring.logger import get_logger
from monitoring.metrics import Metrics, get_metrics_collector

logger = get_logger(__name__)

router = APIRouter(tags=["storefront"])

MAX_LINE_QUANTITY = 99
MAX_NOTES_LENGTH = 500


def _base_context(request: Request, brand: BrandConfig, cart: Cart) -> Dict[str, Any]:
    language = session.get_language(request)
    return {
        "brand": brand,
        "language": language,
        "direction": brand.languages[language].dir,
        "brand_name": brand.get_brand_name(language),
        "order_mode": session.is_order_mode(request),
        "cart": cart,
        "currency": brand.currency,
        "structured_data": generate_structured_data(brand),
        "get_branch_text": get_branch_text,
    }


def _encode_modifiers(selection: ModifierSelection) -> List[str]:
    return [f"{group}::{choice}" for group, choices in selection.items() for choice in choices]


def _card(item: MenuItem, category_id: str, brand: BrandConfig, cart: Cart) -> Dict[str, Any]:
    """Template data for one menu card, priced with the default customization."""
    features = brand.features
    option = default_option(item) if features.enable_product_options else None
    modifiers = default_modifiers(item) if features.enable_modifiers else {}
    line_id = get_cart_item_id(item, option, modifiers)
    return {
        "item": item,
        "category_id": category_id,
        "option": option,
        "modifiers": modifiers,
        "modifier_fields": _encode_modifiers(modifiers),
        "price": get_item_price(item, option, modifiers),
        "base_price": item.base_price,
        "price_changed": is_option_price_different(item, option),
        "line_id": line_id,
        "cart_quantity": cart.quantity_of(line_id),
    }


def _require_cart(request: Request) -> BrandConfig:
    brand = session.get_brand(request)
    if not brand.features.enable_cart:
        raise FeatureDisabledError("The cart is disabled")
    if not session.is_order_mode(request):
        raise OrderingDisabledError("Ordering is only available in order mode")
    return brand


def _find_item(menu: Menu, category_id: str, item_name: str) -> MenuItem:
    item = menu.find_item(category_id, item_name)
    if item is None:
        raise UnknownItemError(f"No item '{item_name}' in category '{category_id}'")
    return item


def _check_notes(notes: str) -> str:
    if len(notes) > MAX_NOTES_LENGTH:
        raise InvalidSelectionError(f"Special instructions are limited to {MAX_NOTES_LENGTH} characters")
    return notes


def _safe_next(next_url: Optional[str], default: str = "/") -> str:
    # Only same-site relative paths
    if next_url and next_url.startswith("/") and not next_url.startswith("//"):
        return next_url
    return default


@router.get("/", response_class=HTMLResponse)
async def menu_page(
    request: Request,
    q: str = "",
    sort: str = PriceSort.DEFAULT.value,
    order: Optional[str] = None,
    category: Optional[str] = None,
):
    """Render the full menu, every category as one section."""
    if order is not None:
        session.set_order_mode(request, order.lower() == "true")

    brand = session.get_brand(request)
    menu = session.get_menu(request)
    cart = session.load_cart(request)
    features = brand.features

    query = q.strip() if features.enable_search else ""
    sections = []
    for menu_category in menu.categories:
        items = menu.filtered_sorted_items(
            menu_category.id,
            query=query,
            sort=sort,
            enable_search=features.enable_search,
            enable_sorting=features.enable_price_sorting,
        )
        if query and not items:
            continue
        sections.append({
            "category": menu_category,
            "cards": [_card(item, menu_category.id, brand, cart) for item in items],
        })

    active_category = category if category in menu.category_order else (
        menu.category_order[0] if menu.category_order else None
    )

    # Tabs reload the page so the server can highlight the chosen category
    kept = [("q", query)] if query else []
    if sort != PriceSort.DEFAULT.value:
        kept.append(("sort", sort))
    category_links = {
        category_id: f"/?{urlencode([('category', category_id)] + kept)}#{category_id}"
        for category_id in menu.category_order
    }

    get_metrics_collector().increment_counter(Metrics.PAGE_VIEWS)

    context = _base_context(request, brand, cart)
    context.update({
        "menu": menu,
        "sections": sections,
        "query": query,
        "sort": sort,
        "sort_options": [s.value for s in PriceSort],
        "active_category": active_category,
        "category_links": category_links,
    })
    return templates.TemplateResponse(request, "menu.html", context)


@router.get("/items/{category_id}/{item_name}", response_class=HTMLResponse)
async def item_detail(
    request: Request,
    category_id: str,
    item_name: str,
    option: Optional[str] = None,
    modifier: List[str] = Query(default=[]),
):
    """Item customization view with a live price for the chosen options."""
    brand = session.get_brand(request)
    if not brand.features.enable_item_modal:
        raise FeatureDisabledError("Item details are disabled")

    item = _find_item(session.get_menu(request), category_id, item_name)
    submitted = parse_modifier_fields(modifier) if modifier else default_modifiers(item)

    try:
        selected_option, selected_modifiers = validate_selection(
            item,
            option,
            submitted,
            enable_options=brand.features.enable_product_options,
            enable_modifiers=brand.features.enable_modifiers,
        )
        error = None
    except InvalidSelectionError as e:
        # Toggling can leave a required group empty; show the form with a hint
        selected_option = item.find_option(option) or default_option(item)
        selected_modifiers = {
            group: [c for c in submitted.get(group, []) if item.modifiers[group].find_option(c)]
            for group in item.modifiers
        }
        error = e.message

    base_url = request.url_for("item_detail", category_id=category_id, item_name=item_name)

    def toggle_url(group_name: str, choice_name: str) -> str:
        toggled = dict(selected_modifiers)
        toggled[group_name] = toggle_modifier(item, group_name, choice_name, selected_modifiers.get(group_name, []))
        params = [("modifier", value) for value in _encode_modifiers(toggled)]
        if selected_option is not None:
            params.insert(0, ("option", selected_option.name))
        return f"{base_url.path}?{urlencode(params)}"

    def option_url(option_name: str) -> str:
        params = [("option", option_name)] + [("modifier", v) for v in _encode_modifiers(selected_modifiers)]
        return f"{base_url.path}?{urlencode(params)}"

    cart = session.load_cart(request)
    get_metrics_collector().increment_counter(Metrics.ITEM_VIEWS)

    context = _base_context(request, brand, cart)
    context.update({
        "item": item,
        "category_id": category_id,
        "selected_option": selected_option,
        "selected_modifiers": selected_modifiers,
        "modifier_fields": _encode_modifiers(selected_modifiers),
        "price": get_item_price(item, selected_option, selected_modifiers),
        "price_changed": is_option_price_different(item, selected_option),
        "toggle_url": toggle_url,
        "option_url": option_url,
        "error": error,
    })
    return templates.TemplateResponse(request, "item.html", context)


@router.post("/cart/add")
async def add_to_cart(
    request: Request,
    category_id: str = Form(...),
    item_name: str = Form(...),
    option: Optional[str] = Form(None),
    quantity: int = Form(1),
    modifier: List[str] = Form(default=[]),
    next_url: Optional[str] = Form(None, alias="next"),
):
    """Add a customized item to the cart."""
    brand = _require_cart(request)
    if quantity <= 0 or quantity > MAX_LINE_QUANTITY:
        raise InvalidSelectionError(f"Quantity must be between 1 and {MAX_LINE_QUANTITY}")

    item = _find_item(session.get_menu(request), category_id, item_name)
    selected_option, selected_modifiers = validate_selection(
        item,
        option,
        parse_modifier_fields(modifier),
        enable_options=brand.features.enable_product_options,
        enable_modifiers=brand.features.enable_modifiers,
    )

    cart = session.load_cart(request)
    cart.add(
        item,
        category_id,
        quantity=quantity,
        selected_option=selected_option,
        selected_modifiers=selected_modifiers,
        language=session.get_language(request),
    )
    session.save_cart(request, cart)
    get_metrics_collector().increment_counter(Metrics.CART_ADDS, quantity)

    return RedirectResponse(_safe_next(next_url), status_code=303)


@router.post("/cart/update")
async def update_cart_line(
    request: Request,
    line_id: str = Form(...),
    quantity: int = Form(...),
    next_url: Optional[str] = Form(None, alias="next"),
):
    """Set a line's quantity; zero removes it."""
    _require_cart(request)
    cart = session.load_cart(request)
    if not cart.update_quantity(line_id, min(quantity, MAX_LINE_QUANTITY)):
        raise UnknownItemError(f"No cart line '{line_id}'")
    if quantity <= 0:
        get_metrics_collector().increment_counter(Metrics.CART_REMOVALS)
    session.save_cart(request, cart)
    return RedirectResponse(_safe_next(next_url, "/cart"), status_code=303)


@router.post("/cart/remove")
async def remove_cart_line(
    request: Request,
    line_id: str = Form(...),
    next_url: Optional[str] = Form(None, alias="next"),
):
    _require_cart(request)
    cart = session.load_cart(request)
    if not cart.remove(line_id):
        raise UnknownItemError(f"No cart line '{line_id}'")
    session.save_cart(request, cart)
    get_metrics_collector().increment_counter(Metrics.CART_REMOVALS)
    return RedirectResponse(_safe_next(next_url, "/cart"), status_code=303)


@router.post("/cart/clear")
async def clear_cart(request: Request):
    _require_cart(request)
    cart = session.load_cart(request)
    cart.clear()
    session.save_cart(request, cart)
    get_metrics_collector().increment_counter(Metrics.CART_CLEARS)
    return RedirectResponse("/cart", status_code=303)


@router.post("/cart/notes")
async def update_order_notes(request: Request, notes: str = Form("")):
    _require_cart(request)
    cart = session.load_cart(request)
    cart.notes = _check_notes(notes)
    session.save_cart(request, cart)
    return RedirectResponse("/cart", status_code=303)


@router.post("/cart/branch")
async def select_branch(request: Request, branch_id: str = Form(...)):
    """Choose the branch that will receive the order."""
    brand = _require_cart(request)
    if not brand.features.enable_branch_selection:
        raise FeatureDisabledError("Branch selection is disabled")
    if brand.get_branch(branch_id) is None:
        raise InvalidSelectionError(f"Unknown branch '{branch_id}'")

    cart = session.load_cart(request)
    cart.branch_id = branch_id
    session.save_cart(request, cart)
    return RedirectResponse("/cart", status_code=303)


@router.get("/cart", response_class=HTMLResponse)
async def view_cart(request: Request):
    brand = session.get_brand(request)
    if not brand.features.enable_cart:
        raise FeatureDisabledError("The cart is disabled")

    cart = session.load_cart(request)
    context = _base_context(request, brand, cart)
    context["branch"] = brand.get_branch(cart.branch_id)
    context["max_notes_length"] = MAX_NOTES_LENGTH
    return templates.TemplateResponse(request, "cart.html", context)


@router.post("/order/whatsapp")
async def send_whatsapp_order(request: Request, notes: Optional[str] = Form(None)):
    """
    Redirect to WhatsApp with the order message pre-filled.

    Notes posted with the order replace the saved ones, so text typed just
    before checkout is part of the message.
    """
    brand = session.get_brand(request)
    cart = session.load_cart(request)
    if notes is not None:
        cart.notes = _check_notes(notes)

    url = create_order_handoff(
        cart,
        brand,
        language=session.get_language(request),
        order_mode=session.is_order_mode(request),
    )
    session.save_cart(request, cart)

    metrics = get_metrics_collector()
    metrics.increment_counter(Metrics.ORDER_HANDOFFS, labels={"branch": cart.branch_id or "none"})
    metrics.record_histogram(Metrics.ORDER_VALUE, cart.total_price)
    metrics.record_histogram(Metrics.ORDER_ITEMS, cart.total_items)

    return RedirectResponse(url, status_code=303)


@router.get("/lang/{code}")
async def switch_language(request: Request, code: str):
    brand = session.get_brand(request)
    if not brand.features.enable_language_switcher:
        raise FeatureDisabledError("Language switching is disabled")
    if code not in brand.languages:
        raise UnknownItemError(f"Unknown language '{code}'")
    session.set_language(request, code)
    return RedirectResponse("/", status_code=303)
