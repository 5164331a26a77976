"""
Per-visitor state kept in the signed session cookie.

Only small values go into the cookie: the cart id, language and order mode.
The cart itself is held by the app's CartStore.
"""

from fastapi import Request

from storefront.config.brand import BrandConfig
from storefront.models.cart import Cart
from storefront.models.menu import Menu
from storefront.web.cart_store import CartStore

CART_ID_KEY = "cart_id"
LANGUAGE_KEY = "language"
ORDER_MODE_KEY = "order_mode"


def get_brand(request: Request) -> BrandConfig:
    return request.app.state.brand


def get_menu(request: Request) -> Menu:
    return request.app.state.menu


def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart_store


def load_cart(request: Request) -> Cart:
    """Cart of the current visitor, with the default branch preselected."""
    cart_id = request.session.get(CART_ID_KEY)
    cart = get_cart_store(request).get(cart_id) if cart_id else None
    if cart is None:
        cart = Cart()
    if cart.branch_id is None:
        cart.branch_id = get_brand(request).default_branch
    return cart


def save_cart(request: Request, cart: Cart) -> None:
    store = get_cart_store(request)
    cart_id = request.session.get(CART_ID_KEY)
    if not cart_id:
        cart_id = store.new_id()
        request.session[CART_ID_KEY] = cart_id
    store.save(cart_id, cart)


def get_language(request: Request) -> str:
    brand = get_brand(request)
    language = request.session.get(LANGUAGE_KEY, brand.default_language)
    return language if language in brand.languages else brand.default_language


def set_language(request: Request, language: str) -> None:
    request.session[LANGUAGE_KEY] = language


def is_order_mode(request: Request) -> bool:
    return bool(request.session.get(ORDER_MODE_KEY, False))


def set_order_mode(request: Request, enabled: bool) -> None:
    request.session[ORDER_MODE_KEY] = enabled
