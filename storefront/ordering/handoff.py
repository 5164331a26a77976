"""
Order handoff: the cart rendered as a text message and packed into a
WhatsApp deep link.
"""

import re
from datetime import datetime
from typing import Optional
from urllib.parse import quote

from storefront.config.brand import Branch, BrandConfig, Currency
from storefront.errors import EmptyCartError, FeatureDisabledError, OrderingDisabledError
from storefront.models.cart import Cart, CartLine
from storefront.pricing import currency_symbol, format_amount
from monitoring.logger import get_logger

logger = get_logger(__name__)

WHATSAPP_BASE_URL = "https://wa.me/"
SEPARATOR = "=" * 20
# Gregorian day-first layout for every message language
ORDER_TIME_FORMAT = "%d/%m/%Y, %H:%M:%S"

# Characters encodeURIComponent leaves untouched besides alphanumerics
URI_COMPONENT_SAFE = "-_.!~*'()"

LABELS = {
    "en": {"branch": "Branch", "address": "Address"},
    "ar": {"branch": "الفرع", "address": "العنوان"},
}


def _line_block(index: int, line: CartLine, symbol: str, locale: str) -> str:
    quantity = line.quantity or 1
    return (
        f"{index}. {line.display_name}\n"
        f"   Quantity: {quantity}\n"
        f"   Price: {symbol} {format_amount(line.unit_price, locale)} each\n"
        f"   Total: {symbol} {format_amount(line.unit_price * quantity, locale)}\n\n"
    )


def compose_order_message(
    cart: Cart,
    config: BrandConfig,
    language: str = "en",
    now: Optional[datetime] = None,
) -> str:
    """
    Build the plain-text order summary sent to the restaurant.

    Args:
        cart: Cart with lines, notes and the chosen branch
        config: Brand configuration (greeting, currency, branches)
        language: Language of the greeting and branch labels
        now: Order time; the current time when omitted

    Returns:
        The unencoded message
    """
    currency: Currency = config.currency
    symbol = currency_symbol(currency, language)
    locale = currency.format
    greetings = config.contact.whatsapp_message

    message = greetings.get(language) or greetings.get("en", "")

    branch = config.get_branch(cart.branch_id)
    if branch is not None:
        labels = LABELS.get(language, LABELS["en"])
        message += f"{labels['branch']}: {branch.name}\n"
        message += f"{labels['address']}: {branch.address}\n\n"

    message += "*Order Details:*\n"
    message += f"{SEPARATOR}\n\n"

    for index, line in enumerate(cart.lines, 1):
        message += _line_block(index, line, symbol, locale)

    subtotal = cart.total_price
    message += f"{SEPARATOR}\n"
    message += f"Subtotal: {symbol} {format_amount(subtotal, locale)}\n"

    if cart.notes and cart.notes.strip():
        message += "\n*Special Instructions:*\n"
        message += f"{cart.notes}\n"

    message += f"\n*Total Amount:* {symbol} {format_amount(subtotal, locale)}\n\n"

    order_time = (now or datetime.now()).strftime(ORDER_TIME_FORMAT)
    message += f"Order Time: {order_time}\n\n"

    message += "Thank you!"

    return message


def encode_message(message: str) -> str:
    """Percent-encode text the way a URI component is encoded in the browser."""
    return quote(message, safe=URI_COMPONENT_SAFE)


def resolve_whatsapp_number(config: BrandConfig, branch_id: Optional[str]) -> str:
    """Number of the chosen branch, or the brand's contact number."""
    if config.features.enable_branch_selection:
        branch: Optional[Branch] = config.get_branch(branch_id)
        if branch is not None and branch.whatsapp_number:
            return branch.whatsapp_number
    return config.contact.whatsapp_number


def build_whatsapp_url(phone_number: str, message: str) -> str:
    """
    Deep link that opens a chat with the number and the message pre-filled.

    >>> build_whatsapp_url("+254 700 000 000", "Hi there")
    'https://wa.me/254700000000?text=Hi%20there'
    """
    digits = re.sub(r"\s", "", phone_number).replace("+", "", 1)
    return f"{WHATSAPP_BASE_URL}{digits}?text={encode_message(message)}"


def create_order_handoff(
    cart: Cart,
    config: BrandConfig,
    language: str = "en",
    order_mode: bool = True,
    now: Optional[datetime] = None,
) -> str:
    """
    Deep link for the cart's order.

    Raises:
        FeatureDisabledError: WhatsApp ordering is switched off
        OrderingDisabledError: The visitor is not in order mode
        EmptyCartError: There is nothing to order
    """
    if not config.features.enable_whatsapp_order:
        raise FeatureDisabledError("WhatsApp ordering is disabled")
    if not order_mode:
        raise OrderingDisabledError("Ordering is only available in order mode")
    if cart.is_empty:
        raise EmptyCartError("Cannot send an empty order")

    message = compose_order_message(cart, config, language, now=now)
    number = resolve_whatsapp_number(config, cart.branch_id)
    url = build_whatsapp_url(number, message)

    logger.info(
        f"Order handed off with {cart.total_items} items",
        extra={"branch": cart.branch_id, "total": cart.total_price, "lines": len(cart.lines)},
    )
    return url
