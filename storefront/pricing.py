"""
Price computation and localized display helpers.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from storefront.config.brand import Currency
from storefront.models.menu import ItemOption, MenuItem

Price = Union[float, int, Sequence[float], None]
ModifierSelection = Dict[str, List[str]]

# Grouping and decimal separators per number locale
NUMBER_FORMATS = {
    "en": (",", "."),
    "de": (".", ","),
    "fr": (" ", ","),
    "ar": ("٬", "٫"),
}


def format_amount(value: float, locale: str = "en-KE") -> str:
    """
    Format a number with grouping separators and at most three decimals.

    >>> format_amount(1250)
    '1,250'
    >>> format_amount(99.5)
    '99.5'
    """
    group_sep, decimal_sep = NUMBER_FORMATS.get(locale.split("-")[0].lower(), NUMBER_FORMATS["en"])
    rounded = round(float(value), 3)
    text = f"{rounded:,.3f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text.replace(",", "\0").replace(".", decimal_sep).replace("\0", group_sep)


def currency_symbol(currency: Currency, language: str) -> str:
    return currency.symbol_en if language == "en" else currency.symbol


def format_price(price: Price, language: str, currency: Currency) -> str:
    """
    Render a price or a price list with the currency symbol.

    Lists collapse to a single amount when all prices are equal, otherwise
    they render as ``"<symbol> min - max"``. Missing prices render as zero.
    """
    symbol = currency_symbol(currency, language)

    if price is None or price == "":
        return f"{symbol} 0"

    if isinstance(price, (list, tuple)):
        if not price:
            return f"{symbol} 0"
        low, high = min(price), max(price)
        if low == high:
            return f"{symbol} {format_amount(low, currency.format)}"
        return f"{symbol} {format_amount(low, currency.format)} - {format_amount(high, currency.format)}"

    return f"{symbol} {format_amount(price, currency.format)}"


def get_text(obj: Any, field: str, language: str) -> str:
    """Localized text of a model or dict field; Arabic falls back to the base field."""
    if obj is None:
        return ""
    if isinstance(obj, dict):
        getter = obj.get
    else:
        def getter(key, default=None):
            return getattr(obj, key, default)

    if language == "ar":
        return getter(f"{field}_ar") or getter(field) or ""
    return getter(field) or ""


def _option_name(option: Union[ItemOption, str, None]) -> Optional[str]:
    if option is None:
        return None
    if isinstance(option, str):
        return option
    return option.name


def get_item_price(
    item: Optional[MenuItem],
    selected_option: Union[ItemOption, str, None] = None,
    selected_modifiers: Optional[ModifierSelection] = None,
) -> float:
    """
    Unit price of an item with its current customization.

    The selected option's price replaces the base price when the item has
    that option. Each selected modifier choice adds its price; names that do
    not exist on the item are ignored.
    """
    if item is None:
        return 0

    price = item.base_price
    option_name = _option_name(selected_option)
    if option_name and item.options:
        option = item.find_option(option_name)
        if option is not None:
            price = option.price

    for group_name, choice_names in (selected_modifiers or {}).items():
        group = item.modifiers.get(group_name)
        if group is None:
            continue
        for choice_name in choice_names or []:
            choice = group.find_option(choice_name)
            if choice is not None:
                price += choice.price

    return price


def get_cart_item_id(
    item: Optional[MenuItem],
    selected_option: Union[ItemOption, str, None] = None,
    selected_modifiers: Optional[ModifierSelection] = None,
) -> str:
    """
    Cart-line identity: item name, option, then every selected modifier choice.

    Two selections produce the same identity only when the item, option and
    the ordered modifier choices all match.
    """
    if item is None:
        return ""

    line_id = item.name
    option_name = _option_name(selected_option)
    if option_name:
        line_id += f"_{option_name}"

    for group_name, choice_names in (selected_modifiers or {}).items():
        for choice_name in choice_names or []:
            line_id += f"_{group_name}_{choice_name}"

    return line_id


def get_item_display_name(
    item: MenuItem,
    selected_option: Optional[ItemOption] = None,
    language: str = "en",
) -> str:
    """Localized item name with the chosen option in parentheses."""
    name = get_text(item, "name", language)
    if selected_option is not None and item.options:
        name += f" ({get_text(selected_option, 'name', language)})"
    return name


def is_option_price_different(item: Optional[MenuItem], selected_option: Optional[ItemOption]) -> bool:
    """Whether the chosen option changes the price shown on the card."""
    if item is None or selected_option is None or not item.options:
        return False
    return get_item_price(item, selected_option) != item.base_price
