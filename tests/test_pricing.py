"""
Tests for price computation, cart-line identity and price formatting.
"""

import pytest

from storefront.config.brand import Currency
from storefront.pricing import (
    format_amount,
    format_price,
    get_cart_item_id,
    get_item_display_name,
    get_item_price,
    get_text,
    is_option_price_different,
)

KSH = Currency(code="Ksh", symbol="ك.ش", symbol_en="Ksh", format="en-KE")


@pytest.fixture
def classic_waffle(mock_menu):
    return mock_menu.find_item("waffles", "Classic Waffle")


@pytest.fixture
def oreo_shake(mock_menu):
    return mock_menu.find_item("milkshakes", "Oreo Shake")


@pytest.mark.parametrize("value, expected", [
    (0, "0"),
    (950, "950"),
    (1900.0, "1,900"),
    (1234567, "1,234,567"),
    (99.5, "99.5"),
    (10.1234, "10.123"),
])
def test_format_amount(value, expected):
    assert format_amount(value) == expected


@pytest.mark.parametrize("price, expected", [
    (None, "Ksh 0"),
    ("", "Ksh 0"),
    ([], "Ksh 0"),
    (650, "Ksh 650"),
    ([450, 600], "Ksh 450 - 600"),
    ([700, 700], "Ksh 700"),
    ([1500, 1200, 2000], "Ksh 1,200 - 2,000"),
])
def test_format_price_english(price, expected):
    assert format_price(price, "en", KSH) == expected


def test_format_price_uses_local_symbol_outside_english():
    assert format_price(650, "ar", KSH) == "ك.ش 650"
    assert format_price(None, "ar", KSH) == "ك.ش 0"


def test_get_text_prefers_arabic_with_fallback(classic_waffle):
    assert get_text(classic_waffle, "name", "ar") == "وافل كلاسيك"
    assert get_text(classic_waffle, "name", "en") == "Classic Waffle"
    assert get_text({"name": "Tea"}, "name", "ar") == "Tea"
    assert get_text(None, "name", "en") == ""


def test_price_without_customization_is_base_price(classic_waffle):
    assert get_item_price(classic_waffle) == 650


def test_option_price_replaces_base_price(oreo_shake):
    assert get_item_price(oreo_shake, oreo_shake.find_option("Large")) == 700
    assert get_item_price(oreo_shake, "Regular") == 550


def test_unknown_option_falls_back_to_base_price(oreo_shake):
    assert get_item_price(oreo_shake, "Huge") == 550


def test_modifier_prices_are_added(classic_waffle):
    modifiers = {"Sauce": ["Nutella"], "Toppings": ["Strawberries", "Banana"]}
    assert get_item_price(classic_waffle, None, modifiers) == 650 + 150 + 100 + 80


def test_unknown_modifier_names_are_ignored(classic_waffle):
    modifiers = {"Sauce": ["Caramel"], "Sprinkles": ["Rainbow"]}
    assert get_item_price(classic_waffle, None, modifiers) == 650


def test_option_and_modifiers_combine(oreo_shake):
    price = get_item_price(oreo_shake, "Large", {"Extras": ["Extra Oreo", "Whipped Cream"]})
    assert price == 700 + 100 + 50


def test_cart_id_of_plain_item_is_its_name(classic_waffle):
    assert get_cart_item_id(classic_waffle) == "Classic Waffle"


def test_cart_id_includes_option_and_each_choice(classic_waffle, oreo_shake):
    modifiers = {"Sauce": ["Nutella"], "Toppings": [], "Extra": []}
    assert get_cart_item_id(classic_waffle, None, modifiers) == "Classic Waffle_Sauce_Nutella"
    assert get_cart_item_id(oreo_shake, "Large", {"Extras": ["Extra Oreo", "Whipped Cream"]}) == (
        "Oreo Shake_Large_Extras_Extra Oreo_Extras_Whipped Cream"
    )


def test_cart_id_depends_on_choice_order(classic_waffle):
    first = get_cart_item_id(classic_waffle, None, {"Toppings": ["Banana", "Strawberries"]})
    second = get_cart_item_id(classic_waffle, None, {"Toppings": ["Strawberries", "Banana"]})
    assert first != second


def test_display_name_appends_localized_option(oreo_shake):
    large = oreo_shake.find_option("Large")
    assert get_item_display_name(oreo_shake, large, "en") == "Oreo Shake (Large)"
    assert get_item_display_name(oreo_shake, large, "ar") == "شيك أوريو (كبير)"
    assert get_item_display_name(oreo_shake, None, "en") == "Oreo Shake"


def test_option_price_difference(mock_menu, oreo_shake):
    assert is_option_price_different(oreo_shake, oreo_shake.find_option("Large")) is True
    assert is_option_price_different(oreo_shake, oreo_shake.find_option("Regular")) is False
    juice = mock_menu.find_item("drinks", "Fresh Juice")
    assert is_option_price_different(juice, juice.find_option("Mango")) is False
    assert is_option_price_different(oreo_shake, None) is False
