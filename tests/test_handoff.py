"""
Tests for the order message and the WhatsApp deep link.
"""

from datetime import datetime
from urllib.parse import parse_qs, urlparse

import pytest

from storefront.errors import EmptyCartError, FeatureDisabledError, OrderingDisabledError
from storefront.models.cart import Cart
from storefront.ordering.handoff import (
    build_whatsapp_url,
    compose_order_message,
    create_order_handoff,
    encode_message,
    resolve_whatsapp_number,
)

ORDER_TIME = datetime(2026, 10, 19, 14, 5, 9)


def test_compose_order_message_layout(mock_cart, brand_config):
    mock_cart.notes = "No nuts"

    message = compose_order_message(mock_cart, brand_config, "en", now=ORDER_TIME)

    assert message == (
        "Hello! I'd like to place an order from Orange Desserts.\n\n"
        "Branch: Kilimani Branch\n"
        "Address: Shuja Mall, Kilimani, Nairobi\n\n"
        "*Order Details:*\n"
        "====================\n\n"
        "1. Bubble Waffle (Large)\n"
        "   Quantity: 2\n"
        "   Price: Ksh 950 each\n"
        "   Total: Ksh 1,900\n\n"
        "2. Strawberry Shake\n"
        "   Quantity: 1\n"
        "   Price: Ksh 500 each\n"
        "   Total: Ksh 500\n\n"
        "====================\n"
        "Subtotal: Ksh 2,400\n"
        "\n*Special Instructions:*\n"
        "No nuts\n"
        "\n*Total Amount:* Ksh 2,400\n\n"
        "Order Time: 19/10/2026, 14:05:09\n\n"
        "Thank you!"
    )


def test_blank_notes_and_unknown_branch_are_left_out(mock_cart, brand_config):
    mock_cart.notes = "   "
    mock_cart.branch_id = "westlands"

    message = compose_order_message(mock_cart, brand_config, "en", now=ORDER_TIME)

    assert "Special Instructions" not in message
    assert "Branch:" not in message
    assert message.startswith("Hello! I'd like to place an order from Orange Desserts.\n\n*Order Details:*")


def test_arabic_message_uses_arabic_greeting_and_labels(mock_cart, brand_config):
    message = compose_order_message(mock_cart, brand_config, "ar", now=ORDER_TIME)

    assert message.startswith(brand_config.contact.whatsapp_message["ar"])
    assert "الفرع: Kilimani Branch\n" in message
    assert "العنوان: Shuja Mall, Kilimani, Nairobi\n" in message


def test_encode_message_matches_uri_component_encoding():
    assert encode_message("Hi there!\n*Total:* Ksh 1,900 (each)") == (
        "Hi%20there!%0A*Total%3A*%20Ksh%201%2C900%20(each)"
    )
    assert encode_message("طلب") == "%D8%B7%D9%84%D8%A8"


def test_build_whatsapp_url_strips_plus_and_whitespace():
    url = build_whatsapp_url("+254 795 903\t251", "Hello")
    assert url == "https://wa.me/254795903251?text=Hello"


def test_number_follows_selected_branch(brand_config):
    assert resolve_whatsapp_number(brand_config, "parklands") == "+254799025071"
    assert resolve_whatsapp_number(brand_config, "unknown") == brand_config.contact.whatsapp_number


def test_number_ignores_branch_when_selection_disabled(brand_config):
    brand_config.features.enable_branch_selection = False
    assert resolve_whatsapp_number(brand_config, "parklands") == brand_config.contact.whatsapp_number


def test_create_order_handoff_round_trips_message(mock_cart, brand_config):
    mock_cart.branch_id = "south-c"

    url = create_order_handoff(mock_cart, brand_config, "en", now=ORDER_TIME)

    parsed = urlparse(url)
    assert parsed.netloc == "wa.me"
    assert parsed.path == "/254723555569"
    text = parse_qs(parsed.query)["text"][0]
    assert text == compose_order_message(mock_cart, brand_config, "en", now=ORDER_TIME)


def test_handoff_refuses_empty_cart(brand_config):
    with pytest.raises(EmptyCartError):
        create_order_handoff(Cart(), brand_config)


def test_handoff_requires_order_mode(mock_cart, brand_config):
    with pytest.raises(OrderingDisabledError):
        create_order_handoff(mock_cart, brand_config, order_mode=False)


def test_handoff_requires_whatsapp_feature(mock_cart, brand_config):
    brand_config.features.enable_whatsapp_order = False
    with pytest.raises(FeatureDisabledError):
        create_order_handoff(mock_cart, brand_config)


def test_arabic_message_keeps_gregorian_timestamp(mock_cart, brand_config):
    message = compose_order_message(mock_cart, brand_config, "ar", now=ORDER_TIME)
    assert "Order Time: 19/10/2026, 14:05:09\n\nThank you!" in message
