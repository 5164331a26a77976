"""
Tests for brand configuration loading and structured data.
"""

import json

import pytest

from storefront.config.brand import get_branch_text, get_hero_height, load_brand_config
from storefront.errors import StorefrontError
from storefront.seo import generate_structured_data


def test_default_brand(brand_config):
    assert brand_config.brand_name == "Orange Desserts"
    assert brand_config.default_branch == "kilimani"
    assert [b.id for b in brand_config.branches] == ["kilimani", "parklands", "south-c"]
    assert brand_config.features.enable_whatsapp_order is True
    assert brand_config.features.enable_language_switcher is False
    assert brand_config.languages["ar"].dir == "rtl"


def test_brand_name_falls_back_to_english(brand_config):
    assert brand_config.get_brand_name("ar") == "Orange Desserts"
    brand_config.brand_name_ar = "أورانج"
    assert brand_config.get_brand_name("ar") == "أورانج"


def test_branch_text_translation(brand_config):
    branch = brand_config.get_branch("parklands")
    assert get_branch_text(branch, "name", "ar") == "Parklands Branch"
    branch.name_ar = "فرع باركلاندز"
    assert get_branch_text(branch, "name", "ar") == "فرع باركلاندز"
    assert get_branch_text(branch, "address", "en") == "Limuru Road, Parklands, Nairobi"
    assert get_branch_text(None, "name", "en") == ""


@pytest.mark.parametrize("size, expected", [
    ("small", {"mobile": "220px", "desktop": "260px"}),
    ("medium", {"mobile": "280px", "desktop": "320px"}),
    ("large", {"mobile": "340px", "desktop": "380px"}),
    ("huge", {"mobile": "280px", "desktop": "320px"}),
])
def test_hero_height(size, expected):
    assert get_hero_height(size) == expected


def test_load_brand_config_accepts_snake_and_camel_case(tmp_path):
    path = tmp_path / "brand.json"
    path.write_text(json.dumps({
        "brandName": "Snack Attack",
        "features": {"enableLanguageSwitcher": True, "enable_cart": False},
        "branches": [{"id": "dxb", "name": "Dubai", "whatsappNumber": "+971500000000"}],
        "contact": {"whatsapp_number": "+971500000001"},
    }), encoding="utf-8")

    config = load_brand_config(path)

    assert config.brand_name == "Snack Attack"
    assert config.features.enable_language_switcher is True
    assert config.features.enable_cart is False
    assert config.get_branch("dxb").whatsapp_number == "+971500000000"
    assert config.contact.whatsapp_number == "+971500000001"


def test_load_brand_config_rejects_invalid_file(tmp_path):
    path = tmp_path / "brand.json"
    path.write_text(json.dumps({"brandName": "No Contact"}), encoding="utf-8")
    with pytest.raises(StorefrontError):
        load_brand_config(path)


def test_structured_data(brand_config):
    data = generate_structured_data(brand_config)

    assert data["@type"] == "DessertShop"
    assert data["name"] == "Orange Desserts"
    assert data["url"] == "https://orangedesserts.ke"
    assert data["hasMenu"] == "https://orangedesserts.ke/menu"
    assert data["address"]["addressCountry"] == "KE"
    assert data["geo"]["latitude"] == -1.286389
    assert data["openingHoursSpecification"][1]["dayOfWeek"] == ["Friday", "Saturday"]
    assert data["servesCuisine"] == ["Waffles", "Milkshakes", "Sweet Treats", "Desserts"]


def test_brand_config_follows_settings(monkeypatch, tmp_path):
    from storefront.config import brand, settings

    monkeypatch.setattr(settings, "_settings", settings.Settings())
    assert brand.get_brand_config().brand_name == "Orange Desserts"

    path = tmp_path / "brand.json"
    path.write_text(json.dumps({"brandName": "Cafe Nile", "contact": {"whatsappNumber": "+20 100 000 0000"}}), encoding="utf-8")
    monkeypatch.setattr(settings, "_settings", settings.Settings(brand_config_path=path))
    assert brand.get_brand_config().brand_name == "Cafe Nile"
