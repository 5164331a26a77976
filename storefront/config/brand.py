"""
Brand configuration: identity, feature toggles, branches, currency and layout.
Customize DEFAULT_BRAND below, or point BRAND_CONFIG_PATH at a JSON file.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from storefront.config.settings import get_settings
from storefront.errors import StorefrontError
from monitoring.logger import get_logger

logger = get_logger(__name__)


class ConfigModel(BaseModel):
    """Accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Colors(ConfigModel):
    primary: str = "#F05A2A"
    secondary: str = "#8BC540"
    contrast: str = "#222222"
    accent: str = "#000000"
    white: str = "#FFFFFF"
    black: str = "#1A1A1A"
    gray: Dict[str, str] = Field(default_factory=lambda: {
        "50": "#fafafa",
        "100": "#f5f5f5",
        "200": "#e5e5e5",
        "300": "#d4d4d4",
        "400": "#a3a3a3",
        "500": "#737373",
        "600": "#525252",
        "700": "#404040",
        "800": "#262626",
        "900": "#171717",
    })


class Features(ConfigModel):
    enable_hero_image: bool = False
    enable_language_switcher: bool = False
    enable_search: bool = True
    enable_price_sorting: bool = True
    enable_cart: bool = True
    enable_whatsapp_order: bool = Field(True, alias="enableWhatsAppOrder")
    enable_item_modal: bool = True
    enable_drag_scroll: bool = False
    enable_branch_selection: bool = True
    enable_product_options: bool = True
    enable_modifiers: bool = True


class Branch(ConfigModel):
    """A physical location that receives orders on its own WhatsApp number."""

    id: str
    name: str
    name_ar: str = ""
    whatsapp_number: str
    address: str = ""
    address_ar: str = ""


class Language(ConfigModel):
    code: str
    name: str
    dir: str = "ltr"


class Currency(ConfigModel):
    code: str = "Ksh"
    symbol: str = "Ksh"
    symbol_en: str = "Ksh"
    format: str = "en-KE"


class Contact(ConfigModel):
    phone: str = ""
    whatsapp_number: str
    whatsapp_message: Dict[str, str] = Field(default_factory=dict)


class Images(ConfigModel):
    hero_path: str = "/images/hero/"
    item_path: str = "/images/"
    default_hero: str = "trays.png"


class HeroImage(ConfigModel):
    mobile: str = "/images/hero-mobile.png"
    desktop: str = "/images/hero-desktop.png"
    alt: str = ""
    overlay: bool = False
    overlay_opacity: float = 0.2


class Layout(ConfigModel):
    items_per_row: int = 3
    show_item_images: bool = True
    show_item_description: bool = True
    show_quantity_selector: bool = True
    sticky_categories: bool = True
    show_hero_image: bool = True
    hero_height: str = "medium"


class Footer(ConfigModel):
    copyright_text: Dict[str, str] = Field(default_factory=dict)
    developed_by: Dict[str, str] = Field(default_factory=dict)
    show_brand_name: bool = True


class Animations(ConfigModel):
    enable_animations: bool = True
    animation_speed: float = 0.3
    stagger_delay: float = 0.1


class Coordinates(ConfigModel):
    latitude: float
    longitude: float


class Location(ConfigModel):
    name: str
    address: str
    locality: str = ""
    region: str = ""
    country: str = ""
    coordinates: Optional[Coordinates] = None


class OpeningHours(ConfigModel):
    day_of_week: List[str]
    opens: str
    closes: str


class BusinessInfo(ConfigModel):
    type: str = "Restaurant"
    cuisine: List[str] = Field(default_factory=list)
    price_range: str = "$$"
    description: str = ""
    domain: str = ""
    opening_hours: List[OpeningHours] = Field(default_factory=list)
    locations: List[Location] = Field(default_factory=list)


class BrandConfig(ConfigModel):
    """Complete storefront configuration."""

    brand_name: str
    brand_name_ar: str = ""
    colors: Colors = Field(default_factory=Colors)
    features: Features = Field(default_factory=Features)
    branches: List[Branch] = Field(default_factory=list)
    default_branch: Optional[str] = None
    languages: Dict[str, Language] = Field(default_factory=lambda: {
        "en": Language(code="en", name="English", dir="ltr"),
        "ar": Language(code="ar", name="العربية", dir="rtl"),
    })
    default_language: str = "en"
    currency: Currency = Field(default_factory=Currency)
    contact: Contact
    images: Images = Field(default_factory=Images)
    hero_image: HeroImage = Field(default_factory=HeroImage)
    layout: Layout = Field(default_factory=Layout)
    footer: Footer = Field(default_factory=Footer)
    animations: Animations = Field(default_factory=Animations)
    business_info: BusinessInfo = Field(default_factory=BusinessInfo)

    def get_brand_name(self, language: str) -> str:
        """Brand name in the given language, falling back to English."""
        if language == "ar" and self.brand_name_ar:
            return self.brand_name_ar
        return self.brand_name

    def get_branch(self, branch_id: Optional[str]) -> Optional[Branch]:
        """Find a branch by id."""
        for branch in self.branches:
            if branch.id == branch_id:
                return branch
        return None

    def text(self, mapping: Dict[str, str], language: str) -> str:
        """Pick a per-language string, falling back to English."""
        return mapping.get(language) or mapping.get("en", "")


def get_branch_text(branch: Optional[Branch], field: str, language: str) -> str:
    """Localized branch field (`name`, `address`), English when no translation exists."""
    if branch is None:
        return ""
    if language == "ar":
        translated = getattr(branch, f"{field}_ar", "")
        if translated:
            return translated
    return getattr(branch, field, "") or ""


HERO_HEIGHTS = {
    "small": {"mobile": "220px", "desktop": "260px"},
    "medium": {"mobile": "280px", "desktop": "320px"},
    "large": {"mobile": "340px", "desktop": "380px"},
}


def get_hero_height(height_type: str) -> Dict[str, str]:
    """Hero banner heights for a layout size; unknown sizes use medium."""
    return dict(HERO_HEIGHTS.get(height_type, HERO_HEIGHTS["medium"]))


DEFAULT_BRAND = {
    "brandName": "Orange Desserts",
    "brandNameAr": "",
    "features": {
        "enableHeroImage": False,
        "enableLanguageSwitcher": False,
        "enableSearch": True,
        "enablePriceSorting": True,
        "enableCart": True,
        "enableWhatsAppOrder": True,
        "enableItemModal": True,
        "enableDragScroll": False,
        "enableBranchSelection": True,
        "enableProductOptions": True,
        "enableModifiers": True,
    },
    "branches": [
        {
            "id": "kilimani",
            "name": "Kilimani Branch",
            "whatsappNumber": "+254795903251",
            "address": "Shuja Mall, Kilimani, Nairobi",
        },
        {
            "id": "parklands",
            "name": "Parklands Branch",
            "whatsappNumber": "+254799025071",
            "address": "Limuru Road, Parklands, Nairobi",
        },
        {
            "id": "south-c",
            "name": "South C Branch",
            "whatsappNumber": "+254723555569",
            "address": "Muhuhu Avn, South C, Nairobi",
        },
    ],
    "defaultBranch": "kilimani",
    "defaultLanguage": "en",
    "currency": {"code": "Ksh", "symbol": "Ksh", "symbolEn": "Ksh", "format": "en-KE"},
    "contact": {
        "phone": "+254795903251",
        "whatsappNumber": "+254795903251",
        "whatsappMessage": {
            "en": "Hello! I'd like to place an order from Orange Desserts.\n\n",
            "ar": "مرحباً! أود تقديم طلب من أورانج ديزرتس.\n\n",
        },
    },
    "heroImage": {
        "mobile": "/images/hero-mobile.png",
        "desktop": "/images/hero-desktop.png",
        "alt": "Orange Desserts - Waffles, milkshakes & sweet treats",
        "overlay": False,
        "overlayOpacity": 0.2,
    },
    "layout": {"itemsPerRow": 3, "stickyCategories": True, "showHeroImage": True, "heroHeight": "medium"},
    "footer": {
        "copyrightText": {"en": "All rights reserved.", "ar": "جميع الحقوق محفوظة."},
        "developedBy": {"en": "Crafted with excellence", "ar": "مطور بإتقان"},
        "showBrandName": True,
    },
    "businessInfo": {
        "type": "DessertShop",
        "cuisine": ["Waffles", "Milkshakes", "Sweet Treats", "Desserts"],
        "priceRange": "$$",
        "description": "Orange Desserts - Simple pleasures, crafted with care. "
                       "Waffles, milkshakes & sweet treats made fresh daily.",
        "domain": "https://orangedesserts.ke",
        "openingHours": [
            {
                "dayOfWeek": ["Monday", "Tuesday", "Wednesday", "Thursday", "Sunday"],
                "opens": "10:00",
                "closes": "23:00",
            },
            {"dayOfWeek": ["Friday", "Saturday"], "opens": "11:00", "closes": "00:00"},
        ],
        "locations": [
            {
                "name": "Main Branch",
                "address": "Nairobi, Kenya",
                "locality": "Nairobi",
                "region": "Nairobi",
                "country": "KE",
                "coordinates": {"latitude": -1.286389, "longitude": 36.817223},
            }
        ],
    },
}


def load_brand_config(path: Optional[Path] = None) -> BrandConfig:
    """
    Load the brand configuration.

    Args:
        path: JSON file to read; the built-in configuration is used when None

    Returns:
        Validated BrandConfig
    """
    if path is None:
        return BrandConfig.model_validate(DEFAULT_BRAND)

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        config = BrandConfig.model_validate(raw)
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"Failed to load brand configuration from {path}: {e}")
        raise StorefrontError(f"Invalid brand configuration: {path}", detail=str(e)) from e

    logger.info(f"Loaded brand configuration for {config.brand_name}", extra={"path": str(path)})
    return config


def get_brand_config() -> BrandConfig:
    """Brand configuration selected by the current settings."""
    return load_brand_config(get_settings().brand_config_path)
