"""
Jinja2 environment shared by the page routes.
"""

import json

from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from storefront.config.brand import get_hero_height
from storefront.config.settings import PACKAGE_DIR
from storefront.pricing import format_amount, format_price, get_text

templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))


def _json_ld(data) -> Markup:
    # "</" must not close the surrounding script element
    return Markup(json.dumps(data, ensure_ascii=False).replace("</", "<\\/"))


templates.env.globals.update(
    format_price=format_price,
    format_amount=format_amount,
    get_text=get_text,
    get_hero_height=get_hero_height,
)
templates.env.filters["json_ld"] = _json_ld
