"""
Run the storefront with uvicorn: ``python -m storefront``.
"""

import uvicorn

from storefront.app import create_app
from storefront.config import get_brand_config, get_restaurant_menu, get_settings
from monitoring.logger import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(log_level=settings.log_level, enable_json=settings.log_json)
    app = create_app(settings, brand=get_brand_config(), menu=get_restaurant_menu())
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
