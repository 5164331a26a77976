"""
FastAPI application factory for the storefront.
"""

from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from storefront.config.brand import BrandConfig, load_brand_config
from storefront.config.settings import Settings, get_settings
from storefront.errors import StorefrontError
from storefront.models.menu import Menu, load_menu
from storefront.web import api, routes
from storefront.web.cart_store import CartStore
from storefront.web.templating import templates
from monitoring import health_check
from monitoring.logger import get_logger
from monitoring.metrics import Metrics, get_metrics_collector

logger = get_logger(__name__)

SESSION_COOKIE = "storefront_session"


async def handle_storefront_error(request: Request, exc: StorefrontError):
    """Render storefront errors as JSON for the API and as a page otherwise."""
    logger.warning(
        f"{type(exc).__name__}: {exc.message}",
        extra={"path": request.url.path, "status": exc.status_code},
    )
    get_metrics_collector().increment_counter(
        Metrics.REQUEST_ERRORS, labels={"type": type(exc).__name__}
    )

    if request.url.path.startswith("/api"):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "detail": exc.detail},
        )

    brand: BrandConfig = request.app.state.brand
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "brand": brand,
            "brand_name": brand.brand_name,
            "language": brand.default_language,
            "direction": "ltr",
            "message": exc.message,
            "status_code": exc.status_code,
        },
        status_code=exc.status_code,
    )


def create_app(
    settings: Optional[Settings] = None,
    brand: Optional[BrandConfig] = None,
    menu: Optional[Menu] = None,
) -> FastAPI:
    """
    Build the storefront application.

    Args:
        settings: Runtime settings; read from the environment when omitted
        brand: Brand configuration; loaded per settings when omitted
        menu: Menu catalog; loaded from settings.menu_data_path when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    brand = brand or load_brand_config(settings.brand_config_path)
    menu = menu or load_menu(settings.menu_data_path)

    app = FastAPI(title=f"{brand.brand_name} Menu", version="1.0.0")
    app.state.settings = settings
    app.state.brand = brand
    app.state.menu = menu
    app.state.cart_store = CartStore(idle_timeout=timedelta(minutes=settings.cart_idle_minutes))

    # No max_age: the cart id lives exactly as long as the browser session
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=SESSION_COOKIE,
        max_age=None,
        same_site="lax",
        https_only=settings.environment == "production",
    )
    app.add_exception_handler(StorefrontError, handle_storefront_error)

    app.include_router(routes.router)
    app.include_router(api.router)
    app.include_router(health_check.router)

    if settings.session_secret == "change-me" and settings.environment == "production":
        logger.warning("SESSION_SECRET is not set; session cookies use the default key")

    logger.info(
        f"Storefront ready for {brand.brand_name}",
        extra={"categories": len(menu.categories), "environment": settings.environment},
    )
    return app
