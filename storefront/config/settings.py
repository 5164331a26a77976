"""
Runtime settings read from the environment.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_MENU_PATH = PACKAGE_DIR / "data" / "menu.json"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Application settings."""

    environment: str = Field("development", description="Deployment environment name")
    menu_data_path: Path = Field(DEFAULT_MENU_PATH, description="Path to the menu JSON document")
    brand_config_path: Optional[Path] = Field(None, description="Optional brand configuration JSON")
    session_secret: str = Field("change-me", description="Key used to sign the session cookie")
    host: str = Field("127.0.0.1", description="Bind address")
    port: int = Field(8000, description="Bind port")
    log_level: str = Field("INFO", description="Log level")
    log_json: bool = Field(False, description="Render logs as JSON")
    cart_idle_minutes: int = Field(720, gt=0, description="Minutes an untouched cart is kept in memory")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        brand_path = os.getenv("BRAND_CONFIG_PATH")
        return cls(
            environment=os.getenv("ENVIRONMENT", "development"),
            menu_data_path=Path(os.getenv("MENU_DATA_PATH", str(DEFAULT_MENU_PATH))),
            brand_config_path=Path(brand_path) if brand_path else None,
            session_secret=os.getenv("SESSION_SECRET", "change-me"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=_env_bool("LOG_JSON"),
            cart_idle_minutes=int(os.getenv("CART_IDLE_MINUTES", "720")),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the process-wide settings instance.

    Returns:
        Settings read from the environment on first use
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
