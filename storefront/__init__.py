"""
Restaurant Menu Storefront Package

This package contains the menu catalog, item customization, session cart and
order handoff logic of the restaurant storefront, plus the web layer that
renders it.
"""

from storefront.app import create_app

__all__ = ["create_app"]
__version__ = "1.0.0"
