"""
Exception types raised by the storefront.
"""

from typing import Optional


class StorefrontError(Exception):
    """Base class for storefront errors."""

    status_code: int = 500

    def __init__(self, message: str, *, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class MenuDataError(StorefrontError):
    """The menu catalog file is missing or malformed."""

    status_code = 500


class UnknownItemError(StorefrontError):
    """A category or item name does not exist in the catalog."""

    status_code = 404


class InvalidSelectionError(StorefrontError):
    """Option or modifier choices do not fit the item."""

    status_code = 422


class OrderingDisabledError(StorefrontError):
    """Cart changes were attempted outside order mode."""

    status_code = 403


class FeatureDisabledError(StorefrontError):
    """The requested feature is switched off in the brand configuration."""

    status_code = 404


class EmptyCartError(StorefrontError):
    """An order handoff was requested with nothing in the cart."""

    status_code = 400
