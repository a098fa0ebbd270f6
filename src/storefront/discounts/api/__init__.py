"""Discount codes API package."""

from storefront.discounts.api.routes import router

__all__ = ["router"]
