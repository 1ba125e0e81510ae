"""
Majji API package.

Provides the FastAPI application backing the Majji marketplace storefront.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
