"""
Storefront module.

Client-side composition root: one Storefront per signed-in browser.
"""

from .app import Storefront, create_identity_provider, create_storefront

__all__ = ["Storefront", "create_identity_provider", "create_storefront"]
