"""
Catalog module.

The add-product form model and its local field validation.
"""

from .exceptions import ProductValidationError
from .models import CATEGORIES, LICENSE_OPTIONS, ProductDraft
from .validation import validate_product_draft

__all__ = [
    "ProductValidationError",
    "CATEGORIES",
    "LICENSE_OPTIONS",
    "ProductDraft",
    "validate_product_draft",
]
