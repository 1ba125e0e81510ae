"""
Catalog module exceptions.
"""

from shared.exceptions import ValidationError


class ProductValidationError(ValidationError):
    """Raised when the add-product form has invalid fields."""

    def __init__(self, errors: dict[str, str]):
        super().__init__(
            "Please fix the highlighted fields",
            code="PRODUCT_VALIDATION",
            details={"fields": errors},
        )
        self.errors = errors
