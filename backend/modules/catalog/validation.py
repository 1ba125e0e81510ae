"""
Add-product form validation.

Runs entirely locally; an invalid form never leaves the page.
"""

from pydantic import EmailStr, TypeAdapter, ValidationError as PydanticValidationError

from .models import CATEGORIES, LICENSE_OPTIONS, ProductDraft

_email_adapter = TypeAdapter(EmailStr)


def validate_product_draft(draft: ProductDraft) -> dict[str, str]:
    """
    Check the add-product form.

    Returns:
        Field name to error message; empty when the form is valid
    """
    errors: dict[str, str] = {}

    if not draft.name.strip():
        errors["name"] = "Product name is required"
    if not draft.description.strip():
        errors["description"] = "Description is required"
    if not draft.category:
        errors["category"] = "Category is required"
    elif draft.category not in CATEGORIES:
        errors["category"] = "Unknown category"

    price = draft.parsed_price()
    if price is None or price <= 0:
        errors["price"] = "Valid price is required"

    if not draft.tag_list():
        errors["tags"] = "At least one tag is required"

    unknown_licenses = [name for name in draft.license_types if name not in LICENSE_OPTIONS]
    if not draft.license_types or unknown_licenses:
        errors["license_types"] = "Choose at least one valid license type"

    if draft.support_email.strip():
        try:
            _email_adapter.validate_python(draft.support_email.strip())
        except PydanticValidationError:
            errors["support_email"] = "Enter a valid email address"

    return errors
