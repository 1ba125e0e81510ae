"""
Catalog module data models.

Only the add-product form lives here; listings are not persisted.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel, Field

CATEGORIES: tuple[str, ...] = (
    "Web Application",
    "Mobile App",
    "WordPress Plugin",
    "API/Service",
    "Component Library",
    "Chrome Extension",
    "Desktop Application",
)

LICENSE_OPTIONS: tuple[str, ...] = ("Standard", "Extended", "Enterprise", "White Label")


class ProductDraft(BaseModel):
    """
    Add-product form values, as typed.

    Price and tags stay text until validation so that the exact input can
    be shown back next to its error.
    """

    name: str = ""
    description: str = ""
    category: str = ""
    price: str = ""
    tags: str = Field(default="", description="Comma-separated")
    license_types: list[str] = Field(default_factory=lambda: ["Standard"])
    features: list[str] = Field(default_factory=lambda: [""])
    demo_url: str = ""
    documentation_url: str = ""
    support_email: str = ""

    def tag_list(self) -> list[str]:
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]

    def feature_list(self) -> list[str]:
        return [feature.strip() for feature in self.features if feature.strip()]

    def parsed_price(self) -> Optional[Decimal]:
        """Price as a Decimal, or None if it is not a number."""
        try:
            price = Decimal(self.price.strip())
        except InvalidOperation:
            return None
        return price if price.is_finite() else None
