"""
Navigation module data models.
"""

from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from .exceptions import UnknownViewError


class View(str, Enum):
    """The fixed set of storefront views."""

    HOME = "home"
    BROWSE = "browse"
    PRODUCT = "product"
    DASHBOARD = "dashboard"
    AUTH = "auth"
    ONBOARDING = "onboarding"
    ADD_PRODUCT = "add-product"


# Views that need a signed-in user
PROTECTED_VIEWS = frozenset({View.DASHBOARD, View.ADD_PRODUCT})


class NavigationRequest(BaseModel):
    """
    Normalized navigation intent.

    Mapping targets may use the storefront client's keys
    (``page``, ``productId``, ``searchTerm``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    view: View = Field(validation_alias=AliasChoices("view", "page"))
    product_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("product_id", "productId")
    )
    search_term: Optional[str] = Field(
        None, validation_alias=AliasChoices("search_term", "searchTerm")
    )

    @classmethod
    def from_target(cls, target: "NavigationTarget") -> "NavigationRequest":
        """
        Normalize any accepted call shape into a request.

        A bare view identifier is the same as a request with no parameters.

        Raises:
            UnknownViewError: If the view identifier is not one of View
        """
        if isinstance(target, NavigationRequest):
            return target
        if isinstance(target, View):
            return cls(view=target)
        if isinstance(target, str):
            try:
                return cls(view=View(target))
            except ValueError:
                raise UnknownViewError(target)
        if isinstance(target, Mapping):
            try:
                return cls.model_validate(dict(target))
            except PydanticValidationError:
                raise UnknownViewError(str(target.get("view", target.get("page"))))
        raise UnknownViewError(repr(target))


NavigationTarget = Union[str, View, NavigationRequest, Mapping[str, Any]]


class NavigationState(BaseModel):
    """Where the storefront currently is."""

    model_config = ConfigDict(frozen=True)

    current_view: View = View.HOME
    selected_product_id: Optional[str] = None
    search_term: str = ""
