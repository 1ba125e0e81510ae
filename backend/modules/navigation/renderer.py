"""
View renderer.

Pure selection of the page to display. It keeps no state of its own.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from modules.session.models import AccountType
from modules.users.models import User

from .models import NavigationState, View


class Page(str, Enum):
    """Page components the storefront can display."""

    HOME = "home"
    BROWSE = "browse"
    PRODUCT = "product"
    SELLER_DASHBOARD = "seller-dashboard"
    BUYER_DASHBOARD = "buyer-dashboard"
    AUTH = "auth"
    ONBOARDING = "onboarding"
    SIGN_IN_PROMPT = "sign-in-prompt"
    ADD_PRODUCT = "add-product"


class RenderedView(BaseModel):
    """Page to display and the props it needs."""

    model_config = ConfigDict(frozen=True)

    page: Page
    product_id: Optional[str] = None
    search_term: str = ""


def render_view(state: NavigationState, user: Optional[User]) -> RenderedView:
    """Select the page for a navigation state and user."""
    view = state.current_view

    if view == View.BROWSE:
        return RenderedView(page=Page.BROWSE, search_term=state.search_term)
    if view == View.PRODUCT:
        return RenderedView(page=Page.PRODUCT, product_id=state.selected_product_id)
    if view == View.DASHBOARD:
        if user is None:
            return RenderedView(page=Page.AUTH)
        if user.account_type == AccountType.SELLER:
            return RenderedView(page=Page.SELLER_DASHBOARD)
        return RenderedView(page=Page.BUYER_DASHBOARD)
    if view == View.ADD_PRODUCT:
        return RenderedView(page=Page.ADD_PRODUCT if user is not None else Page.AUTH)
    if view == View.AUTH:
        return RenderedView(page=Page.AUTH)
    if view == View.ONBOARDING:
        return RenderedView(page=Page.ONBOARDING if user is not None else Page.SIGN_IN_PROMPT)
    return RenderedView(page=Page.HOME)
