"""
Navigation module.

Client-side page routing: a single navigate operation, the onboarding and
sign-in redirects, and the pure view renderer.

Public API:
- NavigationController, resolve_navigation: state and transition rules
- NavigationRequest, NavigationState, View: models
- render_view, RenderedView, Page: view selection
- UnknownViewError
"""

from .exceptions import UnknownViewError
from .models import PROTECTED_VIEWS, NavigationRequest, NavigationState, NavigationTarget, View
from .renderer import Page, RenderedView, render_view
from .service import NavigationController, resolve_navigation

__all__ = [
    "UnknownViewError",
    "PROTECTED_VIEWS",
    "NavigationRequest",
    "NavigationState",
    "NavigationTarget",
    "View",
    "Page",
    "RenderedView",
    "render_view",
    "NavigationController",
    "resolve_navigation",
]
