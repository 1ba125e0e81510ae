"""
Navigation controller.

Holds the current view and applies the onboarding and sign-in redirects.
"""

import logging
from typing import Callable, Optional

from modules.users.models import User

from .models import (
    PROTECTED_VIEWS,
    NavigationRequest,
    NavigationState,
    NavigationTarget,
    View,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[NavigationState], None]


def resolve_navigation(request: NavigationRequest, user: Optional[User]) -> NavigationState:
    """
    Apply the transition rules to a request.

    1. A user pending onboarding always lands on onboarding, without
       navigation parameters.
    2. Protected views without a user land on auth.
    3. Otherwise the requested view, with only the parameters the request
       carries.
    """
    if user is not None and user.needs_onboarding and request.view != View.ONBOARDING:
        return NavigationState(current_view=View.ONBOARDING)

    if request.view in PROTECTED_VIEWS and user is None:
        return NavigationState(current_view=View.AUTH)

    return NavigationState(
        current_view=request.view,
        selected_product_id=request.product_id,
        search_term=request.search_term or "",
    )


class NavigationController:
    """
    Single owner of NavigationState.

    State changes only through navigate() and through re-evaluation when
    the User changes (wire on_user_changed to the user synchronizer).
    """

    def __init__(self, user: Optional[User] = None):
        self._user = user
        self._state = NavigationState()
        self._listeners: list[StateListener] = []
        if user is not None:
            self.on_user_changed(user)

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def current_view(self) -> View:
        return self._state.current_view

    @property
    def user(self) -> Optional[User]:
        return self._user

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def navigate(self, target: NavigationTarget) -> NavigationState:
        """
        Navigate to a view.

        Args:
            target: A view identifier, a NavigationRequest, or a mapping
                with view/product_id/search_term keys

        Returns:
            The resulting navigation state

        Raises:
            UnknownViewError: If the target names no known view
        """
        request = NavigationRequest.from_target(target)
        return self._transition(request)

    def on_user_changed(self, user: Optional[User]) -> None:
        """Re-evaluate the current view for a new User."""
        self._user = user
        state = self._state

        if user is not None and not user.needs_onboarding and state.current_view == View.ONBOARDING:
            request = NavigationRequest(view=View.DASHBOARD)
        else:
            request = NavigationRequest(
                view=state.current_view,
                product_id=state.selected_product_id,
                search_term=state.search_term or None,
            )
        self._transition(request)

    def _transition(self, request: NavigationRequest) -> NavigationState:
        new_state = resolve_navigation(request, self._user)
        if new_state.current_view != request.view:
            logger.debug("Redirected %s -> %s", request.view.value, new_state.current_view.value)

        if new_state != self._state:
            self._state = new_state
            for listener in list(self._listeners):
                listener(new_state)
        return self._state
