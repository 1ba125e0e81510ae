"""Tests for the navigation controller."""

from datetime import date

import pytest

from modules.navigation.exceptions import UnknownViewError
from modules.navigation.models import NavigationRequest, NavigationState, View
from modules.navigation.service import NavigationController, resolve_navigation
from modules.session.models import AccountType
from modules.users.models import User


def make_user(needs_onboarding: bool = False, account_type=AccountType.SELLER) -> User:
    return User(
        id="user-1",
        email="user@example.com",
        name="" if needs_onboarding else "User",
        account_type=None if needs_onboarding else account_type,
        needs_onboarding=needs_onboarding,
        joined_date=date(2024, 1, 1),
    )


class TestResolveNavigation:
    @pytest.mark.parametrize("view", list(View))
    def test_pending_onboarding_always_lands_on_onboarding(self, view):
        request = NavigationRequest(view=view, product_id="p1", search_term="cms")
        state = resolve_navigation(request, make_user(needs_onboarding=True))
        assert state == NavigationState(current_view=View.ONBOARDING)

    @pytest.mark.parametrize("view", [View.DASHBOARD, View.ADD_PRODUCT])
    def test_protected_views_need_a_user(self, view):
        state = resolve_navigation(NavigationRequest(view=view), None)
        assert state.current_view == View.AUTH

    @pytest.mark.parametrize("view", [View.HOME, View.BROWSE, View.PRODUCT, View.AUTH, View.ONBOARDING])
    def test_public_views_without_user(self, view):
        assert resolve_navigation(NavigationRequest(view=view), None).current_view == view

    def test_onboarded_user_reaches_protected_view(self):
        state = resolve_navigation(NavigationRequest(view=View.ADD_PRODUCT), make_user())
        assert state.current_view == View.ADD_PRODUCT


class TestNavigationController:
    @pytest.fixture
    def controller(self):
        return NavigationController()

    def test_starts_at_home(self, controller):
        assert controller.state == NavigationState()
        assert controller.current_view == View.HOME

    @pytest.mark.parametrize("view", list(View))
    def test_bare_and_structured_requests_are_equivalent(self, view):
        """A bare view identifier is the same as a request with no parameters."""
        bare = NavigationController(make_user())
        structured = NavigationController(make_user())
        mapping = NavigationController(make_user())

        assert bare.navigate(view.value) == structured.navigate(NavigationRequest(view=view))
        assert bare.state == mapping.navigate({"view": view.value})

    def test_browse_search_term(self, controller):
        controller.navigate({"view": "browse", "searchTerm": "cms"})
        assert controller.state.search_term == "cms"

        controller.navigate("browse")
        assert controller.state.search_term == ""

    def test_product_selection(self, controller):
        state = controller.navigate({"page": "product", "productId": 7})
        assert state.current_view == View.PRODUCT
        assert state.selected_product_id == "7"

    def test_parameters_do_not_carry_over(self, controller):
        controller.navigate(NavigationRequest(view=View.PRODUCT, product_id="p1"))
        state = controller.navigate(View.BROWSE)
        assert state.selected_product_id is None

    @pytest.mark.parametrize("target", ["checkout", {"view": "nowhere"}, {"productId": "1"}, 42])
    def test_unknown_view(self, controller, target):
        with pytest.raises(UnknownViewError):
            controller.navigate(target)
        assert controller.state == NavigationState()

    def test_signed_out_dashboard_goes_to_auth(self, controller):
        assert controller.navigate("dashboard").current_view == View.AUTH

    def test_pending_user_redirected_on_sign_in(self, controller):
        controller.navigate({"view": "browse", "searchTerm": "cms"})
        controller.on_user_changed(make_user(needs_onboarding=True))
        assert controller.state == NavigationState(current_view=View.ONBOARDING)

    def test_navigate_while_pending_stays_on_onboarding(self):
        controller = NavigationController(make_user(needs_onboarding=True))
        assert controller.current_view == View.ONBOARDING
        assert controller.navigate("home").current_view == View.ONBOARDING

    def test_completing_onboarding_goes_to_dashboard(self):
        controller = NavigationController(make_user(needs_onboarding=True))
        controller.on_user_changed(make_user())
        assert controller.current_view == View.DASHBOARD

    def test_sign_out_on_protected_view_goes_to_auth(self):
        controller = NavigationController(make_user())
        controller.navigate("add-product")
        controller.on_user_changed(None)
        assert controller.current_view == View.AUTH

    def test_user_change_keeps_public_view(self):
        controller = NavigationController()
        controller.navigate({"view": "browse", "searchTerm": "cms"})
        controller.on_user_changed(make_user())
        assert controller.state == NavigationState(current_view=View.BROWSE, search_term="cms")

    def test_listeners_only_see_changes(self, controller):
        seen = []
        unsubscribe = controller.subscribe(seen.append)
        controller.navigate("browse")
        controller.navigate("browse")
        unsubscribe()
        controller.navigate("home")
        assert [state.current_view for state in seen] == [View.BROWSE]
