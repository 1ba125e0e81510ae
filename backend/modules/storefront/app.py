"""
Storefront facade.

Wires the Session Adapter, User Model Synchronizer and Navigation
Controller together and exposes the page-level actions.
"""

import logging
from typing import Optional

from shared.config import Settings, get_settings
from shared.database import get_supabase_anon_client
from modules.catalog.exceptions import ProductValidationError
from modules.catalog.models import ProductDraft
from modules.catalog.validation import validate_product_draft
from modules.navigation.models import NavigationState, NavigationTarget, View
from modules.navigation.renderer import RenderedView, render_view
from modules.navigation.service import NavigationController
from modules.onboarding.models import OnboardingDraft
from modules.onboarding.service import OnboardingFlow
from modules.session.interfaces import IIdentityProvider
from modules.session.memory_provider import InMemoryIdentityProvider
from modules.session.models import AccountType
from modules.session.service import SessionAdapter
from modules.session.supabase_provider import SupabaseIdentityProvider
from modules.users.interfaces import IFallbackIdentityResolver
from modules.users.models import User
from modules.users.resolvers import DemoAccountResolver
from modules.users.service import UserModelSynchronizer

logger = logging.getLogger(__name__)


class Storefront:
    """
    One storefront client session.

    Errors from the actions below propagate unchanged so the calling page
    can show them next to its form; none of them leave the storefront in
    an unusable state.
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        fallback: Optional[IFallbackIdentityResolver] = None,
        redirect_to: Optional[str] = None,
        social_providers: Optional[list[str]] = None,
    ):
        self.session = SessionAdapter(
            provider,
            redirect_to=redirect_to,
            social_providers=social_providers,
        )
        self.users = UserModelSynchronizer(self.session, fallback)
        self.navigation = NavigationController(self.users.current_user)
        self.users.subscribe(self.navigation.on_user_changed)

    @property
    def user(self) -> Optional[User]:
        return self.users.current_user

    def navigate(self, target: NavigationTarget) -> NavigationState:
        return self.navigation.navigate(target)

    def render(self) -> RenderedView:
        return render_view(self.navigation.state, self.users.current_user)

    async def start(self) -> Optional[User]:
        """Pick up a session the provider already has."""
        await self.session.restore()
        return self.user

    async def sign_in(self, email: str, password: str) -> NavigationState:
        """Sign in, then go to the dashboard (or onboarding, if pending)."""
        await self.session.sign_in_with_password(email, password)
        return self.navigate(View.DASHBOARD)

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        account_type: AccountType,
        company: Optional[str] = None,
    ) -> NavigationState:
        """Create an account, then go to onboarding."""
        await self.session.sign_up(email, password, name, account_type, company)
        return self.navigate(View.ONBOARDING)

    async def sign_in_with_provider(self, provider_name: str) -> str:
        """
        Start a social sign-in and return the redirect URL.

        Navigation keeps working while the redirect is pending; the
        session shows up through the adapter once it comes back.
        """
        return await self.session.sign_in_with_provider(provider_name)

    async def complete_provider_sign_in(self, auth_code: str) -> NavigationState:
        await self.session.complete_provider_sign_in(auth_code)
        return self.navigate(View.DASHBOARD)

    async def sign_out(self) -> NavigationState:
        await self.session.sign_out()
        return self.navigation.state

    def start_onboarding(self) -> OnboardingFlow:
        """Open the onboarding wizard, pre-filled from the sign-up form."""
        return OnboardingFlow(
            self.session,
            self.users,
            self.navigation,
            draft=OnboardingDraft.from_record(self.users.current_record),
        )

    def submit_product(self, draft: ProductDraft) -> NavigationState:
        """
        Validate the add-product form and return to the dashboard.

        Raises:
            ProductValidationError: With a message per invalid field
        """
        errors = validate_product_draft(draft)
        if errors:
            raise ProductValidationError(errors)

        user = self.user
        logger.info(
            "Product %r submitted for review by %s",
            draft.name.strip(),
            user.id if user else None,
        )
        return self.navigate(View.DASHBOARD)


def create_identity_provider(settings: Settings) -> IIdentityProvider:
    """Identity provider selected by IDENTITY_BACKEND."""
    if settings.identity_backend == "memory":
        return InMemoryIdentityProvider.from_settings(settings)
    return SupabaseIdentityProvider(get_supabase_anon_client())


def create_storefront(settings: Optional[Settings] = None) -> Storefront:
    """Build a storefront from configuration."""
    settings = settings or get_settings()
    fallback = DemoAccountResolver.from_settings(settings)
    return Storefront(
        create_identity_provider(settings),
        fallback=fallback if len(fallback) else None,
        redirect_to=settings.auth_callback_url,
        social_providers=settings.social_providers,
    )
