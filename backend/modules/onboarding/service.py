"""
Onboarding flow implementation.

A three-step wizard: identity, interests, summary. Steps are validated
locally; only confirming the summary talks to the Session Adapter.
"""

import logging
from typing import Optional

from shared.exceptions import StorefrontError
from modules.navigation.models import View
from modules.navigation.service import NavigationController
from modules.session.exceptions import OperationInProgressError
from modules.session.interfaces import ISessionAdapter
from modules.session.models import AccountType, ProfileUpdate
from modules.users.models import User
from modules.users.service import UserModelSynchronizer

from .models import (
    INTEREST_CATALOG,
    FieldError,
    OnboardingDraft,
    OnboardingStep,
    OnboardingSummary,
)
from .exceptions import OnboardingStateError, OnboardingValidationError

logger = logging.getLogger(__name__)


def validate_identity(draft: OnboardingDraft) -> Optional[FieldError]:
    """Check the identity step. Returns the first field error, if any."""
    if not draft.name.strip():
        return FieldError(field="name", message="Please enter your name")
    if draft.account_type == AccountType.BUYER and not draft.company.strip():
        return FieldError(field="company", message="Please enter your company name")
    return None


class OnboardingFlow:
    """
    Onboarding wizard state.

    Identity fields can only be edited on the identity step, bio and
    interests on the interests step; the summary is read-only. Going back
    keeps everything that was entered.
    """

    def __init__(
        self,
        session: ISessionAdapter,
        users: UserModelSynchronizer,
        navigation: NavigationController,
        draft: Optional[OnboardingDraft] = None,
    ):
        self._session = session
        self._users = users
        self._navigation = navigation
        self._draft: Optional[OnboardingDraft] = draft or OnboardingDraft()
        self._step = OnboardingStep.IDENTITY
        self._submitting = False
        self.error: Optional[FieldError] = None

    @property
    def step(self) -> OnboardingStep:
        return self._step

    @property
    def draft(self) -> OnboardingDraft:
        return self._active_draft()

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def is_finished(self) -> bool:
        """True once the draft was discarded, by completion or abandonment."""
        return self._draft is None

    def update_identity(
        self,
        *,
        name: Optional[str] = None,
        account_type: Optional[AccountType] = None,
        company: Optional[str] = None,
    ) -> OnboardingDraft:
        self._require_step(OnboardingStep.IDENTITY, "Identity can only be edited on the first step")
        changes = {}
        if name is not None:
            changes["name"] = name
        if account_type is not None:
            changes["account_type"] = AccountType(account_type)
        if company is not None:
            changes["company"] = company
        self._draft = self._active_draft().model_copy(update=changes)
        return self._draft

    def update_bio(self, bio: str) -> OnboardingDraft:
        self._require_step(OnboardingStep.INTERESTS, "Bio can only be edited on the interests step")
        self._draft = self._active_draft().model_copy(update={"bio": bio})
        return self._draft

    def toggle_interest(self, interest: str) -> frozenset[str]:
        """Select or deselect an interest tag from the catalog."""
        self._require_step(OnboardingStep.INTERESTS, "Interests can only be edited on the interests step")
        if interest not in INTEREST_CATALOG:
            raise OnboardingValidationError("interests", f"Unknown interest: {interest}")

        draft = self._active_draft()
        interests = draft.interests ^ {interest}
        self._draft = draft.model_copy(update={"interests": interests})
        return interests

    def next(self) -> OnboardingStep:
        """
        Advance one step.

        Raises:
            OnboardingValidationError: If the identity step is incomplete.
                The step does not change and the error is kept in self.error.
            OnboardingStateError: From the summary step (use confirm())
        """
        draft = self._active_draft()
        if self._step == OnboardingStep.SUMMARY:
            raise OnboardingStateError("Confirm the summary to finish onboarding", self._step)

        if self._step == OnboardingStep.IDENTITY:
            error = validate_identity(draft)
            if error is not None:
                self.error = error
                raise OnboardingValidationError(error.field, error.message)

        self.error = None
        self._step = OnboardingStep(self._step + 1)
        return self._step

    def back(self, to: Optional[OnboardingStep] = None) -> OnboardingStep:
        """Go back to the previous step, or to any earlier one."""
        self._active_draft()
        if self._step == OnboardingStep.IDENTITY:
            raise OnboardingStateError("Already on the first step", self._step)
        target = OnboardingStep(to) if to is not None else OnboardingStep(self._step - 1)
        if target >= self._step:
            raise OnboardingStateError("Can only go back to an earlier step", self._step)

        self.error = None
        self._step = target
        return self._step

    def summary(self) -> OnboardingSummary:
        draft = self._active_draft()
        return OnboardingSummary(
            name=draft.name.strip(),
            account_type=draft.account_type,
            company=draft.company.strip() if draft.account_type == AccountType.BUYER else None,
            bio=draft.bio,
            interests=sorted(draft.interests),
        )

    async def confirm(self) -> Optional[User]:
        """
        Save the profile and finish onboarding.

        On failure the error is kept in self.error, re-raised, and the
        wizard stays on the summary step so the user can retry.
        """
        self._require_step(OnboardingStep.SUMMARY, "Onboarding can only be confirmed from the summary")
        if self._submitting:
            raise OperationInProgressError("complete_onboarding")

        recap = self.summary()
        fields = ProfileUpdate(
            name=recap.name,
            account_type=recap.account_type,
            company=recap.company,
            needs_onboarding=False,
        )

        self._submitting = True
        self.error = None
        try:
            await self._session.update_profile(fields)
        except StorefrontError as e:
            logger.warning("Completing onboarding failed: %s", e.message)
            self.error = FieldError(message=e.message)
            raise
        finally:
            self._submitting = False

        user = self._users.mark_onboarded(recap.name, recap.account_type, recap.company)
        self._draft = None
        self._navigation.navigate(View.DASHBOARD)
        return user

    def abandon(self) -> None:
        """Discard the draft without saving anything."""
        self._draft = None
        self.error = None

    def _active_draft(self) -> OnboardingDraft:
        if self._draft is None:
            raise OnboardingStateError("Onboarding is no longer active")
        return self._draft

    def _require_step(self, step: OnboardingStep, message: str) -> None:
        self._active_draft()
        if self._step != step:
            raise OnboardingStateError(message, self._step)
