"""
Onboarding module.

The mandatory three-step profile wizard new accounts go through before
they can use the rest of the storefront.

Public API:
- OnboardingFlow: wizard state and transitions
- OnboardingDraft, OnboardingStep, OnboardingSummary, FieldError: models
- INTEREST_CATALOG: selectable interest tags
- OnboardingValidationError, OnboardingStateError
"""

from .exceptions import OnboardingStateError, OnboardingValidationError
from .models import (
    INTEREST_CATALOG,
    FieldError,
    OnboardingDraft,
    OnboardingStep,
    OnboardingSummary,
)
from .service import OnboardingFlow, validate_identity

__all__ = [
    "OnboardingStateError",
    "OnboardingValidationError",
    "INTEREST_CATALOG",
    "FieldError",
    "OnboardingDraft",
    "OnboardingStep",
    "OnboardingSummary",
    "OnboardingFlow",
    "validate_identity",
]
