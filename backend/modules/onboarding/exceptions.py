"""
Onboarding module exceptions.
"""

from typing import Optional

from shared.exceptions import StorefrontError, ValidationError


class OnboardingValidationError(ValidationError):
    """Raised when a wizard step's fields are invalid."""

    def __init__(self, field: Optional[str], message: str):
        super().__init__(
            message,
            code="ONBOARDING_VALIDATION",
            details={"field": field},
        )
        self.field = field


class OnboardingStateError(StorefrontError):
    """Raised for a wizard action that is not allowed at the current step."""

    def __init__(self, message: str, step: Optional[int] = None):
        super().__init__(
            message,
            code="ONBOARDING_STATE",
            details={"step": step},
        )
