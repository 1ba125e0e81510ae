"""
Navigation module exceptions.
"""

from shared.exceptions import ValidationError


class UnknownViewError(ValidationError):
    """Raised when navigating to a view that does not exist."""

    def __init__(self, view: str):
        super().__init__(
            f"Unknown view: {view}",
            code="UNKNOWN_VIEW",
            details={"view": view},
        )
