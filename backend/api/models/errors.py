"""
Error response models.

Standardized error responses for the API, used in route documentation.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format (FastAPI HTTPException body)."""

    detail: str
