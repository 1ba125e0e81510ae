"""
Profiles module.

Server-side profile updates behind the update-profile endpoint.

Public API:
- IProfileService: Interface for profile operations
"""

from .interfaces import IProfileService

__all__ = ["IProfileService"]
