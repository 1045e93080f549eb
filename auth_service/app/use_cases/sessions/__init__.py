"""
Session Management Use Cases

Listing and revoking a user's own sessions.
"""

from .list_sessions_use_case import ListSessionsUseCase
from .revoke_session_use_case import RevokeSessionUseCase
from .revoke_other_sessions_use_case import RevokeOtherSessionsUseCase

__all__ = [
    "ListSessionsUseCase",
    "RevokeSessionUseCase",
    "RevokeOtherSessionsUseCase",
]
