"""
Logout Use Case

Ends the caller's session. Same ownership contract as RevokeSessionUseCase.
"""

from auth_service.app.use_cases.sessions.revoke_session_use_case import (
    RevokeSessionUseCase,
)


class LogoutUseCase(RevokeSessionUseCase):
    """
    Use case for logging out of a session.

    Business Rules:
    - Session must exist and belong to the caller
    - Access tokens already issued stay valid until they expire
    """

    action = "logged out"
