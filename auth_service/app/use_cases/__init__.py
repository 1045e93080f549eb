"""
Use Cases

Organized into domain folders:
- auth/: Login, token refresh, logout, password change and reset
- sessions/: Listing and revoking a user's sessions

Import from subdirectories for better organization.
"""

from .auth import (
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    ChangePasswordUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    VerifyAccessTokenUseCase,
    GetCurrentUserUseCase,
)
from .sessions import (
    ListSessionsUseCase,
    RevokeSessionUseCase,
    RevokeOtherSessionsUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "ChangePasswordUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "VerifyAccessTokenUseCase",
    "GetCurrentUserUseCase",
    # Sessions
    "ListSessionsUseCase",
    "RevokeSessionUseCase",
    "RevokeOtherSessionsUseCase",
]
