"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .change_password_use_case import ChangePasswordUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .verify_access_token_use_case import VerifyAccessTokenUseCase
from .get_current_user_use_case import GetCurrentUserUseCase
from .errors import AuthErrorCode
from .dtos import (
    RequestContext,
    AuthUser,
    TokenPair,
    LoginResponse,
    SessionInfo,
    RevokeSessionResponse,
    RevokeSessionsResponse,
    MessageResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "ChangePasswordUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "VerifyAccessTokenUseCase",
    "GetCurrentUserUseCase",
    # Errors
    "AuthErrorCode",
    # DTOs - Context
    "RequestContext",
    # DTOs - Responses
    "AuthUser",
    "TokenPair",
    "LoginResponse",
    "SessionInfo",
    "RevokeSessionResponse",
    "RevokeSessionsResponse",
    "MessageResponse",
]
