"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import UserStatus, UserType

# Export all entities
from .user import User
from .session import Session
from .rotated_refresh_token import RotatedRefreshToken
from .password_reset_token import PasswordResetToken

__all__ = [
    # Enums
    "UserStatus",
    "UserType",
    # Entities
    "User",
    "Session",
    "RotatedRefreshToken",
    "PasswordResetToken",
]
