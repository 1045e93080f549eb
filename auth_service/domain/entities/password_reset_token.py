"""
PasswordResetToken Entity

Single-use, time-boxed password reset tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from auth_service.domain.base import utc_now


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - secure password reset tokens.

    Business Rules:
    - Token is SHA-256 hash of a secure random string
    - Expires after PASSWORD_RESET_EXPIRE_MINUTES
    - Single-use: used_at is set on consumption and never cleared
    - Issuing a new token marks every unconsumed token of the user as used
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(max_length=64, index=True)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
        Index("idx_password_reset_user_used", "user_id", "used_at"),
    )
