"""
RotatedRefreshToken Entity

Hashes of refresh tokens that have been rotated away.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from auth_service.domain.base import utc_now


class RotatedRefreshToken(SQLModel, table=True):
    """
    RotatedRefreshToken entity - history of superseded refresh tokens.

    Business Rules:
    - Written in the same transaction as the rotation that superseded it
    - Presenting a token found here is a reuse signal for its session's owner
    """

    __tablename__ = "rotated_refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    session_id: UUID = Field(foreign_key="auth_sessions.id", index=True)
    token_hash: str = Field(max_length=64, unique=True, index=True)

    rotated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
