"""
Session Entity

One authenticated device/browser instance holding a rotating refresh token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from auth_service.domain.base import utc_now


class Session(SQLModel, table=True):
    """
    Session entity - stores the hash of the current refresh token.

    Business Rules:
    - Refresh tokens are stored as SHA-256 hex digests, never raw
    - The hash is replaced in place on each refresh (id and metadata kept)
    - Revocation is terminal; revoked_at is never cleared
    - Sessions past expires_at are invalid even when not revoked
    - Rows are never deleted by the service
    """

    __tablename__ = "auth_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    refresh_token_hash: str = Field(max_length=64, unique=True)

    # Metadata only, never used for binding
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_auth_session_user_revoked", "user_id", "revoked_at"),
        Index("idx_auth_session_expires_at", "expires_at"),
    )

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expires_at <= (now or utc_now())
