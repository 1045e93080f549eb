"""
User Entity

Credential and status record consulted by the authentication flows.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from auth_service.domain.base import utc_now
from .enums import UserStatus, UserType


class User(SQLModel, table=True):
    """
    User entity - a person who can authenticate within one tenant.

    Business Rules:
    - Email is unique per tenant and compared case-insensitively (stored lowercased)
    - password_hash is an Argon2id hash; None means password login is impossible
    - password_changed_at is the watermark embedded in access tokens
    - status is read at login, refresh and token verification
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(nullable=False, index=True)
    email: str = Field(max_length=255, index=True)
    password_hash: Optional[str] = Field(default=None, max_length=255)

    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    user_type: UserType = Field(default=UserType.staff)
    status: UserStatus = Field(default=UserStatus.pending)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    password_changed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_user_tenant_email"),
        Index("idx_user_status", "status"),
    )
