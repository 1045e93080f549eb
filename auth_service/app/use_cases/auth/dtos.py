"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from auth_service.domain.entities import Session, User


# ============================================================================
# Context
# ============================================================================


class RequestContext(BaseModel):
    """Caller metadata passed explicitly into every operation"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    tenant_id: Optional[UUID] = None
    session_id: Optional[UUID] = None


# ============================================================================
# Response DTOs
# ============================================================================


class AuthUser(BaseModel):
    """User as returned to clients - never includes the credential hash"""

    id: str
    tenant_id: str
    email: str
    first_name: str
    last_name: str
    user_type: str
    status: str
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "AuthUser":
        return cls(
            id=str(user.id),
            tenant_id=str(user.tenant_id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            user_type=user.user_type.value,
            status=user.status.value,
            last_login_at=user.last_login_at,
        )


class TokenPair(BaseModel):
    """Access + refresh token pair; expires_in is the access token lifetime in seconds"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    session_id: str


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: AuthUser
    tokens: TokenPair


class SessionInfo(BaseModel):
    """Active session as shown in the "my devices" list"""

    id: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime
    last_used_at: Optional[datetime] = None
    expires_at: datetime
    is_current: bool

    @classmethod
    def from_entity(
        cls, session: Session, current_session_id: Optional[UUID] = None
    ) -> "SessionInfo":
        return cls(
            id=str(session.id),
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            created_at=session.created_at,
            last_used_at=session.last_used_at,
            expires_at=session.expires_at,
            is_current=current_session_id is not None and session.id == current_session_id,
        )


class RevokeSessionResponse(BaseModel):
    """Response for single-session revocation (logout / revoke)"""

    session_id: str
    revoked: bool


class RevokeSessionsResponse(BaseModel):
    """Response for bulk session revocation"""

    revoked_count: int
    kept_session_id: Optional[str] = None


class MessageResponse(BaseModel):
    """Status + human readable message"""

    status: str
    message: str
