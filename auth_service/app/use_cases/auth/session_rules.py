"""
Rules shared by the session lifecycle use cases: account status gating and
token pair issuance.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from auth_service.app.services.token_service import AccessTokenClaims, ITokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.base import utc_now
from auth_service.domain.entities import User, UserStatus
from auth_service.libs.result import Error
from .dtos import RequestContext, TokenPair
from .errors import AuthErrorCode

_STATUS_ERRORS = {
    UserStatus.suspended: Error(AuthErrorCode.ACCOUNT_SUSPENDED, "Account is suspended"),
    UserStatus.inactive: Error(AuthErrorCode.ACCOUNT_INACTIVE, "Account is inactive"),
    UserStatus.pending: Error(
        AuthErrorCode.ACCOUNT_PENDING, "Account is pending activation"
    ),
}


def check_user_status(user: User) -> Optional[Error]:
    """Error for any status that may not hold a session, None for active users"""
    return _STATUS_ERRORS.get(user.status)


def access_claims_for(user: User, session_id: UUID) -> AccessTokenClaims:
    return AccessTokenClaims(
        sub=str(user.id),
        tenant_id=str(user.tenant_id),
        email=user.email,
        user_type=user.user_type.value,
        token_version=ITokenService.token_version(user.password_changed_at),
        sid=str(session_id),
    )


def refresh_expiry(refresh_token_expire_days: int) -> datetime:
    return utc_now() + timedelta(days=refresh_token_expire_days)


async def open_session(
    uow: UnitOfWork,
    token_service: ITokenService,
    user: User,
    context: RequestContext,
    refresh_token_expire_days: int,
) -> TokenPair:
    """Create a session row for the user and issue its first token pair"""
    refresh_token = token_service.generate_refresh_token()
    session = await uow.sessions.create(
        user_id=user.id,
        refresh_token_hash=token_service.hash_token(refresh_token),
        expires_at=refresh_expiry(refresh_token_expire_days),
        ip_address=context.ip_address,
        user_agent=context.user_agent,
    )

    access_token = token_service.issue_access_token(access_claims_for(user, session.id))

    return TokenPair(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=token_service.access_token_ttl_seconds,
        session_id=str(session.id),
    )
