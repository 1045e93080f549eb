"""
Refresh Token Use Case

Exchanges a refresh token for a new token pair with rotation and reuse detection.
"""

import logging
from typing import Optional

from auth_service.app.services.token_service import ITokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.entities import Session
from auth_service.libs.result import Error, Result, Return
from config import ApplicationConfig
from .dtos import RequestContext, TokenPair
from .errors import AuthErrorCode
from .session_rules import access_claims_for, check_user_status, refresh_expiry

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token rotation: the session keeps its id, the stored hash is replaced
    - Replaying a rotated-away token, or any token of a revoked session, is
      treated as theft: every session of the owner is revoked
    - Expired sessions fail without revoking anything
    - Owner status is re-checked on every refresh
    - Rotation is a compare-and-swap; losing a race counts as reuse
    - Expiry slides forward by refresh_token_expire_days on each rotation
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: ITokenService,
        refresh_token_expire_days: int = ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS,
    ):
        self.uow = uow
        self.token_service = token_service
        self.refresh_token_expire_days = refresh_token_expire_days

    async def execute(
        self, refresh_token: str, context: Optional[RequestContext] = None
    ) -> Result[TokenPair]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate
            context: Caller IP / user agent (logged only)

        Returns:
            Result with the new TokenPair, or Error
        """
        context = context or RequestContext()

        async with self.uow:
            token_hash = self.token_service.hash_token(refresh_token)
            session = await self.uow.sessions.get_by_refresh_token_hash(token_hash)

            if session is None:
                rotated_from = await self.uow.sessions.get_by_rotated_token_hash(
                    token_hash
                )
                if rotated_from is None:
                    return Return.err(
                        Error(AuthErrorCode.INVALID_REFRESH_TOKEN, "Invalid refresh token")
                    )
                return await self._contain_reuse(rotated_from, context, "rotated token replayed")

            if session.is_revoked:
                return await self._contain_reuse(session, context, "revoked session token used")

            if session.is_expired():
                return Return.err(Error(AuthErrorCode.SESSION_EXPIRED, "Session has expired"))

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None:
                return Return.err(
                    Error(AuthErrorCode.INVALID_REFRESH_TOKEN, "Invalid refresh token")
                )

            status_error = check_user_status(user)
            if status_error is not None:
                return Return.err(status_error)

            new_refresh_token = self.token_service.generate_refresh_token()
            rotated = await self.uow.sessions.rotate_refresh_token(
                session.id,
                expected_hash=token_hash,
                new_hash=self.token_service.hash_token(new_refresh_token),
                new_expires_at=refresh_expiry(self.refresh_token_expire_days),
            )
            if not rotated:
                return await self._contain_reuse(session, context, "concurrent rotation lost")

            await self.uow.commit()

            access_token = self.token_service.issue_access_token(
                access_claims_for(user, session.id)
            )

            logger.info(f"Token refreshed for user {user.id} (session {session.id})")

            return Return.ok(
                TokenPair(
                    access_token=access_token,
                    refresh_token=new_refresh_token,
                    expires_in=self.token_service.access_token_ttl_seconds,
                    session_id=str(session.id),
                )
            )

    async def _contain_reuse(
        self, session: Session, context: RequestContext, reason: str
    ) -> Result[TokenPair]:
        revoked = await self.uow.sessions.revoke_all_by_user_id(session.user_id)
        await self.uow.commit()

        logger.warning(
            f"Refresh token reuse detected ({reason}) for user {session.user_id}, "
            f"session {session.id}, ip {context.ip_address}: revoked {revoked} session(s)"
        )

        return Return.err(Error(AuthErrorCode.SESSION_REVOKED, "Session has been revoked"))
