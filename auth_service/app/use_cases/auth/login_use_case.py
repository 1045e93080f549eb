"""
Login Use Case

Verifies credentials and opens a new session with a fresh token pair.
"""

import logging
from typing import Optional

from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.token_service import ITokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.libs.result import Error, Result, Return
from config import ApplicationConfig
from .dtos import AuthUser, LoginResponse, RequestContext
from .errors import INVALID_CREDENTIALS_MESSAGE, AuthErrorCode
from .session_rules import check_user_status, open_session

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Email lookup is case-insensitive and tenant-scoped when the tenant is known
    - Unknown email costs a full Argon2 computation (no account enumeration)
    - Accounts without a password cannot log in
    - Only active accounts get a session (suspended/inactive/pending are refused)
    - At most max_active_sessions live sessions; the oldest are revoked to make room
    - Creates new session with refresh token, updates user.last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: IPasswordHasher,
        token_service: ITokenService,
        max_active_sessions: int = ApplicationConfig.MAX_ACTIVE_SESSIONS,
        refresh_token_expire_days: int = ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.token_service = token_service
        self.max_active_sessions = max_active_sessions
        self.refresh_token_expire_days = refresh_token_expire_days

    async def execute(
        self,
        email: str,
        password: str,
        context: Optional[RequestContext] = None,
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            context: Caller IP / user agent / tenant

        Returns:
            Result with LoginResponse containing sanitized user and tokens, or Error
        """
        context = context or RequestContext()

        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower(), context.tenant_id)

            if user is None:
                # Hash a dummy password so "no such account" takes as long as a wrong password
                self.password_hasher.simulate_verify()
                return Return.err(
                    Error(AuthErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
                )

            if not user.password_hash:
                self.password_hasher.simulate_verify()
                logger.info(f"Login refused, no password set for user {user.id}")
                return Return.err(
                    Error(
                        AuthErrorCode.CREDENTIAL_NOT_SET,
                        "Password not set for this account",
                    )
                )

            if not self.password_hasher.verify(password, user.password_hash):
                return Return.err(
                    Error(AuthErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
                )

            status_error = check_user_status(user)
            if status_error is not None:
                logger.info(f"Login refused for user {user.id}: {status_error.code}")
                return Return.err(status_error)

            active_count = await self.uow.sessions.count_active(user.id)
            if active_count >= self.max_active_sessions:
                evicted = await self.uow.sessions.evict_oldest(
                    user.id, self.max_active_sessions - 1
                )
                logger.warning(
                    f"Session cap reached for user {user.id}, evicted {evicted} session(s)"
                )

            tokens = await open_session(
                self.uow,
                self.token_service,
                user,
                context,
                self.refresh_token_expire_days,
            )

            await self.uow.users.update_last_login(user.id)

            await self.uow.commit()

            logger.info(
                f"User {user.id} logged in (tenant {user.tenant_id}, session {tokens.session_id})"
            )

            return Return.ok(LoginResponse(user=AuthUser.from_entity(user), tokens=tokens))
