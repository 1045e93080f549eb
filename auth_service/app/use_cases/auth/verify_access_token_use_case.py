"""
Verify Access Token Use Case

Decodes a bearer access token and, when enforced, checks it against the
current state of its owner.
"""

from uuid import UUID

from auth_service.app.services.token_service import (
    AccessTokenClaims,
    ITokenService,
    TokenExpiredError,
    TokenInvalidError,
)
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.entities import UserStatus
from auth_service.libs.result import Error, Result, Return
from config import ApplicationConfig
from .errors import AuthErrorCode


class VerifyAccessTokenUseCase:
    """
    Use case for access token verification.

    Business Rules:
    - Bad signature / malformed token -> INVALID_TOKEN, past exp -> TOKEN_EXPIRED
    - With enforce_token_version, one user read per call rejects tokens whose
      owner is gone or not active, or whose token_version predates the last
      password change
    - Without it verification is stateless and a password change only takes
      effect once outstanding access tokens expire
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: ITokenService,
        enforce_token_version: bool = ApplicationConfig.ENFORCE_TOKEN_VERSION,
    ):
        self.uow = uow
        self.token_service = token_service
        self.enforce_token_version = enforce_token_version

    async def execute(self, token: str) -> Result[AccessTokenClaims]:
        try:
            claims = self.token_service.decode_access_token(token)
        except TokenExpiredError:
            return Return.err(Error(AuthErrorCode.TOKEN_EXPIRED, "Token has expired"))
        except TokenInvalidError:
            return Return.err(Error(AuthErrorCode.INVALID_TOKEN, "Invalid token"))

        if not self.enforce_token_version:
            return Return.ok(claims)

        try:
            user_id = UUID(claims.sub)
        except ValueError:
            return Return.err(Error(AuthErrorCode.INVALID_TOKEN, "Invalid token"))

        # The uow rolls back on exit, so user attributes are only read inside the block
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)

            if user is None or user.status != UserStatus.active:
                return Return.err(Error(AuthErrorCode.INVALID_TOKEN, "Invalid token"))

            if claims.token_version < ITokenService.token_version(user.password_changed_at):
                return Return.err(
                    Error(AuthErrorCode.INVALID_TOKEN, "Token was issued before a password change")
                )

        return Return.ok(claims)
