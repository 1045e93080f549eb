"""
Confirm Password Reset Use Case

Consumes a reset token exactly once and sets the new password.
"""

import logging

from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.token_service import ITokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.libs.result import Error, Result, Return
from .dtos import MessageResponse
from .errors import RESET_TOKEN_INVALID_MESSAGE, AuthErrorCode
from .password_policy import validate_password

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is validated by hashing and comparing with stored hash
    - Unknown, expired and consumed tokens are indistinguishable (RESET_TOKEN_INVALID)
    - Consumption is a conditional update, so only one caller can use a token
    - New password must satisfy the password policy
    - All user sessions are revoked (the caller may hold none)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: IPasswordHasher,
        token_service: ITokenService,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.token_service = token_service

    async def execute(self, token: str, new_password: str) -> Result[MessageResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from the reset link)
            new_password: New password to set

        Errors:
            - INVALID_PASSWORD: Password does not meet complexity requirements
            - RESET_TOKEN_INVALID: Token unknown, expired or already used
        """
        invalid = Error(AuthErrorCode.RESET_TOKEN_INVALID, RESET_TOKEN_INVALID_MESSAGE)

        async with self.uow:
            policy_error = validate_password(new_password)
            if policy_error is not None:
                return Return.err(policy_error)

            token_hash = self.token_service.hash_token(token)
            reset_token = await self.uow.password_reset_tokens.get_valid_by_token_hash(
                token_hash
            )
            if reset_token is None:
                return Return.err(invalid)

            if not await self.uow.password_reset_tokens.mark_used(reset_token.id):
                return Return.err(invalid)

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return Return.err(invalid)

            await self.uow.users.update_password_hash(
                user.id, self.password_hasher.hash(new_password)
            )

            revoked = await self.uow.sessions.revoke_all_by_user_id(user.id)

            await self.uow.commit()

            logger.info(f"Password reset for user {user.id}, revoked {revoked} session(s)")

            return Return.ok(
                MessageResponse(status="success", message="Password has been reset successfully")
            )
