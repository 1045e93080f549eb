"""
Change Password Use Case

Replaces the password of an authenticated user and signs out every other device.
"""

import logging
from typing import Optional
from uuid import UUID

from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.libs.result import Error, Result, Return
from .dtos import MessageResponse
from .errors import AuthErrorCode
from .password_policy import validate_password

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing a password.

    Business Rules:
    - Current password must be verified first
    - New password must satisfy the password policy and differ from the current one
    - Moves the password watermark, so older access tokens stop verifying
    - Revokes every session except the caller's current one
    - Invalidates all outstanding password reset tokens
    """

    def __init__(self, uow: UnitOfWork, password_hasher: IPasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(
        self,
        user_id: UUID,
        current_password: str,
        new_password: str,
        current_session_id: Optional[UUID] = None,
        tenant_id: Optional[UUID] = None,
    ) -> Result[MessageResponse]:
        """
        Execute change password use case.

        Errors:
            - USER_NOT_FOUND: Caller no longer exists
            - CREDENTIAL_NOT_SET: Account has no password to change
            - PASSWORD_MISMATCH: Current password is wrong
            - INVALID_PASSWORD: New password fails the policy
            - PASSWORD_REUSED: New password equals the current one
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id, tenant_id)
            if user is None:
                return Return.err(Error(AuthErrorCode.USER_NOT_FOUND, "User not found"))

            if not user.password_hash:
                return Return.err(
                    Error(AuthErrorCode.CREDENTIAL_NOT_SET, "No password set for this account")
                )

            if not self.password_hasher.verify(current_password, user.password_hash):
                return Return.err(
                    Error(AuthErrorCode.PASSWORD_MISMATCH, "Current password is incorrect")
                )

            policy_error = validate_password(new_password)
            if policy_error is not None:
                return Return.err(policy_error)

            if new_password == current_password:
                return Return.err(
                    Error(
                        AuthErrorCode.PASSWORD_REUSED,
                        "New password must be different from current password",
                    )
                )

            await self.uow.users.update_password_hash(
                user.id, self.password_hasher.hash(new_password)
            )

            revoked = await self.uow.sessions.revoke_all_by_user_id(
                user.id, except_session_id=current_session_id
            )
            await self.uow.password_reset_tokens.invalidate_all_for_user(user.id)

            await self.uow.commit()

            logger.info(
                f"Password changed for user {user.id}, revoked {revoked} other session(s)"
            )

            return Return.ok(
                MessageResponse(status="success", message="Password changed successfully")
            )
