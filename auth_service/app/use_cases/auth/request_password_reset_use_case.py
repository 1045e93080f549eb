"""
Request Password Reset Use Case

Issues a single-use reset token and queues it for the notification channel.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from fastapi import BackgroundTasks

from auth_service.app.services.password_reset_notifier import IPasswordResetNotifier
from auth_service.app.services.token_service import ITokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.base import utc_now
from auth_service.domain.entities import UserStatus
from auth_service.libs.result import Result, Return
from config import ApplicationConfig
from .dtos import MessageResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If the email exists, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Same response whether or not the account exists (no email enumeration)
    - Only active accounts receive a token
    - Earlier unconsumed tokens of the user are invalidated first
    - Token is hashed with SHA-256 before storing
    - Delivery runs after the response is sent
    - Rate limiting to be handled at middleware/infrastructure layer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: ITokenService,
        notifier: IPasswordResetNotifier,
        reset_expire_minutes: int = ApplicationConfig.PASSWORD_RESET_EXPIRE_MINUTES,
    ):
        self.uow = uow
        self.token_service = token_service
        self.notifier = notifier
        self.reset_expire_minutes = reset_expire_minutes

    async def execute(
        self,
        email: str,
        background_tasks: BackgroundTasks,
        tenant_id: Optional[UUID] = None,
    ) -> Result[MessageResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address
            background_tasks: Queue the reset notification is added to
            tenant_id: Tenant scope, when the caller knows it

        Returns:
            Result with the same MessageResponse for every email
        """
        response = MessageResponse(status="sent", message=RESET_REQUESTED_MESSAGE)

        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower(), tenant_id)

            if user is None:
                logger.info("Password reset requested for unknown email")
                return Return.ok(response)

            if user.status != UserStatus.active:
                logger.info(f"Password reset requested for non-active user {user.id}")
                return Return.ok(response)

            await self.uow.password_reset_tokens.invalidate_all_for_user(user.id)

            reset_token = self.token_service.generate_reset_token()
            await self.uow.password_reset_tokens.create(
                user_id=user.id,
                token_hash=self.token_service.hash_token(reset_token),
                expires_at=utc_now() + timedelta(minutes=self.reset_expire_minutes),
            )

            await self.uow.commit()

        background_tasks.add_task(self.notifier.send_password_reset, user, reset_token)

        logger.info(f"Password reset token created for user {user.id}")

        return Return.ok(response)
