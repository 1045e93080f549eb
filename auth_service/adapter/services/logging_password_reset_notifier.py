import logging

from auth_service.app.services.password_reset_notifier import IPasswordResetNotifier
from auth_service.domain.entities import User

logger = logging.getLogger(__name__)


class LoggingPasswordResetNotifier(IPasswordResetNotifier):
    """
    Placeholder delivery channel.

    Records that a reset link was issued; the raw token never reaches the log.
    A mail or message-queue adapter replaces this in deployments that send email.
    """

    async def send_password_reset(self, user: User, reset_token: str) -> None:
        logger.info(f"Password reset link issued for user {user.id}")
