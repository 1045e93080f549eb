from abc import ABC, abstractmethod

from auth_service.domain.entities import User


class IPasswordResetNotifier(ABC):
    """Delivers raw reset tokens to users (email, SMS, ...)"""

    @abstractmethod
    async def send_password_reset(self, user: User, reset_token: str) -> None:
        pass
