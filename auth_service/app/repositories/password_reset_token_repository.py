from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from auth_service.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """Reset token store interface - application layer"""

    @abstractmethod
    async def create(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_valid_by_token_hash(
        self, token_hash: str
    ) -> Optional[PasswordResetToken]:
        """Get an unconsumed, unexpired token by hash"""
        pass

    @abstractmethod
    async def mark_used(self, token_id: UUID) -> bool:
        """Consume a token. Returns False if it was already consumed."""
        pass

    @abstractmethod
    async def invalidate_all_for_user(self, user_id: UUID) -> int:
        """Mark every unconsumed token of the user as used. Returns count."""
        pass
