from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from auth_service.domain.entities import User


class IUserRepository(ABC):
    """User store interface - application layer"""

    @abstractmethod
    async def get_by_email(
        self, email: str, tenant_id: Optional[UUID] = None
    ) -> Optional[User]:
        """Get user by email (case-insensitive), scoped to tenant when given"""
        pass

    @abstractmethod
    async def get_by_id(
        self, user_id: UUID, tenant_id: Optional[UUID] = None
    ) -> Optional[User]:
        """Get user by ID, scoped to tenant when given"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update_last_login(self, user_id: UUID) -> None:
        """Stamp last_login_at with the current time"""
        pass

    @abstractmethod
    async def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Store a new password hash and move the password_changed_at watermark"""
        pass
