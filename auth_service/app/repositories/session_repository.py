from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from auth_service.domain.entities import Session


class ISessionRepository(ABC):
    """Session store interface - application layer"""

    @abstractmethod
    async def create(
        self,
        user_id: UUID,
        refresh_token_hash: str,
        expires_at: datetime,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_by_refresh_token_hash(self, token_hash: str) -> Optional[Session]:
        """
        Get session whose current refresh token hash matches.

        Revoked and expired sessions are returned too; the caller decides.
        """
        pass

    @abstractmethod
    async def get_by_rotated_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get the session a rotated-away refresh token hash used to belong to"""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: UUID) -> List[Session]:
        """Unrevoked, unexpired sessions for a user, most recently used first"""
        pass

    @abstractmethod
    async def rotate_refresh_token(
        self,
        session_id: UUID,
        expected_hash: str,
        new_hash: str,
        new_expires_at: datetime,
    ) -> bool:
        """
        Atomically replace the refresh token hash.

        Succeeds only if the session is unrevoked and still holds expected_hash.
        The superseded hash is recorded as rotated. Returns False when another
        writer got there first.
        """
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: UUID) -> bool:
        """Revoke a specific session. Returns True if it was active and is now revoked."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(
        self, user_id: UUID, except_session_id: Optional[UUID] = None
    ) -> int:
        """Revoke all sessions for a user, optionally sparing one. Returns count."""
        pass

    @abstractmethod
    async def count_active(self, user_id: UUID) -> int:
        """Count unrevoked, unexpired sessions for a user"""
        pass

    @abstractmethod
    async def evict_oldest(self, user_id: UUID, keep_count: int) -> int:
        """Revoke active sessions beyond the keep_count newest. Returns count evicted."""
        pass
