from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.app.repositories.session_repository import ISessionRepository
from auth_service.domain.base import utc_now
from auth_service.domain.entities import RotatedRefreshToken, Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        user_id: UUID,
        refresh_token_hash: str,
        expires_at: datetime,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Session:
        now = utc_now()
        session_obj = Session(
            user_id=user_id,
            refresh_token_hash=refresh_token_hash,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=now,
            last_used_at=now,
            expires_at=expires_at,
        )
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_refresh_token_hash(self, token_hash: str) -> Optional[Session]:
        # Revoked/expired rows are returned so the use case can tell them apart
        stmt = select(Session).where(Session.refresh_token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_rotated_token_hash(self, token_hash: str) -> Optional[Session]:
        stmt = (
            select(Session)
            .join(RotatedRefreshToken, RotatedRefreshToken.session_id == Session.id)
            .where(RotatedRefreshToken.token_hash == token_hash)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_active_by_user_id(self, user_id: UUID) -> List[Session]:
        stmt = (
            select(Session)
            .where(
                Session.user_id == user_id,
                Session.revoked_at.is_(None),
                Session.expires_at > utc_now(),
            )
            .order_by(Session.last_used_at.desc(), Session.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def rotate_refresh_token(
        self,
        session_id: UUID,
        expected_hash: str,
        new_hash: str,
        new_expires_at: datetime,
    ) -> bool:
        # Compare-and-swap on the stored hash: only one concurrent refresh wins
        stmt = (
            update(Session)
            .where(
                Session.id == session_id,
                Session.refresh_token_hash == expected_hash,
                Session.revoked_at.is_(None),
            )
            .values(
                refresh_token_hash=new_hash,
                expires_at=new_expires_at,
                last_used_at=utc_now(),
            )
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False

        self.session.add(RotatedRefreshToken(session_id=session_id, token_hash=expected_hash))
        await self.session.flush()
        return True

    async def revoke_by_id(self, session_id: UUID) -> bool:
        stmt = (
            update(Session)
            .where(Session.id == session_id, Session.revoked_at.is_(None))
            .values(revoked_at=utc_now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_by_user_id(
        self, user_id: UUID, except_session_id: Optional[UUID] = None
    ) -> int:
        stmt = update(Session).where(
            Session.user_id == user_id, Session.revoked_at.is_(None)
        )
        if except_session_id is not None:
            stmt = stmt.where(Session.id != except_session_id)
        result = await self.session.execute(stmt.values(revoked_at=utc_now()))
        await self.session.flush()
        return result.rowcount

    async def count_active(self, user_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(Session)
            .where(
                Session.user_id == user_id,
                Session.revoked_at.is_(None),
                Session.expires_at > utc_now(),
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def evict_oldest(self, user_id: UUID, keep_count: int) -> int:
        stmt = (
            select(Session.id)
            .where(
                Session.user_id == user_id,
                Session.revoked_at.is_(None),
                Session.expires_at > utc_now(),
            )
            .order_by(Session.created_at.desc())
            .offset(max(keep_count, 0))
        )
        result = await self.session.exec(stmt)
        evicted_ids = list(result.all())
        if not evicted_ids:
            return 0

        revoke_stmt = (
            update(Session)
            .where(Session.id.in_(evicted_ids), Session.revoked_at.is_(None))
            .values(revoked_at=utc_now())
        )
        revoke_result = await self.session.execute(revoke_stmt)
        await self.session.flush()
        return revoke_result.rowcount
