from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.app.repositories.user_repository import IUserRepository
from auth_service.domain.base import utc_now
from auth_service.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(
        self, email: str, tenant_id: Optional[UUID] = None
    ) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        if tenant_id is not None:
            stmt = stmt.where(User.tenant_id == tenant_id)
        # Without a tenant the same address may exist in several tenants
        stmt = stmt.order_by(User.created_at)
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_id(
        self, user_id: UUID, tenant_id: Optional[UUID] = None
    ) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        if tenant_id is not None:
            stmt = stmt.where(User.tenant_id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        user.email = user.email.strip().lower()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update_last_login(self, user_id: UUID) -> None:
        stmt = update(User).where(User.id == user_id).values(last_login_at=utc_now())
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(password_hash=password_hash, password_changed_at=utc_now())
        )
        await self.session.execute(stmt)
        await self.session.flush()
