from typing import Optional
from uuid import UUID

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.libs.result import Error, Result, Return
from .dtos import AuthUser
from .errors import AuthErrorCode


class GetCurrentUserUseCase:
    """Sanitized profile of the authenticated user"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, tenant_id: Optional[UUID] = None
    ) -> Result[AuthUser]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id, tenant_id)
            if user is None:
                return Return.err(Error(AuthErrorCode.USER_NOT_FOUND, "User not found"))
            return Return.ok(AuthUser.from_entity(user))
