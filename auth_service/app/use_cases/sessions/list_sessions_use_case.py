from typing import List, Optional
from uuid import UUID

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import SessionInfo
from auth_service.libs.result import Result, Return


class ListSessionsUseCase:
    """Active sessions of a user, most recently used first, flagged against the current one"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, current_session_id: Optional[UUID] = None
    ) -> Result[List[SessionInfo]]:
        async with self.uow:
            sessions = await self.uow.sessions.get_active_by_user_id(user_id)
            return Return.ok(
                [SessionInfo.from_entity(s, current_session_id) for s in sessions]
            )
