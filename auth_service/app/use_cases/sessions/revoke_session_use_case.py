"""
Revoke Session Use Case

Revokes one of the caller's own sessions ("manage my devices").
"""

import logging
from uuid import UUID

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import RevokeSessionResponse
from auth_service.app.use_cases.auth.errors import AuthErrorCode
from auth_service.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class RevokeSessionUseCase:
    """
    Use case for revoking a single session.

    Business Rules:
    - Only the session owner may revoke it through this path
    - Revoking an already revoked session succeeds without changes
    """

    action = "revoked"

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: UUID, user_id: UUID) -> Result[RevokeSessionResponse]:
        """
        Args:
            session_id: Session to revoke
            user_id: Authenticated caller

        Errors:
            - SESSION_NOT_FOUND: No session with that id
            - FORBIDDEN: Session belongs to another user
        """
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return Return.err(Error(AuthErrorCode.SESSION_NOT_FOUND, "Session not found"))

            if session.user_id != user_id:
                return Return.err(
                    Error(AuthErrorCode.FORBIDDEN, "Not authorized to revoke this session")
                )

            revoked = await self.uow.sessions.revoke_by_id(session_id)

            await self.uow.commit()

            logger.info(f"Session {session_id} {self.action} by user {user_id}")

            return Return.ok(RevokeSessionResponse(session_id=str(session_id), revoked=revoked))
