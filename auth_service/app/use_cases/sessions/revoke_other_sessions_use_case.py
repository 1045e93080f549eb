"""
Revoke Other Sessions Use Case

Signs the caller out everywhere except the device they are using.
"""

import logging
from typing import Optional
from uuid import UUID

from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth.dtos import RevokeSessionsResponse
from auth_service.app.use_cases.auth.errors import AuthErrorCode
from auth_service.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class RevokeOtherSessionsUseCase:
    """
    Use case for revoking all of a user's sessions but the current one.

    Business Rules:
    - The kept session must exist and belong to the caller
    - Without a current session every session of the caller is revoked
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, current_session_id: Optional[UUID] = None
    ) -> Result[RevokeSessionsResponse]:
        async with self.uow:
            if current_session_id is not None:
                current_session = await self.uow.sessions.get_by_id(current_session_id)
                if current_session is None:
                    return Return.err(
                        Error(AuthErrorCode.SESSION_NOT_FOUND, "Current session not found")
                    )
                if current_session.user_id != user_id:
                    return Return.err(
                        Error(AuthErrorCode.FORBIDDEN, "Session does not belong to current user")
                    )

            count = await self.uow.sessions.revoke_all_by_user_id(
                user_id, except_session_id=current_session_id
            )

            await self.uow.commit()

            logger.info(f"Revoked {count} other session(s) for user {user_id}")

            return Return.ok(
                RevokeSessionsResponse(
                    revoked_count=count,
                    kept_session_id=str(current_session_id) if current_session_id else None,
                )
            )
