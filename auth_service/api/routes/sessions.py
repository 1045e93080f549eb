from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from auth_service.api.routes.auth import raise_for_error
from auth_service.app.services.token_service import AccessTokenClaims
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth import (
    RequestContext,
    RevokeSessionResponse,
    RevokeSessionsResponse,
    SessionInfo,
)
from auth_service.app.use_cases.sessions import (
    ListSessionsUseCase,
    RevokeOtherSessionsUseCase,
    RevokeSessionUseCase,
)
from auth_service.depends import authenticated_context, get_current_user, get_unit_of_work

router = APIRouter(prefix="/auth/sessions", tags=["Sessions"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[SessionInfo])
async def list_sessions(
    current_user: AccessTokenClaims = Depends(get_current_user),
    context: RequestContext = Depends(authenticated_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Active Sessions

    Unrevoked, unexpired sessions of the caller, most recently used first.
    The session behind the presented access token is flagged is_current.
    """
    use_case = ListSessionsUseCase(uow)
    result = await use_case.execute(UUID(current_user.sub), context.session_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/revoke-others",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionsResponse,
)
async def revoke_other_sessions(
    current_user: AccessTokenClaims = Depends(get_current_user),
    context: RequestContext = Depends(authenticated_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Other Sessions

    Logs out every other device of the caller.
    """
    use_case = RevokeOtherSessionsUseCase(uow)
    result = await use_case.execute(UUID(current_user.sub), context.session_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionResponse,
)
async def revoke_session(
    session_id: UUID,
    current_user: AccessTokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Specific Session

    Raises:
        - 403 Forbidden: Session belongs to another user
        - 404 Not Found: Session not found
    """
    use_case = RevokeSessionUseCase(uow)
    result = await use_case.execute(session_id, UUID(current_user.sub))

    if result.is_err():
        raise_for_error(result.error)

    return result.value
