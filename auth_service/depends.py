from functools import lru_cache
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from auth_service.adapter.services.argon2_password_hasher import Argon2PasswordHasher
from auth_service.adapter.services.jwt_token_service import JwtTokenService
from auth_service.adapter.services.logging_password_reset_notifier import (
    LoggingPasswordResetNotifier,
)
from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.api.error import ClientError
from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.password_reset_notifier import IPasswordResetNotifier
from auth_service.app.services.token_service import AccessTokenClaims, ITokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth import RequestContext, VerifyAccessTokenUseCase

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_password_hasher() -> IPasswordHasher:
    return Argon2PasswordHasher(
        time_cost=ApplicationConfig.ARGON2_TIME_COST,
        memory_cost=ApplicationConfig.ARGON2_MEMORY_COST,
        parallelism=ApplicationConfig.ARGON2_PARALLELISM,
    )


@lru_cache
def get_token_service() -> ITokenService:
    return JwtTokenService(
        secret=ApplicationConfig.JWT_SECRET,
        algorithm=ApplicationConfig.JWT_ALGORITHM,
        access_token_expire_minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


@lru_cache
def get_password_reset_notifier() -> IPasswordResetNotifier:
    return LoggingPasswordResetNotifier()


def get_request_context(request: Request) -> RequestContext:
    """Capture caller metadata once so use cases never touch the request object"""
    return RequestContext(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
) -> AccessTokenClaims:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Returns:
        Verified access token claims (sub, tenant_id, email, user_type, sid)

    Raises:
        ClientError: 401 if token is invalid, expired or superseded
    """
    result = await VerifyAccessTokenUseCase(uow, token_service).execute(
        credentials.credentials
    )
    if result.is_err():
        raise ClientError(result.error, status_code=401)
    return result.value


def authenticated_context(
    claims: AccessTokenClaims = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
) -> RequestContext:
    """Request context enriched with the tenant and session of the access token"""
    return context.model_copy(
        update={
            "tenant_id": UUID(claims.tenant_id),
            "session_id": _optional_uuid(claims.sid),
        }
    )


def _optional_uuid(value: Optional[str]) -> Optional[UUID]:
    return UUID(value) if value else None
