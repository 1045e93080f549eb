from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, EmailStr, Field, model_validator

from auth_service.api.error import ClientError, ServerError
from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.password_reset_notifier import IPasswordResetNotifier
from auth_service.app.services.token_service import AccessTokenClaims, ITokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth import (
    AuthErrorCode,
    AuthUser,
    ChangePasswordUseCase,
    ConfirmPasswordResetUseCase,
    GetCurrentUserUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    MessageResponse,
    RefreshTokenUseCase,
    RequestContext,
    RequestPasswordResetUseCase,
    RevokeSessionResponse,
    TokenPair,
)
from auth_service.app.use_cases.auth.errors import INVALID_CREDENTIALS_MESSAGE
from auth_service.app.use_cases.auth.password_policy import PASSWORD_MAX_LENGTH
from auth_service.depends import (
    authenticated_context,
    get_current_user,
    get_password_hasher,
    get_password_reset_notifier,
    get_request_context,
    get_token_service,
    get_unit_of_work,
)
from auth_service.libs.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])

UNAUTHORIZED_CODES = (
    AuthErrorCode.INVALID_CREDENTIALS,
    AuthErrorCode.INVALID_REFRESH_TOKEN,
    AuthErrorCode.SESSION_EXPIRED,
    AuthErrorCode.SESSION_REVOKED,
    AuthErrorCode.PASSWORD_MISMATCH,
)
ACCOUNT_STATUS_CODES = (
    AuthErrorCode.ACCOUNT_SUSPENDED,
    AuthErrorCode.ACCOUNT_INACTIVE,
    AuthErrorCode.ACCOUNT_PENDING,
)
BAD_REQUEST_CODES = (
    AuthErrorCode.RESET_TOKEN_INVALID,
    AuthErrorCode.INVALID_PASSWORD,
    AuthErrorCode.PASSWORD_REUSED,
    AuthErrorCode.CREDENTIAL_NOT_SET,
)
NOT_FOUND_CODES = (AuthErrorCode.SESSION_NOT_FOUND, AuthErrorCode.USER_NOT_FOUND)


def raise_for_error(error: Error):
    """Map a use case error code to the HTTP error raised to the client"""
    if error.code in UNAUTHORIZED_CODES:
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    if error.code in ACCOUNT_STATUS_CODES or error.code == AuthErrorCode.FORBIDDEN:
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    if error.code in NOT_FOUND_CODES:
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code in BAD_REQUEST_CODES:
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., max_length=255, description="User email address")
    password: str = Field(
        ..., min_length=1, max_length=PASSWORD_MAX_LENGTH, description="User password"
    )
    tenant_id: Optional[UUID] = Field(default=None, description="Tenant scope, if known")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    token_service: ITokenService = Depends(get_token_service),
    context: RequestContext = Depends(get_request_context),
):
    """
    User Login

    Authenticates user and opens a new session.

    Raises:
        - 401 Unauthorized: Invalid credentials (also returned when no password is set)
        - 403 Forbidden: Account suspended, inactive or pending
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, password_hasher, token_service)
    result = await use_case.execute(
        request.email,
        request.password,
        context.model_copy(update={"tenant_id": request.tenant_id}),
    )

    if result.is_err():
        error = result.error
        if error.code == AuthErrorCode.CREDENTIAL_NOT_SET:
            # Same answer as a wrong password so account state does not leak
            error = Error(AuthErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
        raise_for_error(error)

    return result.value


class RefreshRequest(BaseModel):
    """Refresh token HTTP request payload"""

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=TokenPair)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
    context: RequestContext = Depends(get_request_context),
):
    """
    Refresh Tokens

    Rotates the refresh token and issues a new access token.
    Replaying an old refresh token revokes every session of its owner.

    Raises:
        - 401 Unauthorized: Invalid token, expired or revoked session
        - 403 Forbidden: Account no longer active
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshTokenUseCase(uow, token_service)
    result = await use_case.execute(request.refresh_token, context)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=RevokeSessionResponse)
async def logout(
    current_user: AccessTokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the session the access token was issued for. The access token
    itself stays valid until it expires.

    Raises:
        - 401 Unauthorized: Invalid access token
        - 403 Forbidden: Session belongs to another user
        - 404 Not Found: Session not found
    """
    if not current_user.sid:
        raise ClientError(
            Error(AuthErrorCode.SESSION_NOT_FOUND, "Session not found"),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    use_case = LogoutUseCase(uow)
    result = await use_case.execute(UUID(current_user.sid), UUID(current_user.sub))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AuthUser)
async def me(
    current_user: AccessTokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current User

    Returns the authenticated user without credential data.
    """
    use_case = GetCurrentUserUseCase(uow)
    result = await use_case.execute(
        UUID(current_user.sub), UUID(current_user.tenant_id)
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ChangePasswordRequest(BaseModel):
    """Change password HTTP request payload"""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)
    confirm_password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


@router.post("/password/change", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: AccessTokenClaims = Depends(get_current_user),
    context: RequestContext = Depends(authenticated_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    Change Password

    Keeps the current session, revokes every other session and every
    outstanding reset link.

    Raises:
        - 400 Bad Request: Password policy violation
        - 401 Unauthorized: Current password incorrect
        - 404 Not Found: User not found
    """
    use_case = ChangePasswordUseCase(uow, password_hasher)
    result = await use_case.execute(
        UUID(current_user.sub),
        request.current_password,
        request.new_password,
        current_session_id=context.session_id,
        tenant_id=context.tenant_id,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """Password reset request HTTP payload"""

    email: EmailStr = Field(..., max_length=255)
    tenant_id: Optional[UUID] = None


@router.post("/password/forgot", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: ITokenService = Depends(get_token_service),
    notifier: IPasswordResetNotifier = Depends(get_password_reset_notifier),
):
    """
    Request Password Reset

    Always answers the same way, whether or not the account exists.
    """
    use_case = RequestPasswordResetUseCase(uow, token_service, notifier)
    result = await use_case.execute(request.email, background_tasks, request.tenant_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Password reset confirmation HTTP payload"""

    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)
    confirm_password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


@router.post("/password/reset", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    token_service: ITokenService = Depends(get_token_service),
):
    """
    Confirm Password Reset

    Consumes the reset token and signs the user out everywhere.

    Raises:
        - 400 Bad Request: Invalid/expired/used token or password policy violation
    """
    use_case = ConfirmPasswordResetUseCase(uow, password_hasher, token_service)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
