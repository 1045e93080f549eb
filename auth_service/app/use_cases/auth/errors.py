"""
Authentication error codes

Every failure returned by the auth use cases carries one of these codes.
The transport layer owns the mapping to HTTP status codes.
"""


class AuthErrorCode:
    # Credential / account state
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    CREDENTIAL_NOT_SET = "CREDENTIAL_NOT_SET"
    ACCOUNT_SUSPENDED = "ACCOUNT_SUSPENDED"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    ACCOUNT_PENDING = "ACCOUNT_PENDING"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Refresh / session lifecycle
    INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    SESSION_REVOKED = "SESSION_REVOKED"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"

    # Access tokens
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Passwords
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    PASSWORD_REUSED = "PASSWORD_REUSED"
    RESET_TOKEN_INVALID = "RESET_TOKEN_INVALID"


INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
RESET_TOKEN_INVALID_MESSAGE = "Invalid or expired reset token"
