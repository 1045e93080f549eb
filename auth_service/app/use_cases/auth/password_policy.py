import re
from typing import Optional

from auth_service.libs.result import Error
from .errors import AuthErrorCode

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
PASSWORD_SPECIAL_CHARACTERS = "@$!%*?&"

_RULES = (
    (re.compile(r"[a-z]"), "one lowercase letter"),
    (re.compile(r"[A-Z]"), "one uppercase letter"),
    (re.compile(r"\d"), "one number"),
    (re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARACTERS)}]"), "one special character"),
)


def validate_password(password: str) -> Optional[Error]:
    """
    Validate password complexity.

    Returns:
        None if the password is acceptable, otherwise an INVALID_PASSWORD Error
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        return Error(
            AuthErrorCode.INVALID_PASSWORD,
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
        )
    if len(password) > PASSWORD_MAX_LENGTH:
        return Error(
            AuthErrorCode.INVALID_PASSWORD,
            f"Password must be at most {PASSWORD_MAX_LENGTH} characters long",
        )

    missing = [label for pattern, label in _RULES if not pattern.search(password)]
    if missing:
        return Error(
            AuthErrorCode.INVALID_PASSWORD,
            "Password must contain at least " + ", ".join(missing),
        )
    return None
