from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TokenExpiredError(Exception):
    """Access token signature is valid but its exp is in the past"""


class TokenInvalidError(Exception):
    """Access token is malformed, has a bad signature or the wrong type"""


class AccessTokenClaims(BaseModel):
    """Claims carried by an access token"""

    sub: str
    tenant_id: str
    email: str
    user_type: str
    token_version: int = 0
    sid: Optional[str] = None


class ITokenService(ABC):
    """Token codec interface - application layer"""

    access_token_ttl_seconds: int

    @abstractmethod
    def issue_access_token(self, claims: AccessTokenClaims) -> str:
        """Sign claims into a short-lived access token"""
        pass

    @abstractmethod
    def decode_access_token(self, token: str) -> AccessTokenClaims:
        """
        Verify and decode an access token.

        Raises:
            TokenExpiredError: token is past its expiry
            TokenInvalidError: signature, shape or type check failed
        """
        pass

    @abstractmethod
    def generate_refresh_token(self) -> str:
        """Opaque, URL-safe refresh token"""
        pass

    @abstractmethod
    def generate_reset_token(self) -> str:
        """Opaque, URL-safe password reset token"""
        pass

    @abstractmethod
    def hash_token(self, token: str) -> str:
        """One-way deterministic digest used for storage and lookup"""
        pass

    @staticmethod
    def token_version(password_changed_at: Optional[datetime]) -> int:
        """Watermark derived from the password change time (whole seconds)"""
        if password_changed_at is None:
            return 0
        return int((password_changed_at - datetime(1970, 1, 1)).total_seconds())
