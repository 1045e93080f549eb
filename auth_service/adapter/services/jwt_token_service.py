import hashlib
import secrets
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from auth_service.app.services.token_service import (
    AccessTokenClaims,
    ITokenService,
    TokenExpiredError,
    TokenInvalidError,
)

ACCESS_TOKEN_TYPE = "access"


class JwtTokenService(ITokenService):
    """Token codec: HS256 access tokens via python-jose, SHA-256 for opaque tokens"""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 15,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.access_token_ttl_seconds = access_token_expire_minutes * 60

    def issue_access_token(self, claims: AccessTokenClaims) -> str:
        """
        Generate JWT access token

        Args:
            claims: Subject, tenant, email, user type, token version and session id

        Returns:
            JWT token string
        """
        now = datetime.now(UTC)
        payload = claims.model_dump(exclude_none=True)
        payload.update(
            {
                "type": ACCESS_TOKEN_TYPE,
                "iat": now,
                "exp": now + timedelta(seconds=self.access_token_ttl_seconds),
            }
        )
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> AccessTokenClaims:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except JWTError as exc:
            raise TokenInvalidError("Invalid token") from exc

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise TokenInvalidError("Invalid token type")

        try:
            return AccessTokenClaims.model_validate(payload)
        except ValidationError as exc:
            raise TokenInvalidError("Invalid token claims") from exc

    def generate_refresh_token(self) -> str:
        return secrets.token_urlsafe(64)

    def generate_reset_token(self) -> str:
        return secrets.token_urlsafe(32)

    def hash_token(self, token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()
