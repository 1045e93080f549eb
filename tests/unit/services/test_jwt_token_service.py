from datetime import datetime
from uuid import uuid4

import pytest
from jose import jwt

from auth_service.adapter.services.jwt_token_service import JwtTokenService
from auth_service.app.services.token_service import (
    AccessTokenClaims,
    ITokenService,
    TokenExpiredError,
    TokenInvalidError,
)


@pytest.fixture
def claims():
    return AccessTokenClaims(
        sub=str(uuid4()),
        tenant_id=str(uuid4()),
        email="user@acme.com",
        user_type="teacher",
        token_version=1700000000,
        sid=str(uuid4()),
    )


def test_access_token_carries_claims(token_service, claims):
    token = token_service.issue_access_token(claims)

    payload = jwt.decode(token, "unit-test-secret", algorithms=["HS256"])
    assert payload["sub"] == claims.sub
    assert payload["sid"] == claims.sid
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == 15 * 60

    assert token_service.decode_access_token(token) == claims


def test_access_token_ttl(token_service):
    assert token_service.access_token_ttl_seconds == 900


def test_expired_token_raises(claims):
    service = JwtTokenService(secret="unit-test-secret", access_token_expire_minutes=-1)
    token = service.issue_access_token(claims)

    with pytest.raises(TokenExpiredError):
        service.decode_access_token(token)


def test_tampered_token_raises(token_service, claims):
    token = token_service.issue_access_token(claims)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    with pytest.raises(TokenInvalidError):
        token_service.decode_access_token(tampered)


def test_token_of_other_type_raises(token_service, claims):
    payload = claims.model_dump()
    payload["type"] = "refresh"
    token = jwt.encode(payload, "unit-test-secret", algorithm="HS256")

    with pytest.raises(TokenInvalidError):
        token_service.decode_access_token(token)


def test_token_missing_claims_raises(token_service):
    token = jwt.encode({"type": "access", "sub": "x"}, "unit-test-secret", algorithm="HS256")

    with pytest.raises(TokenInvalidError):
        token_service.decode_access_token(token)


def test_opaque_tokens_are_random_and_url_safe(token_service):
    refresh_tokens = {token_service.generate_refresh_token() for _ in range(20)}
    reset_token = token_service.generate_reset_token()

    assert len(refresh_tokens) == 20
    # 64 and 32 random bytes, base64url without padding
    assert all(len(t) == 86 for t in refresh_tokens)
    assert len(reset_token) == 43
    assert all("=" not in t and "+" not in t and "/" not in t for t in refresh_tokens)


def test_hash_token_is_deterministic_sha256(token_service):
    digest = token_service.hash_token("abc")

    assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert token_service.hash_token("abc") == digest
    assert token_service.hash_token("abd") != digest


def test_token_version_watermark():
    assert ITokenService.token_version(None) == 0
    assert ITokenService.token_version(datetime(1970, 1, 1, 0, 0, 10, 999999)) == 10
    assert ITokenService.token_version(datetime(2024, 1, 1)) == 1704067200
