from datetime import timedelta
from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlmodel import update

from auth_service.domain.base import utc_now
from auth_service.domain.entities import Session, UserStatus, User
from tests.utils.api_helpers import bearer, count_active_sessions


@pytest.mark.asyncio
async def test_successful_token_refresh(client: AsyncClient, active_user, login):
    """Rotation

    Given a valid refresh token
    When it is exchanged
    Then a new pair is returned for the same session
    And the new access token is accepted
    """
    tokens = (await login())["tokens"]

    response = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert response.status_code == 200
    data = response.json()
    assert data["refresh_token"] != tokens["refresh_token"]
    assert data["session_id"] == tokens["session_id"]

    me = await client.get("/auth/me", headers=bearer(data))
    assert me.status_code == 200
    assert me.json()["id"] == str(active_user.id)


@pytest.mark.asyncio
async def test_rotated_chain_keeps_working(client: AsyncClient, active_user, login):
    refresh_token = (await login())["tokens"]["refresh_token"]

    for _ in range(3):
        response = await client.post("/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 200
        refresh_token = response.json()["refresh_token"]


@pytest.mark.asyncio
async def test_refresh_token_reuse_revokes_all_sessions(
    client: AsyncClient, active_user, login, db_session
):
    """Reuse detection

    Given u1 logged in as S1 with refresh token R1 and on a second device
    And R1 was rotated to R2
    When R1 is presented again
    Then the call fails with SESSION_REVOKED
    And every session of u1 is revoked, R2 included
    """
    s1 = (await login(client_name="laptop"))["tokens"]
    s2 = (await login(client_name="phone"))["tokens"]
    r1 = s1["refresh_token"]

    rotated = await client.post("/auth/refresh", json={"refresh_token": r1})
    assert rotated.status_code == 200
    r2 = rotated.json()["refresh_token"]

    replay = await client.post("/auth/refresh", json={"refresh_token": r1})

    assert replay.status_code == 401
    assert replay.json()["error"]["code"] == "SESSION_REVOKED"
    assert await count_active_sessions(db_session, active_user.id) == 0

    for token in (r2, s2["refresh_token"]):
        response = await client.post("/auth/refresh", json={"refresh_token": token})
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "SESSION_REVOKED"


@pytest.mark.asyncio
async def test_reuse_does_not_touch_other_users(
    client: AsyncClient, active_user, seed_user, login, db_session
):
    other = await seed_user("second")
    other_tokens = (await login(email=other.email))["tokens"]
    r1 = (await login())["tokens"]["refresh_token"]

    await client.post("/auth/refresh", json={"refresh_token": r1})
    await client.post("/auth/refresh", json={"refresh_token": r1})

    assert await count_active_sessions(db_session, active_user.id) == 0
    assert await count_active_sessions(db_session, other.id) == 1
    response = await client.post(
        "/auth/refresh", json={"refresh_token": other_tokens["refresh_token"]}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unknown_refresh_token(client: AsyncClient):
    response = await client.post("/auth/refresh", json={"refresh_token": "garbage"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_REFRESH_TOKEN"


@pytest.mark.asyncio
async def test_expired_session_does_not_cascade(
    client: AsyncClient, active_user, login, db_session
):
    expired = (await login(client_name="laptop"))["tokens"]
    alive = (await login(client_name="phone"))["tokens"]

    await db_session.execute(
        update(Session)
        .where(Session.id == UUID(expired["session_id"]))
        .values(expires_at=utc_now() - timedelta(minutes=1))
        .execution_options(synchronize_session=False)
    )
    await db_session.commit()
    db_session.expire_all()

    response = await client.post("/auth/refresh", json={"refresh_token": expired["refresh_token"]})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "SESSION_EXPIRED"

    still_alive = await client.post("/auth/refresh", json={"refresh_token": alive["refresh_token"]})
    assert still_alive.status_code == 200


@pytest.mark.asyncio
async def test_refresh_refused_after_suspension(
    client: AsyncClient, active_user, login, db_session
):
    tokens = (await login())["tokens"]

    await db_session.execute(
        update(User)
        .where(User.id == active_user.id)
        .values(status=UserStatus.suspended)
        .execution_options(synchronize_session=False)
    )
    await db_session.commit()
    db_session.expire_all()

    response = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ACCOUNT_SUSPENDED"

    # Existing access tokens stop working as well
    me = await client.get("/auth/me", headers=bearer(tokens))
    assert me.status_code == 401
