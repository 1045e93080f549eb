from datetime import timedelta

import pytest

from auth_service.adapter.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from auth_service.adapter.repositories.session_repository import SessionRepository
from auth_service.adapter.repositories.user_repository import UserRepository
from auth_service.domain.base import utc_now


def token_hash(label: str) -> str:
    return label.ljust(64, "0")


@pytest.mark.asyncio
async def test_rotation_is_compare_and_swap(db_session, active_user):
    repo = SessionRepository(db_session)
    session = await repo.create(
        active_user.id, token_hash("a"), utc_now() + timedelta(days=7)
    )

    first = await repo.rotate_refresh_token(
        session.id, token_hash("a"), token_hash("b"), utc_now() + timedelta(days=7)
    )
    second = await repo.rotate_refresh_token(
        session.id, token_hash("a"), token_hash("c"), utc_now() + timedelta(days=7)
    )
    await db_session.commit()

    assert first is True
    assert second is False

    current = await repo.get_by_refresh_token_hash(token_hash("b"))
    assert current.id == session.id
    assert await repo.get_by_refresh_token_hash(token_hash("a")) is None
    assert await repo.get_by_refresh_token_hash(token_hash("c")) is None

    # The superseded hash still resolves to its session for reuse detection
    rotated_from = await repo.get_by_rotated_token_hash(token_hash("a"))
    assert rotated_from.id == session.id


@pytest.mark.asyncio
async def test_rotation_of_revoked_session_fails(db_session, active_user):
    repo = SessionRepository(db_session)
    session = await repo.create(
        active_user.id, token_hash("a"), utc_now() + timedelta(days=7)
    )
    assert await repo.revoke_by_id(session.id) is True

    rotated = await repo.rotate_refresh_token(
        session.id, token_hash("a"), token_hash("b"), utc_now() + timedelta(days=7)
    )

    assert rotated is False
    # Revocation is terminal
    assert await repo.revoke_by_id(session.id) is False


@pytest.mark.asyncio
async def test_evict_oldest_keeps_newest(db_session, active_user):
    repo = SessionRepository(db_session)
    created = []
    for i in range(4):
        created.append(
            await repo.create(
                active_user.id, token_hash(str(i)), utc_now() + timedelta(days=7)
            )
        )

    evicted = await repo.evict_oldest(active_user.id, keep_count=2)
    await db_session.commit()

    assert evicted == 2
    assert await repo.count_active(active_user.id) == 2
    active_ids = {s.id for s in await repo.get_active_by_user_id(active_user.id)}
    assert active_ids == {created[2].id, created[3].id}


@pytest.mark.asyncio
async def test_expired_sessions_are_not_active(db_session, active_user):
    repo = SessionRepository(db_session)
    await repo.create(active_user.id, token_hash("live"), utc_now() + timedelta(days=7))
    await repo.create(active_user.id, token_hash("dead"), utc_now() - timedelta(seconds=1))

    assert await repo.count_active(active_user.id) == 1
    assert len(await repo.get_active_by_user_id(active_user.id)) == 1


@pytest.mark.asyncio
async def test_revoke_all_except_current(db_session, active_user):
    repo = SessionRepository(db_session)
    keep = await repo.create(active_user.id, token_hash("k"), utc_now() + timedelta(days=7))
    for label in ("x", "y"):
        await repo.create(active_user.id, token_hash(label), utc_now() + timedelta(days=7))

    revoked = await repo.revoke_all_by_user_id(active_user.id, except_session_id=keep.id)

    assert revoked == 2
    assert [s.id for s in await repo.get_active_by_user_id(active_user.id)] == [keep.id]


@pytest.mark.asyncio
async def test_user_lookup_is_case_insensitive(db_session, active_user):
    repo = UserRepository(db_session)

    found = await repo.get_by_email(active_user.email.upper())
    scoped = await repo.get_by_email(active_user.email, active_user.tenant_id)

    assert found.id == active_user.id
    assert scoped.id == active_user.id


@pytest.mark.asyncio
async def test_reset_token_consumed_once(db_session, active_user):
    repo = PasswordResetTokenRepository(db_session)
    token = await repo.create(
        active_user.id, token_hash("reset"), utc_now() + timedelta(hours=1)
    )

    assert (await repo.get_valid_by_token_hash(token_hash("reset"))).id == token.id
    assert await repo.mark_used(token.id) is True
    assert await repo.mark_used(token.id) is False
    assert await repo.get_valid_by_token_hash(token_hash("reset")) is None
