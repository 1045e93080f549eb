from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from auth_service.adapter.services.argon2_password_hasher import Argon2PasswordHasher
from auth_service.adapter.services.jwt_token_service import JwtTokenService
from auth_service.domain.base import utc_now
from auth_service.domain.entities import Session, User, UserStatus, UserType
from tests.fixtures.json_loader import TestDataLoader

TEST_PASSWORD = TestDataLoader.password()


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.update_last_login = AsyncMock()
    uow.users.update_password_hash = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda **kwargs: Session(**kwargs))
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.get_by_refresh_token_hash = AsyncMock(return_value=None)
    uow.sessions.get_by_rotated_token_hash = AsyncMock(return_value=None)
    uow.sessions.get_active_by_user_id = AsyncMock(return_value=[])
    uow.sessions.rotate_refresh_token = AsyncMock(return_value=True)
    uow.sessions.revoke_by_id = AsyncMock(return_value=True)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    uow.sessions.count_active = AsyncMock(return_value=0)
    uow.sessions.evict_oldest = AsyncMock(return_value=0)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock()
    uow.password_reset_tokens.get_valid_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.mark_used = AsyncMock(return_value=True)
    uow.password_reset_tokens.invalidate_all_for_user = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def password_hasher():
    """Real Argon2id hasher with the cheapest legal parameters"""
    return Argon2PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def token_service():
    return JwtTokenService(secret="unit-test-secret", access_token_expire_minutes=15)


@pytest.fixture
def make_user(password_hasher):
    def _make_user(status=UserStatus.active, password=TEST_PASSWORD, **overrides):
        fields = dict(
            id=uuid4(),
            tenant_id=uuid4(),
            email="user@acme.com",
            password_hash=password_hasher.hash(password) if password else None,
            first_name="Ada",
            last_name="Lovelace",
            user_type=UserType.teacher,
            status=status,
        )
        fields.update(overrides)
        return User(**fields)

    return _make_user


@pytest.fixture
def make_session():
    def _make_session(user_id, **overrides):
        now = utc_now()
        fields = dict(
            id=uuid4(),
            user_id=user_id,
            refresh_token_hash="0" * 64,
            created_at=now,
            last_used_at=now,
            expires_at=now + timedelta(days=7),
        )
        fields.update(overrides)
        return Session(**fields)

    return _make_session
