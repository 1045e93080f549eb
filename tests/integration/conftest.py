from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.adapter.services.argon2_password_hasher import Argon2PasswordHasher
from auth_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from auth_service.app.services.password_reset_notifier import IPasswordResetNotifier
from auth_service.depends import (
    get_password_hasher,
    get_password_reset_notifier,
    get_unit_of_work,
)
from auth_service.domain.entities import User, UserStatus, UserType
from tests.fixtures.json_loader import TestDataLoader


class RecordingNotifier(IPasswordResetNotifier):
    """Keeps issued reset tokens so tests can play the user following the link"""

    def __init__(self):
        self.sent = []

    async def send_password_reset(self, user, reset_token):
        self.sent.append((user.email, reset_token))

    def last_token_for(self, email):
        return next(token for sent_to, token in reversed(self.sent) if sent_to == email)


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture
def password_hasher():
    return Argon2PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def tenant_id():
    return uuid4()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def seed_user(db_session, password_hasher, tenant_id):
    """Insert a user from test_data.json; the returned object is detached"""

    async def _seed_user(name="active", **overrides):
        fields = TestDataLoader.user(name)
        password = fields.pop("password", TestDataLoader.password())
        fields.update(overrides)
        user = User(
            tenant_id=fields.get("tenant_id", tenant_id),
            email=fields["email"],
            first_name=fields["first_name"],
            last_name=fields["last_name"],
            user_type=UserType(fields["user_type"]),
            status=UserStatus(fields["status"]),
            password_hash=password_hasher.hash(password) if password else None,
        )
        db_session.add(user)
        await db_session.commit()
        # Keep loaded attributes readable after later rollbacks on the shared session
        db_session.expunge(user)
        return user

    return _seed_user


@pytest_asyncio.fixture
async def active_user(seed_user):
    return await seed_user("active")


@pytest_asyncio.fixture
async def client(db_session, password_hasher, notifier):
    from auth_service.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher
    app.dependency_overrides[get_password_reset_notifier] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def login(client):
    """POST /auth/login and return the parsed body, failing the test on non-200"""

    async def _login(email=None, password=None, client_name="laptop"):
        response = await client.post(
            "/auth/login",
            json={
                "email": email or TestDataLoader.user()["email"],
                "password": password or TestDataLoader.password(),
            },
            headers=TestDataLoader.client_headers(client_name),
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login
