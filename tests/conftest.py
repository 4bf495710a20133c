import os

# Must be set before smartq.core.config is imported
os.environ.setdefault("TEST_MODE", "true")

import uuid

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from smartq.core.locks import QueueLockManager
from smartq.core.security import create_access_token, get_password_hash
from smartq.db.database import get_db_session
from smartq.main import app
from smartq.models import Base, Queue, QueueStatus, Service, User, UserRole
from smartq.services.queue_entry_service import QueueEntryService

TEST_PASSWORD = "testpassword"


@pytest.fixture(scope="function")
async def test_db_engine(tmp_path):
    # A file database so several sessions can hold their own connections
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'smartq_test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_db_engine):
    return async_sessionmaker(
        test_db_engine, class_=AsyncSession, autoflush=False, expire_on_commit=False
    )


@pytest.fixture(scope="function")
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
def hashed_password():
    # bcrypt is slow; hash once per test and share it between fixture users
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def create_user(db_session: AsyncSession, hashed_password: str):
    async def _factory(
        name: str = "Test User",
        email: str | None = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        user = User(
            id=uuid.uuid4(),
            name=name,
            email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
            hashed_password=hashed_password,
            role=role.value,
            is_active=True,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _factory


@pytest.fixture(scope="function")
async def test_user(create_user):
    return await create_user(name="Alice", email="alice@example.com")


@pytest.fixture(scope="function")
async def provider(create_user):
    return await create_user(name="Provider", email="provider@example.com", role=UserRole.SERVICE_PROVIDER)


@pytest.fixture(scope="function")
async def admin_user(create_user):
    return await create_user(name="Admin", email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture(scope="function")
async def service(db_session: AsyncSession, provider: User):
    svc = Service(id=uuid.uuid4(), name="Passport Office", location="Main St", provider_id=provider.id)
    db_session.add(svc)
    await db_session.commit()
    await db_session.refresh(svc)
    return svc


@pytest.fixture(scope="function")
def create_queue(db_session: AsyncSession, service: Service):
    async def _factory(max_capacity: int | None = None, status: QueueStatus = QueueStatus.OPEN) -> Queue:
        queue = Queue(
            id=uuid.uuid4(),
            service_id=service.id,
            status=status.value,
            max_capacity=max_capacity,
            current_size=0,
            last_queue_number=0,
        )
        db_session.add(queue)
        await db_session.commit()
        await db_session.refresh(queue)
        return queue

    return _factory


@pytest.fixture(scope="function")
def entry_service(session_factory):
    return QueueEntryService(session_factory=session_factory, lock_manager=QueueLockManager())


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        role = user.role.value if hasattr(user.role, "value") else user.role
        token, _ = create_access_token(data={"sub": str(user.id), "role": role})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture(scope="function")
async def client(session_factory, entry_service):
    async def _get_test_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _get_test_db_session
    original_entry_service = app.state.queue_entry_service
    app.state.queue_entry_service = entry_service

    # Disable rate limiter for tests
    app.state.limiter.enabled = False

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.state.limiter.enabled = True
    app.state.queue_entry_service = original_entry_service
    app.dependency_overrides.clear()

