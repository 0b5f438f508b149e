"""Test configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from linkup.api.deps import get_object_store
from linkup.api.main import app
from linkup.auth import hash_password, issue_token
from linkup.database import get_db
from linkup.models import Base, Creator, User

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Create test engine with static pool to share connection
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    """Override database dependency for tests."""
    async with TestSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Override the dependency
app.dependency_overrides[get_db] = override_get_db


class FakeObjectStore:
    """In-memory stand-in for the S3 media bucket."""

    base_url = "https://media.linkup.test"

    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.deleted: list[str] = []

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = (data, content_type)
        return f"{self.base_url}/{key}"

    async def delete_object(self, key: str) -> None:
        self.objects.pop(key, None)
        self.deleted.append(key)

    def key_for_url(self, url: str) -> str:
        return url.removeprefix(f"{self.base_url}/")


class FailingCommitSession:
    """Wraps a session so every commit fails and is rolled back."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def __getattr__(self, name: str):
        return getattr(self._session, name)

    async def commit(self) -> None:
        raise RuntimeError("database went away")


@pytest.fixture(autouse=True)
async def setup_database() -> AsyncGenerator[None, None]:
    """Set up and tear down database for each test."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def object_store() -> Generator[FakeObjectStore, None, None]:
    """Fresh fake object store, also wired into the app."""
    store = FakeObjectStore()
    app.dependency_overrides[get_object_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_object_store, None)


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for tests."""
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
async def client(object_store: FakeObjectStore) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def make_user(db: AsyncSession, name: str, email: str, password: str = "password123") -> User:
    user = User(name=name, email=email, password_hash=hash_password(password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def make_creator(db: AsyncSession, owner: User, is_public: bool) -> Creator:
    creator = Creator(owner_user_id=owner.id, is_public=is_public)
    db.add(creator)
    await db.commit()
    await db.refresh(creator)
    return creator


def bearer(user: User) -> dict[str, str]:
    """Authorization header for a user."""
    return {"Authorization": f"Bearer {issue_token(user.id)}"}


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user who owns the creator fixtures."""
    return await make_user(db_session, "Alice", "alice@example.com")


@pytest.fixture
async def follower_user(db_session: AsyncSession) -> User:
    """A user who follows creators."""
    return await make_user(db_session, "Bob", "bob@example.com")


@pytest.fixture
async def outsider_user(db_session: AsyncSession) -> User:
    """A user with no relationship to anyone."""
    return await make_user(db_session, "Carol", "carol@example.com")


@pytest.fixture
async def publisher_user(db_session: AsyncSession) -> User:
    """Owner of the public creator."""
    return await make_user(db_session, "Dave", "dave@example.com")


@pytest.fixture
async def private_creator(db_session: AsyncSession, test_user: User) -> Creator:
    """A private creator owned by test_user."""
    return await make_creator(db_session, test_user, is_public=False)


@pytest.fixture
async def public_creator(db_session: AsyncSession, publisher_user: User) -> Creator:
    """A public creator owned by publisher_user."""
    return await make_creator(db_session, publisher_user, is_public=True)


@pytest.fixture
def auth_headers(test_user: User) -> dict[str, str]:
    """Authorization header for test_user."""
    return bearer(test_user)
