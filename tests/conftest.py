"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.notification import NotificationEvent
from domain.services.notification_service import NotificationService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SECRET_KEY = "test-secret-key"


class QueuedPublisher:
    """Collects published events; ``flush`` delivers them in order.

    Stands in for the background dispatcher so deliveries never interleave
    with a request on the shared in-memory connection.
    """

    def __init__(self, service: NotificationService) -> None:
        self._service = service
        self.events: list[NotificationEvent] = []

    def publish(self, event: NotificationEvent) -> bool:
        self.events.append(event)
        return True

    async def flush(self) -> None:
        pending, self.events = self.events, []
        for event in pending:
            await self._service.deliver(event)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables, one per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def notification_service(uow_factory: Callable[[], SQLAlchemyUnitOfWork]) -> NotificationService:
    return NotificationService(uow_factory)


@pytest.fixture
def publisher(notification_service: NotificationService) -> QueuedPublisher:
    return QueuedPublisher(notification_service)


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key=TEST_SECRET_KEY,
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def headers_for(auth_provider: JWTAuthProvider) -> Callable[[str, str], dict[str, str]]:
    """Build bearer headers for an arbitrary user id and display name."""

    def build(user_id: str, name: str) -> dict[str, str]:
        token = auth_provider.create_token(
            TokenUser(id=user_id, email=f"{user_id}@example.com", display_name=name)
        )
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture
def alice(headers_for: Callable[[str, str], dict[str, str]]) -> dict[str, str]:
    return headers_for("user-alice", "alice")


@pytest.fixture
def bob(headers_for: Callable[[str, str], dict[str, str]]) -> dict[str, str]:
    return headers_for("user-bob", "bob")


@pytest.fixture
def carol(headers_for: Callable[[str, str], dict[str, str]]) -> dict[str, str]:
    return headers_for("user-carol", "carol")


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no overrides, no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    notification_service: NotificationService,
    publisher: QueuedPublisher,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client wired to the per-test database.

    - Auth uses the test secret, so tokens from ``headers_for`` are accepted
    - Every service factory is overridden to use the in-memory database
    - Notifications are queued on ``publisher`` until flushed
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.profile import get_profile_service
    from api.v1.dependencies import (
        get_club_service,
        get_discovery_service,
        get_event_service,
        get_join_service,
        get_membership_service,
        get_notification_service,
    )
    from domain.services.club_service import ClubService
    from domain.services.discovery_service import DiscoveryService
    from domain.services.event_service import EventService
    from domain.services.join_service import JoinService
    from domain.services.membership_service import MembershipService
    from domain.services.profile_service import ProfileService
    from main import create_app

    ProfileService.clear_provisioned_cache()
    app = create_app()

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
    app.dependency_overrides[get_club_service] = lambda: ClubService(uow_factory)
    app.dependency_overrides[get_membership_service] = lambda: MembershipService(
        uow_factory, publisher=publisher
    )
    app.dependency_overrides[get_join_service] = lambda: JoinService(
        uow_factory, publisher=publisher
    )
    app.dependency_overrides[get_discovery_service] = lambda: DiscoveryService(uow_factory)
    app.dependency_overrides[get_event_service] = lambda: EventService(uow_factory)
    app.dependency_overrides[get_notification_service] = lambda: notification_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
    ProfileService.clear_provisioned_cache()


@pytest.fixture
def create_club(
    api_client: AsyncClient,
) -> Callable[..., Awaitable[dict[str, Any]]]:
    """POST /club/create and return the created club body."""

    async def create(headers: dict[str, str], name: str, **fields: Any) -> dict[str, Any]:
        response = await api_client.post(
            "/api/v1/club/create",
            json={"clubName": name, **fields},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return dict(response.json())

    return create
