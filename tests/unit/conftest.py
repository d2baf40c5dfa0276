"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from domain.entities.club import Club, ClubMember, ClubRole
from domain.entities.identifiers import new_object_id


class FakeUnitOfWork:
    """Fake Unit of Work with all 6 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.clubs = AsyncMock()
        self.members = AsyncMock()
        self.join_requests = AsyncMock()
        self.notifications = AsyncMock()
        self.events = AsyncMock()
        self.profiles = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def publisher() -> MagicMock:
    """Notification publisher that records published events."""
    mock = MagicMock()
    mock.publish.return_value = True
    return mock


@pytest.fixture
def user_id() -> str:
    """A user ID."""
    return "user-1"


@pytest.fixture
def actor_id() -> str:
    """A second user ID (distinct from user_id)."""
    return "user-admin"


@pytest.fixture
def club_id() -> str:
    """A random club ID."""
    return new_object_id()


@pytest.fixture
def public_club(club_id: str, actor_id: str) -> Club:
    return Club(id=club_id, name="Riders", created_by=actor_id, is_private=False)


@pytest.fixture
def private_club(club_id: str, actor_id: str) -> Club:
    return Club(id=club_id, name="Secret", created_by=actor_id, is_private=True)


@pytest.fixture
def admin_member(club_id: str, actor_id: str) -> ClubMember:
    return ClubMember(
        club_id=club_id,
        user_id=actor_id,
        roles=frozenset({ClubRole.MEMBER, ClubRole.ADMIN}),
    )


@pytest.fixture
def plain_member(club_id: str, user_id: str) -> ClubMember:
    return ClubMember(club_id=club_id, user_id=user_id)
