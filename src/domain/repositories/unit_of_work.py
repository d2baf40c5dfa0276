"""Unit of Work protocol."""

from typing import Protocol

from sqlalchemy.exc import IntegrityError

from domain.repositories.club_repository import IClubRepository
from domain.repositories.event_repository import IEventRepository
from domain.repositories.join_request_repository import IJoinRequestRepository
from domain.repositories.member_repository import IMemberRepository
from domain.repositories.notification_repository import INotificationRepository
from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    clubs: IClubRepository
    members: IMemberRepository
    join_requests: IJoinRequestRepository
    notifications: INotificationRepository
    events: IEventRepository
    profiles: IProfileRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error comes from a unique constraint or index."""
    orig = str(exc.orig).lower() if exc.orig else ""
    return "unique" in orig or "duplicate" in orig
