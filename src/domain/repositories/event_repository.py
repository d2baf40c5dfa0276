"""Event repository protocol."""

from typing import Protocol

from domain.entities.event import Event


class IEventRepository(Protocol):
    """Repository interface for Event entities."""

    async def create(self, event: Event) -> Event:
        """Create an event."""
        ...

    async def list_all(self) -> list[Event]:
        """Every event, soonest first."""
        ...

    async def list_for_club(self, club_id: str) -> list[Event]:
        """Events of one club, soonest first."""
        ...

    async def list_public_for_clubs(self, club_ids: list[str]) -> list[Event]:
        """Public events of the given clubs, soonest first."""
        ...
