"""Join request repository protocol."""

from typing import Protocol

from domain.entities.club import JoinRequest


class IJoinRequestRepository(Protocol):
    """Repository interface for JoinRequest entities."""

    async def get(self, id: str) -> JoinRequest | None:
        """Get a join request by ID."""
        ...

    async def get_pending(self, club_id: str, user_id: str) -> JoinRequest | None:
        """Get the user's pending request for a club, if any."""
        ...

    async def list_pending(self, club_id: str) -> list[JoinRequest]:
        """Pending requests of a club, oldest first."""
        ...

    async def create(self, request: JoinRequest) -> JoinRequest:
        """Create a join request."""
        ...

    async def delete(self, id: str) -> bool:
        """Delete a join request."""
        ...
