"""Club member repository protocol."""

from typing import Protocol

from domain.entities.club import ClubMember


class IMemberRepository(Protocol):
    """Repository interface for ClubMember entities."""

    async def get(self, id: str) -> ClubMember | None:
        """Get a member row by ID."""
        ...

    async def get_for_user(self, club_id: str, user_id: str) -> ClubMember | None:
        """Get the member row of a user in a club."""
        ...

    async def list_for_club(self, club_id: str) -> list[ClubMember]:
        """Get all members of a club, in join order."""
        ...

    async def list_club_ids_for_user(self, user_id: str) -> list[str]:
        """IDs of the clubs a user belongs to."""
        ...

    async def list_admin_user_ids(self, club_id: str) -> list[str]:
        """User IDs of the club's admins."""
        ...

    async def count_admins(self, club_id: str) -> int:
        """Number of admin rows in a club."""
        ...

    async def add(self, member: ClubMember) -> ClubMember:
        """Add a member row."""
        ...

    async def update_roles(self, member: ClubMember) -> ClubMember:
        """Persist the member's role set."""
        ...

    async def remove(self, id: str) -> bool:
        """Delete a member row."""
        ...
