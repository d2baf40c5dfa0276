"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: str) -> Profile | None:
        """Get a profile by user ID."""
        ...

    async def get_many(self, ids: list[str]) -> dict[str, Profile]:
        """Profiles keyed by user ID. Unknown users are skipped."""
        ...

    async def upsert(self, profile: Profile) -> Profile:
        """Insert the profile or refresh its email and display name."""
        ...
