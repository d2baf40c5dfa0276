"""Club repository protocol."""

from typing import Protocol

from domain.entities.club import Club
from domain.geo import BoundingBox


class IClubRepository(Protocol):
    """Repository interface for Club entities."""

    async def get(self, id: str, for_update: bool = False) -> Club | None:
        """Get a club by ID, optionally locking the row until commit."""
        ...

    async def get_by_name(self, name: str) -> Club | None:
        """Get a club by its exact name."""
        ...

    async def get_many(self, ids: list[str]) -> dict[str, Club]:
        """Get clubs by ID, keyed by ID. Missing IDs are skipped."""
        ...

    async def list_all(self) -> list[Club]:
        """Get every club, oldest first."""
        ...

    async def create(self, club: Club) -> Club:
        """Create a new club."""
        ...

    async def update(self, club: Club) -> Club:
        """Update an existing club."""
        ...

    async def count_members(self, club_ids: list[str]) -> dict[str, int]:
        """Member counts for the given clubs. Clubs without members map to 0."""
        ...

    # --- Geospatial ---

    async def find_in_box(
        self,
        box: BoundingBox,
        include_private: bool,
    ) -> list[Club]:
        """Clubs whose indexed point lies inside the box."""
        ...

    async def list_with_geolocation(self, include_private: bool) -> list[Club]:
        """Clubs carrying a geolocation, whether or not the indexed point is set."""
        ...
