"""SQLAlchemy implementation of Club repository."""

from typing import Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.club import Club, GeoLocation, LogoAsset
from domain.geo import BoundingBox
from infrastructure.database.models import ClubMemberModel, ClubModel


def geolocation_from_document(doc: dict[str, Any] | None) -> GeoLocation | None:
    """Parse a stored geolocation document. Malformed documents yield None."""
    if not doc:
        return None
    lat, lng = doc.get("latitude"), doc.get("longitude")
    if isinstance(lat, bool) or isinstance(lng, bool):
        return None
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        return None
    return GeoLocation(latitude=float(lat), longitude=float(lng), place_name=doc.get("placeName"))


def geolocation_to_document(geolocation: GeoLocation | None) -> dict[str, Any] | None:
    if geolocation is None:
        return None
    doc: dict[str, Any] = {"latitude": geolocation.latitude, "longitude": geolocation.longitude}
    if geolocation.place_name:
        doc["placeName"] = geolocation.place_name
    return doc


class SQLAlchemyClubRepository:
    """SQLAlchemy implementation of IClubRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: str, for_update: bool = False) -> Club | None:
        """Get a club by ID, optionally locking the row until commit."""
        stmt = select(ClubModel).where(ClubModel.id == id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_name(self, name: str) -> Club | None:
        """Get a club by its exact name."""
        stmt = select(ClubModel).where(ClubModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_many(self, ids: list[str]) -> dict[str, Club]:
        """Get clubs by ID, keyed by ID."""
        if not ids:
            return {}
        stmt = select(ClubModel).where(ClubModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def list_all(self) -> list[Club]:
        """Get every club, oldest first."""
        stmt = select(ClubModel).order_by(ClubModel.created_at, ClubModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, club: Club) -> Club:
        """Create a new club."""
        model = self._to_model(club)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, club: Club) -> Club:
        """Update an existing club, re-deriving the indexed point."""
        stmt = select(ClubModel).where(ClubModel.id == club.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Club {club.id} not found")

        model.name = club.name
        model.description = club.description
        model.location = club.location
        model.is_private = club.is_private
        model.logo = {"url": club.logo.url, "publicId": club.logo.public_id} if club.logo else None
        self._apply_geolocation(model, club.geolocation)
        model.updated_at = club.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def count_members(self, club_ids: list[str]) -> dict[str, int]:
        """Member counts for the given clubs."""
        if not club_ids:
            return {}
        stmt = (
            select(ClubMemberModel.club_id, func.count(ClubMemberModel.id))
            .where(ClubMemberModel.club_id.in_(club_ids))
            .group_by(ClubMemberModel.club_id)
        )
        result = await self._session.execute(stmt)
        counts = {club_id: 0 for club_id in club_ids}
        counts.update({club_id: count for club_id, count in result.all()})
        return counts

    async def find_in_box(self, box: BoundingBox, include_private: bool) -> list[Club]:
        """Clubs whose indexed point lies inside the box."""
        lng_bands = [ClubModel.geo_lng.between(west, east) for west, east in box.lng_ranges]
        stmt = select(ClubModel).where(
            and_(
                ClubModel.geo_lat.is_not(None),
                ClubModel.geo_lat.between(box.min_lat, box.max_lat),
                or_(*lng_bands),
            )
        )
        if not include_private:
            stmt = stmt.where(ClubModel.is_private.is_(False))
        stmt = stmt.order_by(ClubModel.created_at, ClubModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_with_geolocation(self, include_private: bool) -> list[Club]:
        """Clubs carrying a geolocation document."""
        stmt = select(ClubModel).where(ClubModel.geolocation.is_not(None))
        if not include_private:
            stmt = stmt.where(ClubModel.is_private.is_(False))
        stmt = stmt.order_by(ClubModel.created_at, ClubModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    @staticmethod
    def _apply_geolocation(model: ClubModel, geolocation: GeoLocation | None) -> None:
        model.geolocation = geolocation_to_document(geolocation)
        model.geo_lat = geolocation.latitude if geolocation else None
        model.geo_lng = geolocation.longitude if geolocation else None

    def _to_entity(self, model: ClubModel) -> Club:
        """Convert ORM model to domain entity."""
        logo = None
        if model.logo and model.logo.get("url"):
            logo = LogoAsset(url=model.logo["url"], public_id=model.logo.get("publicId"))
        return Club(
            id=model.id,
            name=model.name,
            description=model.description or "",
            location=model.location or "",
            is_private=model.is_private,
            geolocation=geolocation_from_document(model.geolocation),
            logo=logo,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Club) -> ClubModel:
        """Convert domain entity to ORM model."""
        model = ClubModel(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            location=entity.location,
            is_private=entity.is_private,
            logo={"url": entity.logo.url, "publicId": entity.logo.public_id} if entity.logo else None,
            created_by=entity.created_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
        self._apply_geolocation(model, entity.geolocation)
        return model
