"""Club catalogue service layer."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import ClubNameTakenError, FieldValidationError
from domain.entities.club import Club, ClubSummary, GeoLocation, LogoAsset
from domain.entities.membership import found_club
from domain.repositories.unit_of_work import IUnitOfWork, is_unique_violation
from domain.services.membership_service import get_club_or_raise, require_admin

logger = structlog.get_logger()

# Sentinel for "field not supplied" where None means "clear it".
UNSET: Any = object()


def _check_geolocation(geolocation: GeoLocation | None) -> None:
    if geolocation is None:
        return
    errors = []
    if not -90 <= geolocation.latitude <= 90:
        errors.append(
            {"field": "geolocation.latitude", "message": "Latitude must be between -90 and 90"}
        )
    if not -180 <= geolocation.longitude <= 180:
        errors.append(
            {"field": "geolocation.longitude", "message": "Longitude must be between -180 and 180"}
        )
    if errors:
        raise FieldValidationError(errors)


class ClubService:
    """Service layer for creating, editing and reading clubs."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create_club(
        self,
        user_id: str,
        name: str,
        description: str = "",
        location: str = "",
        is_private: bool = False,
        geolocation: GeoLocation | None = None,
    ) -> Club:
        """Create a club and enrol the creator as its admin."""
        name = name.strip()
        if not name:
            raise FieldValidationError([{"field": "clubName", "message": "Club name is required"}])
        _check_geolocation(geolocation)

        async with self._uow_factory() as uow:
            if await uow.clubs.get_by_name(name):
                raise ClubNameTakenError(name)

            club = Club(
                name=name,
                created_by=user_id,
                description=description,
                location=location,
                is_private=is_private,
                geolocation=geolocation,
            )
            try:
                created = await uow.clubs.create(club)
                await uow.members.add(found_club(created).member)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                if is_unique_violation(exc):
                    raise ClubNameTakenError(name) from exc
                raise

        logger.info("club_created", club_id=created.id, created_by=user_id, is_private=is_private)
        return created

    async def update_club(
        self,
        club_id: str,
        user_id: str,
        name: str | None = None,
        description: str | None = None,
        location: str | None = None,
        is_private: bool | None = None,
        geolocation: GeoLocation | None = UNSET,
        logo: LogoAsset | None = UNSET,
    ) -> ClubSummary:
        """Update club details. Admin only; ``geolocation=None`` clears it."""
        async with self._uow_factory() as uow:
            club = await get_club_or_raise(uow, club_id)
            await require_admin(uow, club_id, user_id)

            if name is not None:
                name = name.strip()
                if not name:
                    raise FieldValidationError(
                        [{"field": "clubName", "message": "Club name is required"}]
                    )
                if name != club.name:
                    taken = await uow.clubs.get_by_name(name)
                    if taken and taken.id != club.id:
                        raise ClubNameTakenError(name)
                club.name = name
            if description is not None:
                club.description = description
            if location is not None:
                club.location = location
            if is_private is not None:
                club.is_private = is_private
            if geolocation is not UNSET:
                _check_geolocation(geolocation)
                club.geolocation = geolocation
            if logo is not UNSET:
                club.logo = logo

            club.updated_at = datetime.utcnow()
            try:
                updated = await uow.clubs.update(club)
                counts = await uow.clubs.count_members([updated.id])
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                if is_unique_violation(exc):
                    raise ClubNameTakenError(club.name) from exc
                raise

        logger.info("club_updated", club_id=club_id, updated_by=user_id)
        return ClubSummary(club=updated, member_count=counts.get(updated.id, 0))

    async def get_club(self, club_id: str) -> ClubSummary:
        """Get a club with its member count."""
        async with self._uow_factory() as uow:
            club = await get_club_or_raise(uow, club_id)
            counts = await uow.clubs.count_members([club.id])
            return ClubSummary(club=club, member_count=counts.get(club.id, 0))

    async def list_clubs(self) -> list[ClubSummary]:
        """Every club with its member count."""
        async with self._uow_factory() as uow:
            clubs = await uow.clubs.list_all()
            counts = await uow.clubs.count_members([c.id for c in clubs])
            return [ClubSummary(club=c, member_count=counts.get(c.id, 0)) for c in clubs]
