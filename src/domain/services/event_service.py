"""Club event service layer."""

from collections.abc import Callable
from datetime import datetime

import structlog

from core.exceptions import FieldValidationError
from domain.entities.club import GeoLocation
from domain.entities.event import Event, EventType
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.membership_service import get_club_or_raise, require_member

logger = structlog.get_logger()


class EventService:
    """Service layer for club events."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create_event(
        self,
        user_id: str,
        club_id: str,
        name: str,
        description: str,
        start_time: datetime,
        end_time: datetime | None = None,
        location: str | None = None,
        geolocation: GeoLocation | None = None,
        event_type: EventType = EventType.EVENT,
        is_private: bool = True,
    ) -> Event:
        """Create an event. Only members of the club may do so."""
        if end_time is not None and end_time < start_time:
            raise FieldValidationError(
                [{"field": "endTime", "message": "End time must not be before start time"}]
            )

        async with self._uow_factory() as uow:
            await get_club_or_raise(uow, club_id)
            await require_member(uow, club_id, user_id)

            event = Event(
                name=name.strip(),
                description=description,
                start_time=start_time,
                end_time=end_time,
                club_id=club_id,
                created_by=user_id,
                location=location,
                geolocation=geolocation,
                event_type=event_type,
                is_private=is_private,
            )
            created = await uow.events.create(event)
            await uow.commit()

        logger.info("event_created", event_id=created.id, club_id=club_id, created_by=user_id)
        return created

    async def list_events(self) -> list[Event]:
        async with self._uow_factory() as uow:
            return await uow.events.list_all()

    async def list_club_events(self, club_id: str) -> list[Event]:
        async with self._uow_factory() as uow:
            await get_club_or_raise(uow, club_id)
            return await uow.events.list_for_club(club_id)

    async def list_my_club_events(self, user_id: str) -> list[Event]:
        """Public events of every club the user belongs to, by start time."""
        async with self._uow_factory() as uow:
            club_ids = await uow.members.list_club_ids_for_user(user_id)
            if not club_ids:
                return []
            return await uow.events.list_public_for_clubs(club_ids)
