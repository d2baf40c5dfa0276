"""SQLAlchemy implementation of Event repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.event import Event, EventType
from infrastructure.database.models import EventModel
from infrastructure.database.repositories.sqlalchemy_club_repo import (
    geolocation_from_document,
    geolocation_to_document,
)


class SQLAlchemyEventRepository:
    """SQLAlchemy implementation of IEventRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, event: Event) -> Event:
        model = self._to_model(event)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def list_all(self) -> list[Event]:
        stmt = select(EventModel).order_by(EventModel.start_time, EventModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_for_club(self, club_id: str) -> list[Event]:
        stmt = (
            select(EventModel)
            .where(EventModel.club_id == club_id)
            .order_by(EventModel.start_time, EventModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_public_for_clubs(self, club_ids: list[str]) -> list[Event]:
        stmt = (
            select(EventModel)
            .where(EventModel.club_id.in_(club_ids), EventModel.is_private.is_(False))
            .order_by(EventModel.start_time, EventModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: EventModel) -> Event:
        return Event(
            id=model.id,
            name=model.name,
            description=model.description,
            start_time=model.start_time,
            end_time=model.end_time,
            location=model.location,
            geolocation=geolocation_from_document(model.geolocation),
            event_type=EventType(model.event_type),
            is_private=model.is_private,
            image_url=model.image_url,
            image_public_id=model.image_public_id,
            club_id=model.club_id,
            created_by=model.created_by,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Event) -> EventModel:
        return EventModel(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            start_time=entity.start_time,
            end_time=entity.end_time,
            location=entity.location,
            geolocation=geolocation_to_document(entity.geolocation),
            event_type=entity.event_type.value,
            is_private=entity.is_private,
            image_url=entity.image_url,
            image_public_id=entity.image_public_id,
            club_id=entity.club_id,
            created_by=entity.created_by,
            created_at=entity.created_at,
        )
