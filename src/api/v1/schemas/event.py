"""Pydantic schemas for Event API."""

from datetime import datetime, timezone

from pydantic import Field, field_validator

from api.v1.schemas.common import CamelModel, GeoLocationSchema
from domain.entities.event import Event, EventType


class EventCreate(CamelModel):
    """Schema for creating an Event."""

    club_id: str = Field(..., min_length=24, max_length=24)
    event_name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=5000)
    start_time: datetime
    end_time: datetime | None = None
    location: str | None = Field(None, max_length=255)
    geolocation: GeoLocationSchema | None = None
    event_type: EventType = EventType.EVENT
    is_private: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def to_naive_utc(cls, v: datetime | None) -> datetime | None:
        """Store times as naive UTC; offsets are converted first."""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class EventResponse(CamelModel):
    """Schema for Event response."""

    id: str
    club_id: str
    event_name: str
    description: str
    start_time: datetime
    end_time: datetime | None = None
    location: str | None = None
    geolocation: GeoLocationSchema | None = None
    event_type: EventType
    is_private: bool
    image_url: str | None = None
    created_by: str
    created_at: datetime

    @classmethod
    def from_entity(cls, event: Event) -> "EventResponse":
        return cls(
            id=event.id,
            club_id=event.club_id,
            event_name=event.name,
            description=event.description,
            start_time=event.start_time,
            end_time=event.end_time,
            location=event.location,
            geolocation=(
                GeoLocationSchema(
                    latitude=event.geolocation.latitude,
                    longitude=event.geolocation.longitude,
                    place_name=event.geolocation.place_name,
                )
                if event.geolocation
                else None
            ),
            event_type=event.event_type,
            is_private=event.is_private,
            image_url=event.image_url,
            created_by=event.created_by,
            created_at=event.created_at,
        )


class EventListResponse(CamelModel):
    events: list[EventResponse]
