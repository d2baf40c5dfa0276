"""Club event domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from domain.entities.club import GeoLocation
from domain.entities.identifiers import new_object_id


class EventType(str, Enum):
    """Kind of club event."""

    RIDE = "ride"
    MEETING = "meeting"
    MEETUP = "meetup"
    EVENT = "event"


@dataclass
class Event:
    """Domain entity for a club event."""

    name: str
    description: str
    start_time: datetime
    club_id: str
    created_by: str
    id: str = field(default_factory=new_object_id)
    end_time: datetime | None = None
    location: str | None = None
    geolocation: GeoLocation | None = None
    event_type: EventType = EventType.EVENT
    is_private: bool = True
    image_url: str | None = None
    image_public_id: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
