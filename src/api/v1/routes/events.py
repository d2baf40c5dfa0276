"""Club event API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import InitializedUser
from api.dependencies.ids import ClubId
from api.v1.dependencies import get_event_service
from api.v1.schemas.event import EventCreate, EventListResponse, EventResponse
from core.exceptions import InvalidIdError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.club import GeoLocation
from domain.entities.identifiers import is_object_id
from domain.services.event_service import EventService

router = APIRouter(prefix="/event", tags=["events"])


@router.post(
    "/create",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event",
    responses={
        403: {"description": "Caller is not a member of the club"},
        404: {"description": "Club not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_event(
    request: Request,
    body: EventCreate,
    user: InitializedUser,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    if not is_object_id(body.club_id):
        raise InvalidIdError("club")

    geolocation = (
        GeoLocation(
            latitude=body.geolocation.latitude,
            longitude=body.geolocation.longitude,
            place_name=body.geolocation.place_name,
        )
        if body.geolocation
        else None
    )
    event = await service.create_event(
        user_id=user.id,
        club_id=body.club_id.lower(),
        name=body.event_name,
        description=body.description,
        start_time=body.start_time,
        end_time=body.end_time,
        location=body.location,
        geolocation=geolocation,
        event_type=body.event_type,
        is_private=body.is_private,
    )
    return EventResponse.from_entity(event)


@router.get("", response_model=EventListResponse, summary="List all events")
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_events(
    request: Request,
    user: InitializedUser,
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    events = await service.list_events()
    return EventListResponse(events=[EventResponse.from_entity(e) for e in events])


@router.get(
    "/my-clubs",
    response_model=EventListResponse,
    summary="Public events of the caller's clubs",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_my_club_events(
    request: Request,
    user: InitializedUser,
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    """Public events across every club the caller belongs to, by start time."""
    events = await service.list_my_club_events(user.id)
    return EventListResponse(events=[EventResponse.from_entity(e) for e in events])


@router.get(
    "/club/{club_id}",
    response_model=EventListResponse,
    summary="List a club's events",
    responses={404: {"description": "Club not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_club_events(
    request: Request,
    club_id: ClubId,
    user: InitializedUser,
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    events = await service.list_club_events(club_id)
    return EventListResponse(events=[EventResponse.from_entity(e) for e in events])
