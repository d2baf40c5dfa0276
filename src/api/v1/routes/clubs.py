"""Club API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import InitializedUser
from api.dependencies.ids import ClubId
from api.v1.dependencies import get_club_service, get_discovery_service
from api.v1.schemas.club import (
    ClubCreate,
    ClubListResponse,
    ClubResponse,
    ClubUpdate,
    NearbyClubListResponse,
    NearbyClubResponse,
)
from core.rate_limit import READ_LIMIT, SEARCH_LIMIT, WRITE_LIMIT, limiter
from domain.entities.club import GeoLocation, LogoAsset
from domain.services.club_service import UNSET, ClubService
from domain.services.discovery_service import DiscoveryService

router = APIRouter(prefix="/club", tags=["clubs"])


@router.post(
    "/create",
    response_model=ClubResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a club",
    responses={
        201: {"description": "Club created; the creator is its admin"},
        409: {"description": "Club name already taken"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_club(
    request: Request,
    body: ClubCreate,
    user: InitializedUser,
    service: ClubService = Depends(get_club_service),
) -> ClubResponse:
    """Create a club and enrol the caller as its first admin."""
    geolocation = (
        GeoLocation(
            latitude=body.geolocation.latitude,
            longitude=body.geolocation.longitude,
            place_name=body.geolocation.place_name,
        )
        if body.geolocation
        else None
    )
    club = await service.create_club(
        user_id=user.id,
        name=body.club_name,
        description=body.description,
        location=body.location,
        is_private=body.is_private,
        geolocation=geolocation,
    )
    return ClubResponse.from_entity(club, member_count=1)


@router.get(
    "",
    response_model=ClubListResponse,
    summary="List clubs",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_clubs(
    request: Request,
    user: InitializedUser,
    service: ClubService = Depends(get_club_service),
) -> ClubListResponse:
    """Every club with its member count."""
    summaries = await service.list_clubs()
    return ClubListResponse(
        clubs=[ClubResponse.from_entity(s.club, s.member_count) for s in summaries]
    )


@router.get(
    "/nearby",
    response_model=NearbyClubListResponse,
    summary="Find clubs near a point",
    responses={
        400: {"description": "Coordinates, radius or limit out of range"},
        504: {"description": "Search exceeded its time budget"},
    },
)
@limiter.limit(SEARCH_LIMIT)  # type: ignore[untyped-decorator]
async def find_nearby_clubs(
    request: Request,
    user: InitializedUser,
    latitude: float | None = Query(None, description="Search center latitude"),
    longitude: float | None = Query(None, description="Search center longitude"),
    radius: float | None = Query(None, description="Search radius in km (default 50, max 500)"),
    limit: int | None = Query(None, description="Maximum results (default 20, max 100)"),
    include_private: bool = Query(False, alias="includePrivate"),
    service: DiscoveryService = Depends(get_discovery_service),
) -> NearbyClubListResponse:
    """Clubs within ``radius`` km, nearest first."""
    result = await service.find_nearby(
        latitude=latitude,
        longitude=longitude,
        radius_km=radius,
        limit=limit,
        include_private=include_private,
    )
    clubs = [
        NearbyClubResponse(
            **ClubResponse.from_entity(n.club, n.member_count).model_dump(),
            distance=n.distance_km,
        )
        for n in result.clubs
    ]
    return NearbyClubListResponse(clubs=clubs, query_method=result.query_method, total=len(clubs))


@router.get(
    "/{club_id}",
    response_model=ClubResponse,
    summary="Get a club",
    responses={
        400: {"description": "Malformed club ID"},
        404: {"description": "Club not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_club(
    request: Request,
    club_id: ClubId,
    user: InitializedUser,
    service: ClubService = Depends(get_club_service),
) -> ClubResponse:
    summary = await service.get_club(club_id)
    return ClubResponse.from_entity(summary.club, summary.member_count)


@router.put(
    "/{club_id}/update",
    response_model=ClubResponse,
    summary="Update a club",
    responses={
        403: {"description": "Caller is not a club admin"},
        404: {"description": "Club not found"},
        409: {"description": "Club name already taken"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_club(
    request: Request,
    club_id: ClubId,
    body: ClubUpdate,
    user: InitializedUser,
    service: ClubService = Depends(get_club_service),
) -> ClubResponse:
    """Update club details. Admin only."""
    geolocation = UNSET
    if "geolocation" in body.model_fields_set:
        geolocation = (
            GeoLocation(
                latitude=body.geolocation.latitude,
                longitude=body.geolocation.longitude,
                place_name=body.geolocation.place_name,
            )
            if body.geolocation
            else None
        )
    logo = UNSET
    if "logo" in body.model_fields_set:
        logo = LogoAsset(url=body.logo.url, public_id=body.logo.public_id) if body.logo else None

    summary = await service.update_club(
        club_id,
        user.id,
        name=body.club_name,
        description=body.description,
        location=body.location,
        is_private=body.is_private,
        geolocation=geolocation,
        logo=logo,
    )
    return ClubResponse.from_entity(summary.club, summary.member_count)
