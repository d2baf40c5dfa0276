"""Nearby club discovery with an indexed primary path and a scan fallback."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

import structlog
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from core.exceptions import QueryTimeoutError
from domain.entities.club import Club
from domain.geo import NearbyQuery, bounding_box, haversine, validate_nearby_query
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

GEOSPATIAL_INDEX = "geospatial_index"
HAVERSINE_FALLBACK = "haversine_fallback"


@dataclass(frozen=True, slots=True)
class NearbyClub:
    """A club within the search radius."""

    club: Club
    distance_km: float
    member_count: int


@dataclass(frozen=True, slots=True)
class NearbyResult:
    """Search results and the path that produced them."""

    clubs: list[NearbyClub]
    query_method: str


def rank_by_distance(clubs: list[Club], query: NearbyQuery) -> list[tuple[Club, float]]:
    """Filter to the radius, sort by distance (stable) and cap at the limit."""
    ranked = []
    for club in clubs:
        if club.geolocation is None:
            continue
        distance = haversine(
            query.latitude,
            query.longitude,
            club.geolocation.latitude,
            club.geolocation.longitude,
        )
        if distance <= query.radius_km:
            ranked.append((club, distance))
    ranked.sort(key=lambda pair: pair[1])
    return ranked[: query.limit]


class DiscoveryService:
    """Service layer for geospatial club discovery."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        timeout_seconds: float = settings.geo_query_timeout_seconds,
    ) -> None:
        self._uow_factory = uow_factory
        self._timeout = timeout_seconds

    async def _indexed(self, query: NearbyQuery) -> list[tuple[Club, float]]:
        box = bounding_box(query.latitude, query.longitude, query.radius_km)
        async with self._uow_factory() as uow:
            candidates = await uow.clubs.find_in_box(box, query.include_private)
        return rank_by_distance(candidates, query)

    async def _scan(self, query: NearbyQuery) -> list[tuple[Club, float]]:
        async with self._uow_factory() as uow:
            candidates = await uow.clubs.list_with_geolocation(query.include_private)
        return rank_by_distance(candidates, query)

    async def find_nearby(
        self,
        latitude: float | None,
        longitude: float | None,
        radius_km: float | None = None,
        limit: int | None = None,
        include_private: bool = False,
    ) -> NearbyResult:
        """Clubs within ``radius_km`` of a point, nearest first.

        The indexed path runs first. An empty result, an error or a timeout
        there falls back to scanning every club with a geolocation, which
        also finds legacy rows whose indexed point was never derived.
        """
        query = validate_nearby_query(latitude, longitude, radius_km, limit, include_private)

        ranked: list[tuple[Club, float]] = []
        method = GEOSPATIAL_INDEX
        try:
            ranked = await asyncio.wait_for(self._indexed(query), self._timeout)
        except asyncio.TimeoutError:
            logger.warning("nearby_index_timeout", timeout_seconds=self._timeout)
        except SQLAlchemyError:
            logger.warning("nearby_index_failed", exc_info=True)

        if not ranked:
            method = HAVERSINE_FALLBACK
            logger.info(
                "nearby_fallback_used",
                latitude=query.latitude,
                longitude=query.longitude,
                radius_km=query.radius_km,
            )
            try:
                ranked = await asyncio.wait_for(self._scan(query), self._timeout)
            except asyncio.TimeoutError as exc:
                raise QueryTimeoutError("nearby clubs") from exc

        async with self._uow_factory() as uow:
            counts = await uow.clubs.count_members([club.id for club, _ in ranked])

        return NearbyResult(
            clubs=[
                NearbyClub(
                    club=club,
                    distance_km=round(distance, 2),
                    member_count=counts.get(club.id, 0),
                )
                for club, distance in ranked
            ],
            query_method=method,
        )
