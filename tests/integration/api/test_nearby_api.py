"""Integration tests for nearby club discovery."""

import pytest
from httpx import AsyncClient

from domain.entities.identifiers import new_object_id
from infrastructure.database.models import ClubModel

LISBON = {"latitude": 38.7223, "longitude": -9.1393}
SINTRA = {"latitude": 38.8029, "longitude": -9.3817}
PORTO = {"latitude": 41.1579, "longitude": -8.6291}


async def _insert_legacy_club(session_factory, name: str, geolocation: dict) -> str:
    """A club row written before the indexed point existed."""
    club_id = new_object_id()
    async with session_factory() as session:
        session.add(
            ClubModel(
                id=club_id,
                name=name,
                geolocation=geolocation,
                created_by="user-legacy",
            )
        )
        await session.commit()
    return club_id


class TestNearbyAPI:
    @pytest.mark.asyncio
    async def test_indexed_search_orders_by_distance(
        self, api_client: AsyncClient, alice, create_club
    ):
        await create_club(alice, "Sintra Riders", geolocation=SINTRA)
        await create_club(alice, "Lisbon Riders", geolocation=LISBON)
        await create_club(alice, "Porto Riders", geolocation=PORTO)

        response = await api_client.get(
            "/api/v1/club/nearby",
            params={"latitude": 38.72, "longitude": -9.14, "radius": 50},
            headers=alice,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["queryMethod"] == "geospatial_index"
        assert data["total"] == 2
        assert [c["clubName"] for c in data["clubs"]] == ["Lisbon Riders", "Sintra Riders"]
        assert data["clubs"][0]["distance"] < data["clubs"][1]["distance"]
        assert data["clubs"][0]["memberCount"] == 1

    @pytest.mark.asyncio
    async def test_limit_caps_results(self, api_client: AsyncClient, alice, create_club):
        await create_club(alice, "Sintra Riders", geolocation=SINTRA)
        await create_club(alice, "Lisbon Riders", geolocation=LISBON)

        response = await api_client.get(
            "/api/v1/club/nearby",
            params={"latitude": 38.72, "longitude": -9.14, "limit": 1},
            headers=alice,
        )

        assert [c["clubName"] for c in response.json()["clubs"]] == ["Lisbon Riders"]

    @pytest.mark.asyncio
    async def test_private_clubs_hidden_unless_requested(
        self, api_client: AsyncClient, alice, create_club
    ):
        await create_club(alice, "Lisbon Riders", geolocation=LISBON)
        await create_club(alice, "Secret", geolocation=SINTRA, isPrivate=True)
        params = {"latitude": 38.72, "longitude": -9.14}

        public_only = await api_client.get("/api/v1/club/nearby", params=params, headers=alice)
        with_private = await api_client.get(
            "/api/v1/club/nearby", params={**params, "includePrivate": "true"}, headers=alice
        )

        assert [c["clubName"] for c in public_only.json()["clubs"]] == ["Lisbon Riders"]
        assert [c["clubName"] for c in with_private.json()["clubs"]] == ["Lisbon Riders", "Secret"]

    @pytest.mark.asyncio
    async def test_legacy_rows_found_by_fallback(
        self, api_client: AsyncClient, alice, session_factory
    ):
        await _insert_legacy_club(session_factory, "Old Timers", LISBON)

        response = await api_client.get(
            "/api/v1/club/nearby",
            params={"latitude": 38.72, "longitude": -9.14},
            headers=alice,
        )

        data = response.json()
        assert data["queryMethod"] == "haversine_fallback"
        assert [c["clubName"] for c in data["clubs"]] == ["Old Timers"]
        assert data["clubs"][0]["memberCount"] == 0

    @pytest.mark.asyncio
    async def test_empty_area_reports_fallback(self, api_client: AsyncClient, alice, create_club):
        await create_club(alice, "Porto Riders", geolocation=PORTO)

        response = await api_client.get(
            "/api/v1/club/nearby",
            params={"latitude": 38.72, "longitude": -9.14, "radius": 10},
            headers=alice,
        )

        assert response.status_code == 200
        assert response.json() == {"clubs": [], "queryMethod": "haversine_fallback", "total": 0}

    @pytest.mark.asyncio
    async def test_missing_coordinates_return_400(self, api_client: AsyncClient, alice):
        response = await api_client.get("/api/v1/club/nearby", headers=alice)

        assert response.status_code == 400
        fields = {d["field"] for d in response.json()["details"]}
        assert fields == {"latitude", "longitude"}

    @pytest.mark.asyncio
    async def test_out_of_range_parameters_return_400(self, api_client: AsyncClient, alice):
        response = await api_client.get(
            "/api/v1/club/nearby",
            params={"latitude": 91, "longitude": 0, "radius": 501, "limit": 0},
            headers=alice,
        )

        assert response.status_code == 400
        fields = {d["field"] for d in response.json()["details"]}
        assert fields == {"latitude", "radius", "limit"}

    @pytest.mark.asyncio
    async def test_non_numeric_latitude_returns_400(self, api_client: AsyncClient, alice):
        response = await api_client.get(
            "/api/v1/club/nearby",
            params={"latitude": "north", "longitude": 0},
            headers=alice,
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "latitude"
