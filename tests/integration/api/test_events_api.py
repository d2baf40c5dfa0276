"""Integration tests for Events API."""

import pytest
from httpx import AsyncClient


def _event(club_id: str, name: str = "Sunday Ride", **fields) -> dict:
    return {
        "clubId": club_id,
        "eventName": name,
        "description": "Coastal loop",
        "startTime": "2026-11-01T09:00:00",
        **fields,
    }


class TestEventsAPI:
    @pytest.mark.asyncio
    async def test_member_creates_event(self, api_client: AsyncClient, alice, create_club):
        club = await create_club(alice, "Riders")

        response = await api_client.post(
            "/api/v1/event/create",
            json=_event(club["id"], endTime="2026-11-01T13:00:00", location="Cascais"),
            headers=alice,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["eventName"] == "Sunday Ride"
        assert data["clubId"] == club["id"]
        assert data["createdBy"] == "user-alice"
        assert data["eventType"] == "event"
        assert data["isPrivate"] is True

    @pytest.mark.asyncio
    async def test_outsider_cannot_create_event(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Riders")

        response = await api_client.post("/api/v1/event/create", json=_event(club["id"]), headers=bob)

        assert response.status_code == 403
        assert response.json()["error_code"] == "NOT_A_MEMBER"

    @pytest.mark.asyncio
    async def test_end_before_start_returns_400(self, api_client: AsyncClient, alice, create_club):
        club = await create_club(alice, "Riders")

        response = await api_client.post(
            "/api/v1/event/create",
            json=_event(club["id"], endTime="2026-11-01T08:00:00"),
            headers=alice,
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "endTime"

    @pytest.mark.asyncio
    async def test_malformed_club_id_returns_400(self, api_client: AsyncClient, alice):
        response = await api_client.post(
            "/api/v1/event/create", json=_event("z" * 24), headers=alice
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ID"

    @pytest.mark.asyncio
    async def test_list_events_by_start_time(self, api_client: AsyncClient, alice, create_club):
        club = await create_club(alice, "Riders")
        await api_client.post(
            "/api/v1/event/create",
            json=_event(club["id"], "Later", startTime="2026-12-01T09:00:00"),
            headers=alice,
        )
        await api_client.post(
            "/api/v1/event/create", json=_event(club["id"], "Sooner"), headers=alice
        )

        all_events = await api_client.get("/api/v1/event", headers=alice)
        club_events = await api_client.get(f"/api/v1/event/club/{club['id']}", headers=alice)

        assert [e["eventName"] for e in all_events.json()["events"]] == ["Sooner", "Later"]
        assert [e["eventName"] for e in club_events.json()["events"]] == ["Sooner", "Later"]

    @pytest.mark.asyncio
    async def test_my_clubs_lists_public_events_of_joined_clubs(
        self, api_client: AsyncClient, alice, bob, create_club
    ):
        riders = await create_club(alice, "Riders")
        others = await create_club(alice, "Others")
        await api_client.post(f"/api/v1/club/{riders['id']}/join", headers=bob)
        for club_id, name, private in [
            (riders["id"], "Open Ride", False),
            (riders["id"], "Admins Only", True),
            (others["id"], "Elsewhere", False),
        ]:
            await api_client.post(
                "/api/v1/event/create", json=_event(club_id, name, isPrivate=private), headers=alice
            )

        response = await api_client.get("/api/v1/event/my-clubs", headers=bob)

        assert response.status_code == 200
        assert [e["eventName"] for e in response.json()["events"]] == ["Open Ride"]

    @pytest.mark.asyncio
    async def test_my_clubs_empty_without_memberships(self, api_client: AsyncClient, carol):
        response = await api_client.get("/api/v1/event/my-clubs", headers=carol)

        assert response.json() == {"events": []}

    @pytest.mark.asyncio
    async def test_unknown_club_events_return_404(self, api_client: AsyncClient, alice):
        response = await api_client.get("/api/v1/event/club/" + "b" * 24, headers=alice)

        assert response.status_code == 404


class TestEventTimezones:
    @pytest.mark.asyncio
    async def test_utc_start_with_naive_end(self, api_client: AsyncClient, alice, create_club):
        club = await create_club(alice, "Riders")

        response = await api_client.post(
            "/api/v1/event/create",
            json=_event(club["id"], startTime="2026-11-01T09:00:00Z", endTime="2026-11-01T13:00:00"),
            headers=alice,
        )

        assert response.status_code == 201
        assert response.json()["startTime"] == "2026-11-01T09:00:00"
        assert response.json()["endTime"] == "2026-11-01T13:00:00"

    @pytest.mark.asyncio
    async def test_offsets_are_converted_to_utc(self, api_client: AsyncClient, alice, create_club):
        club = await create_club(alice, "Riders")

        response = await api_client.post(
            "/api/v1/event/create",
            json=_event(
                club["id"],
                startTime="2026-11-01T10:00:00+02:00",
                endTime="2026-11-01T08:30:00",
            ),
            headers=alice,
        )

        assert response.status_code == 201
        assert response.json()["startTime"] == "2026-11-01T08:00:00"

    @pytest.mark.asyncio
    async def test_mixed_times_still_ordered(self, api_client: AsyncClient, alice, create_club):
        club = await create_club(alice, "Riders")

        response = await api_client.post(
            "/api/v1/event/create",
            json=_event(
                club["id"],
                startTime="2026-11-01T09:00:00Z",
                endTime="2026-11-01T12:00:00+05:00",
            ),
            headers=alice,
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "endTime"
