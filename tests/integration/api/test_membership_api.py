"""Integration tests for the join workflow and the membership ledger."""

import pytest
from httpx import AsyncClient


async def _join(api_client: AsyncClient, club_id: str, headers: dict[str, str]) -> dict:
    response = await api_client.post(f"/api/v1/club/{club_id}/join", headers=headers)
    assert response.status_code == 201, response.text
    return dict(response.json())


async def _member_id(api_client: AsyncClient, club_id: str, headers: dict[str, str]) -> str:
    response = await api_client.get(
        f"/api/v1/club/{club_id}/membership-status", headers=headers
    )
    return str(response.json()["memberId"])


class TestJoinPublicClub:
    @pytest.mark.asyncio
    async def test_instant_join(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Riders")

        data = await _join(api_client, club["id"], bob)

        assert data["message"] == "Successfully joined the club"
        assert data["instant"] is True
        assert data["membership"]["userId"] == "user-bob"
        assert data["membership"]["role"] == "member"
        assert "joinRequest" not in data

        status = await api_client.get(f"/api/v1/club/{club['id']}/membership-status", headers=bob)
        assert status.json()["status"] == "member"
        assert status.json()["permissions"] == ["view", "post"]

    @pytest.mark.asyncio
    async def test_member_count_grows(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Riders")
        await _join(api_client, club["id"], bob)

        response = await api_client.get(f"/api/v1/club/{club['id']}", headers=alice)

        assert response.json()["memberCount"] == 2

    @pytest.mark.asyncio
    async def test_duplicate_join_returns_400(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Riders")
        await _join(api_client, club["id"], bob)

        response = await api_client.post(f"/api/v1/club/{club['id']}/join", headers=bob)

        assert response.status_code == 400
        assert response.json()["error_code"] == "ALREADY_A_MEMBER"

    @pytest.mark.asyncio
    async def test_existing_members_are_notified(
        self, api_client: AsyncClient, alice, bob, create_club, publisher
    ):
        club = await create_club(alice, "Riders")
        await _join(api_client, club["id"], bob)
        await publisher.flush()

        alice_feed = await api_client.get("/api/v1/notifications", headers=alice)
        bob_feed = await api_client.get("/api/v1/notifications", headers=bob)

        notifications = alice_feed.json()["notifications"]
        assert len(notifications) == 1
        assert notifications[0]["type"] == "new_member"
        assert notifications[0]["message"] == "bob joined Riders"
        assert bob_feed.json()["notifications"] == []

    @pytest.mark.asyncio
    async def test_join_unknown_club_returns_404(self, api_client: AsyncClient, bob):
        response = await api_client.post("/api/v1/club/" + "a" * 24 + "/join", headers=bob)

        assert response.status_code == 404


class TestJoinPrivateClub:
    @pytest.mark.asyncio
    async def test_join_files_request(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Secret", isPrivate=True)

        data = await _join(api_client, club["id"], bob)

        assert data["message"] == "Join request sent successfully"
        assert data["instant"] is False
        assert data["joinRequest"]["status"] == "pending"
        assert "membership" not in data

        status = await api_client.get(f"/api/v1/club/{club['id']}/membership-status", headers=bob)
        assert status.json()["status"] == "pending"
        assert status.json()["joinRequestId"] == data["joinRequest"]["id"]

    @pytest.mark.asyncio
    async def test_duplicate_request_returns_400(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Secret", isPrivate=True)
        await _join(api_client, club["id"], bob)

        response = await api_client.post(f"/api/v1/club/{club['id']}/join", headers=bob)

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_JOIN_REQUEST"

    @pytest.mark.asyncio
    async def test_admin_approves_request(
        self, api_client: AsyncClient, alice, bob, create_club, publisher
    ):
        club = await create_club(alice, "Secret", isPrivate=True)
        request_id = (await _join(api_client, club["id"], bob))["joinRequest"]["id"]

        pending = await api_client.get(f"/api/v1/club/{club['id']}/join-requests", headers=alice)
        assert [r["id"] for r in pending.json()["joinRequests"]] == [request_id]

        response = await api_client.post(
            f"/api/v1/club/{club['id']}/join-requests/{request_id}/approve", headers=alice
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Join request approved successfully"
        assert response.json()["member"]["userId"] == "user-bob"

        pending = await api_client.get(f"/api/v1/club/{club['id']}/join-requests", headers=alice)
        assert pending.json()["joinRequests"] == []

        await publisher.flush()
        feed = (await api_client.get("/api/v1/notifications", headers=bob)).json()
        assert feed["notifications"][0]["type"] == "request_approved"
        assert feed["notifications"][0]["message"] == "Your request to join Secret was approved by alice"

    @pytest.mark.asyncio
    async def test_admins_hear_about_requests(
        self, api_client: AsyncClient, alice, bob, create_club, publisher
    ):
        club = await create_club(alice, "Secret", isPrivate=True)
        await _join(api_client, club["id"], bob)
        await publisher.flush()

        feed = (await api_client.get("/api/v1/notifications", headers=alice)).json()

        assert feed["notifications"][0]["type"] == "join_request"
        assert feed["notifications"][0]["message"] == "bob wants to join Secret"
        assert feed["notifications"][0]["senderName"] == "bob"

    @pytest.mark.asyncio
    async def test_admin_rejects_request(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Secret", isPrivate=True)
        request_id = (await _join(api_client, club["id"], bob))["joinRequest"]["id"]

        response = await api_client.post(
            f"/api/v1/club/{club['id']}/join-requests/{request_id}/reject", headers=alice
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Join request rejected successfully"
        status = await api_client.get(f"/api/v1/club/{club['id']}/membership-status", headers=bob)
        assert status.json() == {"status": "not-member"}

    @pytest.mark.asyncio
    async def test_rejected_user_may_request_again(
        self, api_client: AsyncClient, alice, bob, create_club
    ):
        club = await create_club(alice, "Secret", isPrivate=True)
        request_id = (await _join(api_client, club["id"], bob))["joinRequest"]["id"]
        await api_client.post(
            f"/api/v1/club/{club['id']}/join-requests/{request_id}/reject", headers=alice
        )

        data = await _join(api_client, club["id"], bob)

        assert data["joinRequest"]["id"] != request_id

    @pytest.mark.asyncio
    async def test_second_decision_returns_404(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Secret", isPrivate=True)
        request_id = (await _join(api_client, club["id"], bob))["joinRequest"]["id"]
        url = f"/api/v1/club/{club['id']}/join-requests/{request_id}"
        await api_client.post(f"{url}/approve", headers=alice)

        response = await api_client.post(f"{url}/reject", headers=alice)

        assert response.status_code == 404
        assert response.json()["error_code"] == "JOIN_REQUEST_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_non_admin_cannot_list_or_decide(
        self, api_client: AsyncClient, alice, bob, carol, create_club
    ):
        club = await create_club(alice, "Secret", isPrivate=True)
        request_id = (await _join(api_client, club["id"], bob))["joinRequest"]["id"]

        listing = await api_client.get(f"/api/v1/club/{club['id']}/join-requests", headers=carol)
        approve = await api_client.post(
            f"/api/v1/club/{club['id']}/join-requests/{request_id}/approve", headers=bob
        )

        assert listing.status_code == 403
        assert listing.json()["error_code"] == "NOT_A_MEMBER"
        assert approve.status_code == 403


class TestMembersAPI:
    @pytest.mark.asyncio
    async def test_list_members(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Riders")
        await _join(api_client, club["id"], bob)

        response = await api_client.get(f"/api/v1/club/{club['id']}/members", headers=bob)

        assert response.status_code == 200
        members = response.json()["members"]
        assert {m["userId"]: m["role"] for m in members} == {
            "user-alice": "admin",
            "user-bob": "member",
        }

    @pytest.mark.asyncio
    async def test_outsider_cannot_list_members(self, api_client: AsyncClient, alice, carol, create_club):
        club = await create_club(alice, "Riders")

        response = await api_client.get(f"/api/v1/club/{club['id']}/members", headers=carol)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_remove_member(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Riders")
        await _join(api_client, club["id"], bob)
        member_id = await _member_id(api_client, club["id"], bob)

        response = await api_client.delete(
            f"/api/v1/club/{club['id']}/members/{member_id}", headers=alice
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Member removed successfully"
        status = await api_client.get(f"/api/v1/club/{club['id']}/membership-status", headers=bob)
        assert status.json()["status"] == "not-member"

    @pytest.mark.asyncio
    async def test_sole_admin_cannot_be_removed(self, api_client: AsyncClient, alice, create_club):
        club = await create_club(alice, "Riders")
        member_id = await _member_id(api_client, club["id"], alice)

        response = await api_client.delete(
            f"/api/v1/club/{club['id']}/members/{member_id}", headers=alice
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "LAST_ADMIN"

    @pytest.mark.asyncio
    async def test_promote_and_demote(
        self, api_client: AsyncClient, alice, bob, create_club, publisher
    ):
        club = await create_club(alice, "Riders")
        await _join(api_client, club["id"], bob)
        member_id = await _member_id(api_client, club["id"], bob)
        base = f"/api/v1/club/{club['id']}/members/{member_id}"

        promoted = await api_client.post(f"{base}/promote", headers=alice)
        assert promoted.status_code == 200
        assert promoted.json()["message"] == "Member promoted to admin successfully"
        assert promoted.json()["member"]["role"] == "admin"

        again = await api_client.post(f"{base}/promote", headers=alice)
        assert again.status_code == 400
        assert again.json()["error_code"] == "ALREADY_ADMIN"

        demoted = await api_client.post(f"{base}/demote", headers=alice)
        assert demoted.status_code == 200
        assert demoted.json()["message"] == "Admin demoted to member successfully"
        assert demoted.json()["member"]["role"] == "member"

        await publisher.flush()
        feed = (await api_client.get("/api/v1/notifications", headers=bob)).json()
        role_changes = [n for n in feed["notifications"] if n["type"] == "role_change"]
        assert {n["data"]["newRole"] for n in role_changes} == {"admin", "member"}

    @pytest.mark.asyncio
    async def test_self_demotion_rejected(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Riders")
        await _join(api_client, club["id"], bob)
        bob_id = await _member_id(api_client, club["id"], bob)
        alice_id = await _member_id(api_client, club["id"], alice)
        await api_client.post(f"/api/v1/club/{club['id']}/members/{bob_id}/promote", headers=alice)

        response = await api_client.post(
            f"/api/v1/club/{club['id']}/members/{alice_id}/demote", headers=alice
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "SELF_DEMOTION"

    @pytest.mark.asyncio
    async def test_demote_non_admin_rejected(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Riders")
        await _join(api_client, club["id"], bob)
        member_id = await _member_id(api_client, club["id"], bob)

        response = await api_client.post(
            f"/api/v1/club/{club['id']}/members/{member_id}/demote", headers=alice
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "MEMBER_NOT_ADMIN"

    @pytest.mark.asyncio
    async def test_plain_member_cannot_promote(self, api_client: AsyncClient, alice, bob, create_club):
        club = await create_club(alice, "Riders")
        await _join(api_client, club["id"], bob)
        member_id = await _member_id(api_client, club["id"], bob)

        response = await api_client.post(
            f"/api/v1/club/{club['id']}/members/{member_id}/promote", headers=bob
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "NOT_ADMIN"

    @pytest.mark.asyncio
    async def test_member_of_other_club_is_not_found(
        self, api_client: AsyncClient, alice, bob, create_club
    ):
        riders = await create_club(alice, "Riders")
        other = await create_club(bob, "Others")
        bob_member_id = await _member_id(api_client, other["id"], bob)

        response = await api_client.delete(
            f"/api/v1/club/{riders['id']}/members/{bob_member_id}", headers=alice
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "MEMBER_NOT_FOUND"
