"""Unit tests for EventService."""

from datetime import datetime, timedelta

import pytest

from core.exceptions import ClubNotFoundError, FieldValidationError, NotAMemberError
from domain.entities.club import Club, ClubMember
from domain.entities.event import Event, EventType
from domain.services.event_service import EventService
from tests.unit.conftest import FakeUnitOfWork

START = datetime(2026, 11, 7, 9, 0)


@pytest.fixture
def service(uow: FakeUnitOfWork) -> EventService:
    return EventService(lambda: uow)


class TestCreateEvent:
    async def test_member_creates_event(
        self,
        service: EventService,
        uow: FakeUnitOfWork,
        public_club: Club,
        plain_member: ClubMember,
        user_id: str,
    ):
        uow.clubs.get.return_value = public_club
        uow.members.get_for_user.return_value = plain_member
        uow.events.create.side_effect = lambda event: event

        event = await service.create_event(
            user_id=user_id,
            club_id=public_club.id,
            name=" Sunday ride ",
            description="Coast road",
            start_time=START,
            end_time=START + timedelta(hours=4),
            event_type=EventType.RIDE,
            is_private=False,
        )

        assert event.name == "Sunday ride"
        assert event.created_by == user_id
        assert event.event_type == EventType.RIDE
        assert uow.committed

    async def test_end_before_start(self, service: EventService, uow: FakeUnitOfWork, club_id: str, user_id: str):
        with pytest.raises(FieldValidationError):
            await service.create_event(
                user_id=user_id,
                club_id=club_id,
                name="Backwards",
                description="d",
                start_time=START,
                end_time=START - timedelta(minutes=1),
            )
        uow.events.create.assert_not_called()

    async def test_outsider_cannot_create(
        self, service: EventService, uow: FakeUnitOfWork, public_club: Club, user_id: str
    ):
        uow.clubs.get.return_value = public_club
        uow.members.get_for_user.return_value = None

        with pytest.raises(NotAMemberError):
            await service.create_event(
                user_id=user_id, club_id=public_club.id, name="x", description="d", start_time=START
            )

    async def test_missing_club(self, service: EventService, uow: FakeUnitOfWork, club_id: str, user_id: str):
        uow.clubs.get.return_value = None

        with pytest.raises(ClubNotFoundError):
            await service.create_event(
                user_id=user_id, club_id=club_id, name="x", description="d", start_time=START
            )


class TestListEvents:
    async def test_my_club_events_without_memberships(
        self, service: EventService, uow: FakeUnitOfWork, user_id: str
    ):
        uow.members.list_club_ids_for_user.return_value = []

        assert await service.list_my_club_events(user_id) == []
        uow.events.list_public_for_clubs.assert_not_called()

    async def test_my_club_events(self, service: EventService, uow: FakeUnitOfWork, club_id: str, user_id: str):
        event = Event(
            name="Meetup", description="d", start_time=START, club_id=club_id, created_by="x", is_private=False
        )
        uow.members.list_club_ids_for_user.return_value = [club_id]
        uow.events.list_public_for_clubs.return_value = [event]

        assert await service.list_my_club_events(user_id) == [event]
        uow.events.list_public_for_clubs.assert_called_once_with([club_id])

    async def test_club_events_for_missing_club(self, service: EventService, uow: FakeUnitOfWork, club_id: str):
        uow.clubs.get.return_value = None

        with pytest.raises(ClubNotFoundError):
            await service.list_club_events(club_id)
