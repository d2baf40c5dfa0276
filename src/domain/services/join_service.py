"""Join workflow: instant joins, join requests and admin decisions."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AlreadyAMemberError,
    DuplicateJoinRequestError,
    JoinRequestNotFoundError,
)
from domain.entities.club import ClubMember, JoinRequest, JoinRequestStatus
from domain.entities.membership import (
    PendingRequest,
    Stranger,
    approve_request,
    reject_request,
    request_join,
    resolve_state,
)
from domain.entities.notification import NotificationEvent, NotificationType
from domain.repositories.unit_of_work import IUnitOfWork, is_unique_violation
from domain.services.membership_service import get_club_or_raise, require_admin
from domain.services.notification_service import INotificationPublisher

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class JoinOutcome:
    """Result of a join attempt: a member row or a pending request."""

    instant: bool
    member: ClubMember | None = None
    join_request: JoinRequest | None = None


class JoinService:
    """Service layer for the join request lifecycle."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        publisher: Optional[INotificationPublisher] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._publisher = publisher

    def _publish(self, event: NotificationEvent) -> None:
        if self._publisher:
            self._publisher.publish(event)

    async def join(self, club_id: str, user_id: str) -> JoinOutcome:
        """Join a public club instantly or file a request for a private one."""
        async with self._uow_factory() as uow:
            club = await get_club_or_raise(uow, club_id)
            member = await uow.members.get_for_user(club_id, user_id)
            pending = await uow.join_requests.get_pending(club_id, user_id)

            # privacy is read inside this transaction; later flips do not
            # reclassify the outcome
            next_state = request_join(resolve_state(user_id, member, pending), club)

            try:
                if isinstance(next_state, PendingRequest):
                    request = await uow.join_requests.create(next_state.request)
                    admin_ids = await uow.members.list_admin_user_ids(club_id)
                    await uow.commit()
                    event = NotificationEvent(
                        type=NotificationType.JOIN_REQUEST,
                        club_id=club.id,
                        club_name=club.name,
                        recipient_ids=tuple(admin_ids),
                        sender_id=user_id,
                        data={"joinRequestId": request.id, "requesterUserId": user_id},
                    )
                    outcome = JoinOutcome(instant=False, join_request=request)
                else:
                    existing = await uow.members.list_for_club(club_id)
                    created = await uow.members.add(next_state.member)
                    await uow.commit()
                    event = NotificationEvent(
                        type=NotificationType.NEW_MEMBER,
                        club_id=club.id,
                        club_name=club.name,
                        recipient_ids=tuple(m.user_id for m in existing),
                        sender_id=user_id,
                        data={"memberId": created.id},
                    )
                    outcome = JoinOutcome(instant=True, member=created)
            except IntegrityError as exc:
                await uow.rollback()
                if not is_unique_violation(exc):
                    raise
                if club.is_private:
                    raise DuplicateJoinRequestError(user_id) from exc
                raise AlreadyAMemberError(user_id) from exc

        self._publish(event)
        logger.info(
            "club_join",
            club_id=club_id,
            user_id=user_id,
            instant=outcome.instant,
        )
        return outcome

    async def list_join_requests(self, club_id: str, user_id: str) -> list[JoinRequest]:
        """Pending requests of a club, oldest first. Admin only."""
        async with self._uow_factory() as uow:
            await get_club_or_raise(uow, club_id)
            await require_admin(uow, club_id, user_id)
            return await uow.join_requests.list_pending(club_id)

    async def _load_pending(
        self, uow: IUnitOfWork, club_id: str, request_id: str
    ) -> JoinRequest:
        request = await uow.join_requests.get(request_id)
        if request is None or request.club_id != club_id or not request.is_pending:
            raise JoinRequestNotFoundError(request_id)
        return request

    async def approve(
        self, club_id: str, request_id: str, acting_user_id: str
    ) -> ClubMember:
        """Approve a pending request: create the member, delete the request."""
        async with self._uow_factory() as uow:
            club = await get_club_or_raise(uow, club_id)
            await require_admin(uow, club_id, acting_user_id)
            request = await self._load_pending(uow, club_id, request_id)

            existing = await uow.members.get_for_user(club_id, request.user_id)
            state = resolve_state(request.user_id, existing, request)
            next_state = approve_request(state, request)

            try:
                if isinstance(state, (Stranger, PendingRequest)):
                    member = await uow.members.add(next_state.member)
                else:
                    member = next_state.member
                await uow.join_requests.delete(request.id)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                if is_unique_violation(exc):
                    raise AlreadyAMemberError(request.user_id) from exc
                raise

        self._publish(
            NotificationEvent(
                type=NotificationType.REQUEST_APPROVED,
                club_id=club.id,
                club_name=club.name,
                recipient_ids=(request.user_id,),
                sender_id=acting_user_id,
                data={"status": JoinRequestStatus.ACCEPTED.value},
            )
        )
        logger.info(
            "join_request_approved",
            club_id=club_id,
            request_id=request_id,
            approved_by=acting_user_id,
        )
        return member

    async def reject(self, club_id: str, request_id: str, acting_user_id: str) -> None:
        """Reject a pending request and delete it."""
        async with self._uow_factory() as uow:
            club = await get_club_or_raise(uow, club_id)
            await require_admin(uow, club_id, acting_user_id)
            request = await self._load_pending(uow, club_id, request_id)

            existing = await uow.members.get_for_user(club_id, request.user_id)
            reject_request(resolve_state(request.user_id, existing, request), request)

            await uow.join_requests.delete(request.id)
            await uow.commit()

        self._publish(
            NotificationEvent(
                type=NotificationType.REQUEST_REJECTED,
                club_id=club.id,
                club_name=club.name,
                recipient_ids=(request.user_id,),
                sender_id=acting_user_id,
                data={"status": JoinRequestStatus.REJECTED.value},
            )
        )
        logger.info(
            "join_request_rejected",
            club_id=club_id,
            request_id=request_id,
            rejected_by=acting_user_id,
        )
