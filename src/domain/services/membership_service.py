"""Membership ledger: authorization checks, member listing and role changes."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog

from core.exceptions import (
    ClubNotFoundError,
    MemberNotFoundError,
    NotAMemberError,
    NotAdminError,
)
from domain.entities.club import Club, ClubMember, ClubRole
from domain.entities.membership import (
    ActiveMember,
    ClubAdmin,
    demote,
    promote,
    remove,
    resolve_state,
)
from domain.entities.notification import NotificationEvent, NotificationType
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.notification_service import INotificationPublisher

logger = structlog.get_logger()

MEMBER_PERMISSIONS = ("view", "post")
ADMIN_PERMISSIONS = ("view", "post", "manage", "admin")


@dataclass(frozen=True, slots=True)
class AdminCheck:
    """Outcome of an admin verification. ``reason`` is set when not an admin."""

    is_admin: bool
    member: ClubMember | None = None
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class MembershipStatus:
    """Caller's relation to a club as shown to clients."""

    status: str
    role: str | None = None
    permissions: tuple[str, ...] | None = None
    member_since: datetime | None = None
    member_id: str | None = None
    join_request_id: str | None = None
    requested_at: datetime | None = None


async def get_club_or_raise(uow: IUnitOfWork, club_id: str, for_update: bool = False) -> Club:
    club = await uow.clubs.get(club_id, for_update=for_update)
    if not club:
        raise ClubNotFoundError(club_id)
    return club


async def check_admin(uow: IUnitOfWork, club_id: str, user_id: str) -> AdminCheck:
    """Pure read: is ``user_id`` an admin of ``club_id``."""
    member = await uow.members.get_for_user(club_id, user_id)
    if member is None:
        return AdminCheck(is_admin=False, reason="not_a_member")
    if not member.is_admin:
        return AdminCheck(is_admin=False, member=member, reason="not_admin")
    return AdminCheck(is_admin=True, member=member)


async def require_admin(uow: IUnitOfWork, club_id: str, user_id: str) -> ClubMember:
    """Return the caller's member row or raise NotAMember / NotAdmin."""
    check = await check_admin(uow, club_id, user_id)
    if check.reason == "not_a_member":
        raise NotAMemberError(club_id)
    if not check.is_admin:
        raise NotAdminError(club_id)
    return check.member  # type: ignore[return-value]


async def require_member(uow: IUnitOfWork, club_id: str, user_id: str) -> ClubMember:
    """Return the caller's member row or raise NotAMember."""
    member = await uow.members.get_for_user(club_id, user_id)
    if member is None:
        raise NotAMemberError(club_id)
    return member


class MembershipService:
    """Service layer for the membership ledger."""

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

    async def verify_admin(self, user_id: str, club_id: str) -> AdminCheck:
        """Report whether the user is an admin of the club."""
        async with self._uow_factory() as uow:
            return await check_admin(uow, club_id, user_id)

    async def list_members(self, club_id: str, user_id: str) -> list[ClubMember]:
        """Members of a club. The caller must belong to it."""
        async with self._uow_factory() as uow:
            await get_club_or_raise(uow, club_id)
            await require_member(uow, club_id, user_id)
            return await uow.members.list_for_club(club_id)

    async def membership_status(self, club_id: str, user_id: str) -> MembershipStatus:
        """Admin, member, pending or not-member for the caller."""
        async with self._uow_factory() as uow:
            await get_club_or_raise(uow, club_id)
            member = await uow.members.get_for_user(club_id, user_id)
            pending = None
            if member is None:
                pending = await uow.join_requests.get_pending(club_id, user_id)

        state = resolve_state(user_id, member, pending)
        if isinstance(state, (ActiveMember, ClubAdmin)):
            is_admin = isinstance(state, ClubAdmin)
            return MembershipStatus(
                status=ClubRole.ADMIN.value if is_admin else ClubRole.MEMBER.value,
                role=state.member.role.value,
                permissions=ADMIN_PERMISSIONS if is_admin else MEMBER_PERMISSIONS,
                member_since=state.member.joined_at,
                member_id=state.member.id,
            )
        if pending is not None:
            return MembershipStatus(
                status="pending",
                join_request_id=pending.id,
                requested_at=pending.created_at,
            )
        return MembershipStatus(status="not-member")

    async def _get_target(self, uow: IUnitOfWork, club_id: str, member_id: str) -> ClubMember:
        target = await uow.members.get(member_id)
        if target is None or target.club_id != club_id:
            raise MemberNotFoundError(member_id)
        return target

    async def remove_member(self, club_id: str, member_id: str, acting_user_id: str) -> None:
        """Remove a member. The club's sole admin cannot be removed."""
        async with self._uow_factory() as uow:
            # row lock serialises concurrent last-admin checks on this club
            await get_club_or_raise(uow, club_id, for_update=True)
            await require_admin(uow, club_id, acting_user_id)
            target = await self._get_target(uow, club_id, member_id)

            state = ClubAdmin(target) if target.is_admin else ActiveMember(target)
            admin_count = await uow.members.count_admins(club_id)
            remove(state, admin_count)

            await uow.members.remove(target.id)
            await uow.commit()

        logger.info(
            "club_member_removed",
            club_id=club_id,
            member_id=member_id,
            removed_by=acting_user_id,
        )

    async def promote_member(
        self, club_id: str, member_id: str, acting_user_id: str
    ) -> ClubMember:
        """Grant the admin role."""
        async with self._uow_factory() as uow:
            club = await get_club_or_raise(uow, club_id)
            await require_admin(uow, club_id, acting_user_id)
            target = await self._get_target(uow, club_id, member_id)

            state = ClubAdmin(target) if target.is_admin else ActiveMember(target)
            promoted = promote(state)
            updated = await uow.members.update_roles(promoted.member)
            await uow.commit()

        self._publish(
            NotificationEvent(
                type=NotificationType.ROLE_CHANGE,
                club_id=club.id,
                club_name=club.name,
                recipient_ids=(updated.user_id,),
                sender_id=acting_user_id,
                data={"newRole": ClubRole.ADMIN.value},
            )
        )
        logger.info("club_member_promoted", club_id=club_id, member_id=member_id)
        return updated

    async def demote_member(
        self, club_id: str, member_id: str, acting_user_id: str
    ) -> ClubMember:
        """Revoke the admin role. The club always keeps one admin."""
        async with self._uow_factory() as uow:
            club = await get_club_or_raise(uow, club_id, for_update=True)
            await require_admin(uow, club_id, acting_user_id)
            target = await self._get_target(uow, club_id, member_id)

            state = ClubAdmin(target) if target.is_admin else ActiveMember(target)
            admin_count = await uow.members.count_admins(club_id)
            demoted = demote(state, acting_user_id, admin_count)
            updated = await uow.members.update_roles(demoted.member)
            await uow.commit()

        self._publish(
            NotificationEvent(
                type=NotificationType.ROLE_CHANGE,
                club_id=club.id,
                club_name=club.name,
                recipient_ids=(updated.user_id,),
                sender_id=acting_user_id,
                data={"newRole": ClubRole.MEMBER.value},
            )
        )
        logger.info("club_member_demoted", club_id=club_id, member_id=member_id)
        return updated
