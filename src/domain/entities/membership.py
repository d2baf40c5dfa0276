"""Membership state machine for a (user, club) pair.

The state is a closed union of immutable variants. Transition functions are
pure: they take the current state and return the next one, or raise the
domain error that forbids the move. Persisting the produced state is the
caller's job.

    Stranger --join(public)--> ActiveMember
    Stranger --join(private)--> PendingRequest
    PendingRequest --approve--> ActiveMember
    PendingRequest --reject--> Stranger
    ActiveMember --promote--> ClubAdmin
    ClubAdmin --demote--> ActiveMember
    ActiveMember | ClubAdmin --remove--> Stranger
"""

from dataclasses import dataclass
from typing import TypeAlias

from core.exceptions import (
    AlreadyAMemberError,
    AlreadyAdminError,
    DuplicateJoinRequestError,
    JoinRequestNotFoundError,
    LastAdminError,
    MemberNotAdminError,
    SelfDemotionError,
)
from domain.entities.club import Club, ClubMember, ClubRole, JoinRequest


@dataclass(frozen=True, slots=True)
class Stranger:
    """No membership and no pending request."""

    user_id: str


@dataclass(frozen=True, slots=True)
class PendingRequest:
    """Awaiting an admin decision on a join request."""

    request: JoinRequest


@dataclass(frozen=True, slots=True)
class ActiveMember:
    """Member without the admin role."""

    member: ClubMember


@dataclass(frozen=True, slots=True)
class ClubAdmin:
    """Member holding the admin role."""

    member: ClubMember


MembershipState: TypeAlias = Stranger | PendingRequest | ActiveMember | ClubAdmin


def resolve_state(
    user_id: str,
    member: ClubMember | None,
    pending_request: JoinRequest | None,
) -> MembershipState:
    """Derive the current state from the stored member row and pending request."""
    if member is not None:
        return ClubAdmin(member) if member.is_admin else ActiveMember(member)
    if pending_request is not None and pending_request.is_pending:
        return PendingRequest(pending_request)
    return Stranger(user_id)


def found_club(club: Club) -> ClubAdmin:
    """Creator enrolment: bypasses the join path and starts as admin."""
    return ClubAdmin(
        ClubMember(
            club_id=club.id,
            user_id=club.created_by,
            roles=frozenset({ClubRole.MEMBER, ClubRole.ADMIN}),
        )
    )


def request_join(state: MembershipState, club: Club) -> ActiveMember | PendingRequest:
    """Instant join for public clubs, pending request for private clubs."""
    if isinstance(state, (ActiveMember, ClubAdmin)):
        raise AlreadyAMemberError(state.member.user_id)
    if isinstance(state, PendingRequest):
        raise DuplicateJoinRequestError(state.request.user_id)

    if club.is_private:
        return PendingRequest(JoinRequest(club_id=club.id, user_id=state.user_id))
    return ActiveMember(ClubMember(club_id=club.id, user_id=state.user_id))


def approve_request(
    state: MembershipState, request: JoinRequest
) -> ActiveMember | ClubAdmin:
    """Admin approval of a pending request.

    A requester who is already enrolled keeps their existing member row; the
    request is only closed.
    """
    if not request.is_pending:
        raise JoinRequestNotFoundError(request.id)
    if isinstance(state, (ActiveMember, ClubAdmin)):
        return state
    return ActiveMember(ClubMember(club_id=request.club_id, user_id=request.user_id))


def reject_request(state: MembershipState, request: JoinRequest) -> Stranger:
    """Admin rejection of a pending request."""
    if not request.is_pending:
        raise JoinRequestNotFoundError(request.id)
    return Stranger(request.user_id)


def promote(state: ActiveMember | ClubAdmin) -> ClubAdmin:
    """Grant the admin role."""
    if isinstance(state, ClubAdmin):
        raise AlreadyAdminError()
    return ClubAdmin(state.member.with_admin(True))


def demote(
    state: ActiveMember | ClubAdmin, acting_user_id: str, admin_count: int
) -> ActiveMember:
    """Revoke the admin role; the club must keep at least one admin."""
    if not isinstance(state, ClubAdmin):
        raise MemberNotAdminError()
    if state.member.user_id == acting_user_id:
        raise SelfDemotionError()
    if admin_count <= 1:
        raise LastAdminError()
    return ActiveMember(state.member.with_admin(False))


def remove(state: ActiveMember | ClubAdmin, admin_count: int) -> Stranger:
    """Drop a member; the sole admin cannot be removed."""
    if isinstance(state, ClubAdmin) and admin_count <= 1:
        raise LastAdminError()
    return Stranger(state.member.user_id)
