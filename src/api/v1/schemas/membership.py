"""Pydantic schemas for membership and join request API."""

from datetime import datetime

from api.v1.schemas.common import CamelModel
from domain.entities.club import ClubMember, JoinRequest


class MemberResponse(CamelModel):
    """A club member with its effective role."""

    id: str
    club_id: str
    user_id: str
    role: str
    roles: list[str]
    joined_at: datetime

    @classmethod
    def from_entity(cls, member: ClubMember) -> "MemberResponse":
        return cls(
            id=member.id,
            club_id=member.club_id,
            user_id=member.user_id,
            role=member.role.value,
            roles=sorted(r.value for r in member.roles),
            joined_at=member.joined_at,
        )


class MemberListResponse(CamelModel):
    members: list[MemberResponse]


class JoinRequestResponse(CamelModel):
    """A request to join a private club."""

    id: str
    club_id: str
    user_id: str
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, request: JoinRequest) -> "JoinRequestResponse":
        return cls(
            id=request.id,
            club_id=request.club_id,
            user_id=request.user_id,
            status=request.status.value,
            created_at=request.created_at,
        )


class JoinRequestListResponse(CamelModel):
    join_requests: list[JoinRequestResponse]


class JoinResponse(CamelModel):
    """Outcome of a join: instant membership or a pending request."""

    message: str
    instant: bool
    membership: MemberResponse | None = None
    join_request: JoinRequestResponse | None = None


class MemberActionResponse(CamelModel):
    """Result of approve, promote or demote."""

    message: str
    member: MemberResponse


class MembershipStatusResponse(CamelModel):
    """Caller's relation to a club."""

    status: str
    role: str | None = None
    permissions: list[str] | None = None
    member_since: datetime | None = None
    member_id: str | None = None
    join_request_id: str | None = None
    requested_at: datetime | None = None
