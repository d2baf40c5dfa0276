"""Membership and join request API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import InitializedUser
from api.dependencies.ids import ClubId, MemberId, RequestId
from api.v1.dependencies import get_join_service, get_membership_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.membership import (
    JoinRequestListResponse,
    JoinRequestResponse,
    JoinResponse,
    MemberActionResponse,
    MemberListResponse,
    MemberResponse,
    MembershipStatusResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.join_service import JoinService
from domain.services.membership_service import MembershipService

router = APIRouter(prefix="/club/{club_id}", tags=["membership"])


# --- Join workflow ---


@router.post(
    "/join",
    response_model=JoinResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Join a club",
    responses={
        201: {"description": "Joined (public club) or request filed (private club)"},
        400: {"description": "Already a member or already requested"},
        404: {"description": "Club not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def join_club(
    request: Request,
    club_id: ClubId,
    user: InitializedUser,
    service: JoinService = Depends(get_join_service),
) -> JoinResponse:
    """Instant join for public clubs, pending join request for private clubs."""
    outcome = await service.join(club_id, user.id)
    if outcome.instant:
        return JoinResponse(
            message="Successfully joined the club",
            instant=True,
            membership=MemberResponse.from_entity(outcome.member),  # type: ignore[arg-type]
        )
    return JoinResponse(
        message="Join request sent successfully",
        instant=False,
        join_request=JoinRequestResponse.from_entity(outcome.join_request),  # type: ignore[arg-type]
    )


@router.get(
    "/join-requests",
    response_model=JoinRequestListResponse,
    summary="List pending join requests",
    responses={403: {"description": "Caller is not a club admin"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_join_requests(
    request: Request,
    club_id: ClubId,
    user: InitializedUser,
    service: JoinService = Depends(get_join_service),
) -> JoinRequestListResponse:
    requests = await service.list_join_requests(club_id, user.id)
    return JoinRequestListResponse(
        join_requests=[JoinRequestResponse.from_entity(r) for r in requests]
    )


@router.post(
    "/join-requests/{request_id}/approve",
    response_model=MemberActionResponse,
    summary="Approve a join request",
    responses={
        403: {"description": "Caller is not a club admin"},
        404: {"description": "Request not found or already processed"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def approve_join_request(
    request: Request,
    club_id: ClubId,
    request_id: RequestId,
    user: InitializedUser,
    service: JoinService = Depends(get_join_service),
) -> MemberActionResponse:
    member = await service.approve(club_id, request_id, user.id)
    return MemberActionResponse(
        message="Join request approved successfully",
        member=MemberResponse.from_entity(member),
    )


@router.post(
    "/join-requests/{request_id}/reject",
    response_model=MessageResponse,
    summary="Reject a join request",
    responses={
        403: {"description": "Caller is not a club admin"},
        404: {"description": "Request not found or already processed"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def reject_join_request(
    request: Request,
    club_id: ClubId,
    request_id: RequestId,
    user: InitializedUser,
    service: JoinService = Depends(get_join_service),
) -> MessageResponse:
    await service.reject(club_id, request_id, user.id)
    return MessageResponse(message="Join request rejected successfully")


# --- Ledger ---


@router.get(
    "/membership-status",
    response_model=MembershipStatusResponse,
    response_model_exclude_none=True,
    summary="Caller's membership status",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_membership_status(
    request: Request,
    club_id: ClubId,
    user: InitializedUser,
    service: MembershipService = Depends(get_membership_service),
) -> MembershipStatusResponse:
    state = await service.membership_status(club_id, user.id)
    return MembershipStatusResponse(
        status=state.status,
        role=state.role,
        permissions=list(state.permissions) if state.permissions else None,
        member_since=state.member_since,
        member_id=state.member_id,
        join_request_id=state.join_request_id,
        requested_at=state.requested_at,
    )


@router.get(
    "/members",
    response_model=MemberListResponse,
    summary="List club members",
    responses={403: {"description": "Caller is not a member"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_members(
    request: Request,
    club_id: ClubId,
    user: InitializedUser,
    service: MembershipService = Depends(get_membership_service),
) -> MemberListResponse:
    members = await service.list_members(club_id, user.id)
    return MemberListResponse(members=[MemberResponse.from_entity(m) for m in members])


@router.delete(
    "/members/{member_id}",
    response_model=MessageResponse,
    summary="Remove a member",
    responses={
        400: {"description": "Target is the club's last admin"},
        403: {"description": "Caller is not a club admin"},
        404: {"description": "Member not found in this club"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_member(
    request: Request,
    club_id: ClubId,
    member_id: MemberId,
    user: InitializedUser,
    service: MembershipService = Depends(get_membership_service),
) -> MessageResponse:
    await service.remove_member(club_id, member_id, user.id)
    return MessageResponse(message="Member removed successfully")


@router.post(
    "/members/{member_id}/promote",
    response_model=MemberActionResponse,
    summary="Promote a member to admin",
    responses={
        400: {"description": "Member is already an admin"},
        403: {"description": "Caller is not a club admin"},
        404: {"description": "Member not found in this club"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def promote_member(
    request: Request,
    club_id: ClubId,
    member_id: MemberId,
    user: InitializedUser,
    service: MembershipService = Depends(get_membership_service),
) -> MemberActionResponse:
    member = await service.promote_member(club_id, member_id, user.id)
    return MemberActionResponse(
        message="Member promoted to admin successfully",
        member=MemberResponse.from_entity(member),
    )


@router.post(
    "/members/{member_id}/demote",
    response_model=MemberActionResponse,
    summary="Demote an admin to member",
    responses={
        400: {"description": "Not an admin, self-demotion, or last admin"},
        403: {"description": "Caller is not a club admin"},
        404: {"description": "Member not found in this club"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def demote_member(
    request: Request,
    club_id: ClubId,
    member_id: MemberId,
    user: InitializedUser,
    service: MembershipService = Depends(get_membership_service),
) -> MemberActionResponse:
    member = await service.demote_member(club_id, member_id, user.id)
    return MemberActionResponse(
        message="Admin demoted to member successfully",
        member=MemberResponse.from_entity(member),
    )
