"""Club, membership and join request domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from domain.entities.identifiers import new_object_id


class ClubRole(str, Enum):
    """Role tag held by a club member. MEMBER is the implicit baseline."""

    MEMBER = "member"
    ADMIN = "admin"


class JoinRequestStatus(str, Enum):
    """Lifecycle status of a join request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass
class GeoLocation:
    """Structured coordinate attached to a club or event."""

    latitude: float
    longitude: float
    place_name: str | None = None


@dataclass
class LogoAsset:
    """Reference to an image held by the blob storage provider."""

    url: str
    public_id: str | None = None


@dataclass
class Club:
    """Domain entity for a club."""

    name: str
    created_by: str
    id: str = field(default_factory=new_object_id)
    description: str = ""
    location: str = ""
    is_private: bool = False
    geolocation: GeoLocation | None = None
    logo: LogoAsset | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.name = self.name.strip()
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass
class ClubMember:
    """Domain entity linking a user to a club with a role set."""

    club_id: str
    user_id: str
    id: str = field(default_factory=new_object_id)
    roles: frozenset[ClubRole] = frozenset({ClubRole.MEMBER})
    joined_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        # member is always present; admin is additive
        self.roles = frozenset(self.roles) | {ClubRole.MEMBER}

    @property
    def is_admin(self) -> bool:
        return ClubRole.ADMIN in self.roles

    @property
    def role(self) -> ClubRole:
        """Effective (highest) role."""
        return ClubRole.ADMIN if self.is_admin else ClubRole.MEMBER

    def with_admin(self, admin: bool) -> "ClubMember":
        """Return a copy with the admin role added or removed."""
        roles = self.roles | {ClubRole.ADMIN} if admin else self.roles - {ClubRole.ADMIN}
        return ClubMember(
            club_id=self.club_id,
            user_id=self.user_id,
            id=self.id,
            roles=roles,
            joined_at=self.joined_at,
        )


@dataclass
class JoinRequest:
    """Domain entity for a request to join a private club."""

    club_id: str
    user_id: str
    id: str = field(default_factory=new_object_id)
    status: JoinRequestStatus = JoinRequestStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_pending(self) -> bool:
        return self.status == JoinRequestStatus.PENDING


@dataclass(frozen=True, slots=True)
class ClubSummary:
    """Read-only value object: club plus its member count."""

    club: Club
    member_count: int
