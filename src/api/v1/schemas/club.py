"""Pydantic schemas for Club API."""

from datetime import datetime

from pydantic import Field

from api.v1.schemas.common import AssetSchema, CamelModel, GeoLocationSchema
from domain.entities.club import Club


class ClubCreate(CamelModel):
    """Schema for creating a Club."""

    club_name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=2000)
    location: str = Field("", max_length=255)
    is_private: bool = False
    geolocation: GeoLocationSchema | None = None


class ClubUpdate(CamelModel):
    """Schema for updating a Club. Omitted fields are left unchanged;
    an explicit ``geolocation: null`` clears the coordinates."""

    club_name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    location: str | None = Field(None, max_length=255)
    is_private: bool | None = None
    geolocation: GeoLocationSchema | None = None
    logo: AssetSchema | None = None


class ClubResponse(CamelModel):
    """Schema for Club response."""

    id: str
    club_name: str
    description: str
    location: str
    is_private: bool
    geolocation: GeoLocationSchema | None = None
    logo: AssetSchema | None = None
    created_by: str
    member_count: int | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, club: Club, member_count: int | None = None) -> "ClubResponse":
        return cls(
            id=club.id,
            club_name=club.name,
            description=club.description,
            location=club.location,
            is_private=club.is_private,
            geolocation=(
                GeoLocationSchema(
                    latitude=club.geolocation.latitude,
                    longitude=club.geolocation.longitude,
                    place_name=club.geolocation.place_name,
                )
                if club.geolocation
                else None
            ),
            logo=AssetSchema(url=club.logo.url, public_id=club.logo.public_id) if club.logo else None,
            created_by=club.created_by,
            member_count=member_count,
            created_at=club.created_at,
            updated_at=club.updated_at,
        )


class ClubListResponse(CamelModel):
    """List of clubs."""

    clubs: list[ClubResponse]


class NearbyClubResponse(ClubResponse):
    """Club with its distance from the search point, in kilometers."""

    distance: float


class NearbyClubListResponse(CamelModel):
    """Nearby search results and the query path that produced them."""

    clubs: list[NearbyClubResponse]
    query_method: str
    total: int
