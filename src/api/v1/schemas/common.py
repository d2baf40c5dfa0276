"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exchanged as camelCase JSON, populated by field name too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class GeoLocationSchema(CamelModel):
    """Latitude/longitude pair with an optional place name."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    place_name: str | None = Field(None, max_length=255)


class AssetSchema(CamelModel):
    """Reference to an image held by the blob store."""

    url: str = Field(..., min_length=1, max_length=500)
    public_id: str | None = Field(None, max_length=255)
