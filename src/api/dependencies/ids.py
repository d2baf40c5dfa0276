"""Path parameter validation for 24-hex object identifiers."""

from typing import Annotated

from fastapi import Depends, Path

from core.exceptions import InvalidIdError
from domain.entities.identifiers import is_object_id


def _object_id(param: str, entity: str):  # type: ignore[no-untyped-def]
    """Build a dependency that validates ``param`` before any query runs."""

    def validate(value: Annotated[str, Path(alias=param)]) -> str:
        if not is_object_id(value):
            raise InvalidIdError(entity)
        return value.lower()

    return validate


ClubId = Annotated[str, Depends(_object_id("club_id", "club"))]
MemberId = Annotated[str, Depends(_object_id("member_id", "member"))]
RequestId = Annotated[str, Depends(_object_id("request_id", "request"))]
NotificationId = Annotated[str, Depends(_object_id("notification_id", "notification"))]
