"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    NOT_A_MEMBER = "NOT_A_MEMBER"
    NOT_ADMIN = "NOT_ADMIN"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"

    # Not found errors (404)
    CLUB_NOT_FOUND = "CLUB_NOT_FOUND"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
    JOIN_REQUEST_NOT_FOUND = "JOIN_REQUEST_NOT_FOUND"
    NOTIFICATION_NOT_FOUND = "NOTIFICATION_NOT_FOUND"

    # Conflict errors (400/409)
    CLUB_NAME_TAKEN = "CLUB_NAME_TAKEN"
    ALREADY_A_MEMBER = "ALREADY_A_MEMBER"
    DUPLICATE_JOIN_REQUEST = "DUPLICATE_JOIN_REQUEST"
    ALREADY_ADMIN = "ALREADY_ADMIN"
    MEMBER_NOT_ADMIN = "MEMBER_NOT_ADMIN"
    SELF_DEMOTION = "SELF_DEMOTION"
    LAST_ADMIN = "LAST_ADMIN"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    QUERY_TIMEOUT = "QUERY_TIMEOUT"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


# --- Error families ---


class ValidationError(AppException):
    """Malformed input: bad id format, out-of-range values."""

    def __init__(
        self,
        message: str = "Validation failed",
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=403,
            details=details,
        )


class NotFoundError(AppException):
    """A referenced entity does not exist."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class ConflictError(AppException):
    """The operation would violate a uniqueness or role invariant."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status_code,
            details=details,
        )


class TransientInfrastructureError(AppException):
    """Storage or query infrastructure failed; safe to retry later."""

    def __init__(self, error_code: ErrorCode, message: str, status_code: int = 500) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status_code,
        )


# --- Validation ---


class InvalidIdError(ValidationError):
    """An identifier is not a 24-character hex string."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            message=f"Invalid {entity} ID format",
            error_code=ErrorCode.INVALID_ID,
            details={"entity": entity},
        )


class FieldValidationError(ValidationError):
    """One or more fields are out of range."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(
            message="Validation failed",
            error_code=ErrorCode.VALIDATION_ERROR,
            details=errors,
        )


# --- Authorization ---


class NotAMemberError(AuthorizationError):
    """User is not a member of the club."""

    def __init__(self, club_id: str) -> None:
        super().__init__(
            message="You are not a member of this club",
            error_code=ErrorCode.NOT_A_MEMBER,
            details={"club_id": club_id},
        )


class NotAdminError(AuthorizationError):
    """User is a member of the club but lacks the admin role."""

    def __init__(self, club_id: str) -> None:
        super().__init__(
            message="Only club admins can perform this action",
            error_code=ErrorCode.NOT_ADMIN,
            details={"club_id": club_id},
        )


# --- Not found ---


class ClubNotFoundError(NotFoundError):
    """Club not found."""

    def __init__(self, club_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CLUB_NOT_FOUND,
            message="Club not found",
            details={"club_id": club_id},
        )


class MemberNotFoundError(NotFoundError):
    """Member not found in the club."""

    def __init__(self, member_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.MEMBER_NOT_FOUND,
            message="Member not found",
            details={"member_id": member_id},
        )


class JoinRequestNotFoundError(NotFoundError):
    """Join request missing or already processed."""

    def __init__(self, request_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.JOIN_REQUEST_NOT_FOUND,
            message="Join request not found or already processed",
            details={"request_id": request_id},
        )


class NotificationNotFoundError(NotFoundError):
    """Notification not found for this recipient."""

    def __init__(self, notification_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOTIFICATION_NOT_FOUND,
            message="Notification not found or does not belong to you",
            details={"notification_id": notification_id},
        )


# --- Conflicts ---


class ClubNameTakenError(ConflictError):
    """Club name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(
            error_code=ErrorCode.CLUB_NAME_TAKEN,
            message="A club with this name already exists",
            status_code=409,
            details={"name": name},
        )


class AlreadyAMemberError(ConflictError):
    """User is already a member of the club."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_A_MEMBER,
            message="You are already a member of this club",
            details={"user_id": user_id},
        )


class DuplicateJoinRequestError(ConflictError):
    """A pending join request already exists for this user and club."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_JOIN_REQUEST,
            message="You have already requested to join this club",
            details={"user_id": user_id},
        )


class AlreadyAdminError(ConflictError):
    """Member already holds the admin role."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_ADMIN,
            message="Member is already an admin",
        )


class MemberNotAdminError(ConflictError):
    """Demotion target does not hold the admin role."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.MEMBER_NOT_ADMIN,
            message="Member is not an admin",
        )


class SelfDemotionError(ConflictError):
    """Admins cannot demote themselves."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.SELF_DEMOTION,
            message="You cannot demote yourself",
        )


class LastAdminError(ConflictError):
    """Cannot remove or demote the last admin of a club."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.LAST_ADMIN,
            message="Cannot remove or demote the last admin of a club",
        )


# --- Infrastructure ---


class QueryTimeoutError(TransientInfrastructureError):
    """A query exceeded its time budget."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            error_code=ErrorCode.QUERY_TIMEOUT,
            message=f"Query timed out: {operation}",
            status_code=504,
        )


class StorageUnavailableError(TransientInfrastructureError):
    """The database could not be reached."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message="Storage is temporarily unavailable",
            status_code=500,
        )
