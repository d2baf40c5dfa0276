"""Dependency injection factories for API v1."""

from functools import lru_cache

from api.dependencies.profile import get_uow_factory
from domain.services.club_service import ClubService
from domain.services.discovery_service import DiscoveryService
from domain.services.event_service import EventService
from domain.services.join_service import JoinService
from domain.services.membership_service import MembershipService
from domain.services.notification_service import NotificationService
from infrastructure.notifications.dispatcher import NotificationDispatcher


@lru_cache
def get_notification_service() -> NotificationService:
    """Get Notification service instance."""
    return NotificationService(get_uow_factory())


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    """Get the process-wide notification dispatcher."""
    return NotificationDispatcher(get_notification_service().deliver)


@lru_cache
def get_club_service() -> ClubService:
    """Get Club service instance."""
    return ClubService(get_uow_factory())


@lru_cache
def get_membership_service() -> MembershipService:
    """Get Membership service instance."""
    return MembershipService(get_uow_factory(), publisher=get_notification_dispatcher())


@lru_cache
def get_join_service() -> JoinService:
    """Get Join service instance."""
    return JoinService(get_uow_factory(), publisher=get_notification_dispatcher())


@lru_cache
def get_discovery_service() -> DiscoveryService:
    """Get Discovery service instance."""
    return DiscoveryService(get_uow_factory())


@lru_cache
def get_event_service() -> EventService:
    """Get Event service instance."""
    return EventService(get_uow_factory())
