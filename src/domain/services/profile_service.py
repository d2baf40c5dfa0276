"""Profile mirror of identity provider users."""

import logging
from collections.abc import Callable
from typing import ClassVar

from sqlalchemy.exc import IntegrityError

from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork, is_unique_violation


class ProfileService:
    """Keeps a local profile row for every authenticated user."""

    # In-memory cache of user IDs known to have a profile row. Skips the DB
    # round-trip on every authenticated request after the first.
    _provisioned_users: ClassVar[set[str]] = set()

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    @classmethod
    def clear_provisioned_cache(cls) -> None:
        """Clear the provisioned-users cache. Intended for testing."""
        cls._provisioned_users.clear()

    async def ensure_profile(
        self,
        user_id: str,
        email: str | None = None,
        display_name: str | None = None,
    ) -> Profile | None:
        """Create the user's profile from identity claims on first sight.

        Users already seen by this process are skipped without touching the
        database, so later claim changes are not copied. Returns None when
        nothing was written.
        """
        logger = logging.getLogger(__name__)

        if user_id in self._provisioned_users:
            return None

        async with self._uow_factory() as uow:
            try:
                profile = await uow.profiles.upsert(
                    Profile(id=user_id, email=email, display_name=display_name)
                )
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                # concurrent first requests race on the insert
                if is_unique_violation(exc):
                    self._provisioned_users.add(user_id)
                    logger.debug("Profile already created (race condition) for user %s", user_id)
                    return None
                raise

        self._provisioned_users.add(user_id)
        logger.info("Provisioned profile for user %s", user_id)
        return profile
