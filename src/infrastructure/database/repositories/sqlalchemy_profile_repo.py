"""SQLAlchemy implementation of Profile repository."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: str) -> Profile | None:
        model = await self._session.get(ProfileModel, id)
        return self._to_entity(model) if model else None

    async def get_many(self, ids: list[str]) -> dict[str, Profile]:
        if not ids:
            return {}
        stmt = select(ProfileModel).where(ProfileModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def upsert(self, profile: Profile) -> Profile:
        """Insert the profile, or refresh claims that are present."""
        model = await self._session.get(ProfileModel, profile.id)
        if model is None:
            model = ProfileModel(
                id=profile.id,
                email=profile.email,
                display_name=profile.display_name,
                created_at=profile.created_at,
            )
            self._session.add(model)
        else:
            if profile.email:
                model.email = profile.email
            if profile.display_name:
                model.display_name = profile.display_name
            model.updated_at = datetime.utcnow()
        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            email=model.email,
            display_name=model.display_name,
            created_at=model.created_at,
        )
