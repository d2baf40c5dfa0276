"""SQLAlchemy implementation of ClubMember repository."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.club import ClubMember, ClubRole
from infrastructure.database.models import ClubMemberModel


class SQLAlchemyMemberRepository:
    """SQLAlchemy implementation of IMemberRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: str) -> ClubMember | None:
        stmt = select(ClubMemberModel).where(ClubMemberModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_user(self, club_id: str, user_id: str) -> ClubMember | None:
        stmt = select(ClubMemberModel).where(
            ClubMemberModel.club_id == club_id,
            ClubMemberModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_club(self, club_id: str) -> list[ClubMember]:
        stmt = (
            select(ClubMemberModel)
            .where(ClubMemberModel.club_id == club_id)
            .order_by(ClubMemberModel.joined_at, ClubMemberModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_club_ids_for_user(self, user_id: str) -> list[str]:
        stmt = select(ClubMemberModel.club_id).where(ClubMemberModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def list_admin_user_ids(self, club_id: str) -> list[str]:
        stmt = select(ClubMemberModel.user_id).where(
            ClubMemberModel.club_id == club_id,
            ClubMemberModel.is_admin.is_(True),
        )
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def count_admins(self, club_id: str) -> int:
        stmt = select(func.count(ClubMemberModel.id)).where(
            ClubMemberModel.club_id == club_id,
            ClubMemberModel.is_admin.is_(True),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def add(self, member: ClubMember) -> ClubMember:
        model = self._to_model(member)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update_roles(self, member: ClubMember) -> ClubMember:
        stmt = select(ClubMemberModel).where(ClubMemberModel.id == member.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Member {member.id} not found")

        model.is_admin = member.is_admin
        await self._session.flush()
        return self._to_entity(model)

    async def remove(self, id: str) -> bool:
        stmt = delete(ClubMemberModel).where(ClubMemberModel.id == id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined,no-any-return]

    def _to_entity(self, model: ClubMemberModel) -> ClubMember:
        roles = {ClubRole.MEMBER, ClubRole.ADMIN} if model.is_admin else {ClubRole.MEMBER}
        return ClubMember(
            id=model.id,
            club_id=model.club_id,
            user_id=model.user_id,
            roles=frozenset(roles),
            joined_at=model.joined_at,
        )

    def _to_model(self, entity: ClubMember) -> ClubMemberModel:
        return ClubMemberModel(
            id=entity.id,
            club_id=entity.club_id,
            user_id=entity.user_id,
            is_admin=entity.is_admin,
            joined_at=entity.joined_at,
        )
