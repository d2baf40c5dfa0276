"""SQLAlchemy implementation of JoinRequest repository."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.club import JoinRequest, JoinRequestStatus
from infrastructure.database.models import JoinRequestModel


class SQLAlchemyJoinRequestRepository:
    """SQLAlchemy implementation of IJoinRequestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: str) -> JoinRequest | None:
        stmt = select(JoinRequestModel).where(JoinRequestModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_pending(self, club_id: str, user_id: str) -> JoinRequest | None:
        stmt = select(JoinRequestModel).where(
            JoinRequestModel.club_id == club_id,
            JoinRequestModel.user_id == user_id,
            JoinRequestModel.status == JoinRequestStatus.PENDING.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_pending(self, club_id: str) -> list[JoinRequest]:
        stmt = (
            select(JoinRequestModel)
            .where(
                JoinRequestModel.club_id == club_id,
                JoinRequestModel.status == JoinRequestStatus.PENDING.value,
            )
            .order_by(JoinRequestModel.created_at, JoinRequestModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, request: JoinRequest) -> JoinRequest:
        model = JoinRequestModel(
            id=request.id,
            club_id=request.club_id,
            user_id=request.user_id,
            status=request.status.value,
            created_at=request.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: str) -> bool:
        stmt = delete(JoinRequestModel).where(JoinRequestModel.id == id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined,no-any-return]

    def _to_entity(self, model: JoinRequestModel) -> JoinRequest:
        return JoinRequest(
            id=model.id,
            club_id=model.club_id,
            user_id=model.user_id,
            status=JoinRequestStatus(model.status),
            created_at=model.created_at,
        )
