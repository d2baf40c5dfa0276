"""SQLAlchemy implementation of Notification repository."""

from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.notification import Notification, NotificationType
from infrastructure.database.models import NotificationModel


class SQLAlchemyNotificationRepository:
    """SQLAlchemy implementation of INotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_many(self, notifications: list[Notification]) -> list[Notification]:
        """Batch-create notifications."""
        models = [self._to_model(n) for n in notifications]
        self._session.add_all(models)
        await self._session.flush()
        return [self._to_entity(m) for m in models]

    async def list_for_recipient(
        self, recipient_id: str, offset: int = 0, limit: int = 20
    ) -> list[Notification]:
        """Recipient's notifications, newest first."""
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.recipient_id == recipient_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(m) for m in result.scalars()]

    async def count_for_recipient(self, recipient_id: str) -> int:
        stmt = select(func.count(NotificationModel.id)).where(
            NotificationModel.recipient_id == recipient_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_unread(self, recipient_id: str) -> int:
        stmt = select(func.count(NotificationModel.id)).where(
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.is_read.is_(False),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def mark_read(self, id: str, recipient_id: str) -> Notification | None:
        """Mark one notification read, scoped to its recipient."""
        stmt = select(NotificationModel).where(
            NotificationModel.id == id,
            NotificationModel.recipient_id == recipient_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None
        model.is_read = True
        await self._session.flush()
        return self._to_entity(model)

    async def mark_all_read(self, recipient_id: str) -> int:
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined,no-any-return]

    async def delete(self, id: str, recipient_id: str) -> bool:
        stmt = delete(NotificationModel).where(
            NotificationModel.id == id,
            NotificationModel.recipient_id == recipient_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined,no-any-return]

    async def delete_expired(self, now: datetime) -> int:
        """Delete notifications past their expiry."""
        stmt = delete(NotificationModel).where(
            NotificationModel.expires_at.is_not(None),
            NotificationModel.expires_at < now,
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined,no-any-return]

    def _to_entity(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            type=NotificationType(model.type),
            recipient_id=model.recipient_id,
            sender_id=model.sender_id,
            club_id=model.club_id,
            message=model.message,
            data=model.data or {},
            is_read=model.is_read,
            created_at=model.created_at,
            expires_at=model.expires_at,
        )

    def _to_model(self, entity: Notification) -> NotificationModel:
        return NotificationModel(
            id=entity.id,
            type=entity.type.value,
            recipient_id=entity.recipient_id,
            sender_id=entity.sender_id,
            club_id=entity.club_id,
            message=entity.message,
            data=entity.data,
            is_read=entity.is_read,
            created_at=entity.created_at,
            expires_at=entity.expires_at,
        )
