from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from baraza.application.interfaces import SubscriberRepository
from baraza.domain.entities import Subscriber
from baraza.infrastructure.database.models import SubscriberModel


class SQLAlchemySubscriberRepository(SubscriberRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    @staticmethod
    def _to_entity(model: SubscriberModel) -> Subscriber:
        return Subscriber(id=model.id, email=model.email, created_at=model.created_at)

    async def get_by_email(self, email: str) -> Subscriber | None:
        result = await self._session.execute(
            select(SubscriberModel).where(SubscriberModel.email == email)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Subscriber]:
        result = await self._session.execute(select(SubscriberModel).order_by(SubscriberModel.id))
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, subscriber: Subscriber) -> Subscriber:
        model = SubscriberModel(email=subscriber.email)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def delete_by_email(self, email: str) -> bool:
        result = await self._session.execute(
            delete(SubscriberModel).where(SubscriberModel.email == email)
        )
        await self._session.flush()
        return result.rowcount > 0
