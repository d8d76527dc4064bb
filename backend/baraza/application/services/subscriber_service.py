"""Application service for newsletter subscriptions."""

from baraza.application.interfaces import SubscriberRepository, UnitOfWork
from baraza.application.schemas import SubscriberCreate
from baraza.domain.entities import Subscriber
from baraza.domain.exceptions import EntityNotFoundError


class SubscriberService:
    def __init__(self, repository: SubscriberRepository, unit_of_work: UnitOfWork):
        self._repository = repository
        self._uow = unit_of_work

    async def subscribe(self, data: SubscriberCreate) -> Subscriber:
        """Add an address; subscribing twice returns the existing record."""
        email = data.email.strip().lower()
        existing = await self._repository.get_by_email(email)
        if existing is not None:
            return existing
        subscriber = await self._repository.create(Subscriber(email=email))
        await self._uow.commit()
        return subscriber

    async def unsubscribe(self, email: str) -> None:
        email = email.strip().lower()
        if not await self._repository.delete_by_email(email):
            raise EntityNotFoundError("Subscriber", email)
        await self._uow.commit()

    async def list_subscribers(self) -> list[Subscriber]:
        return await self._repository.get_all()

    async def recipient_addresses(self) -> list[str]:
        return [subscriber.email for subscriber in await self._repository.get_all()]
