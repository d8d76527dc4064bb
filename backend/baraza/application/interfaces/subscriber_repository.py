from abc import ABC, abstractmethod

from baraza.domain.entities import Subscriber


class SubscriberRepository(ABC):
    """Port for newsletter subscriber persistence."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Subscriber | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Subscriber]:
        ...

    @abstractmethod
    async def create(self, subscriber: Subscriber) -> Subscriber:
        ...

    @abstractmethod
    async def delete_by_email(self, email: str) -> bool:
        ...
