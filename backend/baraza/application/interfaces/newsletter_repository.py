from abc import ABC, abstractmethod

from baraza.domain.entities import Newsletter


class NewsletterRepository(ABC):
    """Port for newsletter persistence, including category entries and the article pool."""

    @abstractmethod
    async def get_by_id(self, newsletter_id: int) -> Newsletter | None:
        ...

    @abstractmethod
    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Newsletter]:
        ...

    @abstractmethod
    async def create(self, newsletter: Newsletter) -> Newsletter:
        ...

    @abstractmethod
    async def update(self, newsletter: Newsletter) -> Newsletter:
        """Persist status and replace category entries and pool rows to match the entity."""
        ...
