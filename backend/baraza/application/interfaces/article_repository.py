"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from baraza.domain.entities import Article


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article | None:
        """Retrieve a single article, with its tags and categories, by its ID."""
        ...

    @abstractmethod
    async def get_many(self, article_ids: list[int]) -> list[Article]:
        """Retrieve the articles that exist among ``article_ids``, in the given order."""
        ...

    @abstractmethod
    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Article]:
        """Retrieve a paginated list of articles."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and its associations, returning it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Update an existing article and sync its tag/category associations."""
        ...

    @abstractmethod
    async def delete(self, article_id: int) -> bool:
        """Delete an article. Returns True if deleted, False if not found."""
        ...
