from abc import ABC, abstractmethod

from baraza.domain.entities import Category


class CategoryRepository(ABC):
    """Port for category persistence."""

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Category | None:
        ...

    @abstractmethod
    async def get_many(self, category_ids: list[int]) -> list[Category]:
        """Return the categories that exist among ``category_ids``, in the given order."""
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Category | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Category]:
        ...

    @abstractmethod
    async def create(self, category: Category) -> Category:
        ...
