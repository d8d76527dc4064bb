from abc import ABC, abstractmethod

from baraza.domain.entities import Tag


class TagRepository(ABC):
    """Port for tag persistence. Tag names are globally unique."""

    @abstractmethod
    async def get_by_names(self, names: list[str]) -> list[Tag]:
        """Return the existing tags whose name exactly matches one of ``names``."""
        ...

    @abstractmethod
    async def create(self, tag: Tag) -> Tag:
        ...

    @abstractmethod
    async def get_all(self) -> list[Tag]:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...
