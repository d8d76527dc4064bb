"""Application service for the tag and category vocabularies."""

from baraza.application.interfaces import CategoryRepository, TagRepository, UnitOfWork
from baraza.application.schemas import CategoryCreate
from baraza.domain.entities import Category, Tag
from baraza.domain.exceptions import DuplicateEntityError


class TaxonomyService:
    def __init__(
        self,
        tag_repository: TagRepository,
        category_repository: CategoryRepository,
        unit_of_work: UnitOfWork,
    ):
        self._tags = tag_repository
        self._categories = category_repository
        self._uow = unit_of_work

    async def list_tags(self) -> list[Tag]:
        return await self._tags.get_all()

    async def list_categories(self) -> list[Category]:
        return await self._categories.get_all()

    async def create_category(self, data: CategoryCreate) -> Category:
        name = data.name.strip()
        if await self._categories.get_by_name(name) is not None:
            raise DuplicateEntityError("Category", "name", name)
        category = await self._categories.create(Category(name=name))
        await self._uow.commit()
        return category
