"""Concrete tag and category repositories backed by SQLAlchemy."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from baraza.application.interfaces import CategoryRepository, TagRepository
from baraza.domain.entities import Category, Tag
from baraza.infrastructure.database.models import CategoryModel, TagModel


class SQLAlchemyTagRepository(TagRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_names(self, names: list[str]) -> list[Tag]:
        if not names:
            return []
        result = await self._session.execute(select(TagModel).where(TagModel.name.in_(names)))
        return [Tag(id=row.id, name=row.name) for row in result.scalars().all()]

    async def create(self, tag: Tag) -> Tag:
        model = TagModel(name=tag.name)
        self._session.add(model)
        await self._session.flush()
        return Tag(id=model.id, name=model.name)

    async def get_all(self) -> list[Tag]:
        result = await self._session.execute(select(TagModel).order_by(TagModel.name))
        return [Tag(id=row.id, name=row.name) for row in result.scalars().all()]

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(TagModel))
        return result.scalar_one()


class SQLAlchemyCategoryRepository(CategoryRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, category_id: int) -> Category | None:
        model = await self._session.get(CategoryModel, category_id)
        return Category(id=model.id, name=model.name) if model else None

    async def get_many(self, category_ids: list[int]) -> list[Category]:
        if not category_ids:
            return []
        result = await self._session.execute(
            select(CategoryModel).where(CategoryModel.id.in_(category_ids))
        )
        by_id = {row.id: row for row in result.scalars().all()}
        return [
            Category(id=by_id[cid].id, name=by_id[cid].name)
            for cid in dict.fromkeys(category_ids)
            if cid in by_id
        ]

    async def get_by_name(self, name: str) -> Category | None:
        result = await self._session.execute(select(CategoryModel).where(CategoryModel.name == name))
        model = result.scalar_one_or_none()
        return Category(id=model.id, name=model.name) if model else None

    async def get_all(self) -> list[Category]:
        result = await self._session.execute(select(CategoryModel).order_by(CategoryModel.name))
        return [Category(id=row.id, name=row.name) for row in result.scalars().all()]

    async def create(self, category: Category) -> Category:
        model = CategoryModel(name=category.name)
        self._session.add(model)
        await self._session.flush()
        return Category(id=model.id, name=model.name)
