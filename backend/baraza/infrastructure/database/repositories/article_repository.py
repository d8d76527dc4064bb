"""Concrete repository implementation backed by SQLAlchemy."""

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from baraza.application.interfaces import ArticleRepository
from baraza.domain.entities import Article, Category, Tag
from baraza.infrastructure.database.models import (
    ArticleModel,
    CategoryModel,
    CategoryNewsletterArticleModel,
    NewsletterArticleModel,
    TagModel,
    article_categories,
    article_tags,
)


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions.

    Tag and category links are written through the join tables directly;
    rows are only inserted or deleted, so surviving links keep their order.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity, loading associations in link order."""
        tag_rows = await self._session.execute(
            select(TagModel)
            .join(article_tags, article_tags.c.tag_id == TagModel.id)
            .where(article_tags.c.article_id == model.id)
            .order_by(article_tags.c.id)
        )
        category_rows = await self._session.execute(
            select(CategoryModel)
            .join(article_categories, article_categories.c.category_id == CategoryModel.id)
            .where(article_categories.c.article_id == model.id)
            .order_by(article_categories.c.id)
        )
        return Article(
            id=model.id,
            title=model.title,
            content=model.content,
            summary=model.summary,
            cover_image_url=model.cover_image_url,
            user_id=model.user_id,
            tags=[Tag(id=t.id, name=t.name) for t in tag_rows.scalars().all()],
            categories=[Category(id=c.id, name=c.name) for c in category_rows.scalars().all()],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        return ArticleModel(
            title=entity.title,
            content=entity.content,
            summary=entity.summary,
            cover_image_url=entity.cover_image_url,
            user_id=entity.user_id,
        )

    async def get_by_id(self, article_id: int) -> Article | None:
        result = await self._session.get(ArticleModel, article_id)
        return await self._to_entity(result) if result else None

    async def get_many(self, article_ids: list[int]) -> list[Article]:
        if not article_ids:
            return []
        result = await self._session.execute(
            select(ArticleModel).where(ArticleModel.id.in_(article_ids))
        )
        by_id = {model.id: model for model in result.scalars().all()}
        return [
            await self._to_entity(by_id[article_id])
            for article_id in dict.fromkeys(article_ids)
            if article_id in by_id
        ]

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Article]:
        stmt = select(ArticleModel).offset(skip).limit(limit).order_by(ArticleModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [await self._to_entity(row) for row in result.scalars().all()]

    async def create(self, article: Article) -> Article:
        model = self._to_model(article)
        self._session.add(model)
        await self._session.flush()
        await self._sync_links(model.id, article)
        return await self._to_entity(model)

    async def update(self, article: Article) -> Article:
        model = await self._session.get(ArticleModel, article.id)
        if model is None:
            raise ValueError(f"Article {article.id} not found in database")
        model.title = article.title
        model.content = article.content
        model.summary = article.summary
        model.cover_image_url = article.cover_image_url
        model.updated_at = article.updated_at
        await self._session.flush()
        await self._sync_links(model.id, article)
        return await self._to_entity(model)

    async def delete(self, article_id: int) -> bool:
        model = await self._session.get(ArticleModel, article_id)
        if model is None:
            return False
        await self._session.execute(delete(article_tags).where(article_tags.c.article_id == article_id))
        await self._session.execute(
            delete(article_categories).where(article_categories.c.article_id == article_id)
        )
        await self._session.execute(
            delete(NewsletterArticleModel).where(NewsletterArticleModel.article_id == article_id)
        )
        await self._session.execute(
            delete(CategoryNewsletterArticleModel).where(
                CategoryNewsletterArticleModel.article_id == article_id
            )
        )
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _sync_links(self, article_id: int, article: Article) -> None:
        await self._sync_join_table(
            article_tags, "tag_id", article_id, [tag.id for tag in article.tags]
        )
        await self._sync_join_table(
            article_categories, "category_id", article_id, article.category_ids
        )

    async def _sync_join_table(self, table, column: str, article_id: int, wanted: list[int]) -> None:
        target = table.c[column]
        result = await self._session.execute(
            select(target).where(table.c.article_id == article_id).order_by(table.c.id)
        )
        current = list(result.scalars().all())

        stale = [value for value in current if value not in wanted]
        if stale:
            await self._session.execute(
                delete(table).where(table.c.article_id == article_id, target.in_(stale))
            )
        for value in wanted:
            if value not in current:
                await self._session.execute(
                    insert(table).values(article_id=article_id, **{column: value})
                )
        await self._session.flush()
