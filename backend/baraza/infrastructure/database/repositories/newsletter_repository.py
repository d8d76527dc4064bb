"""Concrete newsletter repository backed by SQLAlchemy.

A newsletter is persisted across four tables: the newsletter row, one row
per category entry, the ordered article list of each entry, and the
candidate article pool.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from baraza.application.interfaces import NewsletterRepository
from baraza.domain.entities import (
    CategoryNewsletter,
    Newsletter,
    NewsletterArticle,
    NewsletterStatus,
)
from baraza.infrastructure.database.models import (
    CategoryNewsletterArticleModel,
    CategoryNewsletterModel,
    NewsletterArticleModel,
    NewsletterModel,
)


class SQLAlchemyNewsletterRepository(NewsletterRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def _to_entity(self, model: NewsletterModel) -> Newsletter:
        entries = await self._session.execute(
            select(CategoryNewsletterModel)
            .where(CategoryNewsletterModel.newsletter_id == model.id)
            .order_by(CategoryNewsletterModel.id)
        )
        category_newsletters = []
        for entry in entries.scalars().all():
            listed = await self._session.execute(
                select(CategoryNewsletterArticleModel.article_id)
                .where(CategoryNewsletterArticleModel.category_newsletter_id == entry.id)
                .order_by(CategoryNewsletterArticleModel.position)
            )
            category_newsletters.append(
                CategoryNewsletter(
                    id=entry.id,
                    category_id=entry.category_id,
                    position_in_newsletter=entry.position_in_newsletter,
                    article_ids=list(listed.scalars().all()),
                )
            )

        pool = await self._session.execute(
            select(NewsletterArticleModel)
            .where(NewsletterArticleModel.newsletter_id == model.id)
            .order_by(NewsletterArticleModel.sequence)
        )
        return Newsletter(
            id=model.id,
            status=NewsletterStatus(model.status),
            sent_at=model.sent_at,
            category_newsletters=category_newsletters,
            articles=[
                NewsletterArticle(
                    article_id=row.article_id,
                    position_in_newsletter=row.position_in_newsletter,
                )
                for row in pool.scalars().all()
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, newsletter_id: int) -> Newsletter | None:
        model = await self._session.get(NewsletterModel, newsletter_id)
        return await self._to_entity(model) if model else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Newsletter]:
        stmt = (
            select(NewsletterModel)
            .offset(skip)
            .limit(limit)
            .order_by(NewsletterModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [await self._to_entity(row) for row in result.scalars().all()]

    async def create(self, newsletter: Newsletter) -> Newsletter:
        model = NewsletterModel(status=newsletter.status.value, sent_at=newsletter.sent_at)
        self._session.add(model)
        await self._session.flush()
        await self._write_composition(model.id, newsletter)
        return await self._to_entity(model)

    async def update(self, newsletter: Newsletter) -> Newsletter:
        model = await self._session.get(NewsletterModel, newsletter.id)
        if model is None:
            raise ValueError(f"Newsletter {newsletter.id} not found in database")
        model.status = newsletter.status.value
        model.sent_at = newsletter.sent_at
        model.updated_at = newsletter.updated_at
        await self._session.flush()
        await self._write_composition(model.id, newsletter)
        return await self._to_entity(model)

    async def _write_composition(self, newsletter_id: int, newsletter: Newsletter) -> None:
        existing = await self._session.execute(
            select(CategoryNewsletterModel).where(
                CategoryNewsletterModel.newsletter_id == newsletter_id
            )
        )
        rows = {row.category_id: row for row in existing.scalars().all()}
        wanted = set(newsletter.category_ids)

        for category_id, row in rows.items():
            if category_id not in wanted:
                await self._clear_entry_articles(row.id)
                await self._session.delete(row)

        for entry in newsletter.category_newsletters:
            row = rows.get(entry.category_id)
            if row is None:
                row = CategoryNewsletterModel(
                    newsletter_id=newsletter_id, category_id=entry.category_id
                )
                self._session.add(row)
            row.position_in_newsletter = entry.position_in_newsletter
            await self._session.flush()

            await self._clear_entry_articles(row.id)
            self._session.add_all(
                CategoryNewsletterArticleModel(
                    category_newsletter_id=row.id, article_id=article_id, position=index
                )
                for index, article_id in enumerate(entry.article_ids)
            )

        await self._session.execute(
            delete(NewsletterArticleModel).where(
                NewsletterArticleModel.newsletter_id == newsletter_id
            )
        )
        self._session.add_all(
            NewsletterArticleModel(
                newsletter_id=newsletter_id,
                article_id=item.article_id,
                position_in_newsletter=item.position_in_newsletter,
                sequence=index,
            )
            for index, item in enumerate(newsletter.articles)
        )
        await self._session.flush()

    async def _clear_entry_articles(self, category_newsletter_id: int) -> None:
        await self._session.execute(
            delete(CategoryNewsletterArticleModel).where(
                CategoryNewsletterArticleModel.category_newsletter_id == category_newsletter_id
            )
        )
