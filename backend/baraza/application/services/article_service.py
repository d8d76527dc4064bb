"""Application service (use case) for Article operations."""

import logging

from baraza.application.interfaces import (
    ArticleRepository,
    CategoryRepository,
    SearchIndex,
    TagRepository,
    UnitOfWork,
)
from baraza.application.schemas import ArticleCreate, ArticleUpdate
from baraza.application.services.search_index_sync import SearchIndexSync
from baraza.domain.entities import TAG_NAME_MAX_LENGTH, Article, Category, Tag, parse_tag_list
from baraza.domain.exceptions import EntityNotFoundError, InvalidReferenceError, ValidationError

logger = logging.getLogger(__name__)


class ArticleService:
    """Orchestrates article business logic. Depends on the repository ports (DI)."""

    def __init__(
        self,
        repository: ArticleRepository,
        tag_repository: TagRepository,
        category_repository: CategoryRepository,
        unit_of_work: UnitOfWork,
        search_index: SearchIndex,
    ):
        self._repository = repository
        self._tags = tag_repository
        self._categories = category_repository
        self._uow = unit_of_work
        self._search_index = search_index
        self._index_sync = SearchIndexSync(search_index)

    async def get_article(self, article_id: int) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_articles(self, skip: int = 0, limit: int = 100) -> list[Article]:
        return await self._repository.get_all(skip=skip, limit=limit)

    async def create_article(self, data: ArticleCreate, user_id: int | None) -> Article:
        article = Article(
            title=data.title,
            content=data.content,
            summary=data.summary,
            cover_image_url=data.cover_image_url,
            user_id=user_id,
        )
        categories = await self._resolve_categories(data.category_ids)
        await self.apply_tag_list(article, data.tag_list)
        article.assign_categories(categories)

        article = await self._repository.create(article)
        await self._uow.commit()
        await self._index_sync.push(article)
        return article

    async def update_article(self, article_id: int, data: ArticleUpdate) -> Article:
        article = await self.get_article(article_id)
        indexed_before = article.as_indexed_document()
        article.update(
            title=data.title,
            content=data.content,
            summary=data.summary,
            cover_image_url=data.cover_image_url,
        )

        if data.category_ids is not None:
            categories = await self._resolve_categories(data.category_ids)
            article.assign_categories(categories)
        if data.tag_list is not None:
            await self.apply_tag_list(article, data.tag_list)

        article = await self._repository.update(article)
        await self._uow.commit()
        if article.as_indexed_document() != indexed_before:
            await self._index_sync.push(article)
        return article

    async def delete_article(self, article_id: int) -> bool:
        exists = await self._repository.get_by_id(article_id)
        if exists is None:
            raise EntityNotFoundError("Article", article_id)
        deleted = await self._repository.delete(article_id)
        await self._uow.commit()
        await self._index_sync.remove(article_id)
        return deleted

    async def apply_tag_list(self, article: Article, tag_list: str) -> bool:
        """Reconcile the article's tags with a comma-separated list of names.

        Existing tags are reused by exact name, missing ones created. Returns
        True if the article's tag set changed. Over-long names are rejected
        before any tag is created.
        """
        names = parse_tag_list(tag_list)
        too_long = [name for name in names if len(name) > TAG_NAME_MAX_LENGTH]
        if too_long:
            raise ValidationError(
                [
                    f"Tag '{name[:20]}...' is too long (maximum is {TAG_NAME_MAX_LENGTH} characters)"
                    for name in too_long
                ]
            )
        existing = {tag.name: tag for tag in await self._tags.get_by_names(names)}

        desired: list[Tag] = []
        for name in names:
            tag = existing.get(name)
            if tag is None:
                tag = await self._tags.create(Tag(name=name))
                logger.debug("Created tag %r", name)
            desired.append(tag)
        return article.reconcile_tags(desired)

    # ── Search ──────────────────────────────────────────────────────

    async def search_by_tag(self, tag_name: str) -> list[Article]:
        return await self._load_hits(await self._search_index.search_by_tag(tag_name))

    async def search_by_category(self, category_name: str) -> list[Article]:
        return await self._load_hits(await self._search_index.search_by_category(category_name))

    async def search_all(self, term: str) -> list[Article]:
        return await self._load_hits(await self._search_index.search_all(term))

    async def reindex_all(self, batch_size: int = 500) -> int:
        """Rebuild every article's search document."""
        articles: list[Article] = []
        skip = 0
        while True:
            batch = await self._repository.get_all(skip=skip, limit=batch_size)
            articles.extend(batch)
            if len(batch) < batch_size:
                break
            skip += batch_size
        return await self._index_sync.reindex(articles)

    # ── Helpers ─────────────────────────────────────────────────────

    async def _resolve_categories(self, category_ids: list[int]) -> list[Category]:
        wanted = list(dict.fromkeys(category_ids))
        categories = await self._categories.get_many(wanted)
        found = {category.id for category in categories}
        missing = [cid for cid in wanted if cid not in found]
        if missing:
            raise InvalidReferenceError("Category", missing)
        return categories

    async def _load_hits(self, hit_ids: list[str]) -> list[Article]:
        # Index hits for rows deleted since the last sync are skipped.
        ids = [int(hit) for hit in hit_ids if hit.isdigit()]
        return await self._repository.get_many(ids)
