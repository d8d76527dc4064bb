"""Keeps the search index in step with persisted articles.

Index writes happen after the database commit and never fail the save
that triggered them: an ``IndexWriteError`` is logged and dropped.
"""

import logging

from baraza.application.interfaces import SearchIndex
from baraza.domain.entities import Article
from baraza.domain.exceptions import IndexWriteError

logger = logging.getLogger(__name__)


class SearchIndexSync:
    """Pushes replacement search documents for articles."""

    def __init__(self, index: SearchIndex):
        self._index = index

    async def push(self, article: Article) -> bool:
        """Replace the article's document; returns False if the write failed."""
        try:
            await self._index.index_document(article.as_indexed_document())
        except IndexWriteError as exc:
            logger.warning("Search document for article %s not updated: %s", article.id, exc.message)
            return False
        logger.debug("Search document for article %s updated", article.id)
        return True

    async def remove(self, article_id: int) -> bool:
        try:
            await self._index.delete_document(article_id)
        except IndexWriteError as exc:
            logger.warning("Search document for article %s not removed: %s", article_id, exc.message)
            return False
        return True

    async def reindex(self, articles: list[Article]) -> int:
        """Push every article and refresh; returns the number of documents written.

        Unlike a save, an explicit reindex reports failed writes: every article
        is still attempted, then an ``IndexWriteError`` names the ones that
        were not written.
        """
        await self._index.ensure_index()
        failed: list[int | None] = []
        for article in articles:
            if not await self.push(article):
                failed.append(article.id)
        await self._index.refresh()
        written = len(articles) - len(failed)
        logger.info("Reindexed %d of %d articles", written, len(articles))
        if failed:
            raise IndexWriteError(
                ", ".join(str(article_id) for article_id in failed),
                f"{len(failed)} of {len(articles)} documents not written",
            )
        return written
