"""Unit tests for pushing article documents to the search index."""

import logging

import pytest

from baraza.application.services import SearchIndexSync
from baraza.domain.entities import Article, Category, Tag
from baraza.domain.exceptions import IndexWriteError


@pytest.mark.asyncio
async def test_push_replaces_the_document(search_index):
    sync = SearchIndexSync(search_index)
    article = Article(id=1, title="T", content="C", tags=[Tag("a", 1)])

    assert await sync.push(article) is True
    article.categories = [Category("History", 1)]
    await sync.push(article)

    assert search_index.documents["1"]["categories"] == [{"name": "History"}]
    assert len(search_index.documents) == 1


@pytest.mark.asyncio
async def test_write_failure_is_logged_and_swallowed(search_index, caplog):
    search_index.fail_writes = True
    sync = SearchIndexSync(search_index)

    with caplog.at_level(logging.WARNING):
        pushed = await sync.push(Article(id=2, title="T", content="C"))
        removed = await sync.remove(2)

    assert pushed is False
    assert removed is False
    assert "article 2 not updated" in caplog.text
    assert "cluster unavailable" in caplog.text


@pytest.mark.asyncio
async def test_reindex_counts_successful_writes(search_index):
    articles = [Article(id=n, title=f"T{n}", content="C") for n in (1, 2, 3)]
    written = await SearchIndexSync(search_index).reindex(articles)
    assert written == 3
    assert search_index.refreshed == 1


@pytest.mark.asyncio
async def test_reindex_reports_failed_writes_after_trying_every_article(search_index):
    search_index.fail_writes = True
    articles = [Article(id=n, title=f"T{n}", content="C") for n in (1, 2)]

    with pytest.raises(IndexWriteError) as exc_info:
        await SearchIndexSync(search_index).reindex(articles)

    assert exc_info.value.document_id == "1, 2"
    assert "2 of 2 documents not written" in exc_info.value.message
    assert search_index.refreshed == 1
