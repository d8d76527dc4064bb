"""Unit tests for the Elasticsearch search index adapter."""

import json

import httpx
import pytest

from baraza.domain.exceptions import IndexWriteError, SearchUnavailableError
from baraza.infrastructure.search import ElasticsearchIndex


# ── Helpers ──


def _index(handler, recorded: list | None = None) -> ElasticsearchIndex:
    def recording_handler(request: httpx.Request) -> httpx.Response:
        if recorded is not None:
            recorded.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
    return ElasticsearchIndex(
        base_url="http://search.test:9200/",
        index_name="articles_test",
        http_client=client,
    )


def _hits(*ids: str) -> dict:
    return {"hits": {"total": {"value": len(ids)}, "hits": [{"_id": i, "_score": 1.0} for i in ids]}}


# ── Writes ──


@pytest.mark.asyncio
async def test_index_document_puts_by_article_id():
    recorded: list[httpx.Request] = []
    index = _index(lambda request: httpx.Response(201, json={"result": "created"}), recorded)
    document = {"id": 7, "title": "T", "content": "C", "tags": [{"name": "a"}], "categories": []}

    await index.index_document(document)

    request = recorded[0]
    assert request.method == "PUT"
    assert str(request.url) == "http://search.test:9200/articles_test/_doc/7"
    assert json.loads(request.content) == document


@pytest.mark.asyncio
async def test_index_document_error_raises_index_write_error():
    index = _index(
        lambda request: httpx.Response(
            400, json={"error": {"type": "mapper_parsing_exception", "reason": "bad field"}}
        )
    )
    with pytest.raises(IndexWriteError) as exc_info:
        await index.index_document({"id": 3})
    assert exc_info.value.document_id == 3
    assert exc_info.value.message == "bad field"


@pytest.mark.asyncio
async def test_unreachable_cluster_raises_index_write_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(IndexWriteError):
        await _index(handler).index_document({"id": 1})


@pytest.mark.asyncio
async def test_delete_of_missing_document_is_not_an_error():
    index = _index(lambda request: httpx.Response(404, json={"result": "not_found"}))
    await index.delete_document(5)


@pytest.mark.asyncio
async def test_ensure_index_creates_mapping_when_missing():
    recorded: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "HEAD":
            return httpx.Response(404)
        return httpx.Response(200, json={"acknowledged": True})

    await _index(handler, recorded).ensure_index()

    create = recorded[1]
    assert create.method == "PUT"
    properties = json.loads(create.content)["mappings"]["properties"]
    assert properties["title"]["analyzer"] == "snowball"
    assert properties["tags"]["properties"]["name"]["type"] == "keyword"
    assert properties["categories"]["properties"]["name"]["type"] == "keyword"


@pytest.mark.asyncio
async def test_ensure_index_skips_existing_index():
    recorded: list[httpx.Request] = []
    await _index(lambda request: httpx.Response(200), recorded).ensure_index()
    assert [r.method for r in recorded] == ["HEAD"]


# ── Queries ──


@pytest.mark.asyncio
async def test_search_by_tag_uses_exact_term_query():
    recorded: list[httpx.Request] = []
    index = _index(lambda request: httpx.Response(200, json=_hits("4", "2")), recorded)

    ids = await index.search_by_tag("history")

    assert ids == ["4", "2"]
    body = json.loads(recorded[0].content)
    assert body["query"] == {"term": {"tags.name": "history"}}
    assert recorded[0].url.path == "/articles_test/_search"


@pytest.mark.asyncio
async def test_search_by_category_uses_exact_term_query():
    recorded: list[httpx.Request] = []
    index = _index(lambda request: httpx.Response(200, json=_hits("1")), recorded)

    assert await index.search_by_category("Science") == ["1"]
    assert json.loads(recorded[0].content)["query"] == {"term": {"categories.name": "Science"}}


@pytest.mark.asyncio
async def test_search_all_spans_text_and_association_fields():
    recorded: list[httpx.Request] = []
    index = _index(lambda request: httpx.Response(200, json=_hits()), recorded)

    assert await index.search_all("monsoon") == []
    query = json.loads(recorded[0].content)["query"]["multi_match"]
    assert query["query"] == "monsoon"
    assert set(query["fields"]) == {"title", "content", "tags.name", "categories.name"}


@pytest.mark.asyncio
async def test_search_on_missing_index_returns_nothing():
    index = _index(lambda request: httpx.Response(404, json={"error": {"type": "index_not_found_exception"}}))
    assert await index.search_all("x") == []


@pytest.mark.asyncio
async def test_search_server_error_raises():
    index = _index(lambda request: httpx.Response(503, json={"error": "unavailable"}))
    with pytest.raises(SearchUnavailableError):
        await index.search_by_tag("x")
