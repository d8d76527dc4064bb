"""Elasticsearch REST adapter — implements the SearchIndex interface.

Talks to a single index over plain HTTP with httpx. Documents are keyed by
article id and follow ``Article.as_indexed_document()``.
"""

import logging
from typing import Any

import httpx

from baraza.application.interfaces import SearchIndex
from baraza.domain.exceptions import IndexWriteError, SearchUnavailableError

logger = logging.getLogger(__name__)

_NAME_PROPERTIES = {"properties": {"name": {"type": "keyword"}}}

INDEX_MAPPING: dict[str, Any] = {
    "mappings": {
        "properties": {
            "id": {"type": "keyword"},
            "title": {"type": "text", "analyzer": "snowball"},
            "content": {"type": "text", "analyzer": "snowball"},
            "tags": _NAME_PROPERTIES,
            "categories": _NAME_PROPERTIES,
        }
    }
}

SEARCH_ALL_FIELDS = ["title", "content", "tags.name", "categories.name"]


class ElasticsearchIndex(SearchIndex):
    """Infrastructure adapter for the article search index."""

    def __init__(
        self,
        base_url: str,
        index_name: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
        max_results: int = 100,
    ):
        self._base_url = base_url.rstrip("/")
        self._index_name = index_name
        self._http_client = http_client
        self._owns_client = http_client is None
        self._timeout = timeout
        self._max_results = max_results

    @property
    def index_name(self) -> str:
        return self._index_name

    def _url(self, path: str = "") -> str:
        return f"{self._base_url}/{self._index_name}{path}"

    def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or lazily create a pooled one."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    # ── Writes ──────────────────────────────────────────────────────

    async def ensure_index(self) -> None:
        client = self._get_client()
        try:
            response = await client.head(self._url())
            if response.status_code == 200:
                return
            response = await client.put(self._url(), json=INDEX_MAPPING)
        except httpx.HTTPError as exc:
            raise IndexWriteError(self._index_name, str(exc)) from exc

        if response.status_code == 400 and "resource_already_exists" in response.text:
            return
        if response.status_code >= 300:
            raise IndexWriteError(self._index_name, self._error_message(response))
        logger.info("Created search index %s", self._index_name)

    async def index_document(self, document: dict[str, Any]) -> None:
        document_id = document["id"]
        try:
            response = await self._get_client().put(
                self._url(f"/_doc/{document_id}"), json=document
            )
        except httpx.HTTPError as exc:
            raise IndexWriteError(document_id, str(exc)) from exc

        if response.status_code not in (200, 201):
            raise IndexWriteError(document_id, self._error_message(response))
        logger.debug("Indexed article %s", document_id)

    async def delete_document(self, document_id: int) -> None:
        try:
            response = await self._get_client().delete(self._url(f"/_doc/{document_id}"))
        except httpx.HTTPError as exc:
            raise IndexWriteError(document_id, str(exc)) from exc

        if response.status_code not in (200, 404):
            raise IndexWriteError(document_id, self._error_message(response))

    async def refresh(self) -> None:
        try:
            response = await self._get_client().post(self._url("/_refresh"))
        except httpx.HTTPError as exc:
            raise IndexWriteError(self._index_name, str(exc)) from exc
        if response.status_code >= 300:
            raise IndexWriteError(self._index_name, self._error_message(response))

    # ── Queries ─────────────────────────────────────────────────────

    async def search_by_tag(self, tag_name: str) -> list[str]:
        return await self._search({"term": {"tags.name": tag_name}})

    async def search_by_category(self, category_name: str) -> list[str]:
        return await self._search({"term": {"categories.name": category_name}})

    async def search_all(self, term: str) -> list[str]:
        return await self._search(
            {"multi_match": {"query": term, "fields": SEARCH_ALL_FIELDS}}
        )

    async def _search(self, query: dict[str, Any]) -> list[str]:
        payload = {"query": query, "size": self._max_results, "_source": False}
        try:
            response = await self._get_client().post(self._url("/_search"), json=payload)
        except httpx.HTTPError as exc:
            raise SearchUnavailableError(str(exc)) from exc

        if response.status_code == 404:
            logger.warning("Search index %s does not exist yet", self._index_name)
            return []
        if response.status_code != 200:
            raise SearchUnavailableError(self._error_message(response))

        hits = response.json().get("hits", {}).get("hits", [])
        return [str(hit["_id"]) for hit in hits]

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract the error reason from an Elasticsearch error body."""
        try:
            error = response.json().get("error", response.text)
            if isinstance(error, dict):
                return error.get("reason") or error.get("type") or response.text
            return str(error)
        except ValueError:
            return f"HTTP {response.status_code}: {response.text}"
