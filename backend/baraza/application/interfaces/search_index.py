"""Search index port — write and query contract for the article search index."""

from abc import ABC, abstractmethod
from typing import Any


class SearchIndex(ABC):
    """Port for the external article search index.

    Documents follow ``Article.as_indexed_document()``. Query methods return
    matching article ids as strings, most relevant first.
    """

    @abstractmethod
    async def ensure_index(self) -> None:
        """Create the index with its mapping if it does not exist yet."""
        ...

    @abstractmethod
    async def index_document(self, document: dict[str, Any]) -> None:
        """Replace the document keyed by ``document["id"]``.

        Raises:
            IndexWriteError: If the index rejects or never acknowledges the write.
        """
        ...

    @abstractmethod
    async def delete_document(self, document_id: int) -> None:
        """Remove a document; a missing document is not an error.

        Raises:
            IndexWriteError: If the index rejects the delete.
        """
        ...

    @abstractmethod
    async def refresh(self) -> None:
        """Make recent writes visible to queries."""
        ...

    @abstractmethod
    async def search_by_tag(self, tag_name: str) -> list[str]:
        ...

    @abstractmethod
    async def search_by_category(self, category_name: str) -> list[str]:
        ...

    @abstractmethod
    async def search_all(self, term: str) -> list[str]:
        """Free-text search across title, content, tag names and category names."""
        ...

    async def aclose(self) -> None:
        """Release any pooled connections held by the adapter."""
