"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

TAG_SEPARATOR = ","
TAG_NAME_MAX_LENGTH = 255


@dataclass
class Tag:
    """A globally unique label, shared by every article that uses it."""

    name: str
    id: int | None = None


@dataclass
class Category:
    """Article classifier, also the grouping key inside a newsletter."""

    name: str
    id: int | None = None


def parse_tag_list(raw: str | None) -> list[str]:
    """Split a comma-separated tag list into distinct, trimmed names.

    Blank entries are dropped and the first occurrence of a name wins,
    so the returned order follows the input.
    """
    if not raw:
        return []
    names = (part.strip() for part in raw.split(TAG_SEPARATOR))
    return list(dict.fromkeys(name for name in names if name))


@dataclass
class Article:
    """Core domain entity representing an authored article."""

    title: str
    content: str
    summary: str = ""
    cover_image_url: str | None = None
    user_id: int | None = None
    tags: list[Tag] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags]

    @property
    def tag_list(self) -> str:
        """Tag names joined with commas, in association order."""
        return TAG_SEPARATOR.join(self.tag_names)

    @property
    def category_ids(self) -> list[int]:
        return [category.id for category in self.categories if category.id is not None]

    def update(
        self,
        title: str | None = None,
        content: str | None = None,
        summary: str | None = None,
        cover_image_url: str | None = None,
    ) -> None:
        """Update article fields and refresh the updated_at timestamp."""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if summary is not None:
            self.summary = summary
        if cover_image_url is not None:
            self.cover_image_url = cover_image_url
        self.updated_at = datetime.now(timezone.utc)

    def reconcile_tags(self, desired: list[Tag]) -> bool:
        """Make the tag set equal to ``desired``; return True if it changed.

        Kept tags stay in their current order, new ones are appended in the
        order given. Unlinking never touches the Tag itself.
        """
        desired_by_name = {tag.name: tag for tag in desired}
        current = set(self.tag_names)

        kept = [tag for tag in self.tags if tag.name in desired_by_name]
        added = [tag for name, tag in desired_by_name.items() if name not in current]
        changed = len(kept) != len(self.tags) or bool(added)
        if changed:
            self.tags = kept + added
        return changed

    def assign_categories(self, categories: list[Category]) -> bool:
        """Replace the category set; return True if it changed."""
        wanted = {category.id: category for category in categories}
        if set(wanted) == set(self.category_ids):
            return False
        self.categories = list(wanted.values())
        return True

    def as_indexed_document(self) -> dict[str, Any]:
        """Flattened projection pushed to the search index."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": [{"name": tag.name} for tag in self.tags],
            "categories": [{"name": category.name} for category in self.categories],
        }
