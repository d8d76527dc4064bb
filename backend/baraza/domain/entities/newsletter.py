"""Newsletter composition model — ordered categories, article pool and approval state."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from baraza.domain.entities.article import Article, Category
from baraza.domain.exceptions import InvalidReferenceError, InvalidTransitionError


class NewsletterStatus(str, Enum):
    """Lifecycle of a newsletter. Approved and rejected are terminal."""

    DRAFT = "draft"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not NewsletterStatus.DRAFT


@dataclass
class CategoryNewsletter:
    """One category's position and assigned articles within a newsletter."""

    category_id: int
    position_in_newsletter: int | None = None
    article_ids: list[int] = field(default_factory=list)
    id: int | None = None


@dataclass
class NewsletterArticle:
    """An article in the newsletter's candidate pool."""

    article_id: int
    position_in_newsletter: int | None = None


@dataclass
class NewsletterSection:
    """A category with its resolved articles, as rendered in the newsletter mail."""

    category: Category
    articles: list[Article] = field(default_factory=list)


def _position_key(position: int | None) -> tuple[int, int]:
    # Unpositioned entries sort after positioned ones.
    return (0, position) if position is not None else (1, 0)


@dataclass
class Newsletter:
    """Curated bundle of categories and articles awaiting editorial approval."""

    status: NewsletterStatus = NewsletterStatus.DRAFT
    category_newsletters: list[CategoryNewsletter] = field(default_factory=list)
    articles: list[NewsletterArticle] = field(default_factory=list)
    id: int | None = None
    sent_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # ── Queries ─────────────────────────────────────────────────────

    @property
    def article_ids(self) -> list[int]:
        return [entry.article_id for entry in self.articles]

    @property
    def category_ids(self) -> list[int]:
        return [entry.category_id for entry in self.category_newsletters]

    def ordered_categories(self) -> list[CategoryNewsletter]:
        """Category entries in display order."""
        return sorted(
            self.category_newsletters,
            key=lambda entry: _position_key(entry.position_in_newsletter),
        )

    def category_entry(self, category_id: int) -> CategoryNewsletter:
        for entry in self.category_newsletters:
            if entry.category_id == category_id:
                return entry
        raise InvalidReferenceError(
            "Category", [category_id], reason=f"not part of newsletter {self.id}"
        )

    # ── Composition ─────────────────────────────────────────────────

    def add_category(self, category_id: int) -> CategoryNewsletter:
        """Attach a category; returns the existing entry if already attached."""
        for entry in self.category_newsletters:
            if entry.category_id == category_id:
                return entry
        entry = CategoryNewsletter(category_id=category_id)
        self.category_newsletters.append(entry)
        self._touch()
        return entry

    def add_articles(self, article_ids: list[int]) -> None:
        """Extend the candidate pool, ignoring articles already in it."""
        known = set(self.article_ids)
        for article_id in article_ids:
            if article_id not in known:
                self.articles.append(NewsletterArticle(article_id=article_id))
                known.add(article_id)
        self._touch()

    def set_category_order(self, category_id: int, position: int | None) -> None:
        self.category_entry(category_id).position_in_newsletter = position
        self._touch()

    def set_articles(self, category_id: int, article_ids: list[int]) -> None:
        """Replace the articles listed under one category.

        Only articles already in the newsletter's pool may be placed.
        """
        entry = self.category_entry(category_id)
        self._ensure_in_pool(article_ids)
        entry.article_ids = list(dict.fromkeys(article_ids))
        self._touch()

    def replace_articles(
        self, article_ids: list[int], positions: dict[int, int | None] | None = None
    ) -> None:
        """Restrict the pool to ``article_ids`` and apply positions.

        Category lists are pruned to the surviving articles.
        """
        self._ensure_in_pool(article_ids)
        positions = positions or {}
        current = {entry.article_id: entry for entry in self.articles}

        survivors = []
        for article_id in dict.fromkeys(article_ids):
            position = positions.get(article_id, current[article_id].position_in_newsletter)
            survivors.append(NewsletterArticle(article_id=article_id, position_in_newsletter=position))
        self.articles = sorted(
            survivors, key=lambda entry: _position_key(entry.position_in_newsletter)
        )

        keep = set(self.article_ids)
        for entry in self.category_newsletters:
            self.set_articles(
                entry.category_id, [aid for aid in entry.article_ids if aid in keep]
            )

    # ── State transitions ───────────────────────────────────────────

    def approve(self) -> None:
        self._transition(NewsletterStatus.APPROVED)

    def reject(self) -> None:
        self._transition(NewsletterStatus.REJECTED)

    def mark_sent(self) -> None:
        self.sent_at = datetime.now(timezone.utc)
        self._touch()

    def _transition(self, target: NewsletterStatus) -> None:
        if self.status.is_terminal:
            raise InvalidTransitionError("Newsletter", self.status.value, target.value)
        self.status = target
        self._touch()

    def _ensure_in_pool(self, article_ids: list[int]) -> None:
        known = set(self.article_ids)
        unknown = [aid for aid in article_ids if aid not in known]
        if unknown:
            raise InvalidReferenceError(
                "Article", unknown, reason=f"not in the article pool of newsletter {self.id}"
            )

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
