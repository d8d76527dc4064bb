"""Shared in-memory fakes for the repository and adapter ports."""

import copy
from typing import Any

import pytest

from baraza.application.interfaces import (
    ArticleRepository,
    CategoryRepository,
    Mailer,
    NewsletterRepository,
    PasswordHasher,
    SearchIndex,
    SubscriberRepository,
    TagRepository,
    UnitOfWork,
    UserRepository,
)
from baraza.domain.entities import (
    Article,
    Category,
    Newsletter,
    NewsletterSection,
    Subscriber,
    Tag,
    User,
)
from baraza.domain.exceptions import IndexWriteError


class FakeArticleRepository(ArticleRepository):
    """In-memory fake repository; hands out copies like a real session would."""

    def __init__(self):
        self._articles: dict[int, Article] = {}
        self._next_id = 1

    async def get_by_id(self, article_id: int) -> Article | None:
        article = self._articles.get(article_id)
        return copy.deepcopy(article) if article else None

    async def get_many(self, article_ids: list[int]) -> list[Article]:
        return [
            copy.deepcopy(self._articles[aid])
            for aid in dict.fromkeys(article_ids)
            if aid in self._articles
        ]

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Article]:
        articles = list(self._articles.values())
        return copy.deepcopy(articles[skip : skip + limit])

    async def create(self, article: Article) -> Article:
        article.id = self._next_id
        self._next_id += 1
        self._articles[article.id] = copy.deepcopy(article)
        return article

    async def update(self, article: Article) -> Article:
        if article.id not in self._articles:
            raise ValueError(f"Article {article.id} not found")
        self._articles[article.id] = copy.deepcopy(article)
        return article

    async def delete(self, article_id: int) -> bool:
        return self._articles.pop(article_id, None) is not None


class FakeTagRepository(TagRepository):
    def __init__(self):
        self.tags: dict[str, Tag] = {}

    async def get_by_names(self, names: list[str]) -> list[Tag]:
        return [self.tags[name] for name in names if name in self.tags]

    async def create(self, tag: Tag) -> Tag:
        tag.id = len(self.tags) + 1
        self.tags[tag.name] = tag
        return tag

    async def get_all(self) -> list[Tag]:
        return sorted(self.tags.values(), key=lambda t: t.name)

    async def count(self) -> int:
        return len(self.tags)


class FakeCategoryRepository(CategoryRepository):
    def __init__(self):
        self.categories: dict[int, Category] = {}

    async def get_by_id(self, category_id: int) -> Category | None:
        return self.categories.get(category_id)

    async def get_many(self, category_ids: list[int]) -> list[Category]:
        return [self.categories[cid] for cid in dict.fromkeys(category_ids) if cid in self.categories]

    async def get_by_name(self, name: str) -> Category | None:
        return next((c for c in self.categories.values() if c.name == name), None)

    async def get_all(self) -> list[Category]:
        return sorted(self.categories.values(), key=lambda c: c.name)

    async def create(self, category: Category) -> Category:
        category.id = len(self.categories) + 1
        self.categories[category.id] = category
        return category


class FakeNewsletterRepository(NewsletterRepository):
    def __init__(self):
        self._newsletters: dict[int, Newsletter] = {}
        self._next_id = 1

    async def get_by_id(self, newsletter_id: int) -> Newsletter | None:
        newsletter = self._newsletters.get(newsletter_id)
        return copy.deepcopy(newsletter) if newsletter else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Newsletter]:
        return copy.deepcopy(list(self._newsletters.values())[skip : skip + limit])

    async def create(self, newsletter: Newsletter) -> Newsletter:
        newsletter.id = self._next_id
        self._next_id += 1
        self._newsletters[newsletter.id] = copy.deepcopy(newsletter)
        return newsletter

    async def update(self, newsletter: Newsletter) -> Newsletter:
        self._newsletters[newsletter.id] = copy.deepcopy(newsletter)
        return newsletter


class FakeUserRepository(UserRepository):
    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1

    async def get_by_id(self, user_id: int) -> User | None:
        user = self._users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def get_by_email(self, email: str) -> User | None:
        user = next((u for u in self._users.values() if u.email == email), None)
        return copy.deepcopy(user) if user else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[User]:
        return copy.deepcopy(list(self._users.values())[skip : skip + limit])

    async def create(self, user: User) -> User:
        user.id = self._next_id
        self._next_id += 1
        self._users[user.id] = copy.deepcopy(user)
        return user

    async def update(self, user: User) -> User:
        self._users[user.id] = copy.deepcopy(user)
        return user

    async def delete(self, user_id: int) -> bool:
        return self._users.pop(user_id, None) is not None


class FakeSubscriberRepository(SubscriberRepository):
    def __init__(self):
        self.subscribers: dict[str, Subscriber] = {}

    async def get_by_email(self, email: str) -> Subscriber | None:
        return self.subscribers.get(email)

    async def get_all(self) -> list[Subscriber]:
        return list(self.subscribers.values())

    async def create(self, subscriber: Subscriber) -> Subscriber:
        subscriber.id = len(self.subscribers) + 1
        self.subscribers[subscriber.email] = subscriber
        return subscriber

    async def delete_by_email(self, email: str) -> bool:
        return self.subscribers.pop(email, None) is not None


class FakeUnitOfWork(UnitOfWork):
    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


class FakeSearchIndex(SearchIndex):
    """Keeps documents in a dict and answers queries by exact matching."""

    def __init__(self):
        self.documents: dict[str, dict[str, Any]] = {}
        self.fail_writes = False
        self.refreshed = 0

    async def ensure_index(self) -> None:
        return None

    async def index_document(self, document: dict[str, Any]) -> None:
        if self.fail_writes:
            raise IndexWriteError(document["id"], "cluster unavailable")
        self.documents[str(document["id"])] = copy.deepcopy(document)

    async def delete_document(self, document_id: int) -> None:
        if self.fail_writes:
            raise IndexWriteError(document_id, "cluster unavailable")
        self.documents.pop(str(document_id), None)

    async def refresh(self) -> None:
        self.refreshed += 1

    async def search_by_tag(self, tag_name: str) -> list[str]:
        return [
            doc_id for doc_id, doc in self.documents.items()
            if tag_name in [t["name"] for t in doc["tags"]]
        ]

    async def search_by_category(self, category_name: str) -> list[str]:
        return [
            doc_id for doc_id, doc in self.documents.items()
            if category_name in [c["name"] for c in doc["categories"]]
        ]

    async def search_all(self, term: str) -> list[str]:
        term = term.lower()
        hits = []
        for doc_id, doc in self.documents.items():
            haystack = " ".join(
                [doc["title"], doc["content"]]
                + [t["name"] for t in doc["tags"]]
                + [c["name"] for c in doc["categories"]]
            ).lower()
            if term in haystack:
                hits.append(doc_id)
        return hits


class RecordingMailer(Mailer):
    def __init__(self, accept: bool = True):
        self.accept = accept
        self.newsletters: list[tuple[Newsletter, list[NewsletterSection], list[str]]] = []
        self.editor_welcomes: list[User] = []

    async def send_newsletter(self, newsletter, sections, recipients) -> bool:
        self.newsletters.append((newsletter, sections, recipients))
        return self.accept

    async def send_editor_welcome(self, user: User) -> bool:
        self.editor_welcomes.append(user)
        return self.accept


class PlainPasswordHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        return hashed_password == f"hashed:{plain_password}"


@pytest.fixture
def article_repository() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def tag_repository() -> FakeTagRepository:
    return FakeTagRepository()


@pytest.fixture
def category_repository() -> FakeCategoryRepository:
    return FakeCategoryRepository()


@pytest.fixture
def newsletter_repository() -> FakeNewsletterRepository:
    return FakeNewsletterRepository()


@pytest.fixture
def user_repository() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def subscriber_repository() -> FakeSubscriberRepository:
    return FakeSubscriberRepository()


@pytest.fixture
def unit_of_work() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def search_index() -> FakeSearchIndex:
    return FakeSearchIndex()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def password_hasher() -> PlainPasswordHasher:
    return PlainPasswordHasher()
