"""FastAPI dependency injection — wires infrastructure to application layer."""

import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from baraza.config import get_settings
from baraza.application.interfaces import Mailer, PasswordHasher, SearchIndex
from baraza.application.services import (
    ArticleService,
    EditorWelcomeNotifier,
    EventDispatcher,
    NewsletterService,
    SubscriberService,
    TaxonomyService,
    UserService,
)
from baraza.domain.authorization import is_permitted
from baraza.domain.entities import User
from baraza.domain.events import UserRoleChanged
from baraza.domain.exceptions import PermissionDeniedError
from baraza.infrastructure.database.session import get_db_session
from baraza.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyNewsletterRepository,
    SQLAlchemySubscriberRepository,
    SQLAlchemyTagRepository,
    SQLAlchemyUserRepository,
)
from baraza.infrastructure.database.unit_of_work import SQLAlchemyUnitOfWork
from baraza.infrastructure.mail import ResendMailer
from baraza.infrastructure.search import ElasticsearchIndex
from baraza.infrastructure.security import BcryptPasswordHasher

logger = logging.getLogger(__name__)


# ── Process-wide adapters ───────────────────────────────────────────


@lru_cache
def get_search_index() -> SearchIndex:
    """Shared search index client (one connection pool per process)."""
    settings = get_settings()
    return ElasticsearchIndex(
        base_url=settings.search_index_url,
        index_name=settings.search_index_name,
        timeout=settings.search_timeout,
    )


@lru_cache
def get_mailer() -> Mailer:
    settings = get_settings()
    return ResendMailer(
        api_key=settings.resend_api_key,
        from_email=settings.mail_from,
        public_base_url=settings.public_base_url,
        newsletter_subject=settings.newsletter_subject,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher()


# ── Acting user ─────────────────────────────────────────────────────


async def get_current_user(
    x_user_id: int | None = Header(default=None),
    session: AsyncSession = Depends(get_db_session),
) -> User | None:
    """Resolve the acting user from the ``X-User-Id`` header; None means guest."""
    if x_user_id is None:
        return None
    user = await SQLAlchemyUserRepository(session).get_by_id(x_user_id)
    if user is None:
        logger.debug("Unknown X-User-Id %s, acting as guest", x_user_id)
    return user


def require_permission(
    resource: str, action: str
) -> Callable[..., Awaitable[User | None]]:
    """Dependency factory rejecting callers whose role lacks ``(resource, action)``."""

    async def _check(current_user: User | None = Depends(get_current_user)) -> User | None:
        if not is_permitted(current_user, resource, action):
            raise PermissionDeniedError(resource, action)
        return current_user

    return _check


# ── Services ────────────────────────────────────────────────────────


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
    search_index: SearchIndex = Depends(get_search_index),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService with its repositories and the search index wired up."""
    yield ArticleService(
        repository=SQLAlchemyArticleRepository(session),
        tag_repository=SQLAlchemyTagRepository(session),
        category_repository=SQLAlchemyCategoryRepository(session),
        unit_of_work=SQLAlchemyUnitOfWork(session),
        search_index=search_index,
    )


async def get_taxonomy_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[TaxonomyService, None]:
    yield TaxonomyService(
        tag_repository=SQLAlchemyTagRepository(session),
        category_repository=SQLAlchemyCategoryRepository(session),
        unit_of_work=SQLAlchemyUnitOfWork(session),
    )


async def get_newsletter_service(
    session: AsyncSession = Depends(get_db_session),
    mailer: Mailer = Depends(get_mailer),
) -> AsyncGenerator[NewsletterService, None]:
    """Provides a NewsletterService; mail goes through the shared mailer."""
    yield NewsletterService(
        repository=SQLAlchemyNewsletterRepository(session),
        article_repository=SQLAlchemyArticleRepository(session),
        category_repository=SQLAlchemyCategoryRepository(session),
        subscriber_repository=SQLAlchemySubscriberRepository(session),
        unit_of_work=SQLAlchemyUnitOfWork(session),
        mailer=mailer,
    )


async def get_event_dispatcher(
    session: AsyncSession = Depends(get_db_session),
    mailer: Mailer = Depends(get_mailer),
) -> AsyncGenerator[EventDispatcher, None]:
    """Per-request dispatcher with the domain event handlers subscribed."""
    dispatcher = EventDispatcher()
    dispatcher.subscribe(
        UserRoleChanged, EditorWelcomeNotifier(mailer, SQLAlchemyUserRepository(session))
    )
    yield dispatcher


async def get_user_service(
    session: AsyncSession = Depends(get_db_session),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    events: EventDispatcher = Depends(get_event_dispatcher),
) -> AsyncGenerator[UserService, None]:
    yield UserService(
        repository=SQLAlchemyUserRepository(session),
        unit_of_work=SQLAlchemyUnitOfWork(session),
        password_hasher=password_hasher,
        events=events,
    )


async def get_subscriber_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SubscriberService, None]:
    yield SubscriberService(
        repository=SQLAlchemySubscriberRepository(session),
        unit_of_work=SQLAlchemyUnitOfWork(session),
    )
