"""Application service (use case) for newsletter curation and delivery."""

import logging

from baraza.application.interfaces import (
    ArticleRepository,
    CategoryRepository,
    Mailer,
    NewsletterRepository,
    SubscriberRepository,
    UnitOfWork,
)
from baraza.application.schemas import NewsletterCreate, NewsletterUpdateRequest
from baraza.application.services.newsletter_reconciler import NewsletterUpdateReconciler
from baraza.domain.entities import Article, Newsletter, NewsletterSection, NewsletterStatus
from baraza.domain.exceptions import (
    EntityNotFoundError,
    InvalidReferenceError,
    InvalidTransitionError,
)

logger = logging.getLogger(__name__)


class NewsletterService:
    """Orchestrates newsletter composition, approval and sending.

    Every mutating call is one unit of work: it either commits in full or
    raises, leaving the rollback to the request session.
    """

    def __init__(
        self,
        repository: NewsletterRepository,
        article_repository: ArticleRepository,
        category_repository: CategoryRepository,
        subscriber_repository: SubscriberRepository,
        unit_of_work: UnitOfWork,
        mailer: Mailer,
        reconciler: NewsletterUpdateReconciler | None = None,
    ):
        self._repository = repository
        self._articles = article_repository
        self._categories = category_repository
        self._subscribers = subscriber_repository
        self._uow = unit_of_work
        self._mailer = mailer
        self._reconciler = reconciler or NewsletterUpdateReconciler()

    async def get_newsletter(self, newsletter_id: int) -> Newsletter:
        newsletter = await self._repository.get_by_id(newsletter_id)
        if newsletter is None:
            raise EntityNotFoundError("Newsletter", newsletter_id)
        return newsletter

    async def list_newsletters(self, skip: int = 0, limit: int = 100) -> list[Newsletter]:
        return await self._repository.get_all(skip=skip, limit=limit)

    async def create_newsletter(self, data: NewsletterCreate) -> Newsletter:
        """Start a draft with the given categories and candidate articles."""
        await self._ensure_categories_exist(data.category_ids)
        await self._ensure_articles_exist(data.article_ids)

        newsletter = Newsletter()
        for category_id in dict.fromkeys(data.category_ids):
            newsletter.add_category(category_id)
        newsletter.add_articles(data.article_ids)

        newsletter = await self._repository.create(newsletter)
        await self._uow.commit()
        logger.info("Created draft newsletter %s", newsletter.id)
        return newsletter

    async def add_articles(self, newsletter_id: int, article_ids: list[int]) -> Newsletter:
        """Extend the candidate pool that category assignments draw from."""
        newsletter = await self.get_newsletter(newsletter_id)
        await self._ensure_articles_exist(article_ids)
        newsletter.add_articles(article_ids)
        newsletter = await self._repository.update(newsletter)
        await self._uow.commit()
        return newsletter

    async def set_category_articles(
        self, newsletter_id: int, category_id: int, article_ids: list[int]
    ) -> Newsletter:
        newsletter = await self.get_newsletter(newsletter_id)
        newsletter.set_articles(category_id, article_ids)
        newsletter = await self._repository.update(newsletter)
        await self._uow.commit()
        return newsletter

    async def update_newsletter(
        self, newsletter_id: int, request: NewsletterUpdateRequest
    ) -> Newsletter:
        """Reconcile a submitted form and, on an approve commit, approve the newsletter."""
        current = await self.get_newsletter(newsletter_id)
        reconciled = self._reconciler.reconcile(current, request)
        newsletter = await self._repository.update(reconciled)
        await self._uow.commit()
        return newsletter

    async def reject_newsletter(self, newsletter_id: int) -> Newsletter:
        newsletter = await self.get_newsletter(newsletter_id)
        newsletter.reject()
        newsletter = await self._repository.update(newsletter)
        await self._uow.commit()
        logger.info("Newsletter %s rejected", newsletter_id)
        return newsletter

    async def send_newsletter(self, newsletter_id: int) -> tuple[int, bool]:
        """Mail an approved newsletter to every subscriber.

        Returns the number of recipients and whether the mailer accepted it.
        """
        newsletter = await self.get_newsletter(newsletter_id)
        if newsletter.status is not NewsletterStatus.APPROVED:
            raise InvalidTransitionError("Newsletter", newsletter.status.value, "sent")

        recipients = [subscriber.email for subscriber in await self._subscribers.get_all()]
        if not recipients:
            logger.info("Newsletter %s has no subscribers to send to", newsletter_id)
            return 0, False

        sections = await self.build_sections(newsletter)
        sent = await self._mailer.send_newsletter(newsletter, sections, recipients)
        if sent:
            newsletter.mark_sent()
            await self._repository.update(newsletter)
            await self._uow.commit()
        return len(recipients), sent

    async def build_sections(self, newsletter: Newsletter) -> list[NewsletterSection]:
        """Resolve categories and articles in display order.

        A category without explicit assignments lists the pool articles
        classified under it.
        """
        articles = {
            article.id: article
            for article in await self._articles.get_many(newsletter.article_ids)
        }
        pool: list[Article] = [
            articles[article_id] for article_id in newsletter.article_ids if article_id in articles
        ]

        sections: list[NewsletterSection] = []
        for entry in newsletter.ordered_categories():
            category = await self._categories.get_by_id(entry.category_id)
            if category is None:
                continue
            if entry.article_ids:
                listed = [articles[aid] for aid in entry.article_ids if aid in articles]
            else:
                listed = [a for a in pool if category.id in a.category_ids]
            sections.append(NewsletterSection(category=category, articles=listed))
        return sections

    async def _ensure_categories_exist(self, category_ids: list[int]) -> None:
        found = {category.id for category in await self._categories.get_many(category_ids)}
        missing = [cid for cid in category_ids if cid not in found]
        if missing:
            raise InvalidReferenceError("Category", missing)

    async def _ensure_articles_exist(self, article_ids: list[int]) -> None:
        found = {article.id for article in await self._articles.get_many(article_ids)}
        missing = [aid for aid in article_ids if aid not in found]
        if missing:
            raise InvalidReferenceError("Article", missing)
