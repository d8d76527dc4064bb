"""Reconciles a submitted newsletter form against the current composition.

The form carries category positions, the desired article membership,
per-article positions and a commit intent. Position entries for articles
that are no longer in the membership are dropped: edit forms can still
carry rows for articles the editor has just unticked.
"""

import copy
import logging

from baraza.application.schemas import ArticleAttributes, NewsletterUpdateRequest
from baraza.domain.entities import Newsletter

logger = logging.getLogger(__name__)


class NewsletterUpdateReconciler:
    """Applies an update request to a working copy of a newsletter.

    The newsletter passed in is never mutated, so a failure part-way
    leaves the caller's entity exactly as it was.
    """

    def reconcile(self, newsletter: Newsletter, request: NewsletterUpdateRequest) -> Newsletter:
        attributes = request.newsletter
        working = copy.deepcopy(newsletter)

        desired_ids = (
            list(dict.fromkeys(attributes.article_ids))
            if attributes.article_ids is not None
            else working.article_ids
        )
        positions = self.filter_article_positions(attributes.articles_attributes, desired_ids)

        for entry in attributes.category_newsletters_attributes:
            working.set_category_order(entry.category_id, entry.position_in_newsletter)

        working.replace_articles(desired_ids, positions)

        if request.approve:
            working.approve()
            logger.info("Newsletter %s approved", working.id)
        return working

    @staticmethod
    def filter_article_positions(
        articles_attributes: list[ArticleAttributes], desired_ids: list[int]
    ) -> dict[int, int | None]:
        """Positions keyed by article id, restricted to ``desired_ids``.

        Later entries for the same article win.
        """
        allowed = set(desired_ids)
        positions: dict[int, int | None] = {}
        dropped = 0
        for entry in articles_attributes:
            if entry.id not in allowed:
                dropped += 1
                continue
            positions[entry.id] = entry.position_in_newsletter
        if dropped:
            logger.debug("Dropped %d stale article position entries", dropped)
        return positions
