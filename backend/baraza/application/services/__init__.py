from .article_service import ArticleService
from .editor_welcome_notifier import EditorWelcomeNotifier
from .event_dispatcher import EventDispatcher
from .newsletter_reconciler import NewsletterUpdateReconciler
from .newsletter_service import NewsletterService
from .search_index_sync import SearchIndexSync
from .subscriber_service import SubscriberService
from .taxonomy_service import TaxonomyService
from .user_service import UserService

__all__ = [
    "ArticleService",
    "EditorWelcomeNotifier",
    "EventDispatcher",
    "NewsletterUpdateReconciler",
    "NewsletterService",
    "SearchIndexSync",
    "SubscriberService",
    "TaxonomyService",
    "UserService",
]
