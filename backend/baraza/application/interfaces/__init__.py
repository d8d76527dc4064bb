from .article_repository import ArticleRepository
from .category_repository import CategoryRepository
from .mailer import Mailer
from .newsletter_repository import NewsletterRepository
from .password_hasher import PasswordHasher
from .search_index import SearchIndex
from .subscriber_repository import SubscriberRepository
from .tag_repository import TagRepository
from .unit_of_work import UnitOfWork
from .user_repository import UserRepository

__all__ = [
    "ArticleRepository",
    "CategoryRepository",
    "Mailer",
    "NewsletterRepository",
    "PasswordHasher",
    "SearchIndex",
    "SubscriberRepository",
    "TagRepository",
    "UnitOfWork",
    "UserRepository",
]
