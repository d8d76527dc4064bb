from .article_repository import SQLAlchemyArticleRepository
from .newsletter_repository import SQLAlchemyNewsletterRepository
from .subscriber_repository import SQLAlchemySubscriberRepository
from .tag_repository import SQLAlchemyCategoryRepository, SQLAlchemyTagRepository
from .user_repository import SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyArticleRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyNewsletterRepository",
    "SQLAlchemySubscriberRepository",
    "SQLAlchemyTagRepository",
    "SQLAlchemyUserRepository",
]
