from .article import TAG_NAME_MAX_LENGTH, Article, Category, Tag, parse_tag_list
from .newsletter import (
    CategoryNewsletter,
    Newsletter,
    NewsletterArticle,
    NewsletterSection,
    NewsletterStatus,
)
from .subscriber import Subscriber
from .user import GenderCategory, User, UserRole, validate_credentials

__all__ = [
    "Article",
    "Category",
    "Tag",
    "parse_tag_list",
    "TAG_NAME_MAX_LENGTH",
    "CategoryNewsletter",
    "Newsletter",
    "NewsletterArticle",
    "NewsletterSection",
    "NewsletterStatus",
    "Subscriber",
    "GenderCategory",
    "User",
    "UserRole",
    "validate_credentials",
]
