from .article import ArticleModel, CategoryModel, TagModel, article_categories, article_tags
from .newsletter import (
    CategoryNewsletterArticleModel,
    CategoryNewsletterModel,
    NewsletterArticleModel,
    NewsletterModel,
)
from .subscriber import SubscriberModel
from .user import UserModel

__all__ = [
    "ArticleModel",
    "CategoryModel",
    "TagModel",
    "article_categories",
    "article_tags",
    "CategoryNewsletterArticleModel",
    "CategoryNewsletterModel",
    "NewsletterArticleModel",
    "NewsletterModel",
    "SubscriberModel",
    "UserModel",
]
