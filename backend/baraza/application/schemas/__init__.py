from .article import (
    ArticleCreate,
    ArticleResponse,
    ArticleUpdate,
    CategoryCreate,
    CategorySchema,
    TagSchema,
)
from .newsletter import (
    APPROVE_COMMIT,
    ArticleAttributes,
    CategoryNewsletterAttributes,
    NewsletterArticlesAdd,
    NewsletterAttributes,
    NewsletterCreate,
    NewsletterResponse,
    NewsletterSendResponse,
    NewsletterUpdateRequest,
)
from .subscriber import SubscriberCreate, SubscriberResponse
from .user import EmailChange, UserCreate, UserResponse, UserUpdate

__all__ = [
    "ArticleCreate",
    "ArticleResponse",
    "ArticleUpdate",
    "CategoryCreate",
    "CategorySchema",
    "TagSchema",
    "APPROVE_COMMIT",
    "ArticleAttributes",
    "CategoryNewsletterAttributes",
    "NewsletterArticlesAdd",
    "NewsletterAttributes",
    "NewsletterCreate",
    "NewsletterResponse",
    "NewsletterSendResponse",
    "NewsletterUpdateRequest",
    "SubscriberCreate",
    "SubscriberResponse",
    "EmailChange",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
