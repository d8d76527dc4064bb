"""Pydantic DTOs for newsletter composition and the nested update form."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from baraza.domain.entities import NewsletterStatus

APPROVE_COMMIT = "Approve"


class CategoryNewsletterAttributes(BaseModel):
    """One category ordering update. ``id`` and ``newsletter_id`` are accepted but not trusted."""

    category_id: int
    position_in_newsletter: int | None = None
    id: int | None = None
    newsletter_id: int | None = None


class ArticleAttributes(BaseModel):
    """Position update for one article of the newsletter."""

    id: int
    position_in_newsletter: int | None = None


class NewsletterAttributes(BaseModel):
    """Nested ``newsletter`` part of the update form.

    ``article_ids`` is the desired membership; ``None`` means the form did
    not send it and the membership stays as it is.
    """

    category_newsletters_attributes: list[CategoryNewsletterAttributes] = Field(default_factory=list)
    article_ids: list[int] | None = None
    articles_attributes: list[ArticleAttributes] = Field(default_factory=list)

    @field_validator("article_ids", mode="before")
    @classmethod
    def _drop_blank_ids(cls, value: Any) -> Any:
        # HTML forms send an empty string so an empty selection is still submitted.
        if isinstance(value, list):
            return [item for item in value if not (isinstance(item, str) and not item.strip())]
        return value


class NewsletterUpdateRequest(BaseModel):
    """Body of ``PATCH /newsletters/{id}``."""

    newsletter: NewsletterAttributes = Field(default_factory=NewsletterAttributes)
    commit: str | None = None

    @property
    def approve(self) -> bool:
        return self.commit == APPROVE_COMMIT


class NewsletterCreate(BaseModel):
    category_ids: list[int] = Field(default_factory=list)
    article_ids: list[int] = Field(default_factory=list)


class NewsletterArticlesAdd(BaseModel):
    article_ids: list[int] = Field(..., min_length=1)


class CategoryNewsletterResponse(BaseModel):
    id: int | None
    category_id: int
    position_in_newsletter: int | None
    article_ids: list[int]

    model_config = {"from_attributes": True}


class NewsletterArticleResponse(BaseModel):
    article_id: int
    position_in_newsletter: int | None

    model_config = {"from_attributes": True}


class NewsletterResponse(BaseModel):
    id: int
    status: NewsletterStatus
    category_newsletters: list[CategoryNewsletterResponse]
    articles: list[NewsletterArticleResponse]
    sent_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class NewsletterSendResponse(BaseModel):
    newsletter_id: int
    recipients: int
    sent: bool
