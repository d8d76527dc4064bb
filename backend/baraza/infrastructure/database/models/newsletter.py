"""SQLAlchemy ORM models for newsletters, their category entries and article pool."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from baraza.infrastructure.database.base import Base


class NewsletterModel(Base):
    """ORM model — maps to the 'newsletters' table."""

    __tablename__ = "newsletters"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft", index=True)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<NewsletterModel(id={self.id}, status='{self.status}')>"


class CategoryNewsletterModel(Base):
    """One category within one newsletter — maps to 'category_newsletters'."""

    __tablename__ = "category_newsletters"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    newsletter_id: Mapped[int] = mapped_column(
        ForeignKey("newsletters.id", ondelete="CASCADE"), nullable=False
    )
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), nullable=False)
    position_in_newsletter: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        Index("ix_category_newsletters_pair", "newsletter_id", "category_id", unique=True),
    )


class CategoryNewsletterArticleModel(Base):
    """An article listed under a newsletter category, in ``position`` order."""

    __tablename__ = "category_newsletter_articles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    category_newsletter_id: Mapped[int] = mapped_column(
        ForeignKey("category_newsletters.id", ondelete="CASCADE"), nullable=False, index=True
    )
    article_id: Mapped[int] = mapped_column(
        ForeignKey("articles.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class NewsletterArticleModel(Base):
    """An article in a newsletter's candidate pool — maps to 'newsletter_articles'."""

    __tablename__ = "newsletter_articles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    newsletter_id: Mapped[int] = mapped_column(
        ForeignKey("newsletters.id", ondelete="CASCADE"), nullable=False
    )
    article_id: Mapped[int] = mapped_column(
        ForeignKey("articles.id", ondelete="CASCADE"), nullable=False
    )
    position_in_newsletter: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_newsletter_articles_pair", "newsletter_id", "article_id", unique=True),
    )
