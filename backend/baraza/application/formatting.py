"""Presentation helpers shared by API responses and mail templates."""

from baraza.domain.entities import Article

SUMMARY_LENGTH = 150
SUMMARY_OMISSION = "..."
DEFAULT_COVER_IMAGE_PATH = "/assets/z_original.png"


def truncate_summary(summary: str | None, length: int = SUMMARY_LENGTH) -> str:
    """Keep the first ``length`` characters, marking the cut with an ellipsis."""
    if not summary:
        return ""
    if len(summary) <= length:
        return summary
    return summary[:length] + SUMMARY_OMISSION


def cover_image_url_for(article: Article, base_url: str) -> str:
    """The article's cover image, or the site-wide placeholder when it has none."""
    if article.cover_image_url:
        return article.cover_image_url
    return base_url.rstrip("/") + DEFAULT_COVER_IMAGE_PATH
