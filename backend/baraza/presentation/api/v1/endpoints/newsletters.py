"""Newsletter curation, approval and delivery endpoints."""

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status

from baraza.application.schemas import (
    NewsletterArticlesAdd,
    NewsletterCreate,
    NewsletterResponse,
    NewsletterSendResponse,
    NewsletterUpdateRequest,
)
from baraza.application.services import NewsletterService
from baraza.domain.entities import User
from baraza.domain.exceptions import (
    EntityNotFoundError,
    InvalidReferenceError,
    InvalidTransitionError,
)
from baraza.infrastructure.dependencies import get_newsletter_service, require_permission

router = APIRouter(prefix="/newsletters", tags=["Newsletters"])


def _raise_http(e: Exception) -> NoReturn:
    if isinstance(e, EntityNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, InvalidReferenceError):
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if isinstance(e, InvalidTransitionError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    raise e


@router.get("", response_model=list[NewsletterResponse])
async def list_newsletters(
    skip: int = 0,
    limit: int = 100,
    _: User | None = Depends(require_permission("newsletters", "index")),
    service: NewsletterService = Depends(get_newsletter_service),
) -> list[NewsletterResponse]:
    newsletters = await service.list_newsletters(skip=skip, limit=limit)
    return [NewsletterResponse.model_validate(n, from_attributes=True) for n in newsletters]


@router.get("/{newsletter_id}", response_model=NewsletterResponse)
async def get_newsletter(
    newsletter_id: int,
    _: User | None = Depends(require_permission("newsletters", "show")),
    service: NewsletterService = Depends(get_newsletter_service),
) -> NewsletterResponse:
    try:
        newsletter = await service.get_newsletter(newsletter_id)
    except EntityNotFoundError as e:
        _raise_http(e)
    return NewsletterResponse.model_validate(newsletter, from_attributes=True)


@router.post("", response_model=NewsletterResponse, status_code=status.HTTP_201_CREATED)
async def create_newsletter(
    data: NewsletterCreate,
    _: User | None = Depends(require_permission("newsletters", "create")),
    service: NewsletterService = Depends(get_newsletter_service),
) -> NewsletterResponse:
    """Start a draft newsletter from categories and candidate articles."""
    try:
        newsletter = await service.create_newsletter(data)
    except InvalidReferenceError as e:
        _raise_http(e)
    return NewsletterResponse.model_validate(newsletter, from_attributes=True)


@router.post("/{newsletter_id}/articles", response_model=NewsletterResponse)
async def add_newsletter_articles(
    newsletter_id: int,
    data: NewsletterArticlesAdd,
    _: User | None = Depends(require_permission("newsletters", "update")),
    service: NewsletterService = Depends(get_newsletter_service),
) -> NewsletterResponse:
    """Add articles to the candidate pool."""
    try:
        newsletter = await service.add_articles(newsletter_id, data.article_ids)
    except (EntityNotFoundError, InvalidReferenceError) as e:
        _raise_http(e)
    return NewsletterResponse.model_validate(newsletter, from_attributes=True)


@router.put(
    "/{newsletter_id}/categories/{category_id}/articles",
    response_model=NewsletterResponse,
)
async def set_category_articles(
    newsletter_id: int,
    category_id: int,
    data: NewsletterArticlesAdd,
    _: User | None = Depends(require_permission("newsletters", "update")),
    service: NewsletterService = Depends(get_newsletter_service),
) -> NewsletterResponse:
    """Replace the ordered articles listed under one category of the newsletter."""
    try:
        newsletter = await service.set_category_articles(
            newsletter_id, category_id, data.article_ids
        )
    except (EntityNotFoundError, InvalidReferenceError) as e:
        _raise_http(e)
    return NewsletterResponse.model_validate(newsletter, from_attributes=True)


@router.patch("/{newsletter_id}", response_model=NewsletterResponse)
async def update_newsletter(
    newsletter_id: int,
    request: NewsletterUpdateRequest,
    _: User | None = Depends(require_permission("newsletters", "update")),
    service: NewsletterService = Depends(get_newsletter_service),
) -> NewsletterResponse:
    """Apply the edit form; a ``commit`` of ``"Approve"`` also approves the newsletter."""
    try:
        newsletter = await service.update_newsletter(newsletter_id, request)
    except (EntityNotFoundError, InvalidReferenceError, InvalidTransitionError) as e:
        _raise_http(e)
    return NewsletterResponse.model_validate(newsletter, from_attributes=True)


@router.post("/{newsletter_id}/reject", response_model=NewsletterResponse)
async def reject_newsletter(
    newsletter_id: int,
    _: User | None = Depends(require_permission("newsletters", "reject")),
    service: NewsletterService = Depends(get_newsletter_service),
) -> NewsletterResponse:
    try:
        newsletter = await service.reject_newsletter(newsletter_id)
    except (EntityNotFoundError, InvalidTransitionError) as e:
        _raise_http(e)
    return NewsletterResponse.model_validate(newsletter, from_attributes=True)


@router.post("/{newsletter_id}/send", response_model=NewsletterSendResponse)
async def send_newsletter(
    newsletter_id: int,
    _: User | None = Depends(require_permission("newsletters", "send")),
    service: NewsletterService = Depends(get_newsletter_service),
) -> NewsletterSendResponse:
    """Mail an approved newsletter to every subscriber."""
    try:
        recipients, sent = await service.send_newsletter(newsletter_id)
    except (EntityNotFoundError, InvalidTransitionError) as e:
        _raise_http(e)
    return NewsletterSendResponse(newsletter_id=newsletter_id, recipients=recipients, sent=sent)
