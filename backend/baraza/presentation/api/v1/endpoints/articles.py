"""Article CRUD, search and reindex endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from baraza.config import get_settings
from baraza.application.formatting import cover_image_url_for, truncate_summary
from baraza.application.schemas import ArticleCreate, ArticleUpdate, ArticleResponse
from baraza.application.services import ArticleService
from baraza.domain.authorization import is_permitted
from baraza.domain.entities import Article, User
from baraza.domain.exceptions import (
    EntityNotFoundError,
    IndexWriteError,
    InvalidReferenceError,
    PermissionDeniedError,
    SearchUnavailableError,
    ValidationError,
)
from baraza.infrastructure.dependencies import (
    get_article_service,
    get_current_user,
    require_permission,
)

router = APIRouter(prefix="/articles", tags=["Articles"])


def _to_response(article: Article) -> ArticleResponse:
    return ArticleResponse(
        id=article.id,
        title=article.title,
        content=article.content,
        summary=article.summary,
        summary_excerpt=truncate_summary(article.summary),
        cover_image_url=cover_image_url_for(article, get_settings().public_base_url),
        user_id=article.user_id,
        tag_list=article.tag_list,
        tags=[{"id": t.id, "name": t.name} for t in article.tags],
        categories=[{"id": c.id, "name": c.name} for c in article.categories],
        created_at=article.created_at,
        updated_at=article.updated_at,
    )


@router.get("", response_model=list[ArticleResponse])
async def list_articles(
    skip: int = 0,
    limit: int = 100,
    _: User | None = Depends(require_permission("articles", "index")),
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """Retrieve a paginated list of articles."""
    articles = await service.list_articles(skip=skip, limit=limit)
    return [_to_response(a) for a in articles]


@router.get("/search", response_model=list[ArticleResponse])
async def search_articles(
    q: str | None = Query(None, description="Free text across title, content, tags and categories"),
    tag: str | None = Query(None, description="Exact tag name"),
    category: str | None = Query(None, description="Exact category name"),
    _: User | None = Depends(require_permission("articles", "search")),
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """Search the article index. Exactly one of ``q``, ``tag`` or ``category`` is expected."""
    given = [value for value in (q, tag, category) if value]
    if len(given) != 1:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Provide exactly one of 'q', 'tag' or 'category'",
        )
    try:
        if tag:
            articles = await service.search_by_tag(tag)
        elif category:
            articles = await service.search_by_category(category)
        else:
            articles = await service.search_all(q)
    except SearchUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return [_to_response(a) for a in articles]


@router.post("/reindex")
async def reindex_articles(
    _: User | None = Depends(require_permission("articles", "reindex")),
    service: ArticleService = Depends(get_article_service),
) -> dict:
    """Rebuild the search document of every article."""
    try:
        written = await service.reindex_all()
    except IndexWriteError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return {"indexed": written}


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: int,
    _: User | None = Depends(require_permission("articles", "show")),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Retrieve a single article by ID."""
    try:
        article = await service.get_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(article)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    current_user: User | None = Depends(require_permission("articles", "create")),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new article owned by the acting user."""
    try:
        article = await service.create_article(data, user_id=current_user.id)
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.messages)
    return _to_response(article)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    current_user: User | None = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Update an existing article. Only its author may edit it."""
    try:
        existing = await service.get_article(article_id)
        if not is_permitted(current_user, "articles", "update", existing):
            raise PermissionDeniedError("articles", "update")
        article = await service.update_article(article_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.messages)
    return _to_response(article)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: int,
    _: User | None = Depends(require_permission("articles", "destroy")),
    service: ArticleService = Depends(get_article_service),
) -> None:
    """Delete an article by ID."""
    try:
        await service.delete_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
