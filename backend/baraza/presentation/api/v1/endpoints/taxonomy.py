"""Tag and category vocabulary endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from baraza.application.schemas import CategoryCreate, CategorySchema, TagSchema
from baraza.application.services import TaxonomyService
from baraza.domain.entities import User
from baraza.domain.exceptions import DuplicateEntityError
from baraza.infrastructure.dependencies import get_taxonomy_service, require_permission

router = APIRouter(tags=["Taxonomy"])


@router.get("/tags", response_model=list[TagSchema])
async def list_tags(
    _: User | None = Depends(require_permission("tags", "index")),
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> list[TagSchema]:
    tags = await service.list_tags()
    return [TagSchema.model_validate(t, from_attributes=True) for t in tags]


@router.get("/categories", response_model=list[CategorySchema])
async def list_categories(
    _: User | None = Depends(require_permission("categories", "index")),
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> list[CategorySchema]:
    categories = await service.list_categories()
    return [CategorySchema.model_validate(c, from_attributes=True) for c in categories]


@router.post("/categories", response_model=CategorySchema, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    _: User | None = Depends(require_permission("categories", "create")),
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> CategorySchema:
    """Create a category. Names are unique."""
    try:
        category = await service.create_category(data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return CategorySchema.model_validate(category, from_attributes=True)
