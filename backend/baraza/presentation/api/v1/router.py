"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from baraza.presentation.api.v1.endpoints.health import router as health_router
from baraza.presentation.api.v1.endpoints.articles import router as articles_router
from baraza.presentation.api.v1.endpoints.taxonomy import router as taxonomy_router
from baraza.presentation.api.v1.endpoints.newsletters import router as newsletters_router
from baraza.presentation.api.v1.endpoints.users import router as users_router
from baraza.presentation.api.v1.endpoints.subscribers import router as subscribers_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(articles_router)
router.include_router(taxonomy_router)
router.include_router(newsletters_router)
router.include_router(users_router)
router.include_router(subscribers_router)
