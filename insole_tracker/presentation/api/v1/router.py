"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from insole_tracker.presentation.api.v1.endpoints.health import router as health_router
from insole_tracker.presentation.api.v1.endpoints.insoles import router as insoles_router
from insole_tracker.presentation.api.v1.endpoints.connectivity import router as connectivity_router
from insole_tracker.presentation.api.v1.endpoints.settings import router as settings_router
from insole_tracker.presentation.api.v1.endpoints.notifications import router as notifications_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(insoles_router)
router.include_router(connectivity_router)
router.include_router(settings_router)
router.include_router(notifications_router)
