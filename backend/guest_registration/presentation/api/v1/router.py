"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from guest_registration.presentation.api.v1.endpoints.health import router as health_router
from guest_registration.presentation.api.v1.endpoints.registrations import router as registrations_router
from guest_registration.presentation.api.v1.endpoints.documents import router as documents_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(registrations_router)
router.include_router(documents_router)
