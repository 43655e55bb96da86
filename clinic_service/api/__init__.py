"""
API Package - FastAPI Routers

Exports all API routers for main app registration.
"""

from fastapi import APIRouter

from clinic_service.api.clients import router as clients_router
from clinic_service.api.scans import router as scans_router
from clinic_service.api.slots import router as slots_router

# API Version
API_VERSION = "1.0.0"

api_router = APIRouter()
api_router.include_router(slots_router)
api_router.include_router(scans_router)
api_router.include_router(clients_router)

__all__ = [
    "api_router",
    "slots_router",
    "scans_router",
    "clients_router",
    "API_VERSION",
]
