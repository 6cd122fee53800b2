"""Main API router: combines all endpoint routers."""

from fastapi import APIRouter

from mermaid_validator.api.health import router as health_router
from mermaid_validator.api.validation import router as validation_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Diagram validation
api_router.include_router(validation_router, tags=["Validation"])
