"""API route modules."""

from fastapi import APIRouter

from gumboard.entrypoints.api.routes.auth import router as auth_router
from gumboard.entrypoints.api.routes.boards import router as boards_router
from gumboard.entrypoints.api.routes.notes import router as notes_router
from gumboard.entrypoints.api.routes.organizations import router as organizations_router

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(auth_router)
api_router.include_router(organizations_router)
api_router.include_router(boards_router)
api_router.include_router(notes_router)

__all__ = ["api_router"]
