"""FastAPI application definition."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .deps import lifespan, settings
from .errors import register_exception_handlers
from .routes import api_router

app = FastAPI(
    title="gumboard",
    description="Sticky-note boards for teams",
    version="0.1.0",
    lifespan=lifespan,
    redirect_slashes=False,
)

# CORS middleware for the web frontend; cookies need a concrete origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.auth_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
