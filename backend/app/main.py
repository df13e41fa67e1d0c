"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.logging_config import configure_logging
from app.api.v1.routes import translation

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging(settings.log_level)

    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; translation calls will fail")
    logger.info(
        "Translation engine configured: provider A=%s (%s), provider B=%s (%s)",
        settings.provider_a_label,
        settings.provider_a_model,
        settings.provider_b_label,
        settings.provider_b_model,
    )

    yield


app = FastAPI(
    title=settings.app_name,
    description="Dual-model translation and QA for dubbed government video",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(translation.router, prefix="/api/v1", tags=["translation"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "NYC Dubbing QA API", "version": "0.1.0"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=settings.debug)
