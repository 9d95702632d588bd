# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""EHO Readiness - FastAPI application module."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from beartype import beartype
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.v1 import router as v1_router
from .core.config import get_settings
from .core.logging_utils import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.api_env} mode")
    if not (settings.evidence_api_url and settings.evidence_api_key):
        logger.warning(
            "Evidence store is not configured; readiness requests will fail "
            "until EVIDENCE_API_URL and EVIDENCE_API_KEY are set"
        )

    yield

    logger.info(f"Shutting down {settings.app_name}")


@beartype
def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Inspection readiness scoring for UK food-business sites",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.api_cors_origins),
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(v1_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint returning API information."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "status": "operational",
            "environment": settings.api_env,
        }

    return app


app = create_app()


@beartype
def main() -> None:
    """Run the main application entry point."""
    settings = get_settings()

    uvicorn.run(
        "eho_readiness.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level="info" if not settings.is_production else "error",
    )


if __name__ == "__main__":
    main()
