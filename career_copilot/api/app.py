"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from career_copilot import __version__
from career_copilot.api.routes import router as pdf_router
from career_copilot.api.tools import router as tools_router
from career_copilot.models.tools import TOOLS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info(f"Starting Career Copilot API with {len(TOOLS)} tools...")
    yield
    logger.info("Shutting down Career Copilot API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Career Copilot API",
        description=(
            "Career-assistant tools backed by a hosted language model: CV optimization, "
            "ATS audit, cover letters, interview simulation and skills-gap analysis. "
            "Tool responses are relayed token by token as Server-Sent Events."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(tools_router)
    application.include_router(pdf_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "career-copilot"}

    return application


app = create_app()
