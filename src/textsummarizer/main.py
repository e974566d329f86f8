"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from textsummarizer.api.errors import register_exception_handlers
from textsummarizer.api.router import router as api_router
from textsummarizer.api.web.views import router as web_router
from textsummarizer.config import Settings, get_settings
from textsummarizer.scheduler.jobs import SchedulerService
from textsummarizer.services.rate_limiter import RateLimiter
from textsummarizer.services.summarizer import (
    OpenAIBackend,
    SummarizationBackend,
    SummarizerService,
)
from textsummarizer.services.validation import RepetitionGuard

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

RATE_LIMIT_HEADERS = ["RateLimit-Limit", "RateLimit-Remaining", "RateLimit-Reset", "Retry-After"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    from textsummarizer.infrastructure.database import engine, init_db

    settings: Settings = app.state.settings
    logger.info("Starting text summarizer...")
    logger.info(f"Environment: {settings.environment}")

    # Startup: ensure schema, start housekeeping jobs
    await init_db()
    scheduler = SchedulerService(app.state.rate_limiter)
    scheduler.start()

    yield

    # Shutdown: stop jobs, release pooled connections
    scheduler.shutdown()
    await engine.dispose()
    logger.info("Shutting down text summarizer...")


def create_app(
    settings: Settings | None = None,
    backend: SummarizationBackend | None = None,
    rate_limiter: RateLimiter | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to build from (defaults to environment)
        backend: Summarization backend (defaults to OpenAI)
        rate_limiter: Limiter for /api/summarize (defaults to one built from settings)
    """
    settings = settings or get_settings()

    docs_kwargs = {}
    if settings.is_production:
        docs_kwargs = {"docs_url": None, "redoc_url": None, "openapi_url": None}

    app = FastAPI(
        title="Text Summarizer",
        description="Summarize text with an LLM and browse a searchable history",
        version="0.1.0",
        lifespan=lifespan,
        **docs_kwargs,
    )

    # Components owned by this application instance
    app.state.settings = settings
    app.state.rate_limiter = rate_limiter or RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.state.repetition_guard = RepetitionGuard(
        max_unit=settings.repetition_max_unit,
        min_repeats=settings.repetition_min_repeats,
    )
    app.state.summarizer = SummarizerService(
        backend
        or OpenAIBackend(
            api_key=settings.openai_api_key,
            model=settings.summarization_model,
        )
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
        expose_headers=RATE_LIMIT_HEADERS,
    )
    register_exception_handlers(app)

    # Include routers
    app.include_router(api_router)
    app.include_router(web_router)

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("textsummarizer.main:app", host=settings.host, port=settings.port)
