"""API router aggregator."""

from fastapi import APIRouter

from textsummarizer.api.schemas import HealthResponse
from textsummarizer.api.summaries import router as summaries_router

router = APIRouter(prefix="/api")
router.include_router(summaries_router)


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(ok=True)
