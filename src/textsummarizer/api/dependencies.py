"""FastAPI dependency injection providers."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from textsummarizer.config import Settings
from textsummarizer.domain.errors import RateLimitedError
from textsummarizer.infrastructure.database import get_session
from textsummarizer.services.rate_limiter import RateLimitDecision, RateLimiter
from textsummarizer.services.summarizer import SummarizerService
from textsummarizer.services.summary_service import SummaryService
from textsummarizer.services.validation import RepetitionGuard

logger = logging.getLogger(__name__)

# Type alias for database session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]


def client_address(request: Request, trusted_hops: int = 1) -> str:
    """Resolve the originating address of a request.

    With trusted_hops > 0 the address is taken from X-Forwarded-For, counting
    that many proxies from the right; otherwise the socket peer is used.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if trusted_hops > 0 and forwarded:
        hops = [part.strip() for part in forwarded.split(",") if part.strip()]
        if hops:
            return hops[-trusted_hops] if len(hops) >= trusted_hops else hops[0]
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_app_settings(request: Request) -> Settings:
    """Provide the settings the application was built with."""
    return request.app.state.settings


def get_rate_limiter(request: Request) -> RateLimiter:
    """Provide the application's RateLimiter."""
    return request.app.state.rate_limiter


def get_summarizer(request: Request) -> SummarizerService:
    """Provide the application's SummarizerService."""
    return request.app.state.summarizer


def get_repetition_guard(request: Request) -> RepetitionGuard:
    """Provide the application's RepetitionGuard."""
    return request.app.state.repetition_guard


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
RateLimiterDep = Annotated[RateLimiter, Depends(get_rate_limiter)]
SummarizerDep = Annotated[SummarizerService, Depends(get_summarizer)]
GuardDep = Annotated[RepetitionGuard, Depends(get_repetition_guard)]


def check_rate_limit(
    request: Request, limiter: RateLimiter, settings: Settings
) -> RateLimitDecision:
    """Count a summarize request against its address, raising when over quota.

    The decision is kept on request.state so error responses can carry the
    same RateLimit-* headers as successful ones.
    """
    address = client_address(request, settings.trusted_proxy_hops)
    decision = limiter.hit(address)
    request.state.rate_limit = decision
    if not decision.allowed:
        logger.warning(f"Rate limit exceeded for {address}")
        raise RateLimitedError(headers=decision.headers())
    return decision


async def enforce_rate_limit(
    request: Request,
    response: Response,
    limiter: RateLimiterDep,
    settings: SettingsDep,
) -> RateLimitDecision:
    """Rate limit dependency that also sets RateLimit-* response headers."""
    decision = check_rate_limit(request, limiter, settings)
    response.headers.update(decision.headers())
    return decision


async def get_summary_service(
    session: SessionDep,
    summarizer: SummarizerDep,
    guard: GuardDep,
) -> AsyncGenerator[SummaryService, None]:
    """Provide SummaryService instance."""
    yield SummaryService(session, summarizer, guard)


# Type aliases for commonly used dependencies
RateLimitDep = Annotated[RateLimitDecision, Depends(enforce_rate_limit)]
SummaryServiceDep = Annotated[SummaryService, Depends(get_summary_service)]
