"""HTMX-powered web views."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from textsummarizer.api.dependencies import (
    RateLimiterDep,
    SettingsDep,
    SummaryServiceDep,
    check_rate_limit,
)
from textsummarizer.api.errors import flatten_validation_errors, rate_limit_headers
from textsummarizer.api.schemas import TEXT_MAX_LENGTH, TEXT_MIN_LENGTH, SummarizeRequest
from textsummarizer.api.summaries import normalize_query, parse_int_param
from textsummarizer.domain.errors import SummarizerAppError
from textsummarizer.domain.summary import SummaryStyle
from textsummarizer.repositories.summary_repo import DEFAULT_LIMIT, clamp_offset

logger = logging.getLogger(__name__)

router = APIRouter(tags=["web"])

# Templates configuration
templates = Jinja2Templates(directory=Path(__file__).resolve().parents[2] / "templates")

PAGE_SIZE = DEFAULT_LIMIT

STYLE_LABELS = {
    SummaryStyle.CONCISE: "Concise (3–5 sentences)",
    SummaryStyle.DETAILED: "Detailed (6–10 sentences)",
    SummaryStyle.BULLETS: "Bullet points",
}


def error_messages(exc: ValidationError | SummarizerAppError) -> list[str]:
    """Human-readable messages for the form error box."""
    if isinstance(exc, ValidationError):
        flat = flatten_validation_errors(exc.errors())
        messages = list(flat["formErrors"])
        for field, field_messages in flat["fieldErrors"].items():
            messages.extend(f"{field}: {m}" for m in field_messages)
        return messages
    if exc.message and exc.expose_message:
        return [exc.message]
    return ["Failed to summarize"]


async def _render_list(
    request: Request,
    service: SummaryServiceDep,
    q: str | None,
    offset: int,
) -> HTMLResponse:
    """Render one page of the summary list partial."""
    summaries = await service.list_summaries(q=q, limit=PAGE_SIZE, offset=offset)
    total = await service.count(q=q)

    return templates.TemplateResponse(
        request=request,
        name="partials/summary_list.html",
        context={
            "summaries": summaries,
            "offset": offset + PAGE_SIZE,
            "has_more": offset + len(summaries) < total,
            "q": q or "",
            "first_page": offset == 0,
        },
    )


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, service: SummaryServiceDep) -> HTMLResponse:
    """Render the main page with the form and recent summaries."""
    summaries = await service.list_summaries(limit=PAGE_SIZE, offset=0)
    total = await service.count()

    return templates.TemplateResponse(
        request=request,
        name="index.html",
        context={
            "summaries": summaries,
            "offset": PAGE_SIZE,
            "has_more": len(summaries) < total,
            "q": "",
            "first_page": True,
            "styles": STYLE_LABELS,
            "min_length": TEXT_MIN_LENGTH,
            "max_length": TEXT_MAX_LENGTH,
        },
    )


@router.post("/summaries", response_class=HTMLResponse)
async def create_summary(
    request: Request,
    service: SummaryServiceDep,
    limiter: RateLimiterDep,
    settings: SettingsDep,
    text: Annotated[str, Form()] = "",
    style: Annotated[str, Form()] = SummaryStyle.CONCISE.value,
) -> HTMLResponse:
    """HTMX endpoint for the summarize form - returns a card to prepend."""
    try:
        check_rate_limit(request, limiter, settings)
        payload = SummarizeRequest.model_validate({"text": text, "style": style})
        record = await service.create_summary(payload.text, payload.style)
    except ValidationError as e:
        return _render_form_error(
            request, error_messages(e), status_code=400, headers=rate_limit_headers(request)
        )
    except SummarizerAppError as e:
        return _render_form_error(
            request,
            error_messages(e),
            status_code=e.status_code,
            headers=rate_limit_headers(request, e.headers),
        )

    return templates.TemplateResponse(
        request=request,
        name="partials/summary_card.html",
        context={"summary": record, "clear_error": True},
        status_code=201,
        headers=rate_limit_headers(request),
    )


def _render_form_error(
    request: Request,
    messages: list[str],
    status_code: int,
    headers: dict[str, str] | None = None,
) -> HTMLResponse:
    """Render the error box and retarget the HTMX swap onto it."""
    response = templates.TemplateResponse(
        request=request,
        name="partials/form_error.html",
        context={"messages": messages},
        status_code=status_code,
        headers=headers,
    )
    response.headers["HX-Retarget"] = "#form-error"
    response.headers["HX-Reswap"] = "innerHTML"
    return response


@router.get("/summaries/filter", response_class=HTMLResponse)
async def filter_summaries(
    request: Request,
    service: SummaryServiceDep,
    q: str | None = None,
) -> HTMLResponse:
    """HTMX endpoint for the search box - returns the first page of matches."""
    return await _render_list(request, service, normalize_query(q), offset=0)


@router.get("/summaries/more", response_class=HTMLResponse)
async def load_more_summaries(
    request: Request,
    service: SummaryServiceDep,
    offset: str | None = None,
    q: str | None = None,
) -> HTMLResponse:
    """HTMX endpoint for "load more" - returns the next page."""
    page_offset = clamp_offset(parse_int_param(offset))
    return await _render_list(request, service, normalize_query(q), page_offset)
