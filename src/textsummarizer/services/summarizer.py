"""OpenAI-powered text summarization gateway using the Responses API."""

import logging
from abc import ABC, abstractmethod

import openai
from openai import AsyncOpenAI

from textsummarizer.config import get_settings
from textsummarizer.domain.errors import (
    UpstreamEmptyError,
    UpstreamFailureError,
    UpstreamRateLimitedError,
)
from textsummarizer.domain.summary import SummaryStyle

logger = logging.getLogger(__name__)
settings = get_settings()


STYLE_INSTRUCTIONS: dict[SummaryStyle, str] = {
    SummaryStyle.CONCISE: "Summarize in 3–5 sentences, plain language.",
    SummaryStyle.DETAILED: (
        "Summarize in 6–10 sentences capturing key arguments, data points, and caveats."
    ),
    SummaryStyle.BULLETS: "Summarize as 5–8 bullet points. Use short bullets.",
}

FIDELITY_RULES = """Rules:
- Preserve key facts and numbers.
- Be faithful, do not invent details.
- Write in English."""

INPUT_TEMPLATE = """{instructions}

---
TEXT TO SUMMARIZE:
{text}"""


def build_instructions(style: SummaryStyle) -> str:
    """Build the summarizer instructions for a style."""
    return f"You are an expert text summarizer. {STYLE_INSTRUCTIONS[style]}\n\n{FIDELITY_RULES}"


class SummarizationBackend(ABC):
    """External capability that turns text plus instructions into a summary."""

    @abstractmethod
    async def summarize(self, text: str, instructions: str) -> str:
        """Return the raw summary text.

        Raises:
            UpstreamRateLimitedError: The provider throttled the request
            UpstreamFailureError: Any other provider failure
        """
        pass


class OpenAIBackend(SummarizationBackend):
    """Summarization backend calling the OpenAI Responses API."""

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        """Initialize the backend."""
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.client = AsyncOpenAI(api_key=self.api_key) if self.api_key else None
        self.model = model or settings.summarization_model

    async def summarize(self, text: str, instructions: str) -> str:
        """Submit a single input string holding both instructions and text."""
        if self.client is None:
            logger.warning("OpenAI API key not configured")
            raise UpstreamFailureError("OpenAI API key not configured")

        try:
            response = await self.client.responses.create(
                model=self.model,
                input=INPUT_TEMPLATE.format(instructions=instructions, text=text),
            )
        except openai.RateLimitError as e:
            logger.warning(f"OpenAI rate limit reached: {e}")
            raise UpstreamRateLimitedError() from e
        except openai.APIStatusError as e:
            logger.error(f"OpenAI returned HTTP {e.status_code}: {e}")
            raise UpstreamFailureError(f"OpenAI returned HTTP {e.status_code}") from e
        except openai.OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise UpstreamFailureError(str(e)) from e

        return response.output_text or ""


class SummarizerService:
    """Service for generating summaries of submitted texts."""

    def __init__(self, backend: SummarizationBackend) -> None:
        """Initialize the summarizer with a backend."""
        self.backend = backend

    async def summarize(self, text: str, style: SummaryStyle) -> str:
        """Summarize text in the requested style.

        Raises:
            UpstreamEmptyError: The backend produced only whitespace
        """
        instructions = build_instructions(style)
        raw = await self.backend.summarize(text, instructions)
        summary = (raw or "").strip()
        if not summary:
            logger.error(f"Upstream returned an empty summary for style={style}")
            raise UpstreamEmptyError()
        return summary
