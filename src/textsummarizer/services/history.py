"""Local summary history kept by API clients."""

import logging

from textsummarizer.domain.summary import SummaryRecord, SummaryStyle, filter_summaries
from textsummarizer.infrastructure.api_client import SummarizerClient

logger = logging.getLogger(__name__)


class SummaryHistory:
    """Client-side cache of fetched summaries with a local search filter.

    The filter only sees what has been fetched so far; it never queries
    the server.
    """

    def __init__(self, client: SummarizerClient) -> None:
        self.client = client
        self.items: list[SummaryRecord] = []
        self.query = ""

    async def load(self) -> list[SummaryRecord]:
        """Replace the cache with the server's most recent summaries."""
        self.items = await self.client.list_summaries()
        logger.info(f"Loaded {len(self.items)} summaries")
        return self.items

    async def summarize(
        self, text: str, style: SummaryStyle = SummaryStyle.CONCISE
    ) -> SummaryRecord:
        """Create a summary and prepend it to the cache."""
        record = await self.client.summarize(text, style)
        self.add(record)
        return record

    def add(self, record: SummaryRecord) -> None:
        """Prepend a newly created record."""
        self.items.insert(0, record)

    def visible(self) -> list[SummaryRecord]:
        """Records matching the current filter."""
        return filter_summaries(self.items, self.query)
