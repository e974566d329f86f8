"""Summary domain entity."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class SummaryStyle(StrEnum):
    """Presentation modes a summary can be requested in."""

    CONCISE = "concise"
    DETAILED = "detailed"
    BULLETS = "bullets"


@dataclass
class SummaryRecord:
    """Represents a persisted summary of a submitted text."""

    id: int
    text: str
    summary: str
    style: SummaryStyle
    created_at: datetime

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against text or summary."""
        needle = query.lower()
        return needle in self.text.lower() or needle in self.summary.lower()

    @classmethod
    def from_api(cls, data: dict) -> "SummaryRecord":
        """Create SummaryRecord from an API response body."""
        return cls(
            id=int(data["id"]),
            text=data["text"],
            summary=data["summary"],
            style=SummaryStyle(data["style"]),
            created_at=datetime.fromisoformat(data["created_at"]),
        )


def filter_summaries(records: Iterable[SummaryRecord], query: str | None) -> list[SummaryRecord]:
    """Filter already-fetched records by a free-text query.

    A blank query returns every record, in the given order.
    """
    records = list(records)
    if not query or not query.strip():
        return records
    return [r for r in records if r.matches(query)]
