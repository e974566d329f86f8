"""Summary repository for database operations."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from textsummarizer.domain.summary import SummaryStyle
from textsummarizer.infrastructure.models import SummaryModel

DEFAULT_LIMIT = 50
MAX_LIMIT = 100

# SQLite INTEGER is a signed 64-bit value
_MAX_ID = 2**63 - 1


def clamp_limit(limit: int | None) -> int:
    """Clamp a page size to [1, MAX_LIMIT], defaulting when absent."""
    if limit is None:
        return DEFAULT_LIMIT
    return min(MAX_LIMIT, max(1, limit))


def clamp_offset(offset: int | None) -> int:
    """Clamp an offset to be non-negative, defaulting to 0."""
    if offset is None:
        return 0
    return min(_MAX_ID, max(0, offset))


def _search_clause(q: str) -> ColumnElement[bool]:
    """Case-insensitive literal substring match on text or summary.

    On SQLite, lower() only folds ASCII letters.
    """
    return or_(
        SummaryModel.text.icontains(q, autoescape=True),
        SummaryModel.summary.icontains(q, autoescape=True),
    )


class SummaryRepository:
    """Repository for append-only Summary records.

    Records are never updated or deleted once created.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(self, text: str, summary: str, style: SummaryStyle) -> SummaryModel:
        """Append a summary record and assign its id and created_at."""
        model = SummaryModel(text=text, summary=summary, style=str(style))
        self.session.add(model)
        await self.session.flush()
        return model

    async def get_by_id(self, summary_id: int) -> SummaryModel | None:
        """Get a summary by its ID."""
        if not -_MAX_ID <= summary_id <= _MAX_ID:
            return None
        stmt = select(SummaryModel).where(SummaryModel.id == summary_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_summaries(
        self,
        q: str | None = None,
        limit: int | None = DEFAULT_LIMIT,
        offset: int | None = 0,
    ) -> list[SummaryModel]:
        """List summaries newest first, optionally filtered by a search query."""
        stmt = select(SummaryModel)
        if q:
            stmt = stmt.where(_search_clause(q))

        stmt = (
            stmt.order_by(SummaryModel.created_at.desc(), SummaryModel.id.desc())
            .offset(clamp_offset(offset))
            .limit(clamp_limit(limit))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, q: str | None = None) -> int:
        """Count summaries, optionally filtered by a search query."""
        stmt = select(func.count(SummaryModel.id))
        if q:
            stmt = stmt.where(_search_clause(q))
        result = await self.session.execute(stmt)
        return result.scalar() or 0
