"""Tests for SummaryRepository against an in-memory SQLite database."""

import pytest

from textsummarizer.domain.summary import SummaryStyle
from textsummarizer.repositories.summary_repo import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    SummaryRepository,
    clamp_limit,
    clamp_offset,
)


class TestClamping:
    """Tests for limit/offset clamping helpers."""

    def test_limit_default(self):
        assert clamp_limit(None) == DEFAULT_LIMIT == 50

    def test_limit_upper_bound(self):
        assert clamp_limit(1000) == MAX_LIMIT == 100

    def test_limit_lower_bound(self):
        assert clamp_limit(0) == 1
        assert clamp_limit(-20) == 1

    def test_limit_in_range(self):
        assert clamp_limit(25) == 25

    def test_offset_default(self):
        assert clamp_offset(None) == 0

    def test_offset_negative(self):
        assert clamp_offset(-5) == 0

    def test_offset_positive(self):
        assert clamp_offset(120) == 120


class TestCreateAndGet:
    """Tests for create and get_by_id."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(self, test_session):
        repo = SummaryRepository(test_session)

        record = await repo.create("original text", "short", SummaryStyle.DETAILED)

        assert record.id is not None
        assert record.created_at is not None
        assert record.style == "detailed"

    @pytest.mark.asyncio
    async def test_ids_strictly_increase(self, test_session):
        repo = SummaryRepository(test_session)

        ids = [
            (await repo.create(f"text {i}", f"summary {i}", SummaryStyle.CONCISE)).id
            for i in range(5)
        ]

        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    @pytest.mark.asyncio
    async def test_get_by_id_round_trip(self, test_session):
        repo = SummaryRepository(test_session)
        created = await repo.create("the text", "the summary", SummaryStyle.BULLETS)
        await test_session.commit()

        fetched = await repo.get_by_id(created.id)

        assert fetched is not None
        assert fetched.text == "the text"
        assert fetched.summary == "the summary"
        assert fetched.style == "bullets"

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, test_session):
        repo = SummaryRepository(test_session)
        assert await repo.get_by_id(999999) is None

    @pytest.mark.asyncio
    async def test_get_out_of_range_id_returns_none(self, test_session):
        repo = SummaryRepository(test_session)
        assert await repo.get_by_id(2**70) is None


class TestListSummaries:
    """Tests for list_summaries ordering, search and pagination."""

    @pytest.fixture
    async def seeded_repo(self, test_session):
        repo = SummaryRepository(test_session)
        await repo.create("Solar FOO panels", "energy news", SummaryStyle.CONCISE)
        await repo.create("Budget debate", "the foo committee met", SummaryStyle.DETAILED)
        await repo.create("Weather report", "rain expected", SummaryStyle.BULLETS)
        await repo.create("100% renewable", "grid_scale storage", SummaryStyle.CONCISE)
        await test_session.commit()
        return repo

    @pytest.mark.asyncio
    async def test_newest_first(self, seeded_repo):
        records = await seeded_repo.list_summaries()
        texts = [r.text for r in records]
        assert texts == ["100% renewable", "Weather report", "Budget debate", "Solar FOO panels"]

    @pytest.mark.asyncio
    async def test_search_matches_text_or_summary_case_insensitive(self, seeded_repo):
        records = await seeded_repo.list_summaries(q="foo")
        assert [r.text for r in records] == ["Budget debate", "Solar FOO panels"]

    @pytest.mark.asyncio
    async def test_search_no_match(self, seeded_repo):
        assert await seeded_repo.list_summaries(q="volcano") == []

    @pytest.mark.asyncio
    async def test_search_wildcards_are_literal(self, seeded_repo):
        percent = await seeded_repo.list_summaries(q="%")
        assert [r.text for r in percent] == ["100% renewable"]

        underscore = await seeded_repo.list_summaries(q="d_s")
        assert [r.text for r in underscore] == ["100% renewable"]

    @pytest.mark.asyncio
    async def test_search_folds_ascii_case_only(self, test_session):
        repo = SummaryRepository(test_session)
        await repo.create("ÉCOLE Jules Ferry reopens", "classes resume", SummaryStyle.CONCISE)
        await test_session.commit()

        assert await repo.list_summaries(q="école") == []
        assert len(await repo.list_summaries(q="ÉCOLE")) == 1
        assert len(await repo.list_summaries(q="jules")) == 1
        assert await repo.count(q="école") == 0

    @pytest.mark.asyncio
    async def test_limit_and_offset(self, seeded_repo):
        page = await seeded_repo.list_summaries(limit=2, offset=1)
        assert [r.text for r in page] == ["Weather report", "Budget debate"]

    @pytest.mark.asyncio
    async def test_limits_are_clamped(self, seeded_repo):
        assert len(await seeded_repo.list_summaries(limit=0)) == 1
        assert len(await seeded_repo.list_summaries(limit=1000)) == 4
        assert len(await seeded_repo.list_summaries(offset=-5)) == 4

    @pytest.mark.asyncio
    async def test_count(self, seeded_repo):
        assert await seeded_repo.count() == 4
        assert await seeded_repo.count(q="FOO") == 2
