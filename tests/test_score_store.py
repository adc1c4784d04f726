"""Unit tests for OceanScoreStore — upsert and lookup against a mocked session."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from ocean_scoring.models.ocean_score import OceanScoreRecord
from ocean_scoring.schemas.traits import Facet
from ocean_scoring.services.score_store import OceanScoreStore


def _session(existing=None):
    session = MagicMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = existing
    session.execute = AsyncMock(return_value=result)
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    return session


def _factory(session):
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory


@pytest.fixture
def stored_details(details_from_raw):
    details = details_from_raw(o=4.2, c=3.1, e=2.4, a=3.8, n=1.9)
    return details.model_copy(update={"facets": {Facet.O5_IDEAS: 1.25}})


class TestSave:
    """Tests for the upsert path."""

    @pytest.mark.asyncio
    async def test_insert_new_record(self, stored_details):
        session = _session(existing=None)
        store = OceanScoreStore(_factory(session))
        await store.save("resp-1", "asmt-1", stored_details)

        session.add.assert_called_once()
        record = session.add.call_args.args[0]
        assert isinstance(record, OceanScoreRecord)
        assert record.response_id == "resp-1"
        assert record.assessment_id == "asmt-1"
        assert record.raw["openness"] == 4.2
        assert record.facets == {"O5_Ideas": 1.25}
        session.flush.assert_awaited_once()
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_existing_record(self, stored_details):
        existing = OceanScoreRecord(
            response_id="resp-1",
            assessment_id="old",
            raw={},
            percentile={},
            stanine={},
        )
        session = _session(existing=existing)
        store = OceanScoreStore(_factory(session))
        await store.save("resp-1", "asmt-2", stored_details)

        session.add.assert_not_called()
        assert existing.assessment_id == "asmt-2"
        assert existing.stanine == stored_details.stanine.as_dict()

    @pytest.mark.asyncio
    async def test_caller_session_not_committed(self, stored_details):
        session = _session(existing=None)
        factory = _factory(_session())
        store = OceanScoreStore(factory)
        await store.save("resp-1", "asmt-1", stored_details, db_session=session)

        session.flush.assert_awaited_once()
        session.commit.assert_not_awaited()
        factory.assert_not_called()


class TestLoad:
    """Tests for the lookup path."""

    @pytest.mark.asyncio
    async def test_load_round_trips_details(self, stored_details):
        payload = stored_details.model_dump(mode="json")
        existing = OceanScoreRecord(
            response_id="resp-1",
            assessment_id="asmt-1",
            raw=payload["raw"],
            percentile=payload["percentile"],
            stanine=payload["stanine"],
            facets=payload["facets"],
        )
        store = OceanScoreStore(_factory(_session(existing=existing)))
        loaded = await store.load("resp-1")

        assert loaded == stored_details
        assert loaded.facets[Facet.O5_IDEAS] == 1.25

    @pytest.mark.asyncio
    async def test_load_missing_returns_none(self):
        store = OceanScoreStore(_factory(_session(existing=None)))
        assert await store.load("nope") is None
