"""
OCEAN Scoring Engine — OceanScoreStore: persistence for scored responses

Saves and loads ``OceanScoreDetails`` keyed by response id in the
``ocean_scores`` table.  ``save`` is an upsert: a second save for the same
response id overwrites the stored scores.

Both methods accept an optional ``db_session``.  When ``None`` is passed the
store opens (and commits/closes) its own session from the factory it was
built with.  When an existing session is provided, the caller is
responsible for commit/rollback.
"""

from __future__ import annotations

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ocean_scoring.models.ocean_score import OceanScoreRecord
from ocean_scoring.schemas.scoring import OceanScoreDetails

logger = structlog.get_logger("ocean.score_store")


class OceanScoreStore:
    """Async upsert / lookup of ``OceanScoreDetails``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    # ══════════════════════════════════════════════════════════════════════
    # 1. save — upsert by response id
    # ══════════════════════════════════════════════════════════════════════

    async def save(
        self,
        response_id: str,
        assessment_id: str,
        details: OceanScoreDetails,
        db_session: AsyncSession | None = None,
    ) -> None:
        """Persist ``details`` for ``response_id``.

        Parameters
        ----------
        response_id:
            Unique key of the scored response.
        assessment_id:
            Assessment the response belongs to.
        details:
            Scores to store; enums are written by value.
        db_session:
            Optional caller-managed session.
        """
        payload = details.model_dump(mode="json")
        log = logger.bind(response_id=response_id, assessment_id=assessment_id)

        async def _apply(session: AsyncSession) -> None:
            stmt = select(OceanScoreRecord).where(
                OceanScoreRecord.response_id == response_id
            )
            result = await session.execute(stmt)
            record = result.scalar_one_or_none()

            if record is None:
                session.add(
                    OceanScoreRecord(
                        response_id=response_id,
                        assessment_id=assessment_id,
                        raw=payload["raw"],
                        percentile=payload["percentile"],
                        stanine=payload["stanine"],
                        facets=payload["facets"],
                    )
                )
                log.info("score_store.inserted")
            else:
                record.assessment_id = assessment_id
                record.raw = payload["raw"]
                record.percentile = payload["percentile"]
                record.stanine = payload["stanine"]
                record.facets = payload["facets"]
                log.info("score_store.updated")

            await session.flush()

        if db_session is not None:
            await _apply(db_session)
        else:
            async with self.session_factory() as session:
                await _apply(session)
                await session.commit()

    # ══════════════════════════════════════════════════════════════════════
    # 2. load — lookup by response id
    # ══════════════════════════════════════════════════════════════════════

    async def load(
        self,
        response_id: str,
        db_session: AsyncSession | None = None,
    ) -> Optional[OceanScoreDetails]:
        """Return the stored scores for ``response_id`` or ``None``."""

        async def _fetch(session: AsyncSession) -> Optional[OceanScoreRecord]:
            stmt = select(OceanScoreRecord).where(
                OceanScoreRecord.response_id == response_id
            )
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

        if db_session is not None:
            record = await _fetch(db_session)
        else:
            async with self.session_factory() as session:
                record = await _fetch(session)

        if record is None:
            logger.debug("score_store.miss", response_id=response_id)
            return None

        return OceanScoreDetails.model_validate(
            {
                "raw": record.raw,
                "percentile": record.percentile,
                "stanine": record.stanine,
                "facets": record.facets,
            }
        )
