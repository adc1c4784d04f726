"""
OCEAN Scoring Engine — OceanScoreRecord model (one scored response).
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from ocean_scoring.database import Base

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
JsonType = JSON().with_variant(JSONB(), "postgresql")


class OceanScoreRecord(Base):
    __tablename__ = "ocean_scores"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    response_id: Mapped[str] = mapped_column(
        String, unique=True, index=True, nullable=False
    )
    assessment_id: Mapped[str] = mapped_column(String, index=True, nullable=False)
    raw: Mapped[dict] = mapped_column(
        JsonType, nullable=False, comment="5 raw trait scores (1-5)"
    )
    percentile: Mapped[dict] = mapped_column(
        JsonType, nullable=False, comment="5 trait percentiles (1-99)"
    )
    stanine: Mapped[dict] = mapped_column(
        JsonType, nullable=False, comment="5 trait stanines (1-9)"
    )
    facets: Mapped[dict | None] = mapped_column(
        JsonType, nullable=True, comment="Facet code -> mean score"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )

    def __repr__(self) -> str:
        return (
            f"<OceanScoreRecord response={self.response_id!r} "
            f"assessment={self.assessment_id!r}>"
        )
