"""
OCEAN Scoring Engine — SQLAlchemy ORM models.

Importing this package registers every table on ``Base.metadata`` so that
Alembic autogenerate can see them.
"""

from ocean_scoring.database import Base
from ocean_scoring.models.ocean_score import OceanScoreRecord

__all__ = [
    "Base",
    "OceanScoreRecord",
]
