"""
Fixture migration bookkeeping, one row per migrated entity kind
"""

from sqlmodel import Field, SQLModel
from datetime import datetime

from sportsbar.core.timeutils import utcnow


class MigrationRecord(SQLModel, table=True):
    """Marks an entity kind as migrated from fixtures"""

    __tablename__ = "migration_state"

    kind: str = Field(primary_key=True, max_length=50)
    inserted: int = 0
    skipped: int = 0
    failed: int = 0
    completed_at: datetime = Field(default_factory=utcnow)
