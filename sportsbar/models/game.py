"""
Game model for the televised games schedule
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional


class Game(SQLModel, table=True):
    """Scheduled game shown on the bar's screens"""

    __tablename__ = "games"

    id: str = Field(primary_key=True, max_length=100)
    league: str = Field(max_length=50)

    home_team: str = Field(max_length=255)
    away_team: str = Field(max_length=255)
    home_abbr: str = Field(max_length=10)
    away_abbr: str = Field(max_length=10)

    # Naive UTC
    start_time: datetime = Field(index=True)
    channel: Optional[str] = Field(default=None, max_length=100, nullable=True)
