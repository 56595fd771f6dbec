"""
Event model for specials, watch parties and live music
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, JSON
from datetime import datetime
from typing import List, Optional


class Event(SQLModel, table=True):
    """Bar event, listed by start_date"""

    __tablename__ = "events"

    id: str = Field(primary_key=True, max_length=100)
    title: str = Field(max_length=255, nullable=False)
    slug: str = Field(max_length=255, unique=True, index=True)

    # Naive UTC
    start_date: datetime = Field(index=True)
    end_date: datetime

    description: Optional[str] = Field(default=None, nullable=True)
    image: Optional[str] = Field(default=None, max_length=1000, nullable=True)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
