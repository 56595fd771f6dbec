"""
Pydantic schemas for events and the games schedule
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import datetime
from typing import List, Optional

from sportsbar.core.timeutils import to_storage_time
from sportsbar.schemas.common import SLUG_PATTERN, normalize_labels


class EventCreate(BaseModel):
    """Event creation schema"""
    id: Optional[str] = Field(default=None, min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., max_length=255, pattern=SLUG_PATTERN)
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=1000)
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, value):
        return normalize_labels(value)

    @model_validator(mode="after")
    def _check_dates(self):
        if to_storage_time(self.end_date) < to_storage_time(self.start_date):
            raise ValueError("end_date must not be before start_date")
        return self


class EventUpdate(BaseModel):
    """Partial event update"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255, pattern=SLUG_PATTERN)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=1000)
    tags: Optional[List[str]] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, value):
        return normalize_labels(value)

    @model_validator(mode="after")
    def _check_dates(self):
        if self.start_date and self.end_date and to_storage_time(self.end_date) < to_storage_time(self.start_date):
            raise ValueError("end_date must not be before start_date")
        return self


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
    image: Optional[str] = None
    tags: List[str]


class GameCreate(BaseModel):
    """Game creation schema"""
    id: Optional[str] = Field(default=None, min_length=1, max_length=100)
    league: str = Field(..., min_length=1, max_length=50)
    home_team: str = Field(..., min_length=1, max_length=255)
    away_team: str = Field(..., min_length=1, max_length=255)
    home_abbr: str = Field(..., min_length=1, max_length=10)
    away_abbr: str = Field(..., min_length=1, max_length=10)
    start_time: datetime
    channel: Optional[str] = Field(default=None, max_length=100)


class GameUpdate(BaseModel):
    """Partial game update"""
    league: Optional[str] = Field(default=None, min_length=1, max_length=50)
    home_team: Optional[str] = Field(default=None, min_length=1, max_length=255)
    away_team: Optional[str] = Field(default=None, min_length=1, max_length=255)
    home_abbr: Optional[str] = Field(default=None, min_length=1, max_length=10)
    away_abbr: Optional[str] = Field(default=None, min_length=1, max_length=10)
    start_time: Optional[datetime] = None
    channel: Optional[str] = Field(default=None, max_length=100)


class GameResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    league: str
    home_team: str
    away_team: str
    home_abbr: str
    away_abbr: str
    start_time: datetime
    channel: Optional[str] = None
