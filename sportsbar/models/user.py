"""
Admin user model
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional

from sportsbar.core.timeutils import utcnow


class User(SQLModel, table=True):
    """Admin panel account"""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Authentication
    username: str = Field(max_length=255, unique=True, index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(nullable=False)

    created_at: datetime = Field(default_factory=utcnow)
