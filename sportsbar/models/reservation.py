"""
Reservation model
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid

from sportsbar.core.timeutils import utcnow


class ReservationStatus(str, Enum):
    """Reservation lifecycle status"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Reservation(SQLModel, table=True):
    """Table reservation; only status changes after creation"""

    __tablename__ = "reservations"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True, max_length=36)

    # Guest
    name: str = Field(max_length=255)
    email: str = Field(max_length=255)
    phone: str = Field(max_length=50)
    party_size: int

    # Requested date and time, naive UTC
    scheduled_for: datetime = Field(index=True)
    special_requests: Optional[str] = Field(default=None, max_length=2000, nullable=True)

    status: ReservationStatus = Field(default=ReservationStatus.PENDING, index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)
