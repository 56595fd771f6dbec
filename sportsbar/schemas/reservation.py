"""
Pydantic schemas for reservations
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional

from sportsbar.models.reservation import ReservationStatus


class ReservationCreate(BaseModel):
    """Public reservation request. id, status and created_at are server-set."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=3, max_length=50)
    party_size: int = Field(..., ge=1, le=50)
    # Combined date and time; the booking form posts it as "datetime"
    scheduled_for: datetime = Field(..., validation_alias=AliasChoices("scheduled_for", "datetime"))
    special_requests: Optional[str] = Field(default=None, max_length=2000)


class ReservationUpdate(BaseModel):
    """Administrative status transition"""
    status: ReservationStatus


class ReservationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    party_size: int
    scheduled_for: datetime
    special_requests: Optional[str] = None
    status: ReservationStatus
    created_at: datetime
