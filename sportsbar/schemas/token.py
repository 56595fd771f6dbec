"""
Pydantic schemas for authentication and tokens
"""

from pydantic import BaseModel, Field
from datetime import datetime


class TokenPayload(BaseModel):
    """JWT token payload"""
    sub: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    exp: datetime = Field(..., description="Expiration time")


class TokenResponse(BaseModel):
    """Token response"""
    access_token: str
    token_type: str = "bearer"
    user_id: int
    username: str
