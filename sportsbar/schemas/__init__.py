"""
Schemas module
"""

from sportsbar.schemas.content import (
    LandingData,
    LandingUpdate,
    PromotionsData,
    PromotionsUpdate,
    SiteSettingsData,
    SiteSettingsUpdate,
)
from sportsbar.schemas.menu import (
    MenuCategoryCreate,
    MenuCategoryResponse,
    MenuCategoryUpdate,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
)
from sportsbar.schemas.reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationUpdate,
)
from sportsbar.schemas.schedule import (
    EventCreate,
    EventResponse,
    EventUpdate,
    GameCreate,
    GameResponse,
    GameUpdate,
)
from sportsbar.schemas.token import TokenPayload, TokenResponse
from sportsbar.schemas.user import UserCreate, UserLogin, UserResponse

__all__ = [
    "EventCreate",
    "EventResponse",
    "EventUpdate",
    "GameCreate",
    "GameResponse",
    "GameUpdate",
    "LandingData",
    "LandingUpdate",
    "MenuCategoryCreate",
    "MenuCategoryResponse",
    "MenuCategoryUpdate",
    "MenuItemCreate",
    "MenuItemResponse",
    "MenuItemUpdate",
    "PromotionsData",
    "PromotionsUpdate",
    "ReservationCreate",
    "ReservationResponse",
    "ReservationUpdate",
    "SiteSettingsData",
    "SiteSettingsUpdate",
    "TokenPayload",
    "TokenResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
]
