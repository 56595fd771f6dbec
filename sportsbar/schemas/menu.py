"""
Pydantic schemas for menu categories and items
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from sportsbar.schemas.common import SLUG_PATTERN, normalize_labels


class MenuCategoryCreate(BaseModel):
    """Category creation schema; id is generated when omitted"""
    id: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., max_length=255, pattern=SLUG_PATTERN)
    display_order: int = Field(default=0, ge=0)


class MenuCategoryUpdate(BaseModel):
    """Partial category update"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255, pattern=SLUG_PATTERN)
    display_order: Optional[int] = Field(default=None, ge=0)


class MenuCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    display_order: int


class MenuItemCreate(BaseModel):
    """Menu item creation schema. Prices are integer cents."""
    id: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    price: int = Field(..., ge=0, description="Price in cents")
    image: Optional[str] = Field(default=None, max_length=1000)
    badges: List[str] = Field(default_factory=list)
    allergens: List[str] = Field(default_factory=list)
    published: bool = True

    @field_validator("badges", "allergens", mode="before")
    @classmethod
    def _clean_labels(cls, value):
        return normalize_labels(value)


class MenuItemUpdate(BaseModel):
    """Partial menu item update"""
    category_id: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    price: Optional[int] = Field(default=None, ge=0)
    image: Optional[str] = Field(default=None, max_length=1000)
    badges: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    published: Optional[bool] = None

    @field_validator("badges", "allergens", mode="before")
    @classmethod
    def _clean_labels(cls, value):
        return normalize_labels(value)


class MenuItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    category_id: str
    name: str
    description: Optional[str] = None
    price: int
    image: Optional[str] = None
    badges: List[str]
    allergens: List[str]
    published: bool
