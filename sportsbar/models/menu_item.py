"""
Menu item model
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, JSON
from typing import List, Optional


class MenuItem(SQLModel, table=True):
    """Menu item shown on the public menu"""

    __tablename__ = "menu_items"

    id: str = Field(primary_key=True, max_length=100)
    category_id: str = Field(
        foreign_key="menu_categories.id",
        index=True,
        description="Category this item belongs to"
    )

    # Item details
    name: str = Field(max_length=255, nullable=False, description="Item name")
    description: Optional[str] = Field(default=None, max_length=2000, nullable=True)

    # Pricing, in cents to avoid float issues
    price: int = Field(default=0, description="Price in cents")

    image: Optional[str] = Field(default=None, max_length=1000, nullable=True, description="Image URL or path")

    # Free-form labels, always a list (empty when unset)
    badges: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    allergens: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    published: bool = Field(default=True, description="Whether item is shown publicly")
