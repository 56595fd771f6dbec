"""
Menu category model for organizing menu items
"""

from sqlmodel import Field, SQLModel


class MenuCategory(SQLModel, table=True):
    """Menu category, presented in display_order"""

    __tablename__ = "menu_categories"

    id: str = Field(primary_key=True, max_length=100)

    # Category details
    name: str = Field(max_length=255, nullable=False, description="Category name")
    slug: str = Field(max_length=255, unique=True, index=True, description="URL-safe unique key")

    # Display order
    display_order: int = Field(default=0, index=True, description="Order to display categories in UI")
