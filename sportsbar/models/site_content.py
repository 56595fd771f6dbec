"""
Singleton content records: site settings, promotions and landing copy

Each table holds at most one row, addressed by SINGLETON_ID. Nested sections
are stored as JSON and shaped by the schemas in sportsbar.schemas.content.
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, JSON
from typing import Any, Dict, List

SINGLETON_ID = "main"


class SiteSettingsRecord(SQLModel, table=True):
    """Business details, opening hours, hero and footer"""

    __tablename__ = "site_settings"

    id: str = Field(default=SINGLETON_ID, primary_key=True, max_length=20)
    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    hours: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    socials: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    hero: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    footer: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))


class PromotionsRecord(SQLModel, table=True):
    """Landing redirect, side banner and happy hour promotions"""

    __tablename__ = "promotions"

    id: str = Field(default=SINGLETON_ID, primary_key=True, max_length=20)
    landing: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    side_banner: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    happy_hour: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))


class LandingRecord(SQLModel, table=True):
    """Landing page popup, hero, features and special offer"""

    __tablename__ = "landing_content"

    id: str = Field(default=SINGLETON_ID, primary_key=True, max_length=20)
    popup: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    hero: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    features: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    special_offer: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
