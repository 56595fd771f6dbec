"""
Storage interface shared by the in-memory and database adapters

Both adapters honour the same contract:

* lists come back in a fixed order (ties broken by id), never paginated
* lookups return None for unknown ids, deletes return False
* creates never overwrite: duplicate ids or unique keys raise ConflictError
* updates never create
* singleton getters always return a renderable shape
* returned objects are copies, mutating them does not touch storage

Inputs are expected to be validated by the schema layer already.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Set, Union
import uuid

from pydantic import BaseModel

from sportsbar.models import Event, Game, MenuCategory, MenuItem, Reservation, User
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
    MenuCategoryUpdate,
    MenuItemCreate,
    MenuItemUpdate,
)
from sportsbar.schemas.reservation import ReservationCreate, ReservationUpdate
from sportsbar.schemas.schedule import EventCreate, EventUpdate, GameCreate, GameUpdate
from sportsbar.schemas.user import UserCreate


class EntityKind(str, Enum):
    """Entity kinds that can be seeded from fixtures"""
    MENU_CATEGORIES = "menu_categories"
    MENU_ITEMS = "menu_items"
    EVENTS = "events"
    GAMES = "games"
    SITE_SETTINGS = "site_settings"
    PROMOTIONS = "promotions"
    LANDING = "landing_content"


# Categories must precede items, which reference them
MIGRATION_ORDER: List[EntityKind] = [
    EntityKind.MENU_CATEGORIES,
    EntityKind.MENU_ITEMS,
    EntityKind.EVENTS,
    EntityKind.GAMES,
    EntityKind.SITE_SETTINGS,
    EntityKind.PROMOTIONS,
    EntityKind.LANDING,
]

SINGLETON_KINDS = {EntityKind.SITE_SETTINGS, EntityKind.PROMOTIONS, EntityKind.LANDING}


class InsertOutcome(str, Enum):
    """Result of a conflict-tolerant insert"""
    INSERTED = "inserted"
    SKIPPED = "skipped"
    FAILED = "failed"


SeedRecord = Union[
    MenuCategoryCreate,
    MenuItemCreate,
    EventCreate,
    GameCreate,
    SiteSettingsData,
    PromotionsData,
    LandingData,
]


def new_id() -> str:
    return uuid.uuid4().hex


def merge_section_update(current: BaseModel, patch: BaseModel) -> BaseModel:
    """Apply a partial singleton update; each explicitly set section replaces the old one"""
    changes = patch.model_dump(exclude_unset=True, exclude_none=True)
    return current.model_validate({**current.model_dump(), **changes})


class Storage(ABC):
    """Capability interface over the sports bar's content"""

    # ------------------------------------------------------------------
    # Menu categories
    # ------------------------------------------------------------------

    @abstractmethod
    def get_menu_categories(self) -> List[MenuCategory]:
        """Return all categories ordered by display_order, then id."""

    @abstractmethod
    def get_menu_category(self, category_id: str) -> Optional[MenuCategory]:
        ...

    @abstractmethod
    def create_menu_category(self, data: MenuCategoryCreate) -> MenuCategory:
        """Store a category; raises ConflictError on duplicate id or slug."""

    @abstractmethod
    def update_menu_category(self, category_id: str, data: MenuCategoryUpdate) -> Optional[MenuCategory]:
        ...

    @abstractmethod
    def delete_menu_category(self, category_id: str) -> bool:
        """Remove a category. Raises ConflictError while items still reference it."""

    # ------------------------------------------------------------------
    # Menu items
    # ------------------------------------------------------------------

    @abstractmethod
    def get_menu_items(self) -> List[MenuItem]:
        """Return all items ordered by name, then id."""

    @abstractmethod
    def get_menu_items_by_category(self, category_id: str) -> List[MenuItem]:
        """Return the category's items (same order as get_menu_items); [] for unknown categories."""

    @abstractmethod
    def get_menu_item(self, item_id: str) -> Optional[MenuItem]:
        ...

    @abstractmethod
    def create_menu_item(self, data: MenuItemCreate) -> MenuItem:
        """Store an item; raises MissingReferenceError for an unknown category."""

    @abstractmethod
    def update_menu_item(self, item_id: str, data: MenuItemUpdate) -> Optional[MenuItem]:
        ...

    @abstractmethod
    def delete_menu_item(self, item_id: str) -> bool:
        ...

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    @abstractmethod
    def get_events(self) -> List[Event]:
        """Return all events ordered by start_date ascending, then id."""

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[Event]:
        ...

    @abstractmethod
    def get_event_by_slug(self, slug: str) -> Optional[Event]:
        ...

    @abstractmethod
    def create_event(self, data: EventCreate) -> Event:
        ...

    @abstractmethod
    def update_event(self, event_id: str, data: EventUpdate) -> Optional[Event]:
        ...

    @abstractmethod
    def delete_event(self, event_id: str) -> bool:
        ...

    # ------------------------------------------------------------------
    # Games
    # ------------------------------------------------------------------

    @abstractmethod
    def get_games(self) -> List[Game]:
        """Return all games ordered by start_time ascending, then id."""

    @abstractmethod
    def get_todays_games(self, now: Optional[datetime] = None) -> List[Game]:
        """Return games starting within the server-local day containing ``now``."""

    @abstractmethod
    def get_upcoming_games(self, now: Optional[datetime] = None) -> List[Game]:
        """Return games starting at or after ``now``."""

    @abstractmethod
    def get_game(self, game_id: str) -> Optional[Game]:
        ...

    @abstractmethod
    def create_game(self, data: GameCreate) -> Game:
        ...

    @abstractmethod
    def update_game(self, game_id: str, data: GameUpdate) -> Optional[Game]:
        ...

    @abstractmethod
    def delete_game(self, game_id: str) -> bool:
        ...

    # ------------------------------------------------------------------
    # Reservations
    # ------------------------------------------------------------------

    @abstractmethod
    def get_reservations(self) -> List[Reservation]:
        """Return all reservations ordered by created_at ascending, then id."""

    @abstractmethod
    def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        ...

    @abstractmethod
    def create_reservation(self, data: ReservationCreate) -> Reservation:
        """Store a reservation with a generated id, pending status and created_at."""

    @abstractmethod
    def update_reservation(self, reservation_id: str, data: ReservationUpdate) -> Optional[Reservation]:
        ...

    @abstractmethod
    def delete_reservation(self, reservation_id: str) -> bool:
        ...

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def has_users(self) -> bool:
        """True once at least one admin account exists."""

    @abstractmethod
    def create_user(self, data: UserCreate, password_hash: str) -> User:
        """Store an admin account; raises ConflictError on duplicate username or email."""

    # ------------------------------------------------------------------
    # Singletons
    # ------------------------------------------------------------------

    @abstractmethod
    def get_settings(self) -> SiteSettingsData:
        ...

    @abstractmethod
    def update_settings(self, data: SiteSettingsUpdate) -> SiteSettingsData:
        ...

    @abstractmethod
    def get_promotions_data(self) -> PromotionsData:
        ...

    @abstractmethod
    def update_promotions_data(self, data: PromotionsUpdate) -> PromotionsData:
        ...

    @abstractmethod
    def get_landing_data(self) -> LandingData:
        ...

    @abstractmethod
    def update_landing_data(self, data: LandingUpdate) -> LandingData:
        ...

    # ------------------------------------------------------------------
    # Fixture migration support
    # ------------------------------------------------------------------

    @abstractmethod
    def insert_if_absent(self, kind: EntityKind, record: SeedRecord) -> InsertOutcome:
        """Insert a seed record unless its key is already taken.

        Collisions report SKIPPED and any other write failure reports FAILED;
        neither raises.
        """

    @abstractmethod
    def get_migrated_kinds(self) -> Set[EntityKind]:
        ...

    @abstractmethod
    def mark_migrated(self, kind: EntityKind, counts: Dict[str, int]) -> None:
        """Record that ``kind`` finished migrating, with its outcome counts."""
