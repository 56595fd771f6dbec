"""
In-memory storage adapter

Everything lives in per-kind dicts inside the process, so the data is gone
on restart. Use it for local development or when no database is available;
seed it through the fixture migration like the database adapter.

FastAPI serves sync endpoints from a thread pool, so every operation holds a
single re-entrant lock.
"""

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Set, TypeVar
import threading

import structlog
from sqlmodel import SQLModel

from sportsbar.core.timeutils import to_storage_time, today_window, utcnow
from sportsbar.models import (
    Event,
    Game,
    MenuCategory,
    MenuItem,
    MigrationRecord,
    Reservation,
    User,
)
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
from sportsbar.storage.base import (
    EntityKind,
    InsertOutcome,
    SeedRecord,
    Storage,
    merge_section_update,
)
from sportsbar.storage.errors import ConflictError, MissingReferenceError
from sportsbar.storage.records import (
    SINGLETON_TYPES,
    build_event,
    build_game,
    build_menu_category,
    build_menu_item,
    build_reservation,
    build_seed_record,
    build_user,
    copy_record,
    record_to_singleton,
    singleton_to_record,
    update_values,
)

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=SQLModel)


def _sorted_copies(records: Iterable[RecordT], key: Callable) -> List[RecordT]:
    return [copy_record(r) for r in sorted(records, key=key)]


def _field_taken(collection: Dict[str, SQLModel], field: str, value, exclude_id: Optional[str] = None) -> bool:
    return any(
        getattr(record, field) == value
        for record_id, record in collection.items()
        if record_id != exclude_id
    )


class MemoryStorage(Storage):
    """Volatile storage backed by dicts keyed by id"""

    def __init__(self):
        self._lock = threading.RLock()
        self._categories: Dict[str, MenuCategory] = {}
        self._items: Dict[str, MenuItem] = {}
        self._events: Dict[str, Event] = {}
        self._games: Dict[str, Game] = {}
        self._reservations: Dict[str, Reservation] = {}
        self._users: Dict[int, User] = {}
        self._next_user_id = 1

        # Single-row table per singleton kind; absent until migrated or saved
        self._singletons: Dict[EntityKind, SQLModel] = {}
        self._migrations: Dict[EntityKind, MigrationRecord] = {}

    # ------------------------------------------------------------------
    # Menu categories
    # ------------------------------------------------------------------

    def get_menu_categories(self) -> List[MenuCategory]:
        with self._lock:
            return _sorted_copies(self._categories.values(), key=lambda c: (c.display_order, c.id))

    def get_menu_category(self, category_id: str) -> Optional[MenuCategory]:
        with self._lock:
            category = self._categories.get(category_id)
            return copy_record(category) if category else None

    def create_menu_category(self, data: MenuCategoryCreate) -> MenuCategory:
        category = build_menu_category(data)
        with self._lock:
            self._check_category_keys(category.id, category.slug)
            self._categories[category.id] = category
            return copy_record(category)

    def update_menu_category(self, category_id: str, data: MenuCategoryUpdate) -> Optional[MenuCategory]:
        values = update_values(data, MenuCategory)
        with self._lock:
            current = self._categories.get(category_id)
            if current is None:
                return None
            if "slug" in values and _field_taken(self._categories, "slug", values["slug"], exclude_id=category_id):
                raise ConflictError("MenuCategory", "slug", values["slug"])
            updated = self._apply(current, values)
            self._categories[category_id] = updated
            return copy_record(updated)

    def delete_menu_category(self, category_id: str) -> bool:
        with self._lock:
            if category_id not in self._categories:
                return False
            if _field_taken(self._items, "category_id", category_id):
                raise ConflictError("MenuCategory", "id", category_id, reason="still has menu items")
            del self._categories[category_id]
            return True

    def _check_category_keys(self, category_id: str, slug: str) -> None:
        if category_id in self._categories:
            raise ConflictError("MenuCategory", "id", category_id)
        if _field_taken(self._categories, "slug", slug):
            raise ConflictError("MenuCategory", "slug", slug)

    # ------------------------------------------------------------------
    # Menu items
    # ------------------------------------------------------------------

    def get_menu_items(self) -> List[MenuItem]:
        with self._lock:
            return _sorted_copies(self._items.values(), key=lambda i: (i.name, i.id))

    def get_menu_items_by_category(self, category_id: str) -> List[MenuItem]:
        with self._lock:
            matching = [i for i in self._items.values() if i.category_id == category_id]
            return _sorted_copies(matching, key=lambda i: (i.name, i.id))

    def get_menu_item(self, item_id: str) -> Optional[MenuItem]:
        with self._lock:
            item = self._items.get(item_id)
            return copy_record(item) if item else None

    def create_menu_item(self, data: MenuItemCreate) -> MenuItem:
        item = build_menu_item(data)
        with self._lock:
            if item.id in self._items:
                raise ConflictError("MenuItem", "id", item.id)
            if item.category_id not in self._categories:
                raise MissingReferenceError("MenuItem", "category_id", item.category_id)
            self._items[item.id] = item
            return copy_record(item)

    def update_menu_item(self, item_id: str, data: MenuItemUpdate) -> Optional[MenuItem]:
        values = update_values(data, MenuItem)
        with self._lock:
            current = self._items.get(item_id)
            if current is None:
                return None
            if "category_id" in values and values["category_id"] not in self._categories:
                raise MissingReferenceError("MenuItem", "category_id", values["category_id"])
            updated = self._apply(current, values)
            self._items[item_id] = updated
            return copy_record(updated)

    def delete_menu_item(self, item_id: str) -> bool:
        with self._lock:
            return self._items.pop(item_id, None) is not None

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def get_events(self) -> List[Event]:
        with self._lock:
            return _sorted_copies(self._events.values(), key=lambda e: (e.start_date, e.id))

    def get_event(self, event_id: str) -> Optional[Event]:
        with self._lock:
            event = self._events.get(event_id)
            return copy_record(event) if event else None

    def get_event_by_slug(self, slug: str) -> Optional[Event]:
        with self._lock:
            for event in self._events.values():
                if event.slug == slug:
                    return copy_record(event)
            return None

    def create_event(self, data: EventCreate) -> Event:
        event = build_event(data)
        with self._lock:
            self._check_event_keys(event.id, event.slug)
            self._events[event.id] = event
            return copy_record(event)

    def update_event(self, event_id: str, data: EventUpdate) -> Optional[Event]:
        values = update_values(data, Event)
        with self._lock:
            current = self._events.get(event_id)
            if current is None:
                return None
            if "slug" in values and _field_taken(self._events, "slug", values["slug"], exclude_id=event_id):
                raise ConflictError("Event", "slug", values["slug"])
            updated = self._apply(current, values)
            self._events[event_id] = updated
            return copy_record(updated)

    def delete_event(self, event_id: str) -> bool:
        with self._lock:
            return self._events.pop(event_id, None) is not None

    def _check_event_keys(self, event_id: str, slug: str) -> None:
        if event_id in self._events:
            raise ConflictError("Event", "id", event_id)
        if _field_taken(self._events, "slug", slug):
            raise ConflictError("Event", "slug", slug)

    # ------------------------------------------------------------------
    # Games
    # ------------------------------------------------------------------

    def get_games(self) -> List[Game]:
        with self._lock:
            return _sorted_copies(self._games.values(), key=lambda g: (g.start_time, g.id))

    def get_todays_games(self, now: Optional[datetime] = None) -> List[Game]:
        start, end = today_window(now)
        with self._lock:
            todays = [g for g in self._games.values() if start <= g.start_time < end]
            return _sorted_copies(todays, key=lambda g: (g.start_time, g.id))

    def get_upcoming_games(self, now: Optional[datetime] = None) -> List[Game]:
        threshold = to_storage_time(now) if now else utcnow()
        with self._lock:
            upcoming = [g for g in self._games.values() if g.start_time >= threshold]
            return _sorted_copies(upcoming, key=lambda g: (g.start_time, g.id))

    def get_game(self, game_id: str) -> Optional[Game]:
        with self._lock:
            game = self._games.get(game_id)
            return copy_record(game) if game else None

    def create_game(self, data: GameCreate) -> Game:
        game = build_game(data)
        with self._lock:
            if game.id in self._games:
                raise ConflictError("Game", "id", game.id)
            self._games[game.id] = game
            return copy_record(game)

    def update_game(self, game_id: str, data: GameUpdate) -> Optional[Game]:
        values = update_values(data, Game)
        with self._lock:
            current = self._games.get(game_id)
            if current is None:
                return None
            updated = self._apply(current, values)
            self._games[game_id] = updated
            return copy_record(updated)

    def delete_game(self, game_id: str) -> bool:
        with self._lock:
            return self._games.pop(game_id, None) is not None

    # ------------------------------------------------------------------
    # Reservations
    # ------------------------------------------------------------------

    def get_reservations(self) -> List[Reservation]:
        with self._lock:
            return _sorted_copies(self._reservations.values(), key=lambda r: (r.created_at, r.id))

    def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        with self._lock:
            reservation = self._reservations.get(reservation_id)
            return copy_record(reservation) if reservation else None

    def create_reservation(self, data: ReservationCreate) -> Reservation:
        reservation = build_reservation(data)
        with self._lock:
            self._reservations[reservation.id] = reservation
            return copy_record(reservation)

    def update_reservation(self, reservation_id: str, data: ReservationUpdate) -> Optional[Reservation]:
        values = update_values(data, Reservation)
        with self._lock:
            current = self._reservations.get(reservation_id)
            if current is None:
                return None
            updated = self._apply(current, values)
            self._reservations[reservation_id] = updated
            return copy_record(updated)

    def delete_reservation(self, reservation_id: str) -> bool:
        with self._lock:
            return self._reservations.pop(reservation_id, None) is not None

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return copy_record(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return copy_record(user)
            return None

    def has_users(self) -> bool:
        with self._lock:
            return bool(self._users)

    def create_user(self, data: UserCreate, password_hash: str) -> User:
        user = build_user(data, password_hash)
        with self._lock:
            for field in ("username", "email"):
                if _field_taken(self._users, field, getattr(user, field)):
                    raise ConflictError("User", field, getattr(user, field))
            user.id = self._next_user_id
            self._next_user_id += 1
            self._users[user.id] = user
            return copy_record(user)

    # ------------------------------------------------------------------
    # Singletons
    # ------------------------------------------------------------------

    def get_settings(self) -> SiteSettingsData:
        return self._read_singleton(EntityKind.SITE_SETTINGS)

    def update_settings(self, data: SiteSettingsUpdate) -> SiteSettingsData:
        return self._write_singleton(EntityKind.SITE_SETTINGS, data)

    def get_promotions_data(self) -> PromotionsData:
        return self._read_singleton(EntityKind.PROMOTIONS)

    def update_promotions_data(self, data: PromotionsUpdate) -> PromotionsData:
        return self._write_singleton(EntityKind.PROMOTIONS, data)

    def get_landing_data(self) -> LandingData:
        return self._read_singleton(EntityKind.LANDING)

    def update_landing_data(self, data: LandingUpdate) -> LandingData:
        return self._write_singleton(EntityKind.LANDING, data)

    def _read_singleton(self, kind: EntityKind):
        with self._lock:
            record = self._singletons.get(kind)
            if record is None:
                return SINGLETON_TYPES[kind][1]()
            return record_to_singleton(kind, record)

    def _write_singleton(self, kind: EntityKind, patch):
        with self._lock:
            merged = merge_section_update(self._read_singleton(kind), patch)
            self._singletons[kind] = singleton_to_record(kind, merged)
            return merged.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Fixture migration support
    # ------------------------------------------------------------------

    def insert_if_absent(self, kind: EntityKind, record: SeedRecord) -> InsertOutcome:
        built = build_seed_record(kind, record)
        with self._lock:
            if kind in SINGLETON_TYPES:
                if kind in self._singletons:
                    return InsertOutcome.SKIPPED
                self._singletons[kind] = built
                return InsertOutcome.INSERTED

            collection = self._collection(kind)
            if built.id in collection:
                return InsertOutcome.SKIPPED
            if kind in (EntityKind.MENU_CATEGORIES, EntityKind.EVENTS) and _field_taken(collection, "slug", built.slug):
                return InsertOutcome.SKIPPED
            if kind == EntityKind.MENU_ITEMS and built.category_id not in self._categories:
                logger.warning(
                    f"Menu item {built.id} references unknown category {built.category_id}"
                )
                return InsertOutcome.FAILED

            collection[built.id] = built
            return InsertOutcome.INSERTED

    def get_migrated_kinds(self) -> Set[EntityKind]:
        with self._lock:
            return set(self._migrations)

    def mark_migrated(self, kind: EntityKind, counts: Dict[str, int]) -> None:
        with self._lock:
            self._migrations[kind] = MigrationRecord(kind=kind.value, completed_at=utcnow(), **counts)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _collection(self, kind: EntityKind) -> Dict[str, SQLModel]:
        return {
            EntityKind.MENU_CATEGORIES: self._categories,
            EntityKind.MENU_ITEMS: self._items,
            EntityKind.EVENTS: self._events,
            EntityKind.GAMES: self._games,
        }[kind]

    @staticmethod
    def _apply(current: RecordT, values: dict) -> RecordT:
        updated = copy_record(current)
        for field, value in values.items():
            setattr(updated, field, value)
        return updated
