"""
Relational storage adapter on SQLModel / SQLAlchemy

The engine is injected once; each operation opens its own short session.
Uniqueness is checked up front for precise error messages, and any
IntegrityError that still slips through (concurrent writers) is reported as a
ConflictError as well.
"""

from datetime import datetime
import re
from typing import Any, Dict, List, Optional, Set, Type, TypeVar

import structlog
from sqlalchemy import Engine, func, select as sa_select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from sportsbar.core.database import init_db
from sportsbar.core.timeutils import to_storage_time, today_window, utcnow
from sportsbar.models import (
    SINGLETON_ID,
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
from sportsbar.storage.errors import ConflictError, MissingReferenceError, StorageError
from sportsbar.storage.records import (
    SINGLETON_TYPES,
    build_event,
    build_game,
    build_menu_category,
    build_menu_item,
    build_reservation,
    build_seed_record,
    build_user,
    record_to_singleton,
    update_values,
)

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=SQLModel)

_SQLITE_CONSTRAINT = re.compile(r"(UNIQUE|NOT NULL|FOREIGN KEY) constraint failed(?:: \w+\.(\w+))?")
_POSTGRES_COLUMN = re.compile(r'Key \((\w+)\)|column "(\w+)"')
_POSTGRES_CODES = {"23505": "UNIQUE", "23502": "NOT NULL", "23503": "FOREIGN KEY"}


def integrity_failure(exc: IntegrityError, entity: str, model: Type[SQLModel], values: Dict[str, Any]) -> StorageError:
    """Translate a driver integrity error into the storage error it stands for.

    Only unique violations are conflicts. A broken foreign key is a missing
    reference and anything else is a plain storage failure.
    """
    message = str(exc.orig)
    code = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    kind = _POSTGRES_CODES.get(code)
    column = None

    match = _SQLITE_CONSTRAINT.search(message)
    if match:
        kind = kind or match.group(1)
        column = match.group(2)
    else:
        match = _POSTGRES_COLUMN.search(message)
        if match:
            column = match.group(1) or match.group(2)

    if kind == "FOREIGN KEY" and column is None:
        # SQLite does not name the column; a single foreign key is unambiguous
        parents = [key.parent.name for key in model.__table__.foreign_keys]
        column = parents[0] if len(parents) == 1 else None

    if kind == "UNIQUE":
        field = column or "id"
        return ConflictError(entity, field, values.get(field))
    if kind == "FOREIGN KEY":
        field = column or "reference"
        return MissingReferenceError(entity, field, values.get(field))
    if kind == "NOT NULL":
        return StorageError(f"{entity}.{column or '?'} must not be null")
    return StorageError(f"{entity} violates an integrity constraint: {message}")


class DatabaseStorage(Storage):
    """Persistent storage, one table per entity kind"""

    def __init__(self, engine: Engine, create_tables: bool = True):
        self.engine = engine
        if create_tables:
            init_db(engine)

    def _session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------

    def _all(self, statement) -> list:
        with self._session() as session:
            return list(session.exec(statement).all())

    def _first(self, statement):
        with self._session() as session:
            return session.exec(statement).first()

    def _get(self, model: Type[RecordT], key) -> Optional[RecordT]:
        with self._session() as session:
            return session.get(model, key)

    def _exists(self, statement) -> bool:
        return self._first(statement) is not None

    def _insert(self, record: RecordT, entity: str) -> RecordT:
        with self._session() as session:
            session.add(record)
            self._commit(session, entity, record)
            session.refresh(record)
            return record

    def _update(self, model: Type[RecordT], key, values: Dict[str, Any], entity: str) -> Optional[RecordT]:
        with self._session() as session:
            record = session.get(model, key)
            if record is None:
                return None
            for field, value in values.items():
                setattr(record, field, value)
            session.add(record)
            self._commit(session, entity, record)
            session.refresh(record)
            return record

    def _delete(self, model: Type[SQLModel], key) -> bool:
        with self._session() as session:
            record = session.get(model, key)
            if record is None:
                return False
            session.delete(record)
            session.commit()
            return True

    @staticmethod
    def _commit(session: Session, entity: str, record) -> None:
        values = record.model_dump()
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.warning(f"Integrity error writing {entity} {values.get('id')}: {exc.orig}")
            raise integrity_failure(exc, entity, type(record), values) from exc

    # ------------------------------------------------------------------
    # Menu categories
    # ------------------------------------------------------------------

    def get_menu_categories(self) -> List[MenuCategory]:
        return self._all(select(MenuCategory).order_by(MenuCategory.display_order, MenuCategory.id))

    def get_menu_category(self, category_id: str) -> Optional[MenuCategory]:
        return self._get(MenuCategory, category_id)

    def create_menu_category(self, data: MenuCategoryCreate) -> MenuCategory:
        category = build_menu_category(data)
        if self._get(MenuCategory, category.id) is not None:
            raise ConflictError("MenuCategory", "id", category.id)
        self._check_category_slug(category.slug)
        return self._insert(category, "MenuCategory")

    def update_menu_category(self, category_id: str, data: MenuCategoryUpdate) -> Optional[MenuCategory]:
        values = update_values(data, MenuCategory)
        if self._get(MenuCategory, category_id) is None:
            return None
        if "slug" in values:
            self._check_category_slug(values["slug"], exclude_id=category_id)
        return self._update(MenuCategory, category_id, values, "MenuCategory")

    def delete_menu_category(self, category_id: str) -> bool:
        if self._exists(select(MenuItem).where(MenuItem.category_id == category_id)):
            raise ConflictError("MenuCategory", "id", category_id, reason="still has menu items")
        return self._delete(MenuCategory, category_id)

    def _check_category_slug(self, slug: str, exclude_id: Optional[str] = None) -> None:
        statement = select(MenuCategory).where(MenuCategory.slug == slug)
        if exclude_id is not None:
            statement = statement.where(MenuCategory.id != exclude_id)
        if self._exists(statement):
            raise ConflictError("MenuCategory", "slug", slug)

    # ------------------------------------------------------------------
    # Menu items
    # ------------------------------------------------------------------

    def get_menu_items(self) -> List[MenuItem]:
        return self._all(select(MenuItem).order_by(MenuItem.name, MenuItem.id))

    def get_menu_items_by_category(self, category_id: str) -> List[MenuItem]:
        return self._all(
            select(MenuItem)
            .where(MenuItem.category_id == category_id)
            .order_by(MenuItem.name, MenuItem.id)
        )

    def get_menu_item(self, item_id: str) -> Optional[MenuItem]:
        return self._get(MenuItem, item_id)

    def create_menu_item(self, data: MenuItemCreate) -> MenuItem:
        item = build_menu_item(data)
        if self._get(MenuItem, item.id) is not None:
            raise ConflictError("MenuItem", "id", item.id)
        if self._get(MenuCategory, item.category_id) is None:
            raise MissingReferenceError("MenuItem", "category_id", item.category_id)
        return self._insert(item, "MenuItem")

    def update_menu_item(self, item_id: str, data: MenuItemUpdate) -> Optional[MenuItem]:
        values = update_values(data, MenuItem)
        if "category_id" in values and self._get(MenuCategory, values["category_id"]) is None:
            if self._get(MenuItem, item_id) is None:
                return None
            raise MissingReferenceError("MenuItem", "category_id", values["category_id"])
        return self._update(MenuItem, item_id, values, "MenuItem")

    def delete_menu_item(self, item_id: str) -> bool:
        return self._delete(MenuItem, item_id)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def get_events(self) -> List[Event]:
        return self._all(select(Event).order_by(Event.start_date, Event.id))

    def get_event(self, event_id: str) -> Optional[Event]:
        return self._get(Event, event_id)

    def get_event_by_slug(self, slug: str) -> Optional[Event]:
        return self._first(select(Event).where(Event.slug == slug))

    def create_event(self, data: EventCreate) -> Event:
        event = build_event(data)
        if self._get(Event, event.id) is not None:
            raise ConflictError("Event", "id", event.id)
        self._check_event_slug(event.slug)
        return self._insert(event, "Event")

    def update_event(self, event_id: str, data: EventUpdate) -> Optional[Event]:
        values = update_values(data, Event)
        if self._get(Event, event_id) is None:
            return None
        if "slug" in values:
            self._check_event_slug(values["slug"], exclude_id=event_id)
        return self._update(Event, event_id, values, "Event")

    def delete_event(self, event_id: str) -> bool:
        return self._delete(Event, event_id)

    def _check_event_slug(self, slug: str, exclude_id: Optional[str] = None) -> None:
        statement = select(Event).where(Event.slug == slug)
        if exclude_id is not None:
            statement = statement.where(Event.id != exclude_id)
        if self._exists(statement):
            raise ConflictError("Event", "slug", slug)

    # ------------------------------------------------------------------
    # Games
    # ------------------------------------------------------------------

    def get_games(self) -> List[Game]:
        return self._all(select(Game).order_by(Game.start_time, Game.id))

    def get_todays_games(self, now: Optional[datetime] = None) -> List[Game]:
        start, end = today_window(now)
        return self._all(
            select(Game)
            .where(Game.start_time >= start, Game.start_time < end)
            .order_by(Game.start_time, Game.id)
        )

    def get_upcoming_games(self, now: Optional[datetime] = None) -> List[Game]:
        threshold = to_storage_time(now) if now else utcnow()
        return self._all(
            select(Game)
            .where(Game.start_time >= threshold)
            .order_by(Game.start_time, Game.id)
        )

    def get_game(self, game_id: str) -> Optional[Game]:
        return self._get(Game, game_id)

    def create_game(self, data: GameCreate) -> Game:
        game = build_game(data)
        if self._get(Game, game.id) is not None:
            raise ConflictError("Game", "id", game.id)
        return self._insert(game, "Game")

    def update_game(self, game_id: str, data: GameUpdate) -> Optional[Game]:
        return self._update(Game, game_id, update_values(data, Game), "Game")

    def delete_game(self, game_id: str) -> bool:
        return self._delete(Game, game_id)

    # ------------------------------------------------------------------
    # Reservations
    # ------------------------------------------------------------------

    def get_reservations(self) -> List[Reservation]:
        return self._all(select(Reservation).order_by(Reservation.created_at, Reservation.id))

    def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        return self._get(Reservation, reservation_id)

    def create_reservation(self, data: ReservationCreate) -> Reservation:
        return self._insert(build_reservation(data), "Reservation")

    def update_reservation(self, reservation_id: str, data: ReservationUpdate) -> Optional[Reservation]:
        return self._update(Reservation, reservation_id, update_values(data, Reservation), "Reservation")

    def delete_reservation(self, reservation_id: str) -> bool:
        return self._delete(Reservation, reservation_id)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user(self, user_id: int) -> Optional[User]:
        return self._get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._first(select(User).where(User.username == username))

    def has_users(self) -> bool:
        return self._exists(select(User.id))

    def create_user(self, data: UserCreate, password_hash: str) -> User:
        user = build_user(data, password_hash)
        if self.get_user_by_username(user.username) is not None:
            raise ConflictError("User", "username", user.username)
        if self._exists(select(User).where(User.email == user.email)):
            raise ConflictError("User", "email", user.email)
        return self._insert(user, "User")

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
        record_cls, data_cls = SINGLETON_TYPES[kind]
        record = self._get(record_cls, SINGLETON_ID)
        if record is None:
            return data_cls()
        return record_to_singleton(kind, record)

    def _write_singleton(self, kind: EntityKind, patch):
        record_cls, _ = SINGLETON_TYPES[kind]
        merged = merge_section_update(self._read_singleton(kind), patch)
        with self._session() as session:
            record = session.get(record_cls, SINGLETON_ID)
            if record is None:
                record = record_cls(id=SINGLETON_ID)
            for field, value in merged.model_dump().items():
                setattr(record, field, value)
            session.add(record)
            self._commit(session, record_cls.__name__, record)
        return merged

    # ------------------------------------------------------------------
    # Fixture migration support
    # ------------------------------------------------------------------

    def insert_if_absent(self, kind: EntityKind, record: SeedRecord) -> InsertOutcome:
        built = build_seed_record(kind, record)
        if kind == EntityKind.MENU_ITEMS and self._get(MenuCategory, built.category_id) is None:
            logger.warning(f"Menu item {built.id} references unknown category {built.category_id}")
            return InsertOutcome.FAILED

        table = type(built).__table__
        values = built.model_dump()
        dialect = self.engine.dialect.name

        try:
            with self.engine.begin() as connection:
                if dialect == "sqlite":
                    statement = sqlite_insert(table).values(**values).on_conflict_do_nothing()
                elif dialect == "postgresql":
                    statement = postgresql_insert(table).values(**values).on_conflict_do_nothing()
                else:
                    key_column = list(table.primary_key.columns)[0]
                    taken = connection.execute(
                        sa_select(func.count()).select_from(table).where(key_column == values[key_column.name])
                    ).scalar_one()
                    if taken:
                        return InsertOutcome.SKIPPED
                    statement = table.insert().values(**values)
                result = connection.execute(statement)
        except SQLAlchemyError as exc:
            logger.warning(f"Failed to insert {kind.value} record {values.get('id')}: {exc}")
            return InsertOutcome.FAILED

        return InsertOutcome.INSERTED if result.rowcount == 1 else InsertOutcome.SKIPPED

    def get_migrated_kinds(self) -> Set[EntityKind]:
        known = {kind.value for kind in EntityKind}
        records = self._all(select(MigrationRecord))
        return {EntityKind(r.kind) for r in records if r.kind in known}

    def mark_migrated(self, kind: EntityKind, counts: Dict[str, int]) -> None:
        with self._session() as session:
            session.merge(MigrationRecord(kind=kind.value, completed_at=utcnow(), **counts))
            session.commit()
