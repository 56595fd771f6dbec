"""
Conversions between validated schemas and stored records

Both adapters build records here so ids, timestamps and defaults are filled in
the same way regardless of the backing medium.
"""

from datetime import datetime
import copy
from typing import Any, Dict, Type, TypeVar, get_args

from pydantic import BaseModel
from sqlmodel import SQLModel

from sportsbar.core.timeutils import to_storage_time, utcnow
from sportsbar.models import (
    Event,
    Game,
    LandingRecord,
    MenuCategory,
    MenuItem,
    PromotionsRecord,
    Reservation,
    ReservationStatus,
    SiteSettingsRecord,
    User,
)
from sportsbar.schemas.content import LandingData, PromotionsData, SiteSettingsData
from sportsbar.schemas.menu import MenuCategoryCreate, MenuItemCreate
from sportsbar.schemas.reservation import ReservationCreate
from sportsbar.schemas.schedule import EventCreate, GameCreate
from sportsbar.schemas.user import UserCreate
from sportsbar.storage.base import EntityKind, SeedRecord, new_id

RecordT = TypeVar("RecordT", bound=SQLModel)


def _normalize_times(values: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: to_storage_time(value) if isinstance(value, datetime) else value
        for key, value in values.items()
    }


def copy_record(record: RecordT) -> RecordT:
    """Detached copy of a table model instance"""
    return type(record)(**copy.deepcopy(record.model_dump()))


def update_values(patch: BaseModel, record_cls: Type[SQLModel]) -> Dict[str, Any]:
    """Fields explicitly set on a partial update, ready to apply.

    An explicit null clears fields declared Optional on the record and is
    ignored for every other field, defaulted or not.
    """
    values = _normalize_times(patch.model_dump(exclude_unset=True))
    return {
        field: value
        for field, value in values.items()
        if value is not None or _accepts_none(record_cls, field)
    }


def _accepts_none(record_cls: Type[SQLModel], field: str) -> bool:
    return type(None) in get_args(record_cls.model_fields[field].annotation)


def build_menu_category(data: MenuCategoryCreate) -> MenuCategory:
    values = data.model_dump()
    values["id"] = values["id"] or new_id()
    return MenuCategory(**values)


def build_menu_item(data: MenuItemCreate) -> MenuItem:
    values = data.model_dump()
    values["id"] = values["id"] or new_id()
    return MenuItem(**values)


def build_event(data: EventCreate) -> Event:
    values = _normalize_times(data.model_dump())
    values["id"] = values["id"] or new_id()
    return Event(**values)


def build_game(data: GameCreate) -> Game:
    values = _normalize_times(data.model_dump())
    values["id"] = values["id"] or new_id()
    return Game(**values)


def build_reservation(data: ReservationCreate) -> Reservation:
    values = _normalize_times(data.model_dump())
    return Reservation(
        **values,
        id=new_id(),
        status=ReservationStatus.PENDING,
        created_at=utcnow(),
    )


def build_user(data: UserCreate, password_hash: str) -> User:
    return User(
        username=data.username,
        email=str(data.email),
        password_hash=password_hash,
        created_at=utcnow(),
    )


# ============================================================================
# Singletons
# ============================================================================

SINGLETON_TYPES: Dict[EntityKind, tuple] = {
    EntityKind.SITE_SETTINGS: (SiteSettingsRecord, SiteSettingsData),
    EntityKind.PROMOTIONS: (PromotionsRecord, PromotionsData),
    EntityKind.LANDING: (LandingRecord, LandingData),
}


def singleton_to_record(kind: EntityKind, data: BaseModel) -> SQLModel:
    record_cls, _ = SINGLETON_TYPES[kind]
    return record_cls(**data.model_dump())


def record_to_singleton(kind: EntityKind, record: SQLModel) -> BaseModel:
    _, data_cls = SINGLETON_TYPES[kind]
    values = record.model_dump()
    values.pop("id", None)
    return data_cls.model_validate(values)


# ============================================================================
# Seed records
# ============================================================================

_SEED_BUILDERS = {
    EntityKind.MENU_CATEGORIES: build_menu_category,
    EntityKind.MENU_ITEMS: build_menu_item,
    EntityKind.EVENTS: build_event,
    EntityKind.GAMES: build_game,
}


def build_seed_record(kind: EntityKind, record: SeedRecord) -> SQLModel:
    """Turn a fixture record into the table model stored for ``kind``"""
    if kind in SINGLETON_TYPES:
        return singleton_to_record(kind, record)
    return _SEED_BUILDERS[kind](record)
