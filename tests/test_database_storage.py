"""
Database adapter specifics: schema management and the storage factory
"""

import pytest
from datetime import datetime
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect

from sportsbar.core.config import Settings
from sportsbar.core.database import build_engine
from sportsbar.models import MenuCategory, MenuItem
from sportsbar.models.reservation import ReservationStatus
from sportsbar.schemas.menu import MenuCategoryCreate, MenuItemCreate
from sportsbar.schemas.reservation import ReservationCreate
from sportsbar.schemas.user import UserCreate
from sportsbar.storage import DatabaseStorage, MemoryStorage, create_storage
from sportsbar.storage.base import MIGRATION_ORDER
from sportsbar.storage.errors import ConflictError, MissingReferenceError, StorageError
from sportsbar.storage.fixtures import FixtureLoader
from sportsbar.storage.migration import MigrationDriver

ROOT = Path(__file__).resolve().parent.parent


def test_tables_created_on_construction(engine):
    DatabaseStorage(engine)

    tables = set(inspect(engine).get_table_names())
    assert {
        "menu_categories",
        "menu_items",
        "events",
        "games",
        "reservations",
        "users",
        "site_settings",
        "promotions",
        "landing_content",
        "migration_state",
    } <= tables


def test_integrity_failures_keep_their_reason(engine):
    storage = DatabaseStorage(engine)
    storage.create_menu_category(MenuCategoryCreate(id="apps", name="Appetizers", slug="apps"))
    storage.create_menu_item(MenuItemCreate(id="wings", category_id="apps", name="Wings", price=1299))

    with pytest.raises(ConflictError) as conflict:
        storage._insert(MenuCategory(id="starters", name="Starters", slug="apps"), "MenuCategory")
    assert conflict.value.field == "slug"
    assert conflict.value.value == "apps"

    with pytest.raises(MissingReferenceError) as missing:
        storage._insert(MenuItem(id="fries", category_id="sides", name="Fries"), "MenuItem")
    assert missing.value.field == "category_id"
    assert missing.value.value == "sides"

    with pytest.raises(StorageError) as failure:
        storage._update(MenuItem, "wings", {"price": None}, "MenuItem")
    assert not isinstance(failure.value, ConflictError)
    assert "price" in str(failure.value)
    assert storage.get_menu_item("wings").price == 1299


def test_data_survives_new_adapter_instance(tmp_path):
    url = f"sqlite:///{tmp_path / 'bar.db'}"
    first = DatabaseStorage(build_engine(url))
    MigrationDriver(first, FixtureLoader()).run()
    categories = [c.id for c in first.get_menu_categories()]

    second = DatabaseStorage(build_engine(url))

    assert [c.id for c in second.get_menu_categories()] == categories
    assert second.get_migrated_kinds() == set(MIGRATION_ORDER)
    assert MigrationDriver(second, FixtureLoader()).run().inserted == 0


def test_alembic_schema_serves_storage(tmp_path):
    url = f"sqlite:///{tmp_path / 'alembic.db'}"
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", url)

    command.upgrade(config, "head")
    storage = DatabaseStorage(build_engine(url), create_tables=False)
    report = MigrationDriver(storage, FixtureLoader()).run()

    assert report.complete
    assert report.failed == 0
    reservation = storage.create_reservation(
        ReservationCreate(
            name="Jane Doe",
            email="jane@example.com",
            phone="555-0100",
            party_size=4,
            scheduled_for=datetime(2025, 9, 1, 18, 0),
        )
    )
    assert storage.get_reservation(reservation.id).status == ReservationStatus.PENDING
    user = storage.create_user(
        UserCreate(username="manager", email="manager@example.com", password="long-enough"),
        password_hash="hashed",
    )
    assert user.id == 1

    command.downgrade(config, "base")
    assert "menu_items" not in inspect(build_engine(url)).get_table_names()


def test_create_storage_memory_seeds_fixtures():
    storage = create_storage(Settings(STORAGE_BACKEND="memory", RUN_FIXTURE_MIGRATION=True))

    assert isinstance(storage, MemoryStorage)
    assert storage.get_menu_categories()
    assert storage.get_settings().name


def test_create_storage_database(tmp_path):
    settings = Settings(
        STORAGE_BACKEND="database",
        DATABASE_URL=f"sqlite:///{tmp_path / 'bar.db'}",
        DEBUG=False,
        RUN_FIXTURE_MIGRATION=False,
    )

    storage = create_storage(settings)

    assert isinstance(storage, DatabaseStorage)
    assert storage.get_menu_categories() == []
    assert storage.get_migrated_kinds() == set()


def test_create_storage_unknown_backend():
    with pytest.raises(ValueError):
        create_storage(Settings(STORAGE_BACKEND="redis"))
