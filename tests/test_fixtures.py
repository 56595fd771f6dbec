"""
Unit tests for the fixture loader
"""

from sportsbar.schemas.content import SiteSettingsData
from sportsbar.schemas.menu import MenuCategoryCreate, MenuItemCreate
from sportsbar.storage.base import MIGRATION_ORDER, EntityKind
from sportsbar.storage.fixtures import FixtureLoader


def test_bundled_fixtures_load():
    """The fixtures shipped with the package are all valid"""
    batches = FixtureLoader().load_all()

    assert [b.kind for b in batches] == MIGRATION_ORDER
    for batch in batches:
        assert batch.ok, batch.error
        assert batch.records

    categories = FixtureLoader().load(EntityKind.MENU_CATEGORIES).records
    items = FixtureLoader().load(EntityKind.MENU_ITEMS).records
    category_ids = {c.id for c in categories}
    assert all(isinstance(c, MenuCategoryCreate) for c in categories)
    assert all(isinstance(i, MenuItemCreate) and i.category_id in category_ids for i in items)


def test_singleton_fixture_is_one_record(fixtures_dir):
    batch = FixtureLoader(fixtures_dir).load(EntityKind.SITE_SETTINGS)

    assert batch.ok
    assert len(batch.records) == 1
    assert isinstance(batch.records[0], SiteSettingsData)
    assert batch.records[0].hours


def test_missing_file_only_affects_its_kinds(fixtures_dir):
    (fixtures_dir / "menu.json").unlink()
    loader = FixtureLoader(fixtures_dir)

    assert not loader.load(EntityKind.MENU_CATEGORIES).ok
    assert not loader.load(EntityKind.MENU_ITEMS).ok
    assert loader.load(EntityKind.EVENTS).ok
    assert loader.load(EntityKind.LANDING).ok


def test_invalid_json_reported_as_error(fixtures_dir, write_fixture):
    write_fixture("events.json", "[{not json")

    batch = FixtureLoader(fixtures_dir).load(EntityKind.EVENTS)

    assert not batch.ok
    assert batch.records == []
    assert "invalid JSON" in batch.error


def test_missing_section_reported_as_error(fixtures_dir, write_fixture):
    write_fixture("menu.json", {"categories": []})

    loader = FixtureLoader(fixtures_dir)

    assert loader.load(EntityKind.MENU_CATEGORIES).ok
    batch = loader.load(EntityKind.MENU_ITEMS)
    assert not batch.ok
    assert "items" in batch.error


def test_collection_must_be_a_list(fixtures_dir, write_fixture):
    write_fixture("games.json", {"id": "g1"})

    assert not FixtureLoader(fixtures_dir).load(EntityKind.GAMES).ok


def test_malformed_records_dropped(fixtures_dir, write_fixture):
    write_fixture(
        "games.json",
        [
            {
                "id": "good",
                "league": "NBA",
                "home_team": "Knicks",
                "away_team": "Celtics",
                "home_abbr": "NYK",
                "away_abbr": "BOS",
                "start_time": "2025-09-01T23:30:00Z",
            },
            {"id": "bad", "league": "NBA"},
            {"league": "NBA", "note": "no id"},
            "not an object",
        ],
    )

    batch = FixtureLoader(fixtures_dir).load(EntityKind.GAMES)

    assert batch.ok
    assert [g.id for g in batch.records] == ["good"]


def test_invalid_singleton_document_fails_batch(fixtures_dir, write_fixture):
    write_fixture("landing.json", {"features": [{"icon": "tv"}]})

    batch = FixtureLoader(fixtures_dir).load(EntityKind.LANDING)

    assert not batch.ok
