"""
Storage contract tests, run against the in-memory and the database adapter
"""

import pytest
from datetime import date, datetime, time, timedelta, timezone
from unittest.mock import patch

from sportsbar.core.timeutils import utcnow
from sportsbar.models.reservation import ReservationStatus
from sportsbar.schemas.content import (
    FooterLink,
    Footer,
    HappyHour,
    LandingFeature,
    LandingUpdate,
    PromotionsUpdate,
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
from sportsbar.storage.errors import ConflictError, MissingReferenceError


def category(id="apps", slug=None, display_order=1, name="Appetizers"):
    return MenuCategoryCreate(id=id, name=name, slug=slug or id, display_order=display_order)


def item(id="wings", category_id="apps", name="Wings", price=1299, **extra):
    return MenuItemCreate(id=id, category_id=category_id, name=name, price=price, **extra)


def event(id, start, slug=None, hours=3):
    return EventCreate(
        id=id,
        title=id.replace("-", " ").title(),
        slug=slug or id,
        start_date=start,
        end_date=start + timedelta(hours=hours),
    )


def game(id, start):
    return GameCreate(
        id=id,
        league="NFL",
        home_team="Home",
        away_team="Away",
        home_abbr="HOM",
        away_abbr="AWY",
        start_time=start,
    )


def local(day: date, hour: int, minute: int = 0) -> datetime:
    """Aware datetime for a wall-clock time in the server's local timezone"""
    return datetime.combine(day, time(hour, minute)).astimezone()


# ============================================================================
# Menu
# ============================================================================

def test_category_and_item_by_category(storage):
    """Category apps with one item; unknown categories give an empty list"""
    storage.create_menu_category(category())
    storage.create_menu_item(item())

    items = storage.get_menu_items_by_category("apps")
    assert [i.id for i in items] == ["wings"]
    assert items[0].price == 1299
    assert items[0].badges == []
    assert items[0].allergens == []
    assert storage.get_menu_items_by_category("nonexistent") == []


def test_categories_ordered_by_display_order(storage):
    storage.create_menu_category(category("drinks", display_order=3))
    storage.create_menu_category(category("mains", display_order=2))
    storage.create_menu_category(category("apps", display_order=1))

    assert [c.id for c in storage.get_menu_categories()] == ["apps", "mains", "drinks"]


def test_category_order_ties_broken_by_id(storage):
    storage.create_menu_category(category("b", display_order=1))
    storage.create_menu_category(category("a", display_order=1))

    assert [c.id for c in storage.get_menu_categories()] == ["a", "b"]


def test_duplicate_category_slug_rejected(storage):
    storage.create_menu_category(category("apps", slug="appetizers", name="Appetizers"))

    with pytest.raises(ConflictError):
        storage.create_menu_category(category("starters", slug="appetizers", name="Starters"))

    assert storage.get_menu_category("apps").name == "Appetizers"
    assert storage.get_menu_category("starters") is None


def test_duplicate_category_id_rejected(storage):
    storage.create_menu_category(category("apps", slug="appetizers", name="Appetizers"))

    with pytest.raises(ConflictError):
        storage.create_menu_category(category("apps", slug="other", name="Other"))

    assert storage.get_menu_category("apps").slug == "appetizers"


def test_category_id_generated_when_omitted(storage):
    created = storage.create_menu_category(MenuCategoryCreate(name="Sides", slug="sides"))

    assert created.id
    assert storage.get_menu_category(created.id).slug == "sides"


def test_update_category_slug_conflict(storage):
    storage.create_menu_category(category("apps"))
    storage.create_menu_category(category("mains"))

    with pytest.raises(ConflictError):
        storage.update_menu_category("mains", MenuCategoryUpdate(slug="apps"))

    # Keeping its own slug is not a conflict
    updated = storage.update_menu_category("mains", MenuCategoryUpdate(slug="mains", name="Main Courses"))
    assert updated.name == "Main Courses"


def test_item_requires_existing_category(storage):
    with pytest.raises(MissingReferenceError):
        storage.create_menu_item(item(category_id="missing"))

    assert storage.get_menu_items() == []


def test_update_item_to_unknown_category_rejected(storage):
    storage.create_menu_category(category())
    storage.create_menu_item(item())

    with pytest.raises(MissingReferenceError):
        storage.update_menu_item("wings", MenuItemUpdate(category_id="missing"))

    assert storage.get_menu_item("wings").category_id == "apps"


def test_update_item_applies_only_set_fields(storage):
    storage.create_menu_category(category())
    storage.create_menu_item(item(description="Hot", badges=["Spicy"]))

    updated = storage.update_menu_item("wings", MenuItemUpdate(price=1499))

    assert updated.price == 1499
    assert updated.description == "Hot"
    assert updated.badges == ["Spicy"]


def test_update_item_explicit_null_clears_optional_field(storage):
    storage.create_menu_category(category())
    storage.create_menu_item(item(description="Hot"))

    updated = storage.update_menu_item("wings", MenuItemUpdate(description=None, name=None))

    assert updated.description is None
    assert updated.name == "Wings"


def test_update_item_explicit_null_keeps_defaulted_fields(storage):
    storage.create_menu_category(category())
    storage.create_menu_item(item(published=False))

    updated = storage.update_menu_item("wings", MenuItemUpdate(price=None, published=None))

    assert updated.price == 1299
    assert updated.published is False
    assert storage.get_menu_item("wings").price == 1299


def test_update_category_explicit_null_keeps_display_order(storage):
    storage.create_menu_category(category(display_order=3))
    storage.create_menu_category(category(id="mains", display_order=1, name="Mains"))

    updated = storage.update_menu_category("apps", MenuCategoryUpdate(display_order=None))

    assert updated.display_order == 3
    assert [c.id for c in storage.get_menu_categories()] == ["mains", "apps"]


def test_items_ordered_by_name(storage):
    storage.create_menu_category(category())
    storage.create_menu_item(item("z", name="Zucchini Fries"))
    storage.create_menu_item(item("a", name="Nachos"))
    storage.create_menu_item(item("m", name="Calamari"))

    assert [i.name for i in storage.get_menu_items()] == ["Calamari", "Nachos", "Zucchini Fries"]


def test_delete_category_with_items_is_conflict(storage):
    storage.create_menu_category(category())
    storage.create_menu_item(item())

    with pytest.raises(ConflictError):
        storage.delete_menu_category("apps")

    assert storage.delete_menu_item("wings") is True
    assert storage.delete_menu_category("apps") is True
    assert storage.get_menu_category("apps") is None


def test_returned_records_are_copies(storage):
    storage.create_menu_category(category())
    storage.create_menu_item(item(badges=["Spicy"]))

    fetched = storage.get_menu_item("wings")
    fetched.name = "Changed"
    fetched.badges.append("Mutated")

    again = storage.get_menu_item("wings")
    assert again.name == "Wings"
    assert again.badges == ["Spicy"]


# ============================================================================
# Absence
# ============================================================================

def test_lookups_return_none_for_unknown_ids(storage):
    assert storage.get_menu_category("nope") is None
    assert storage.get_menu_item("nope") is None
    assert storage.get_event("nope") is None
    assert storage.get_event_by_slug("nope") is None
    assert storage.get_game("nope") is None
    assert storage.get_reservation("nope") is None
    assert storage.get_user(999) is None
    assert storage.get_user_by_username("nope") is None


def test_delete_unknown_returns_false(storage):
    assert storage.delete_menu_category("nope") is False
    assert storage.delete_menu_item("nope") is False
    assert storage.delete_event("nope") is False
    assert storage.delete_game("nope") is False
    assert storage.delete_reservation("nope") is False


def test_delete_is_idempotent(storage):
    storage.create_game(game("g1", datetime(2025, 9, 1, 18, 0)))

    assert storage.delete_game("g1") is True
    assert storage.delete_game("g1") is False


def test_update_unknown_returns_none_and_creates_nothing(storage):
    assert storage.update_menu_category("nope", MenuCategoryUpdate(name="X")) is None
    assert storage.update_menu_item("nope", MenuItemUpdate(name="X")) is None
    assert storage.update_event("nope", EventUpdate(title="X")) is None
    assert storage.update_game("nope", GameUpdate(channel="ESPN")) is None
    assert storage.update_reservation("nope", ReservationUpdate(status=ReservationStatus.CONFIRMED)) is None

    assert storage.get_menu_categories() == []
    assert storage.get_events() == []
    assert storage.get_games() == []


# ============================================================================
# Events
# ============================================================================

def test_events_ordered_by_start_date(storage):
    base = datetime(2025, 9, 1, 18, 0)
    storage.create_event(event("third", base + timedelta(days=2)))
    storage.create_event(event("first", base))
    storage.create_event(event("second", base + timedelta(days=1)))

    assert [e.id for e in storage.get_events()] == ["first", "second", "third"]


def test_event_slug_lookup_and_uniqueness(storage):
    start = datetime(2025, 9, 1, 18, 0)
    storage.create_event(event("trivia", start, slug="trivia-night"))

    with pytest.raises(ConflictError):
        storage.create_event(event("trivia-2", start, slug="trivia-night"))

    found = storage.get_event_by_slug("trivia-night")
    assert found.id == "trivia"
    assert len(storage.get_events()) == 1


def test_event_times_stored_as_utc(storage):
    aware = datetime(2025, 9, 1, 20, 0, tzinfo=timezone(timedelta(hours=2)))
    storage.create_event(event("party", aware))

    stored = storage.get_event("party")
    assert stored.start_date == datetime(2025, 9, 1, 18, 0)
    assert stored.start_date.tzinfo is None


def test_event_tags_normalised(storage):
    start = datetime(2025, 9, 1, 18, 0)
    storage.create_event(
        EventCreate(
            id="quiz",
            title="Quiz",
            slug="quiz",
            start_date=start,
            end_date=start,
            tags=[" Trivia ", "Trivia", "", "Weekly"],
        )
    )

    assert storage.get_event("quiz").tags == ["Trivia", "Weekly"]


# ============================================================================
# Games
# ============================================================================

def test_games_ordered_by_start_time(storage):
    base = datetime(2025, 9, 1, 18, 0)
    storage.create_game(game("late", base + timedelta(hours=3)))
    storage.create_game(game("early", base))
    storage.create_game(game("middle", base + timedelta(hours=1)))

    assert [g.id for g in storage.get_games()] == ["early", "middle", "late"]


def test_todays_games_window(storage):
    """Only games between local midnight and the next local midnight count"""
    today = date(2025, 9, 1)
    yesterday = today - timedelta(days=1)
    tomorrow = today + timedelta(days=1)

    storage.create_game(game("yesterday-2359", local(yesterday, 23, 59)))
    storage.create_game(game("today-0000", local(today, 0, 0)))
    storage.create_game(game("today-2359", local(today, 23, 59)))
    storage.create_game(game("tomorrow-0000", local(tomorrow, 0, 0)))

    todays = storage.get_todays_games(now=local(today, 12, 0))

    assert [g.id for g in todays] == ["today-0000", "today-2359"]


def test_upcoming_games(storage):
    now = datetime(2025, 9, 1, 18, 0)
    storage.create_game(game("past", now - timedelta(minutes=1)))
    storage.create_game(game("now", now))
    storage.create_game(game("later", now + timedelta(days=2)))

    assert [g.id for g in storage.get_upcoming_games(now=now)] == ["now", "later"]


def test_update_game(storage):
    storage.create_game(game("g1", datetime(2025, 9, 1, 18, 0)))

    updated = storage.update_game("g1", GameUpdate(channel="ESPN"))

    assert updated.channel == "ESPN"
    assert updated.home_abbr == "HOM"


# ============================================================================
# Reservations
# ============================================================================

def test_create_reservation_sets_server_fields(storage):
    before = utcnow()
    reservation = storage.create_reservation(
        ReservationCreate(
            name="Jane Doe",
            email="jane@example.com",
            phone="555-0100",
            party_size=4,
            scheduled_for="2025-09-01T18:00:00Z",
        )
    )

    assert reservation.id
    assert reservation.status == ReservationStatus.PENDING
    assert reservation.created_at >= before
    assert reservation.scheduled_for == datetime(2025, 9, 1, 18, 0)
    assert storage.get_reservation(reservation.id).email == "jane@example.com"


def test_reservation_status_update(storage):
    reservation = storage.create_reservation(
        ReservationCreate(
            name="Jane Doe",
            email="jane@example.com",
            phone="555-0100",
            party_size=4,
            scheduled_for=datetime(2025, 9, 1, 18, 0),
        )
    )

    updated = storage.update_reservation(reservation.id, ReservationUpdate(status=ReservationStatus.CONFIRMED))

    assert updated.status == ReservationStatus.CONFIRMED
    assert updated.created_at == reservation.created_at
    assert storage.get_reservation(reservation.id).status == ReservationStatus.CONFIRMED


def test_reservations_in_creation_order(storage):
    created_at = {
        "First": datetime(2025, 9, 1, 12, 0),
        "Second": datetime(2025, 9, 1, 10, 0),
        "Third": datetime(2025, 9, 1, 11, 0),
    }
    ids = {}
    for name, moment in created_at.items():
        with patch("sportsbar.storage.records.utcnow", return_value=moment):
            ids[name] = storage.create_reservation(
                ReservationCreate(
                    name=name,
                    email="guest@example.com",
                    phone="555-0100",
                    party_size=2,
                    scheduled_for=datetime(2025, 9, 1, 18, 0),
                )
            ).id

    listed = storage.get_reservations()

    assert [r.id for r in listed] == [ids["Second"], ids["Third"], ids["First"]]
    assert [r.name for r in listed] == ["Second", "Third", "First"]


# ============================================================================
# Users
# ============================================================================

def test_create_user_assigns_ids_and_rejects_duplicates(storage):
    assert storage.has_users() is False

    first = storage.create_user(
        UserCreate(username="manager", email="manager@example.com", password="long-enough"),
        password_hash="hashed",
    )
    assert first.id is not None
    assert storage.has_users() is True
    assert storage.get_user(first.id).username == "manager"
    assert storage.get_user_by_username("manager").password_hash == "hashed"

    with pytest.raises(ConflictError):
        storage.create_user(
            UserCreate(username="manager", email="other@example.com", password="long-enough"),
            password_hash="hashed",
        )
    with pytest.raises(ConflictError):
        storage.create_user(
            UserCreate(username="other", email="manager@example.com", password="long-enough"),
            password_hash="hashed",
        )


# ============================================================================
# Singletons
# ============================================================================

def test_settings_default_shape(storage):
    """An empty store still renders: every field present, collections empty"""
    settings = storage.get_settings()

    dumped = settings.model_dump(exclude_none=True)
    assert dumped["hours"] == []
    assert dumped["socials"] == {}
    assert dumped["name"] == ""
    assert set(dumped) == {"name", "address", "phone", "email", "hours", "socials", "hero", "footer"}


def test_promotions_and_landing_defaults(storage):
    promotions = storage.get_promotions_data()
    landing = storage.get_landing_data()

    assert promotions.landing.enabled is False
    assert promotions.side_banner.enabled is False
    assert promotions.happy_hour.offers == []
    assert landing.popup.enabled is False
    assert landing.features == []
    assert landing.special_offer.enabled is False


def test_settings_partial_update_replaces_sections(storage):
    storage.update_settings(SiteSettingsUpdate(name="The Sideline", socials={"instagram": "https://x"}))
    updated = storage.update_settings(
        SiteSettingsUpdate(footer=Footer(description="Since 2012", links=[FooterLink(title="Menu", url="/menu")]))
    )

    assert updated.name == "The Sideline"
    assert updated.socials == {"instagram": "https://x"}
    assert updated.footer.links[0].url == "/menu"
    assert storage.get_settings() == updated


def test_landing_and_promotions_update(storage):
    storage.update_landing_data(LandingUpdate(features=[LandingFeature(title="30 Screens")]))
    storage.update_promotions_data(PromotionsUpdate(happy_hour=HappyHour(enabled=True, title="Happy Hour")))

    assert [f.title for f in storage.get_landing_data().features] == ["30 Screens"]
    promotions = storage.get_promotions_data()
    assert promotions.happy_hour.enabled is True
    assert promotions.side_banner.enabled is False


def test_singleton_reads_are_copies(storage):
    storage.update_landing_data(LandingUpdate(features=[LandingFeature(title="30 Screens")]))

    landing = storage.get_landing_data()
    landing.features.append(LandingFeature(title="Mutated"))

    assert len(storage.get_landing_data().features) == 1
