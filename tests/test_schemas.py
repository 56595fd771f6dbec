"""
Unit tests for request schema validation
"""

import pytest
from pydantic import ValidationError

from sportsbar.schemas.common import normalize_labels
from sportsbar.schemas.content import SiteSettingsData
from sportsbar.schemas.menu import MenuCategoryCreate, MenuItemCreate, MenuItemUpdate
from sportsbar.schemas.reservation import ReservationCreate
from sportsbar.schemas.schedule import EventCreate


def test_normalize_labels():
    assert normalize_labels(None) == []
    assert normalize_labels([" Spicy", "Spicy", "", "  ", "Vegan"]) == ["Spicy", "Vegan"]


def test_item_labels_never_null():
    item = MenuItemCreate(category_id="apps", name="Wings", price=1299, badges=None)

    assert item.badges == []
    assert item.allergens == []


def test_item_update_keeps_unset_fields_unset():
    update = MenuItemUpdate(price=100)

    assert update.model_dump(exclude_unset=True) == {"price": 100}


@pytest.mark.parametrize("slug", ["Appetizers", "two words", "trailing-", "-leading", "double--dash", ""])
def test_invalid_slugs_rejected(slug):
    with pytest.raises(ValidationError):
        MenuCategoryCreate(name="Appetizers", slug=slug)


def test_event_end_before_start_rejected():
    with pytest.raises(ValidationError):
        EventCreate(
            title="Party",
            slug="party",
            start_date="2025-09-01T19:00:00Z",
            end_date="2025-09-01T18:00:00Z",
        )


def test_event_compares_mixed_offsets():
    event = EventCreate(
        title="Party",
        slug="party",
        start_date="2025-09-01T19:00:00+02:00",
        end_date="2025-09-01T18:00:00Z",
    )
    assert event.end_date > event.start_date


@pytest.mark.parametrize("party_size", [0, 51])
def test_party_size_bounds(party_size):
    with pytest.raises(ValidationError):
        ReservationCreate(
            name="Jane Doe",
            email="jane@example.com",
            phone="555-0100",
            party_size=party_size,
            scheduled_for="2025-09-01T18:00:00Z",
        )


def test_settings_default_is_renderable():
    dumped = SiteSettingsData().model_dump(exclude_none=True)

    assert dumped["hours"] == []
    assert dumped["socials"] == {}
    assert dumped["hero"] == {"background_image": "", "title": "", "subtitle": ""}
    assert dumped["footer"]["links"] == []
