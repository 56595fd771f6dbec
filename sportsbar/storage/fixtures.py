"""
Seed fixture loader

Reads the bundled JSON fixtures and validates them into the schemas storage
accepts. A file that cannot be read or parsed only affects the entity kinds
it holds; a malformed record is dropped and the rest of its file still loads.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type
import json

import structlog
from pydantic import BaseModel, ValidationError

from sportsbar.schemas.content import LandingData, PromotionsData, SiteSettingsData
from sportsbar.schemas.menu import MenuCategoryCreate, MenuItemCreate
from sportsbar.schemas.schedule import EventCreate, GameCreate
from sportsbar.storage.base import MIGRATION_ORDER, SINGLETON_KINDS, EntityKind, SeedRecord

logger = structlog.get_logger(__name__)

DEFAULT_FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data"

# kind -> (file name, key inside the file or None for the whole document, schema)
FIXTURE_SOURCES: Dict[EntityKind, tuple] = {
    EntityKind.MENU_CATEGORIES: ("menu.json", "categories", MenuCategoryCreate),
    EntityKind.MENU_ITEMS: ("menu.json", "items", MenuItemCreate),
    EntityKind.EVENTS: ("events.json", None, EventCreate),
    EntityKind.GAMES: ("games.json", None, GameCreate),
    EntityKind.SITE_SETTINGS: ("settings.json", None, SiteSettingsData),
    EntityKind.PROMOTIONS: ("promotions.json", None, PromotionsData),
    EntityKind.LANDING: ("landing.json", None, LandingData),
}


class FixtureError(Exception):
    """A fixture file could not be read or does not have the expected shape"""


@dataclass
class FixtureBatch:
    """Records loaded for one entity kind; ``error`` is set when the file failed"""
    kind: EntityKind
    records: List[SeedRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FixtureLoader:
    """Loads fixture batches from a directory of JSON files"""

    def __init__(self, fixtures_dir: Optional[Path] = None):
        self.fixtures_dir = Path(fixtures_dir) if fixtures_dir else DEFAULT_FIXTURES_DIR

    def load_all(self) -> List[FixtureBatch]:
        return [self.load(kind) for kind in MIGRATION_ORDER]

    def load(self, kind: EntityKind) -> FixtureBatch:
        file_name, key, schema = FIXTURE_SOURCES[kind]
        try:
            document = self._read(file_name)
            raw = self._select(document, key, file_name)
        except FixtureError as exc:
            logger.error(f"Could not load {kind.value} fixtures: {exc}")
            return FixtureBatch(kind=kind, error=str(exc))

        if kind in SINGLETON_KINDS:
            return self._load_singleton(kind, raw, schema, file_name)
        return self._load_collection(kind, raw, schema, file_name)

    def _read(self, file_name: str) -> Any:
        path = self.fixtures_dir / file_name
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as exc:
            raise FixtureError(f"cannot read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise FixtureError(f"invalid JSON in {path}: {exc}") from exc

    @staticmethod
    def _select(document: Any, key: Optional[str], file_name: str) -> Any:
        if key is None:
            return document
        if not isinstance(document, dict) or key not in document:
            raise FixtureError(f"{file_name} has no '{key}' section")
        return document[key]

    def _load_collection(self, kind: EntityKind, raw: Any, schema: Type[BaseModel], file_name: str) -> FixtureBatch:
        if not isinstance(raw, list):
            error = f"{file_name} must hold a list of {kind.value}"
            logger.error(f"Could not load {kind.value} fixtures: {error}")
            return FixtureBatch(kind=kind, error=error)

        records = []
        for position, entry in enumerate(raw):
            # Seed records need stable ids, otherwise a re-run would duplicate them
            if not isinstance(entry, dict) or not entry.get("id"):
                logger.warning(f"Skipping {kind.value} fixture #{position} in {file_name}: missing id")
                continue
            try:
                records.append(schema.model_validate(entry))
            except ValidationError as exc:
                logger.warning(
                    f"Skipping {kind.value} fixture {entry['id']} in {file_name}: "
                    f"{exc.error_count()} validation error(s)"
                )
        logger.info(f"Loaded {len(records)} {kind.value} fixtures from {file_name}")
        return FixtureBatch(kind=kind, records=records)

    def _load_singleton(self, kind: EntityKind, raw: Any, schema: Type[BaseModel], file_name: str) -> FixtureBatch:
        try:
            record = schema.model_validate(raw)
        except ValidationError as exc:
            error = f"{file_name} is not a valid {kind.value} document ({exc.error_count()} error(s))"
            logger.error(f"Could not load {kind.value} fixtures: {error}")
            return FixtureBatch(kind=kind, error=error)
        return FixtureBatch(kind=kind, records=[record])
