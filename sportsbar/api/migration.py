"""
Fixture migration admin endpoints
"""

from fastapi import APIRouter, Depends
import structlog

from sportsbar.core.config import get_settings
from sportsbar.core.dependencies import get_current_admin, get_storage
from sportsbar.storage.base import MIGRATION_ORDER, Storage
from sportsbar.storage.fixtures import FixtureLoader
from sportsbar.storage.migration import MigrationDriver

logger = structlog.get_logger(__name__)
router = APIRouter(dependencies=[Depends(get_current_admin)])


def _driver(storage: Storage) -> MigrationDriver:
    return MigrationDriver(storage, FixtureLoader(get_settings().FIXTURES_DIR))


@router.get("")
def migration_status(storage: Storage = Depends(get_storage)):
    """Which entity kinds have been seeded from fixtures"""
    migrated = storage.get_migrated_kinds()
    return {
        "state": _driver(storage).state().value,
        "migrated_kinds": [kind.value for kind in MIGRATION_ORDER if kind in migrated],
        "pending_kinds": [kind.value for kind in MIGRATION_ORDER if kind not in migrated],
    }


@router.post("")
def run_migration(storage: Storage = Depends(get_storage)):
    """Run the fixture migration; kinds already migrated are left alone"""
    logger.info("Fixture migration triggered from admin")
    report = _driver(storage).run()
    return report.to_dict()
