"""
Seed the configured storage from the bundled JSON fixtures

Run with ``python -m sportsbar.scripts.migrate_fixtures``. Kinds that were
already migrated are left alone, so the job can be re-run at any time.
Pass ``--status`` to only report which kinds are still pending.
"""

import argparse
import sys

import structlog

from sportsbar.core.config import get_settings
from sportsbar.storage import MemoryStorage, create_storage
from sportsbar.storage.base import MIGRATION_ORDER
from sportsbar.storage.fixtures import FixtureLoader
from sportsbar.storage.migration import MigrationDriver

logger = structlog.get_logger(__name__)


def main(argv=None) -> int:
    """Main entry point for the migration job"""
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--status", action="store_true", help="report migration state without writing")
    args = parser.parse_args(argv)

    settings = get_settings().model_copy(update={"RUN_FIXTURE_MIGRATION": False})

    try:
        storage = create_storage(settings)
        if isinstance(storage, MemoryStorage):
            logger.warning("STORAGE_BACKEND is memory; migrated data lives only as long as this process")

        driver = MigrationDriver(storage, FixtureLoader(settings.FIXTURES_DIR))

        if args.status:
            migrated = storage.get_migrated_kinds()
            logger.info(f"Migration state: {driver.state().value}")
            for kind in MIGRATION_ORDER:
                logger.info(f"  {kind.value}: {'migrated' if kind in migrated else 'pending'}")
            return 0

        logger.info("="*80)
        logger.info("Starting fixture migration")
        logger.info("="*80)

        report = driver.run()

        logger.info("="*80)
        logger.info("Fixture migration complete" if report.complete else "Fixture migration incomplete")
        logger.info(f"Results: {report.to_dict()}")
        logger.info("="*80)
        return 0 if report.complete else 1

    except Exception as e:
        logger.error(f"Fatal error in migration job: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
