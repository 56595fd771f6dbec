"""
One-time fixture migration into a storage adapter

Completion is tracked per entity kind. A kind is marked migrated once its
fixtures were read and every record was attempted, even if some were skipped
or failed. Kinds whose fixture file could not be loaded stay unmarked and are
retried on the next run, as are kinds never reached because the process died
mid-migration.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import structlog

from sportsbar.storage.base import MIGRATION_ORDER, EntityKind, InsertOutcome, Storage
from sportsbar.storage.fixtures import FixtureLoader

logger = structlog.get_logger(__name__)


class MigrationState(str, Enum):
    NOT_MIGRATED = "not_migrated"
    MIGRATED = "migrated"


@dataclass
class KindReport:
    """Outcome counts for one entity kind"""
    kind: EntityKind
    inserted: int = 0
    skipped: int = 0
    failed: int = 0
    already_migrated: bool = False
    load_error: Optional[str] = None

    def record(self, outcome: InsertOutcome) -> None:
        if outcome == InsertOutcome.INSERTED:
            self.inserted += 1
        elif outcome == InsertOutcome.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1

    def counts(self) -> Dict[str, int]:
        return {"inserted": self.inserted, "skipped": self.skipped, "failed": self.failed}


@dataclass
class MigrationReport:
    kinds: List[KindReport] = field(default_factory=list)

    @property
    def inserted(self) -> int:
        return sum(k.inserted for k in self.kinds)

    @property
    def skipped(self) -> int:
        return sum(k.skipped for k in self.kinds)

    @property
    def failed(self) -> int:
        return sum(k.failed for k in self.kinds)

    @property
    def complete(self) -> bool:
        return all(k.load_error is None for k in self.kinds)

    def for_kind(self, kind: EntityKind) -> KindReport:
        for report in self.kinds:
            if report.kind == kind:
                return report
        raise KeyError(kind)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "complete": self.complete,
            "inserted": self.inserted,
            "skipped": self.skipped,
            "failed": self.failed,
            "kinds": [
                {
                    "kind": k.kind.value,
                    **k.counts(),
                    "already_migrated": k.already_migrated,
                    "load_error": k.load_error,
                }
                for k in self.kinds
            ],
        }


class MigrationDriver:
    """Seeds a storage adapter from fixtures; safe to run any number of times"""

    def __init__(self, storage: Storage, loader: FixtureLoader):
        self.storage = storage
        self.loader = loader

    def state(self) -> MigrationState:
        if set(MIGRATION_ORDER) <= self.storage.get_migrated_kinds():
            return MigrationState.MIGRATED
        return MigrationState.NOT_MIGRATED

    def run(self) -> MigrationReport:
        report = MigrationReport()
        migrated = self.storage.get_migrated_kinds()

        for kind in MIGRATION_ORDER:
            kind_report = KindReport(kind=kind)
            report.kinds.append(kind_report)

            if kind in migrated:
                kind_report.already_migrated = True
                continue

            batch = self.loader.load(kind)
            if not batch.ok:
                kind_report.load_error = batch.error
                logger.warning(f"Fixture migration for {kind.value} deferred: {batch.error}")
                continue

            for record in batch.records:
                outcome = self.storage.insert_if_absent(kind, record)
                kind_report.record(outcome)
                if outcome != InsertOutcome.INSERTED:
                    logger.info(f"Fixture {kind.value} record {getattr(record, 'id', 'main')} {outcome.value}")

            self.storage.mark_migrated(kind, kind_report.counts())
            logger.info(
                "Fixture migration step finished",
                kind=kind.value,
                inserted=kind_report.inserted,
                skipped=kind_report.skipped,
                failed=kind_report.failed,
            )

        logger.info(
            "Fixture migration finished",
            inserted=report.inserted,
            skipped=report.skipped,
            failed=report.failed,
            complete=report.complete,
        )
        return report
