"""Backup export and import."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from pydantic import ValidationError

from fitness_coach.codec import (
    BACKUP_VERSION,
    BackupDocument,
    DailyLogRecord,
    LegacyChecklistRecord,
    MetricRecord,
)
from fitness_coach.services.daily_logs import DailyLogService
from fitness_coach.services.legacy import LegacyStateStore
from fitness_coach.services.metrics import MetricsService
from fitness_coach.services.store import WATER_INTAKE_KEY, WORKOUT_BADGES_KEY

_logger = logging.getLogger(__name__)


class BackupImportError(ValueError):
    """Raised when a backup document cannot be imported."""


@dataclass(frozen=True)
class ImportReport:
    """What a backup import changed."""

    daily_logs_added: int
    metrics_added: int
    checklist_restored: bool
    widget_state_restored: list[str]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class BackupService:
    """Builds backup documents and restores them."""

    daily_log_service: DailyLogService
    legacy_state: LegacyStateStore
    metrics_service: MetricsService
    clock: Callable[[], datetime] = field(default=_utc_now)

    def export_document(self) -> BackupDocument:
        """Return a backup of the daily log, metrics and widget state."""
        checklist = self.legacy_state.read_checklist()
        return BackupDocument(
            version=BACKUP_VERSION,
            exported_at=self.clock(),
            daily_logs=[
                DailyLogRecord.from_entry(entry)
                for entry in self.daily_log_service.export_all()
            ],
            checklist=(
                None
                if checklist is None
                else LegacyChecklistRecord.from_checklist(checklist)
            ),
            progress_metrics=[
                MetricRecord.from_entry(entry)
                for entry in self.metrics_service.list_entries()
            ],
            workout_badges=self.legacy_state.read_widget_state(WORKOUT_BADGES_KEY),
            water_intake=self.legacy_state.read_widget_state(WATER_INTAKE_KEY),
        )

    def export_json(self) -> str:
        """Return the backup document as JSON text."""
        return self.export_document().model_dump_json(
            by_alias=True, exclude_none=True, indent=2
        )

    def import_json(self, raw: str | bytes, merge: bool = True) -> ImportReport:
        """Validate and restore a backup document.

        Raises BackupImportError without touching storage when the document
        is malformed.
        """
        try:
            document = BackupDocument.model_validate_json(raw)
        except ValidationError as exc:
            _logger.warning("Rejected backup import: %s", exc.error_count())
            raise BackupImportError("Backup file is not a valid backup") from exc
        return self.import_document(document, merge=merge)

    def import_document(
        self, document: BackupDocument, merge: bool = True
    ) -> ImportReport:
        """Restore a validated backup document."""
        added = 0
        if document.daily_logs is not None:
            added = self.daily_log_service.import_entries(
                [record.to_entry() for record in document.daily_logs], merge=merge
            )

        metrics_added = 0
        if document.progress_metrics is not None:
            metrics_added = self.metrics_service.import_entries(
                [record.to_entry() for record in document.progress_metrics],
                merge=merge,
            )

        checklist_restored = document.checklist is not None
        if document.checklist is not None:
            self.legacy_state.write_checklist(document.checklist.to_checklist())

        restored = []
        for key, value in (
            (WORKOUT_BADGES_KEY, document.workout_badges),
            (WATER_INTAKE_KEY, document.water_intake),
        ):
            if value is None:
                continue
            self.legacy_state.write_widget_state(key, value)
            restored.append(key)

        _logger.info(
            "Imported backup: version=%s daily_logs_added=%s metrics_added=%s "
            "merge=%s",
            document.version,
            added,
            metrics_added,
            merge,
        )
        return ImportReport(
            daily_logs_added=added,
            metrics_added=metrics_added,
            checklist_restored=checklist_restored,
            widget_state_restored=restored,
        )
