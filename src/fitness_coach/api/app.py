"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date
from typing import Literal

from fastapi import FastAPI, HTTPException, Query, Request, Response, status

from fitness_coach.api.models import (
    DailyLogUpdate,
    GoalUpdate,
    MetricCreate,
    WaterIntakeUpdate,
    WaterIntakeView,
)
from fitness_coach.app_logging import configure_logging
from fitness_coach.codec import DailyLogRecord, MetricRecord
from fitness_coach.containers import AppContainer
from fitness_coach.domain.daily_logs import DailyLogStats
from fitness_coach.domain.metrics import MetricPoint
from fitness_coach.domain.streaks import DayCompletion, StreakSnapshot
from fitness_coach.services.backup import BackupImportError

Goal = Literal["protein", "steps", "water", "workout"]


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container.migration_service.run()
        except Exception:
            logger.exception("Failed to migrate legacy data")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get(
        "/logs",
        response_model=list[DailyLogRecord],
        response_model_exclude_none=True,
    )
    async def list_logs(request: Request) -> list[DailyLogRecord]:
        """Return the full daily log history."""
        entries = _container(request).daily_log_service.get_all()
        return [DailyLogRecord.from_entry(entry) for entry in entries]

    @app.delete("/logs", status_code=status.HTTP_204_NO_CONTENT)
    async def clear_logs(request: Request) -> Response:
        """Delete every daily log entry."""
        _container(request).daily_log_service.clear()
        logger.info("Daily logs cleared")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get(
        "/logs/today",
        response_model=DailyLogRecord | None,
        response_model_exclude_none=True,
    )
    async def today_log(request: Request) -> DailyLogRecord | None:
        """Return today's entry or null."""
        entry = _container(request).daily_log_service.get_today()
        return None if entry is None else DailyLogRecord.from_entry(entry)

    @app.get(
        "/logs/recent",
        response_model=list[DailyLogRecord],
        response_model_exclude_none=True,
    )
    async def recent_logs(
        request: Request, days: int = Query(default=14, ge=0)
    ) -> list[DailyLogRecord]:
        """Return entries from the last N days, newest first."""
        entries = _container(request).daily_log_service.get_recent(days)
        return [DailyLogRecord.from_entry(entry) for entry in entries]

    @app.get(
        "/logs/range",
        response_model=list[DailyLogRecord],
        response_model_exclude_none=True,
    )
    async def range_logs(
        request: Request, start: date, end: date
    ) -> list[DailyLogRecord]:
        """Return entries between two dates, inclusive."""
        entries = _container(request).daily_log_service.get_range(start, end)
        return [DailyLogRecord.from_entry(entry) for entry in entries]

    @app.get(
        "/logs/{day}",
        response_model=DailyLogRecord,
        response_model_exclude_none=True,
    )
    async def log_for_day(day: date, request: Request) -> DailyLogRecord:
        """Return the entry for a date."""
        entry = _container(request).daily_log_service.get_by_date(day)
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return DailyLogRecord.from_entry(entry)

    @app.put(
        "/logs/{day}",
        response_model=DailyLogRecord,
        response_model_exclude_none=True,
    )
    async def upsert_log(
        day: date, update: DailyLogUpdate, request: Request
    ) -> DailyLogRecord:
        """Merge the supplied fields into the entry for a date."""
        entry = _container(request).goal_service.upsert(day, **update.changes())
        return DailyLogRecord.from_entry(entry)

    @app.post(
        "/goals/{goal}",
        response_model=DailyLogRecord,
        response_model_exclude_none=True,
    )
    async def update_goal(
        goal: Goal, update: GoalUpdate, request: Request
    ) -> DailyLogRecord:
        """Set one goal on today's entry."""
        entry = _container(request).goal_service.update_goal(
            goal, update.value, water_glasses=update.water_glasses
        )
        return DailyLogRecord.from_entry(entry)

    @app.get("/stats")
    async def stats(
        request: Request, days: int | None = Query(default=None, ge=0)
    ) -> DailyLogStats:
        """Return completion counts and rates."""
        state_container = _container(request)
        if days is None:
            days = state_container.settings.stats_default_days
        return state_container.daily_log_service.get_stats(days)

    @app.get("/water", response_model=WaterIntakeView)
    async def water_intake(request: Request) -> WaterIntakeView:
        """Return today's water intake."""
        intake = _container(request).water_intake_service.today_intake()
        return WaterIntakeView.from_intake(intake)

    @app.put("/water", response_model=WaterIntakeView)
    async def set_water_intake(
        update: WaterIntakeUpdate, request: Request
    ) -> WaterIntakeView:
        """Set today's glass count."""
        service = _container(request).water_intake_service
        return WaterIntakeView.from_intake(service.set_glasses(update.glasses))

    @app.post("/water/glasses", response_model=WaterIntakeView)
    async def add_water_glass(request: Request) -> WaterIntakeView:
        """Record one more glass of water."""
        intake = _container(request).water_intake_service.add_glass()
        return WaterIntakeView.from_intake(intake)

    @app.delete("/water/glasses", response_model=WaterIntakeView)
    async def remove_water_glass(request: Request) -> WaterIntakeView:
        """Take back one glass of water."""
        intake = _container(request).water_intake_service.remove_glass()
        return WaterIntakeView.from_intake(intake)

    @app.get(
        "/metrics",
        response_model=list[MetricRecord],
        response_model_exclude_none=True,
    )
    async def list_metrics(request: Request) -> list[MetricRecord]:
        """Return body measurement check-ins, newest first."""
        entries = _container(request).metrics_service.list_entries()
        return [MetricRecord.from_entry(entry) for entry in entries]

    @app.post(
        "/metrics",
        status_code=status.HTTP_201_CREATED,
        response_model=MetricRecord,
        response_model_exclude_none=True,
    )
    async def add_metric(payload: MetricCreate, request: Request) -> MetricRecord:
        """Record a body measurement check-in."""
        try:
            entry = _container(request).metrics_service.add(
                payload.day,
                waist=payload.waist,
                weight=payload.weight,
                photos_taken=payload.photos_taken,
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return MetricRecord.from_entry(entry)

    @app.get("/metrics/chart")
    async def metrics_chart(
        request: Request, limit: int = Query(default=8, ge=1, le=52)
    ) -> list[MetricPoint]:
        """Return the latest measured check-ins, oldest first."""
        return _container(request).metrics_service.chart_series(limit)

    @app.delete("/metrics/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_metric(entry_id: int, request: Request) -> Response:
        """Delete a body measurement check-in."""
        if not _container(request).metrics_service.delete(entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/streaks")
    async def streaks(request: Request) -> StreakSnapshot:
        """Return current and longest streaks."""
        return _container(request).streak_service.compute()

    @app.post("/streaks/refresh")
    async def refresh_streaks(request: Request) -> StreakSnapshot:
        """Recompute streaks and update the streak cache."""
        return _container(request).streak_service.refresh()

    @app.get("/streaks/history")
    async def streak_history(
        request: Request, days: int = Query(default=35, ge=1, le=366)
    ) -> list[DayCompletion]:
        """Return completed goal counts per day, oldest first."""
        return _container(request).streak_service.history(days)

    @app.post("/migrations/run")
    async def run_migration(request: Request) -> dict[str, int]:
        """Backfill the daily log from legacy storage."""
        report = _container(request).migration_service.run()
        return asdict(report)

    @app.get("/backup")
    async def export_backup(request: Request) -> Response:
        """Download a backup document."""
        state_container = _container(request)
        payload = state_container.backup_service.export_json()
        today = state_container.daily_log_service.today()
        filename = f"fitness-backup-{today.isoformat()}.json"
        return Response(
            content=payload,
            media_type="application/json",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.post("/backup")
    async def import_backup(request: Request, merge: bool = True) -> dict[str, object]:
        """Restore a backup document."""
        raw = await request.body()
        try:
            report = _container(request).backup_service.import_json(raw, merge=merge)
        except BackupImportError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return asdict(report)

    return app
