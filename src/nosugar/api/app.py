"""FastAPI application factory."""

import logging
from datetime import datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from nosugar.api.admin import router as admin_router
from nosugar.api.schemas import (
    ActivityRequest,
    ConnectionsPayload,
    ImportRequest,
    ManualEntryRequest,
    PresetEntryRequest,
    ProfilePayload,
)
from nosugar.app_logging import configure_logging
from nosugar.containers import AppContainer
from nosugar.domain.budget import BudgetResult
from nosugar.domain.errors import InvalidEntryError, UnknownPresetError
from nosugar.domain.stats import BudgetProgress, DaySeriesPoint, WeekSummary
from nosugar.services.coaching import COMMON_ITEMS
from nosugar.services.export import build_export, export_filename, serialize_entry
from nosugar.services.ledger import PRESETS


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="nosugar")
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the stored profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile()
        return ProfilePayload.from_domain(profile).model_dump(mode="json")

    @app.put("/profile")
    async def put_profile(
        payload: ProfilePayload, request: Request
    ) -> dict[str, object]:
        """Replace the profile and return the recomputed base limit."""
        state_container: AppContainer = request.app.state.container
        state_container.profile_service.save_profile(payload.to_domain())
        base = state_container.budget_service.base_limit()
        return {
            "profile": payload.model_dump(mode="json"),
            "base_limit": _serialize_budget(base),
        }

    @app.get("/connections")
    async def get_connections(request: Request) -> dict[str, bool]:
        """Return data-source toggles."""
        state_container: AppContainer = request.app.state.container
        connections = state_container.profile_service.get_connections()
        return ConnectionsPayload(
            uber_eats=connections.uber_eats,
            banking=connections.banking,
            apple_health=connections.apple_health,
        ).model_dump()

    @app.put("/connections")
    async def put_connections(
        payload: ConnectionsPayload, request: Request
    ) -> dict[str, bool]:
        """Replace data-source toggles."""
        state_container: AppContainer = request.app.state.container
        state_container.profile_service.set_connections(payload.to_domain())
        return payload.model_dump()

    @app.get("/budget")
    async def budget(request: Request) -> dict[str, object]:
        """Return today's limit, consumption, progress and week view."""
        state_container: AppContainer = request.app.state.container
        overview = state_container.budget_service.overview()
        return {
            "base_limit": _serialize_budget(overview.base),
            "bonus": overview.bonus,
            "effective_limit": overview.effective_limit,
            "today_total": overview.today_total,
            "progress": _serialize_progress(overview.progress),
            "tip": overview.tip,
            "common_items": list(COMMON_ITEMS),
            "week": [_serialize_point(point) for point in overview.week],
            "week_summary": _serialize_week_summary(overview.week_summary),
        }

    @app.get("/week")
    async def week(request: Request) -> dict[str, object]:
        """Return the trailing seven days against the current limit."""
        state_container: AppContainer = request.app.state.container
        view = state_container.budget_service.week()
        return {
            "series": [_serialize_point(point) for point in view.series],
            "summary": _serialize_week_summary(view.summary),
        }

    @app.get("/entries")
    async def list_entries(request: Request) -> dict[str, object]:
        """Return the ledger, most recent first."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.ledger_service.list_entries()
        return {"entries": [serialize_entry(entry) for entry in entries]}

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def add_entry(
        payload: ManualEntryRequest, request: Request
    ) -> dict[str, object]:
        """Add a manually typed entry."""
        state_container: AppContainer = request.app.state.container
        try:
            entry = state_container.ledger_service.add_manual(
                payload.item, payload.sugar
            )
        except InvalidEntryError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return serialize_entry(entry)

    @app.get("/presets")
    async def list_presets() -> dict[str, object]:
        """Return the quick-add presets."""
        return {
            "presets": [
                {"label": preset.label, "grams": preset.grams} for preset in PRESETS
            ]
        }

    @app.post("/entries/preset", status_code=status.HTTP_201_CREATED)
    async def add_preset(
        payload: PresetEntryRequest, request: Request
    ) -> dict[str, object]:
        """Add a quick-add preset."""
        state_container: AppContainer = request.app.state.container
        try:
            entry = state_container.ledger_service.add_preset(payload.label)
        except UnknownPresetError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return serialize_entry(entry)

    @app.post("/entries/import")
    async def import_entries(
        payload: ImportRequest, request: Request
    ) -> dict[str, object]:
        """Import CSV text; malformed rows are skipped."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.ledger_service.import_text(payload.text)
        return {
            "imported": len(entries),
            "entries": [serialize_entry(entry) for entry in entries],
        }

    @app.delete("/entries/{entry_id}")
    async def delete_entry(entry_id: UUID, request: Request) -> dict[str, str]:
        """Remove an entry by id."""
        state_container: AppContainer = request.app.state.container
        if not state_container.ledger_service.remove(entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "deleted"}

    @app.post("/activity")
    async def record_activity(
        payload: ActivityRequest, request: Request
    ) -> dict[str, int]:
        """Record today's active energy and return the granted bonus."""
        state_container: AppContainer = request.app.state.container
        bonus = state_container.activity_service.record_activity(payload.kcal)
        return {
            "granted": bonus.granted,
            "weekly_remaining": bonus.weekly_remaining,
            "effective_limit": state_container.budget_service.effective_limit(),
        }

    @app.get("/export")
    async def export(request: Request) -> JSONResponse:
        """Return the export document as a JSON attachment."""
        state_container: AppContainer = request.app.state.container
        tz = ZoneInfo(state_container.settings.timezone)
        document = build_export(
            state_container.profile_service.get_profile(),
            state_container.profile_service.get_connections(),
            state_container.ledger_service.list_entries(),
            tz,
        )
        filename = export_filename(datetime.now(tz=tz).date())
        return JSONResponse(
            document,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.post("/reset")
    async def reset(request: Request) -> dict[str, str]:
        """Clear the ledger and restore the default profile."""
        state_container: AppContainer = request.app.state.container
        state_container.ledger_service.clear()
        state_container.profile_service.reset()
        logger.info("All user data reset")
        return {"status": "ok"}

    return app


def _serialize_budget(result: BudgetResult) -> dict[str, object]:
    return {"total": result.total, "breakdown": result.breakdown}


def _serialize_progress(progress: BudgetProgress) -> dict[str, object]:
    return {
        "consumed": progress.consumed,
        "limit": progress.limit,
        "percent": progress.percent,
        "status": progress.status,
        "limit_reached": progress.limit_reached,
    }


def _serialize_point(point: DaySeriesPoint) -> dict[str, object]:
    return {
        "day": point.day,
        "total": point.total,
        "limit": point.limit,
        "over_limit": point.over_limit,
    }


def _serialize_week_summary(summary: WeekSummary) -> dict[str, int]:
    return {
        "total": summary.total,
        "target": summary.target,
        "days_over": summary.days_over,
    }
