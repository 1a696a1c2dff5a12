"""FastAPI application factory."""

import logging
from zoneinfo import ZoneInfo

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from food_scanner.api.food_models import (
    CompareRequest,
    FoodCreate,
    FoodPayload,
    FoodUpdate,
)
from food_scanner.app_logging import configure_logging
from food_scanner.containers import AppContainer
from food_scanner.domain.comparison import FoodComparison
from food_scanner.domain.foods import FoodRecord, RecentSearchEntry
from food_scanner.domain.history import format_search_time
from food_scanner.services.notices import Notice
from food_scanner.services.search import FoodRepositoryError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    timezone = ZoneInfo(container.settings.timezone)

    app = FastAPI()
    app.state.container = container

    def _respond(
        request: Request, pending: list[Notice] | None = None, **body: object
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        notices = [*(pending or []), *state_container.notices.drain()]
        return {
            **body,
            "notices": [
                {"title": notice.title, "message": notice.message}
                for notice in notices
            ],
        }

    @app.exception_handler(FoodRepositoryError)
    async def food_repository_error(
        request: Request, exc: FoodRepositoryError
    ) -> JSONResponse:
        logger.error("Remote food repository failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=_respond(request, detail=str(exc)),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(request: Request, q: str = "") -> dict[str, object]:
        """Search foods by name, recording the top match."""
        state_container: AppContainer = request.app.state.container
        results = await state_container.search_service.search(q)
        return _respond(request, results=[food.to_row() for food in results])

    @app.get("/foods/barcode/{barcode}")
    async def scan_barcode(barcode: str, request: Request) -> dict[str, object]:
        """Look up a scanned barcode."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.search_service.scan(barcode)
        return _respond(
            request,
            barcode=result.barcode,
            food=result.food.to_row() if result.food else None,
            can_register=result.can_register,
        )

    @app.post("/foods", status_code=status.HTTP_201_CREATED)
    async def register_food(payload: FoodCreate, request: Request) -> dict[str, object]:
        """Register a new food."""
        state_container: AppContainer = request.app.state.container
        food = state_container.search_service.register(
            payload.model_dump(exclude_none=True)
        )
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Could not register the food",
            )
        return _respond(request, food=food.to_row())

    @app.patch("/foods/{food_id}")
    async def update_food(
        food_id: str, payload: FoodUpdate, request: Request
    ) -> dict[str, object]:
        """Apply a partial update to a food."""
        state_container: AppContainer = request.app.state.container
        food = state_container.search_service.update(
            food_id, payload.model_dump(exclude_none=True)
        )
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Could not update the food",
            )
        return _respond(request, food=food.to_row())

    @app.get("/recent-searches")
    async def list_recent_searches(request: Request) -> dict[str, object]:
        """Return the search history, newest first."""
        state_container: AppContainer = request.app.state.container
        entries = await state_container.recent_searches_service.load()
        return _respond(request, entries=_format_entries(entries, timezone))

    @app.delete("/recent-searches/{food_id}")
    async def remove_recent_search(food_id: str, request: Request) -> dict[str, object]:
        """Remove one food from the history."""
        state_container: AppContainer = request.app.state.container
        entries = await state_container.recent_searches_service.remove(food_id)
        pending: list[Notice] = []
        if entries is None:
            pending = state_container.notices.drain()
            entries = await state_container.recent_searches_service.load()
        return _respond(
            request, pending, entries=_format_entries(entries, timezone)
        )

    @app.delete("/recent-searches")
    async def clear_recent_searches(request: Request) -> dict[str, object]:
        """Clear the search history."""
        state_container: AppContainer = request.app.state.container
        cleared = await state_container.recent_searches_service.clear()
        return _respond(request, cleared=cleared)

    @app.get("/favorites")
    async def list_favorites(request: Request) -> dict[str, object]:
        """Return favorite foods in the order they were added."""
        state_container: AppContainer = request.app.state.container
        favorites = await state_container.favorites_service.load()
        return _respond(request, favorites=[food.to_row() for food in favorites])

    @app.post("/favorites/toggle")
    async def toggle_favorite(
        payload: FoodPayload, request: Request
    ) -> dict[str, object]:
        """Add or remove a favorite."""
        state_container: AppContainer = request.app.state.container
        favorite = await state_container.favorites_service.toggle(payload.to_record())
        return _respond(request, id=payload.id, favorite=favorite)

    @app.post("/compare")
    async def compare_foods(
        payload: CompareRequest, request: Request
    ) -> dict[str, object]:
        """Compare up to the configured number of foods."""
        state_container: AppContainer = request.app.state.container
        comparison = FoodComparison(limit=state_container.settings.comparison_limit)
        for item in payload.foods:
            comparison.add(item.to_record())
        return _respond(
            request,
            foods=[_food_heading(food) for food in comparison.foods],
            rows=[
                {"label": row.label, "unit": row.unit, "values": row.values}
                for row in comparison.rows()
            ],
        )

    return app


def _format_entries(
    entries: list[RecentSearchEntry], timezone: ZoneInfo
) -> list[dict[str, object]]:
    return [
        {**entry.to_row(), "label": format_search_time(entry.timestamp, tz=timezone)}
        for entry in entries
    ]


def _food_heading(food: FoodRecord) -> dict[str, object]:
    return {"id": food.id, "nombre": food.name}
