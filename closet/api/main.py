"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator

from fastapi import FastAPI, HTTPException, Request

from closet.api.schemas import (
    OutfitCreateRequest,
    SuggestionRequest,
    SuggestionResponse,
    WornLogRequest,
)
from closet.config.settings import Settings, get_settings
from closet.monitoring.logging import configure_logging
from closet.recommender.models import (
    ClothingItem,
    InvalidItemError,
    OutfitCandidate,
    OutfitIntegrityError,
    TemperatureUnit,
    WeatherSnapshot,
)
from closet.services.outfit import SuggestionService
from closet.services.wardrobe import OutfitNotFoundError, WardrobeService
from closet.weather.client import LocationNotFoundError, WeatherClient, WeatherServiceError

logger = logging.getLogger(__name__)


async def _resolve_weather(
    payload: SuggestionRequest,
    weather_client: WeatherClient,
    settings: Settings,
) -> WeatherSnapshot:
    if payload.weather is not None:
        return payload.weather.to_snapshot()

    latitude, longitude = payload.latitude, payload.longitude
    if payload.city:
        location = await weather_client.geocode_city(payload.city)
        latitude, longitude = location.latitude, location.longitude
    if latitude is None or longitude is None:
        latitude, longitude = settings.default_latitude, settings.default_longitude
    if latitude is None or longitude is None:
        raise HTTPException(
            status_code=422,
            detail="Provide weather, coordinates, or a city (no default location configured).",
        )
    return await weather_client.fetch_current(latitude, longitude)


def create_app(
    *,
    settings: Settings | None = None,
    wardrobe: WardrobeService | None = None,
    weather_client: WeatherClient | None = None,
) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        if wardrobe is None:
            from closet.db.session import AsyncSessionFactory, init_db

            await init_db()
            app.state.wardrobe = WardrobeService(AsyncSessionFactory)
        else:
            app.state.wardrobe = wardrobe
        app.state.weather_client = weather_client or WeatherClient(settings)
        try:
            yield
        finally:
            if weather_client is None:
                await app.state.weather_client.close()

    app = FastAPI(
        title="Virtual Closet API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.post("/suggestions", tags=["outfits"], response_model=SuggestionResponse)
    async def suggest_outfits(payload: SuggestionRequest, request: Request) -> SuggestionResponse:
        """Recommend outfits for the requested formality and current weather."""

        wardrobe_service: WardrobeService = request.app.state.wardrobe
        try:
            weather = await _resolve_weather(payload, request.app.state.weather_client, settings)
        except LocationNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except WeatherServiceError as exc:
            raise HTTPException(status_code=502, detail=f"Weather unavailable: {exc}") from exc

        service = SuggestionService(wardrobe_service, wardrobe_service, settings)
        try:
            suggestions = await service.generate_suggestions(weather, payload.formality, payload.count)
        except InvalidItemError as exc:
            logger.error("Wardrobe data is corrupt: %s", exc)
            raise HTTPException(status_code=500, detail="Wardrobe data is invalid.") from exc

        units = payload.units or TemperatureUnit(settings.temperature_unit)
        return SuggestionResponse(
            weather=weather.in_unit(units),
            suggestions=[suggestion.to_dict() for suggestion in suggestions],
        )

    @app.post("/outfits", tags=["outfits"], status_code=201)
    async def save_outfit(payload: OutfitCreateRequest, request: Request) -> dict[str, int]:
        """Store an outfit (typically an accepted suggestion)."""

        wardrobe_service: WardrobeService = request.app.state.wardrobe
        items: dict[int, ClothingItem] = {item.id: item for item in await wardrobe_service.list_all_items()}

        def _lookup(item_id: int | None) -> ClothingItem | None:
            if item_id is None:
                return None
            if item_id not in items:
                raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
            return items[item_id]

        try:
            outfit = OutfitCandidate(
                top=_lookup(payload.top_id),
                bottom=_lookup(payload.bottom_id),
                shoes=_lookup(payload.shoes_id),
                outerwear=_lookup(payload.outerwear_id),
                accessory=_lookup(payload.accessory_id),
            )
        except OutfitIntegrityError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        outfit_id = await wardrobe_service.save_outfit(outfit, name=payload.name)
        return {"id": outfit_id}

    @app.post("/outfits/{outfit_id}/worn", tags=["outfits"], status_code=201)
    async def log_worn(outfit_id: int, payload: WornLogRequest, request: Request) -> dict[str, int]:
        """Record that an outfit was worn, feeding the freshness scoring."""

        wardrobe_service: WardrobeService = request.app.state.wardrobe
        try:
            log_id = await wardrobe_service.log_worn_outfit(
                outfit_id,
                payload.worn_date or date.today(),
                notes=payload.notes,
            )
        except OutfitNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"id": log_id}

    return app


app = create_app()
