"""Business logic for reading and recording the user's wardrobe."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from closet.db import models
from closet.recommender.models import (
    Category,
    ClothingItem,
    FormalityLevel,
    InvalidItemError,
    OutfitCandidate,
    WeatherSnapshot,
    WornLog,
)

logger = logging.getLogger(__name__)


class OutfitNotFoundError(LookupError):
    """Raised when logging a wear for an outfit that does not exist."""


def _parse_tags(raw: str | None, item_id: int) -> list[str]:
    if not raw:
        return []
    try:
        tags = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidItemError(f"Item {item_id} has malformed tags: {raw!r}") from exc
    if not isinstance(tags, list):
        raise InvalidItemError(f"Item {item_id} tags must be a JSON list, got {raw!r}")
    return [str(tag) for tag in tags]


def to_domain_item(row: models.ClothingItem) -> ClothingItem:
    """Convert an ORM row into the read-only domain item."""

    return ClothingItem.from_record(
        id=row.id,
        name=row.name,
        category=row.type,
        color=row.color,
        warmth_rating=row.warmth_rating,
        formality=row.formality_level,
        tags=_parse_tags(row.tags, row.id),
        image_path=row.image_path,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class WardrobeService:
    """Facade over the wardrobe and wear-history tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_all_items(self) -> list[ClothingItem]:
        """Return every cataloged item, newest first."""

        async with self._session_factory() as session:
            stmt = select(models.ClothingItem).order_by(
                models.ClothingItem.created_at.desc(),
                models.ClothingItem.id.desc(),
            )
            result = await session.execute(stmt)
            rows = result.scalars().all()
        return [to_domain_item(row) for row in rows]

    async def list_worn_logs_since(self, since: date) -> list[WornLog]:
        """Return wear logs dated on or after ``since`` with their outfit's item ids."""

        async with self._session_factory() as session:
            stmt = (
                select(models.OutfitLog.worn_date, models.Outfit)
                .join(models.Outfit, models.OutfitLog.outfit_id == models.Outfit.id)
                .where(models.OutfitLog.worn_date >= since)
                .order_by(models.OutfitLog.worn_date.desc())
            )
            result = await session.execute(stmt)
            rows = result.all()
        return [WornLog(worn_date=worn_date, item_ids=outfit.item_ids()) for worn_date, outfit in rows]

    async def add_item(
        self,
        *,
        name: str,
        category: Category,
        color: str,
        warmth_rating: int,
        formality: FormalityLevel,
        tags: Iterable[str] = (),
        image_path: str | None = None,
    ) -> ClothingItem:
        """Persist a new clothing item and return its domain form."""

        # Run the domain checks before touching the database.
        ClothingItem(
            id=0,
            category=category,
            color=color,
            warmth_rating=warmth_rating,
            formality=formality,
            name=name,
        )
        row = models.ClothingItem(
            name=name,
            type=category.value,
            color=color,
            warmth_rating=warmth_rating,
            formality_level=formality.value,
            image_path=image_path,
            tags=json.dumps(list(tags)),
        )
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
        logger.info("Added %s item %s (%s)", category.value, row.id, name)
        return to_domain_item(row)

    async def save_outfit(self, outfit: OutfitCandidate, *, name: str | None = None) -> int:
        """Store a suggested outfit so it can later be logged as worn."""

        row = models.Outfit(
            name=name,
            top_id=outfit.top.id,
            bottom_id=outfit.bottom.id,
            shoes_id=outfit.shoes.id,
            outerwear_id=outfit.outerwear.id if outfit.outerwear else None,
            accessory_id=outfit.accessory.id if outfit.accessory else None,
        )
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
        return row.id

    async def log_worn_outfit(
        self,
        outfit_id: int,
        worn_date: date,
        *,
        weather: WeatherSnapshot | None = None,
        notes: str | None = None,
    ) -> int:
        """Record that an outfit was worn on ``worn_date``."""

        async with self._session_factory() as session:
            outfit = await session.get(models.Outfit, outfit_id)
            if outfit is None:
                raise OutfitNotFoundError(f"Outfit {outfit_id} does not exist")
            log = models.OutfitLog(
                outfit_id=outfit_id,
                worn_date=worn_date,
                weather_temp=weather.temperature if weather else None,
                weather_condition=weather.condition.value if weather else None,
                notes=notes,
            )
            session.add(log)
            await session.commit()
            await session.refresh(log)
        logger.info("Logged outfit %s as worn on %s", outfit_id, worn_date.isoformat())
        return log.id
