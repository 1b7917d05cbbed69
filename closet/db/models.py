"""SQLAlchemy models describing the wardrobe tables."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for ORM models."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow
    )


class ClothingItem(Base):
    """Cataloged clothing item."""

    __tablename__ = "clothing_items"
    __table_args__ = (
        CheckConstraint("warmth_rating >= 1 AND warmth_rating <= 5", name="ck_warmth_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(16), index=True, nullable=False)
    color: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    warmth_rating: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    formality_level: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    image_path: Mapped[str | None] = mapped_column(String(256))
    tags: Mapped[str | None] = mapped_column(Text)  # JSON array
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class Outfit(Base):
    """Saved combination of clothing items."""

    __tablename__ = "outfits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(100))
    top_id: Mapped[int | None] = mapped_column(ForeignKey("clothing_items.id", ondelete="SET NULL"))
    bottom_id: Mapped[int | None] = mapped_column(ForeignKey("clothing_items.id", ondelete="SET NULL"))
    shoes_id: Mapped[int | None] = mapped_column(ForeignKey("clothing_items.id", ondelete="SET NULL"))
    outerwear_id: Mapped[int | None] = mapped_column(ForeignKey("clothing_items.id", ondelete="SET NULL"))
    accessory_id: Mapped[int | None] = mapped_column(ForeignKey("clothing_items.id", ondelete="SET NULL"))

    logs: Mapped[list["OutfitLog"]] = relationship(
        back_populates="outfit",
        cascade="all, delete-orphan",
    )

    def item_ids(self) -> tuple[int | None, ...]:
        return (self.top_id, self.bottom_id, self.shoes_id, self.outerwear_id, self.accessory_id)


class OutfitLog(Base):
    """Record of an outfit being worn on a given day."""

    __tablename__ = "outfit_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    outfit_id: Mapped[int] = mapped_column(
        ForeignKey("outfits.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    worn_date: Mapped[date] = mapped_column(Date, index=True, nullable=False)
    weather_temp: Mapped[float | None] = mapped_column(Float)  # Fahrenheit
    weather_condition: Mapped[str | None] = mapped_column(String(16))
    notes: Mapped[str | None] = mapped_column(Text)

    outfit: Mapped[Outfit] = relationship(back_populates="logs")
