from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Boolean, ForeignKey, DateTime, Text, JSON, Float
from sqlalchemy.sql import func
import sqlalchemy as sa
from datetime import datetime, date
from app.core.db import Base


class ClothingItem(Base):
    __tablename__ = "clothing_item"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    name: Mapped[str] = mapped_column(String(200))
    type: Mapped[str] = mapped_column(String(32))
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    color: Mapped[str | None] = mapped_column(String(64), nullable=True)
    material: Mapped[str | None] = mapped_column(String(32), nullable=True)
    pattern: Mapped[str | None] = mapped_column(String(64), nullable=True)
    fit: Mapped[str | None] = mapped_column(String(32), nullable=True)
    style: Mapped[str | None] = mapped_column(String(64), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    season_tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    style_tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    dress_code: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    occasion: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    insulation_value: Mapped[int] = mapped_column(Integer, default=5)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False)
    wear_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    last_worn: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    image_url: Mapped[str] = mapped_column(Text)
    image_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Outfit(Base):
    __tablename__ = "outfit"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    outfit_date: Mapped[date] = mapped_column(sa.Date())
    feedback: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weather_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    items: Mapped[list["OutfitItem"]] = relationship(
        "OutfitItem",
        back_populates="outfit",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )


class OutfitItem(Base):
    __tablename__ = "outfit_item"
    outfit_id: Mapped[int] = mapped_column(Integer, ForeignKey("outfit.id", ondelete="CASCADE"), primary_key=True)
    clothing_item_id: Mapped[int] = mapped_column(Integer, ForeignKey("clothing_item.id", ondelete="CASCADE"), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, default=0)
    outfit: Mapped["Outfit"] = relationship("Outfit", back_populates="items")
    clothing_item: Mapped["ClothingItem"] = relationship("ClothingItem", lazy="selectin")


class OutfitRecommendation(Base):
    __tablename__ = "outfit_recommendation"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    occasion: Mapped[str | None] = mapped_column(Text, nullable=True)
    weather: Mapped[str | None] = mapped_column(Text, nullable=True)
    item_ids: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    locked_item_ids: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    score: Mapped[float | None] = mapped_column(Float, nullable=True)
    reasoning: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    provider: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Profile(Base):
    __tablename__ = "profile"
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    region: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    preferences: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
