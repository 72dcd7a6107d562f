"""SQLAlchemy models for the product catalog."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, BigInteger, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class ProductRecord(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    # Catalog order is part of the contract; rows are rewritten with their index.
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    source: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Classification
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    body_placement: Mapped[str] = mapped_column(String(100), nullable=False, default="Unknown")
    sensory_inputs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    features: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_always_on: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    price: Mapped[str] = mapped_column(String(255), nullable=False, default="Unknown")
    pricing_model: Mapped[str] = mapped_column(String(255), nullable=False, default="Unknown")
    headings: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # Epoch milliseconds
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    last_updated: Mapped[int] = mapped_column(BigInteger, nullable=False)


class SeenUrlRecord(Base):
    __tablename__ = "seen_urls"

    url: Mapped[str] = mapped_column(String(2048), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)


class AppStateRecord(Base):
    """Small key/value rows: last scrape time and user settings."""

    __tablename__ = "app_state"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
