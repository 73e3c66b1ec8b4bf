# pagecraft/models/site.py
# Site-wide key/value settings, content types and media metadata
from __future__ import annotations
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import (
    String, Integer, BigInteger, ForeignKey, DateTime, Enum, Text,
    UniqueConstraint, Index, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pagecraft.db.base import Base, JSONType

ItemStatus = Enum(
    "draft", "published", "archived",
    name="item_status",
    create_constraint=True,
    validate_strings=True,
    native_enum=False,
)


class GlobalSetting(Base):
    __tablename__ = "global_settings"

    id: Mapped[int] = mapped_column(primary_key=True)
    key: Mapped[str] = mapped_column(String(64), unique=True, index=True)  # "branding", "header_config", ...
    value: Mapped[Any] = mapped_column(JSONType, default=dict)
    # bumped on every save; the settings snapshot compares it to spot writes from other processes
    revision: Mapped[int] = mapped_column(Integer, default=1, server_default="1")
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class ContentType(Base):
    __tablename__ = "content_types"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    fields: Mapped[list] = mapped_column(JSONType, default=list)
    page_id: Mapped[Optional[int]] = mapped_column(ForeignKey("pages.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items: Mapped[list["ContentTypeItem"]] = relationship(
        "ContentTypeItem", back_populates="content_type", cascade="all, delete-orphan"
    )


class ContentTypeItem(Base):
    __tablename__ = "content_type_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    content_type_id: Mapped[int] = mapped_column(ForeignKey("content_types.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(100))
    status: Mapped[str] = mapped_column(ItemStatus, default="draft")
    data: Mapped[dict] = mapped_column(JSONType, default=dict)
    author_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    content_type: Mapped["ContentType"] = relationship("ContentType", back_populates="items")

    __table_args__ = (
        UniqueConstraint("content_type_id", "slug", name="uq_content_item_slug_per_type"),
        Index("ix_content_type_items_type_status", "content_type_id", "status"),
    )


class Media(Base):
    __tablename__ = "media"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    file_path: Mapped[str] = mapped_column(String(1024))  # object-storage key
    file_type: Mapped[str] = mapped_column(String(120))
    file_size: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    alt_text: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    tags: Mapped[list] = mapped_column(JSONType, default=list)
    uploaded_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
