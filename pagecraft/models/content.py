# pagecraft/models/content.py
# Content models: Page (with legacy block array), PageSection, ReusableComponent
from __future__ import annotations
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import (
    String, Integer, Boolean, ForeignKey, DateTime, Enum, Text, Index, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pagecraft.db.base import Base, JSONType

PageStatus = Enum(
    "draft", "published", "archived",
    name="page_status",
    create_constraint=True,
    validate_strings=True,
    native_enum=False,
)


class Page(Base):
    __tablename__ = "pages"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    status: Mapped[str] = mapped_column(PageStatus, default="draft")

    seo_title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    seo_description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    seo_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    # block array from the original block editor; read-only fallback for rendering
    content: Mapped[Any] = mapped_column(JSONType, default=list)

    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    sections: Mapped[list["PageSection"]] = relationship(
        "PageSection",
        back_populates="page",
        cascade="all, delete-orphan",
        order_by="PageSection.order",
    )


class ReusableComponent(Base):
    __tablename__ = "reusable_components"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(160))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    block_type: Mapped[str] = mapped_column(String(64))  # a section type key
    content: Mapped[dict] = mapped_column(JSONType, default=dict)
    created_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class PageSection(Base):
    __tablename__ = "page_sections"

    id: Mapped[int] = mapped_column(primary_key=True)
    page_id: Mapped[int] = mapped_column(ForeignKey("pages.id", ondelete="CASCADE"), index=True)
    section_type: Mapped[str] = mapped_column(String(64))
    content_json: Mapped[dict] = mapped_column(JSONType, default=dict)
    style_overrides: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)

    # sort key only; gaps and duplicates are tolerated, ties break on id
    order: Mapped[int] = mapped_column(Integer, default=0)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True)
    is_locked: Mapped[bool] = mapped_column(Boolean, default=False)

    reusable_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("reusable_components.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_linked: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    page: Mapped["Page"] = relationship("Page", back_populates="sections")
    reusable: Mapped[Optional["ReusableComponent"]] = relationship("ReusableComponent")

    __table_args__ = (
        Index("ix_page_sections_page_order", "page_id", "order"),
    )
