# pagecraft/services/page_service.py
# Pages: metadata, status/publish and the legacy block array kept in `content`.
from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pagecraft.models.content import Page
from pagecraft.services.persistence import commit_or_rollback
from pagecraft.utils.validation import generate_slug, validate_slug, validate_title

logger = logging.getLogger(__name__)

PAGE_STATUSES = ("draft", "published", "archived")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_slug_free(db: Session, slug: str, *, exclude_id: Optional[int] = None) -> None:
    stmt = select(Page.id).where(Page.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Page.id != exclude_id)
    if db.scalar(stmt) is not None:
        raise ValueError(f"A page with slug '{slug}' already exists")


def _check_blocks(blocks: Any) -> List[Dict[str, Any]]:
    if blocks is None:
        return []
    if not isinstance(blocks, list) or not all(isinstance(b, dict) for b in blocks):
        raise ValueError("Page content must be a list of blocks")
    return copy.deepcopy(blocks)


def _apply_status(page: Page, status: str) -> None:
    if status not in PAGE_STATUSES:
        raise ValueError(f"Invalid status '{status}'")
    if status == "published" and page.status != "published":
        page.published_at = _now()
    page.status = status


# -------- reads --------
def list_pages(db: Session, *, status: Optional[str] = None) -> List[Page]:
    stmt = select(Page).order_by(Page.updated_at.desc(), Page.id.desc())
    if status:
        stmt = stmt.where(Page.status == status)
    return list(db.scalars(stmt).all())


def get_page(db: Session, *, page_id: int) -> Page:
    page = db.get(Page, page_id)
    if not page:
        raise LookupError("Page not found")
    return page


def get_page_by_slug(db: Session, *, slug: str, published_only: bool = False) -> Page:
    stmt = select(Page).where(Page.slug == slug)
    if published_only:
        stmt = stmt.where(Page.status == "published")
    page = db.scalar(stmt)
    if not page:
        raise LookupError("Page not found")
    return page


# -------- writes --------
def create_page(
    db: Session,
    *,
    title: str,
    slug: Optional[str] = None,
    status: str = "draft",
    seo_title: Optional[str] = None,
    seo_description: Optional[str] = None,
    seo_image: Optional[str] = None,
    content: Optional[List[Dict[str, Any]]] = None,
    created_by: Optional[int] = None,
) -> Page:
    """Slug defaults to one generated from the title."""
    title = validate_title(title)
    slug = validate_slug(slug if slug else generate_slug(title))
    _ensure_slug_free(db, slug)

    page = Page(
        title=title,
        slug=slug,
        status="draft",
        seo_title=seo_title,
        seo_description=seo_description,
        seo_image=seo_image,
        content=_check_blocks(content),
        created_by=created_by,
    )
    _apply_status(page, status)
    db.add(page)
    commit_or_rollback(db, "Failed to create page")
    db.refresh(page)
    logger.info("Page %s created (slug=%s, status=%s)", page.id, page.slug, page.status)
    return page


def update_page(db: Session, *, page_id: int, changes: Dict[str, Any]) -> Page:
    page = get_page(db, page_id=page_id)
    if "title" in changes and changes["title"] is not None:
        page.title = validate_title(changes["title"])
    if "slug" in changes and changes["slug"] is not None:
        slug = validate_slug(changes["slug"])
        _ensure_slug_free(db, slug, exclude_id=page.id)
        page.slug = slug
    for attr in ("seo_title", "seo_description", "seo_image"):
        if attr in changes:
            setattr(page, attr, changes[attr])
    if "content" in changes and changes["content"] is not None:
        page.content = _check_blocks(changes["content"])
    if "status" in changes and changes["status"] is not None:
        _apply_status(page, changes["status"])
    commit_or_rollback(db, "Failed to update page")
    db.refresh(page)
    return page


def set_status(db: Session, *, page_id: int, status: str) -> Page:
    page = get_page(db, page_id=page_id)
    _apply_status(page, status)
    commit_or_rollback(db, "Failed to update page")
    db.refresh(page)
    logger.info("Page %s -> %s", page.id, status)
    return page


def delete_page(db: Session, *, page_id: int) -> None:
    page = get_page(db, page_id=page_id)
    db.delete(page)
    commit_or_rollback(db, "Failed to delete page")
    logger.info("Page %s deleted", page_id)
