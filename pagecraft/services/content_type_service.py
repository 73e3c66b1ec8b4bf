# pagecraft/services/content_type_service.py
# Editor-defined content types (blog, products, ...) and their items.
# Published items feed the `content-feed` and `product-grid` sections.
from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pagecraft.content_type_presets import PRESET_FIELD_TYPES, get_preset
from pagecraft.core.settings import settings
from pagecraft.models.site import ContentType, ContentTypeItem
from pagecraft.services.persistence import commit_or_rollback
from pagecraft.utils.validation import generate_slug, validate_slug, validate_title

logger = logging.getLogger(__name__)

ITEM_STATUSES = ("draft", "published", "archived")


def _check_fields(fields: Any) -> List[Dict[str, Any]]:
    if fields is None:
        return []
    if not isinstance(fields, list):
        raise ValueError("fields must be a list")
    seen = set()
    for f in fields:
        if not isinstance(f, dict) or not f.get("name"):
            raise ValueError("Each field needs a name")
        if f.get("type") not in PRESET_FIELD_TYPES:
            raise ValueError(f"Unsupported field type '{f.get('type')}'")
        if f["name"] in seen:
            raise ValueError(f"Duplicate field name '{f['name']}'")
        seen.add(f["name"])
    return copy.deepcopy(fields)


# ===================== content types =====================
def list_content_types(db: Session) -> List[ContentType]:
    return list(db.scalars(select(ContentType).order_by(ContentType.name)).all())


def get_content_type(db: Session, *, content_type_id: int) -> ContentType:
    ct = db.get(ContentType, content_type_id)
    if not ct:
        raise LookupError("Content type not found")
    return ct


def get_content_type_by_slug(db: Session, *, slug: str) -> Optional[ContentType]:
    return db.scalar(select(ContentType).where(ContentType.slug == slug))


def create_content_type(
    db: Session,
    *,
    name: str,
    slug: Optional[str] = None,
    description: Optional[str] = None,
    icon: Optional[str] = None,
    fields: Optional[List[Dict[str, Any]]] = None,
    page_id: Optional[int] = None,
) -> ContentType:
    name = (name or "").strip()
    if not name:
        raise ValueError("Name is required")
    slug = validate_slug(slug or generate_slug(name))
    if get_content_type_by_slug(db, slug=slug):
        raise ValueError(f"A content type with slug '{slug}' already exists")
    ct = ContentType(
        name=name,
        slug=slug,
        description=description,
        icon=icon,
        fields=_check_fields(fields),
        page_id=page_id,
    )
    db.add(ct)
    commit_or_rollback(db, "Failed to create content type")
    db.refresh(ct)
    logger.info("Content type %s (%s) created", ct.id, ct.slug)
    return ct


def create_from_preset(db: Session, *, preset_id: str, slug: Optional[str] = None) -> ContentType:
    preset = get_preset(preset_id)
    if not preset:
        raise LookupError("Preset not found")
    return create_content_type(
        db,
        name=preset["name"],
        slug=slug or preset["slug"],
        description=preset["description"],
        icon=preset["icon"],
        fields=preset["fields"],
    )


def update_content_type(db: Session, *, content_type_id: int, changes: Dict[str, Any]) -> ContentType:
    ct = get_content_type(db, content_type_id=content_type_id)
    if changes.get("name") is not None:
        name = changes["name"].strip()
        if not name:
            raise ValueError("Name is required")
        ct.name = name
    if changes.get("slug") is not None:
        slug = validate_slug(changes["slug"])
        other = get_content_type_by_slug(db, slug=slug)
        if other and other.id != ct.id:
            raise ValueError(f"A content type with slug '{slug}' already exists")
        ct.slug = slug
    for attr in ("description", "icon", "page_id"):
        if attr in changes:
            setattr(ct, attr, changes[attr])
    if changes.get("fields") is not None:
        ct.fields = _check_fields(changes["fields"])
    commit_or_rollback(db, "Failed to update content type")
    db.refresh(ct)
    return ct


def delete_content_type(db: Session, *, content_type_id: int) -> None:
    ct = get_content_type(db, content_type_id=content_type_id)
    db.delete(ct)
    commit_or_rollback(db, "Failed to delete content type")
    logger.info("Content type %s deleted", content_type_id)


# ===================== items =====================
def _apply_item_status(item: ContentTypeItem, status: str) -> None:
    if status not in ITEM_STATUSES:
        raise ValueError(f"Invalid status '{status}'")
    if status == "published" and item.status != "published":
        item.published_at = datetime.now(timezone.utc)
    item.status = status


def _ensure_item_slug_free(db: Session, content_type_id: int, slug: str, exclude_id: Optional[int] = None) -> None:
    stmt = select(ContentTypeItem.id).where(
        ContentTypeItem.content_type_id == content_type_id,
        ContentTypeItem.slug == slug,
    )
    if exclude_id is not None:
        stmt = stmt.where(ContentTypeItem.id != exclude_id)
    if db.scalar(stmt) is not None:
        raise ValueError(f"An item with slug '{slug}' already exists")


def list_items(db: Session, *, content_type_id: int, status: Optional[str] = None) -> List[ContentTypeItem]:
    get_content_type(db, content_type_id=content_type_id)
    stmt = select(ContentTypeItem).where(ContentTypeItem.content_type_id == content_type_id)
    if status:
        stmt = stmt.where(ContentTypeItem.status == status)
    stmt = stmt.order_by(ContentTypeItem.created_at.desc(), ContentTypeItem.id.desc())
    return list(db.scalars(stmt).all())


def get_item(db: Session, *, item_id: int) -> ContentTypeItem:
    item = db.get(ContentTypeItem, item_id)
    if not item:
        raise LookupError("Item not found")
    return item


def create_item(
    db: Session,
    *,
    content_type_id: int,
    title: str,
    slug: Optional[str] = None,
    status: str = "draft",
    data: Optional[Dict[str, Any]] = None,
    author_id: Optional[int] = None,
) -> ContentTypeItem:
    get_content_type(db, content_type_id=content_type_id)
    title = validate_title(title)
    slug = validate_slug(slug or generate_slug(title))
    _ensure_item_slug_free(db, content_type_id, slug)
    item = ContentTypeItem(
        content_type_id=content_type_id,
        title=title,
        slug=slug,
        status="draft",
        data=copy.deepcopy(data or {}),
        author_id=author_id,
    )
    _apply_item_status(item, status)
    db.add(item)
    commit_or_rollback(db, "Failed to create item")
    db.refresh(item)
    return item


def update_item(db: Session, *, item_id: int, changes: Dict[str, Any]) -> ContentTypeItem:
    item = get_item(db, item_id=item_id)
    if changes.get("title") is not None:
        item.title = validate_title(changes["title"])
    if changes.get("slug") is not None:
        slug = validate_slug(changes["slug"])
        _ensure_item_slug_free(db, item.content_type_id, slug, exclude_id=item.id)
        item.slug = slug
    if changes.get("data") is not None:
        item.data = copy.deepcopy(changes["data"])
    if changes.get("status") is not None:
        _apply_item_status(item, changes["status"])
    commit_or_rollback(db, "Failed to update item")
    db.refresh(item)
    return item


def delete_item(db: Session, *, item_id: int) -> None:
    item = get_item(db, item_id=item_id)
    db.delete(item)
    commit_or_rollback(db, "Failed to delete item")


def list_published_items(db: Session, *, slug: str, limit: Optional[int] = None) -> List[ContentTypeItem]:
    """Newest published first. An unknown slug yields an empty list (the feed just renders nothing)."""
    ct = get_content_type_by_slug(db, slug=slug)
    if not ct:
        return []
    cap = settings.CONTENT_FEED_MAX_ITEMS
    limit = cap if limit is None else max(0, min(int(limit), cap))
    stmt = (
        select(ContentTypeItem)
        .where(ContentTypeItem.content_type_id == ct.id, ContentTypeItem.status == "published")
        .order_by(ContentTypeItem.published_at.desc(), ContentTypeItem.id.desc())
        .limit(limit)
    )
    return list(db.scalars(stmt).all())


def item_to_dict(item: ContentTypeItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "title": item.title,
        "slug": item.slug,
        "data": item.data or {},
        "published_at": item.published_at.isoformat() if item.published_at else None,
    }


def make_feed_loader(db: Session):
    """Bind a session into the (slug, limit) -> items callable the page renderer expects."""
    def _load(slug: str, limit: Optional[int]) -> List[Dict[str, Any]]:
        return [item_to_dict(i) for i in list_published_items(db, slug=slug, limit=limit)]
    return _load
