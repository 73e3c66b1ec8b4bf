# pagecraft/services/media_service.py
# Media library metadata. The bytes themselves live in object storage under `file_path`.
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pagecraft.core.settings import settings
from pagecraft.models.site import Media
from pagecraft.services.persistence import commit_or_rollback

logger = logging.getLogger(__name__)


def _clean_tags(tags: Optional[Iterable[str]]) -> List[str]:
    out: List[str] = []
    for t in tags or []:
        t = str(t).strip()
        if t and t not in out:
            out.append(t)
    return out


def public_url(media: Media) -> str:
    base = (settings.MEDIA_PUBLIC_BASE_URL or "").rstrip("/")
    path = media.file_path.lstrip("/")
    return f"{base}/{path}" if base else f"/{path}"


def list_media(db: Session, *, search: Optional[str] = None, tags: Optional[List[str]] = None) -> List[Media]:
    """
    Newest first. `search` matches name or alt text (case-insensitive);
    `tags` keeps only items carrying every requested tag.
    """
    rows = list(db.scalars(select(Media).order_by(Media.created_at.desc(), Media.id.desc())).all())
    wanted = _clean_tags(tags)
    q = (search or "").strip().lower()

    def _matches(m: Media) -> bool:
        if q and q not in m.name.lower() and q not in (m.alt_text or "").lower():
            return False
        return all(t in (m.tags or []) for t in wanted)

    return [m for m in rows if _matches(m)]


def available_tags(db: Session) -> List[str]:
    tags = set()
    for row in db.scalars(select(Media.tags)).all():
        tags.update(row or [])
    return sorted(tags)


def get_media(db: Session, *, media_id: int) -> Media:
    m = db.get(Media, media_id)
    if not m:
        raise LookupError("Media not found")
    return m


def create_media(
    db: Session,
    *,
    name: str,
    file_path: str,
    file_type: str,
    file_size: Optional[int] = None,
    alt_text: Optional[str] = None,
    tags: Optional[List[str]] = None,
    uploaded_by: Optional[int] = None,
) -> Media:
    if not (name or "").strip():
        raise ValueError("Name is required")
    if not (file_path or "").strip():
        raise ValueError("File path is required")
    m = Media(
        name=name.strip(),
        file_path=file_path.strip(),
        file_type=file_type or "application/octet-stream",
        file_size=file_size,
        alt_text=alt_text,
        tags=_clean_tags(tags),
        uploaded_by=uploaded_by,
    )
    db.add(m)
    commit_or_rollback(db, "Failed to save media")
    db.refresh(m)
    logger.info("Media %s registered (%s)", m.id, m.file_path)
    return m


def update_media(db: Session, *, media_id: int, changes: Dict[str, Any]) -> Media:
    m = get_media(db, media_id=media_id)
    if changes.get("name") is not None:
        if not changes["name"].strip():
            raise ValueError("Name is required")
        m.name = changes["name"].strip()
    if "alt_text" in changes:
        m.alt_text = changes["alt_text"]
    if changes.get("tags") is not None:
        m.tags = _clean_tags(changes["tags"])
    commit_or_rollback(db, "Failed to update media")
    db.refresh(m)
    return m


def delete_media(db: Session, *, media_id: int) -> None:
    m = get_media(db, media_id=media_id)
    db.delete(m)
    commit_or_rollback(db, "Failed to delete media")
    logger.info("Media %s deleted", media_id)
