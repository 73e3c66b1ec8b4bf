#  pagecraft/api/delivery/router.py
from __future__ import annotations

import hashlib
import json
from datetime import date, datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response
from sqlalchemy.orm import Session

from pagecraft.db.session import get_db
from pagecraft.services import content_type_service, page_service, section_service
from pagecraft.services.persistence import PersistenceError
from pagecraft.services.settings_store import SiteSettingsStore, get_settings_store
from pagecraft.web.public.page_renderer import render_page

router = APIRouter(prefix="/delivery/v1", tags=["Delivery"])

CACHE_CONTROL = "public, max-age=60, stale-while-revalidate=120"


def _json_default(o):
    """datetime/date as ISO-8601; naive datetimes are taken as UTC."""
    if isinstance(o, datetime):
        if o.tzinfo is None:
            o = o.replace(tzinfo=timezone.utc)
        return o.astimezone(timezone.utc).replace(microsecond=0).isoformat()
    if isinstance(o, date):
        return o.isoformat()
    raise TypeError(f"Type not serializable: {type(o)}")


def _cached_json(payload: Dict[str, Any], if_none_match: str | None) -> Response:
    """Serialize once, tag with a sha256 ETag and answer 304 when the client already has it."""
    body = json.dumps(payload, default=_json_default, ensure_ascii=False, sort_keys=True).encode("utf-8")
    etag = f'"{hashlib.sha256(body).hexdigest()}"'
    headers = {"ETag": etag, "Cache-Control": CACHE_CONTROL}
    if if_none_match and etag in [t.strip() for t in if_none_match.split(",")]:
        return Response(status_code=304, headers=headers)
    return Response(content=body, media_type="application/json", headers=headers)


@router.get("/pages/{slug}", summary="Published page render model (public)")
def delivery_page(
    slug: str,
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
):
    try:
        page = page_service.get_page_by_slug(db, slug=slug, published_only=True)
    except LookupError:
        raise HTTPException(status_code=404, detail="Page not found")
    try:
        sections = section_service.list_sections(db, page_id=page.id)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=e.message)

    snap = store.snapshot(db)
    rendered = render_page(page, sections, snap.branding, content_type_service.make_feed_loader(db))
    payload = {
        "page": {
            "id": page.id,
            "slug": page.slug,
            "title": page.title,
            "seo_title": page.seo_title,
            "seo_description": page.seo_description,
            "seo_image": page.seo_image,
            "published_at": page.published_at,
        },
        "render": rendered.to_dict(),
        "settings_version": snap.version,
    }
    return _cached_json(payload, if_none_match)


@router.get("/branding", summary="Site branding (public)")
def delivery_branding(
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
):
    snap = store.snapshot(db)
    return _cached_json(
        {"version": snap.version, "branding": snap.branding.model_dump(mode="json")},
        if_none_match,
    )


@router.get("/layout", summary="Header and footer configuration (public)")
def delivery_layout(
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
):
    snap = store.snapshot(db)
    return _cached_json(
        {
            "version": snap.version,
            "header": snap.header.model_dump(mode="json", by_alias=True),
            "footer": snap.footer.model_dump(mode="json", by_alias=True),
        },
        if_none_match,
    )


@router.get("/content/{slug}", summary="Published items of a content type (public)")
def delivery_content(
    slug: str,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
):
    ct = content_type_service.get_content_type_by_slug(db, slug=slug)
    if not ct:
        raise HTTPException(status_code=404, detail="Content type not found")
    items = content_type_service.list_published_items(db, slug=slug, limit=limit)
    return _cached_json(
        {
            "content_type": {"id": ct.id, "slug": ct.slug, "name": ct.name, "fields": ct.fields},
            "items": [content_type_service.item_to_dict(i) for i in items],
        },
        if_none_match,
    )
