# pagecraft/web/public/router.py
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from pagecraft.db.session import get_db
from pagecraft.services import page_service, section_service
from pagecraft.services.content_type_service import make_feed_loader
from pagecraft.services.persistence import PersistenceError
from pagecraft.services.settings_store import SiteSettingsStore, get_settings_store
from pagecraft.web.public.page_renderer import render_page

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))
router = APIRouter(include_in_schema=False)


@router.get("/pages/{slug}")
def public_page(
    slug: str,
    request: Request,
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
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
    rendered = render_page(page, sections, snap.branding, make_feed_loader(db))
    return templates.TemplateResponse(
        request,
        "public/page.html",
        {
            "page": rendered,
            "header": snap.header,
            "footer": snap.footer,
            "settings_version": snap.version,
        },
    )
