# pagecraft/api/v1/endpoints/settings.py
# Site-wide branding and header/footer layout. Reads come from the versioned
# snapshot; writes commit and then publish the key so the snapshot refreshes.
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pagecraft.api.errors import service_errors
from pagecraft.db.session import get_db
from pagecraft.deps.auth import require_admin, require_editor
from pagecraft.models.auth import User
from pagecraft.schemas.settings import (
    FONT_OPTIONS,
    FONT_WEIGHT_OPTIONS,
    BrandingOut,
    BrandingUpdate,
    FooterConfig,
    HeaderConfig,
)
from pagecraft.services import branding_service, layout_service
from pagecraft.services.settings_store import SiteSettingsStore, get_settings_store

router = APIRouter(prefix="/settings", tags=["settings"])


def _branding_out(db: Session, store: SiteSettingsStore) -> BrandingOut:
    snap = store.snapshot(db)
    return BrandingOut(
        branding=snap.branding,
        css_variables=branding_service.branding_css_variables(snap.branding),
        version=snap.version,
    )


# -------- branding --------
@router.get("/branding", response_model=BrandingOut)
def get_branding(
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
    _: User = Depends(require_editor),
):
    return _branding_out(db, store)


@router.put("/branding", response_model=BrandingOut)
def save_branding(
    body: BrandingUpdate,
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
    _: User = Depends(require_admin),
):
    with service_errors():
        branding_service.save_branding(db, colors=body.colors, typography=body.typography, store=store)
    return _branding_out(db, store)


@router.get("/branding/options")
def branding_options(_: User = Depends(require_editor)):
    return {"fonts": FONT_OPTIONS, "fontWeights": FONT_WEIGHT_OPTIONS}


# -------- header / footer --------
@router.get("/header")
def get_header(
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
    _: User = Depends(require_editor),
):
    return store.snapshot(db).header.model_dump(by_alias=True)


@router.put("/header")
def save_header(
    body: HeaderConfig,
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
    _: User = Depends(require_admin),
):
    with service_errors():
        layout_service.save_header_config(db, config=body, store=store)
    return store.snapshot(db).header.model_dump(by_alias=True)


@router.get("/footer")
def get_footer(
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
    _: User = Depends(require_editor),
):
    return store.snapshot(db).footer.model_dump(by_alias=True)


@router.put("/footer")
def save_footer(
    body: FooterConfig,
    db: Session = Depends(get_db),
    store: SiteSettingsStore = Depends(get_settings_store),
    _: User = Depends(require_admin),
):
    with service_errors():
        layout_service.save_footer_config(db, config=body, store=store)
    return store.snapshot(db).footer.model_dump(by_alias=True)
