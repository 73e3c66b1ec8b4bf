# pagecraft/services/branding_service.py
"""
Global branding and the style cascade.

Branding is a singleton row in global_settings. Stored values are merged over
the defaults group by group, so a partially saved row (or none at all) still
yields a complete BrandingSettings.

Style resolution is the cascade used by the public renderer: a section or
legacy block may carry overrides, which only apply when `useCustomStyles` is
on, and then field by field (an empty override falls back to branding).
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from pagecraft.schemas.settings import (
    DEFAULT_BRANDING,
    BrandingColors,
    BrandingSettings,
    BrandingTypography,
    EffectiveStyle,
    StyleOverrides,
)
from pagecraft.services.persistence import commit_or_rollback
from pagecraft.services.site_settings import BRANDING_KEY, get_setting, upsert_setting
from pagecraft.utils.color import hex_to_hsl_var, normalize_hex, readable_text_on

if TYPE_CHECKING:
    from pagecraft.services.settings_store import SiteSettingsStore

logger = logging.getLogger(__name__)

BASE_SIZE_MIN = 12
BASE_SIZE_MAX = 24


# -------- Load / save --------
def _group(stored: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = stored.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        logger.warning("Stored branding %s is not an object; ignoring it", key)
        return {}
    return value


def merge_branding(stored: Optional[Mapping[str, Any]]) -> BrandingSettings:
    """Defaults first, then whatever the stored row carries for each group."""
    stored = stored if isinstance(stored, Mapping) else {}
    colors = {**DEFAULT_BRANDING.colors.model_dump(), **_group(stored, "colors")}
    typography = {
        **DEFAULT_BRANDING.typography.model_dump(by_alias=True),
        **_group(stored, "typography"),
    }
    try:
        return BrandingSettings(
            colors=BrandingColors(**colors),
            typography=BrandingTypography(**typography),
        )
    except ValidationError:
        logger.warning("Stored branding is malformed; falling back to defaults")
        return DEFAULT_BRANDING


def get_branding(db: Session) -> BrandingSettings:
    return merge_branding(get_setting(db, BRANDING_KEY))


def _clean_colors(colors: Mapping[str, Any]) -> Dict[str, str]:
    allowed = set(BrandingColors.model_fields)
    out: Dict[str, str] = {}
    for key, value in colors.items():
        if key not in allowed:
            raise ValueError(f"Unknown branding color: {key}")
        hex_value = normalize_hex(value if isinstance(value, str) else None)
        if not hex_value:
            raise ValueError(f"Invalid color for {key}: {value!r}")
        out[key] = hex_value
    return out


def _clean_typography(typography: Mapping[str, Any]) -> Dict[str, str]:
    allowed = {f.alias or name for name, f in BrandingTypography.model_fields.items()}
    out: Dict[str, str] = {}
    for key, value in typography.items():
        if key not in allowed:
            raise ValueError(f"Unknown typography setting: {key}")
        out[key] = str(value)
    return out


def save_branding(
    db: Session,
    *,
    colors: Optional[Mapping[str, Any]] = None,
    typography: Optional[Mapping[str, Any]] = None,
    store: Optional["SiteSettingsStore"] = None,
) -> BrandingSettings:
    """
    Partial upsert of the branding row. Commits, then notifies `store` so the
    next snapshot read re-fetches.
    """
    current = get_branding(db)
    merged_colors = {**current.colors.model_dump(), **_clean_colors(colors or {})}
    merged_typography = {
        **current.typography.model_dump(by_alias=True),
        **_clean_typography(typography or {}),
    }
    branding = merge_branding({"colors": merged_colors, "typography": merged_typography})
    upsert_setting(db, key=BRANDING_KEY, value=branding.model_dump(by_alias=True))
    commit_or_rollback(db, "Failed to save branding")
    logger.info("Branding updated")
    if store is not None:
        store.publish(BRANDING_KEY)
    return branding


# -------- Style cascade --------
def _as_overrides(overrides: Any) -> Optional[StyleOverrides]:
    if overrides is None:
        return None
    if isinstance(overrides, StyleOverrides):
        return overrides
    if isinstance(overrides, Mapping):
        try:
            return StyleOverrides.model_validate(dict(overrides))
        except ValidationError:
            logger.warning("Ignoring malformed style overrides")
            return None
    return None


def resolve_styles(overrides: Any, branding: BrandingSettings) -> EffectiveStyle:
    """
    Effective style for one rendered unit. Without `useCustomStyles` the
    global branding is returned untouched.
    """
    c, t = branding.colors, branding.typography
    base = EffectiveStyle(
        primary_color=c.primary,
        secondary_color=c.secondary,
        accent_color=c.accent,
        background_color=c.background,
        text_color=c.foreground,
        heading_font=t.heading_font,
        body_font=t.body_font,
        heading_weight=t.heading_weight,
        body_weight=t.body_weight,
    )
    ov = _as_overrides(overrides)
    if ov is None or not ov.use_custom_styles:
        return base
    return EffectiveStyle(
        primary_color=ov.primary_color or base.primary_color,
        secondary_color=ov.secondary_color or base.secondary_color,
        accent_color=ov.accent_color or base.accent_color,
        background_color=ov.background_color or base.background_color,
        text_color=ov.text_color or base.text_color,
        heading_font=ov.heading_font or base.heading_font,
        body_font=ov.body_font or base.body_font,
        heading_weight=ov.heading_weight or base.heading_weight,
        body_weight=ov.body_weight or base.body_weight,
    )


def style_css_declarations(style: EffectiveStyle) -> str:
    """Inline `style=""` payload for a rendered section or block."""
    return "; ".join([
        f"--section-primary: {style.primary_color}",
        f"--section-secondary: {style.secondary_color}",
        f"--section-accent: {style.accent_color}",
        f"background-color: {style.background_color}",
        f"color: {style.text_color}",
        f"--section-heading-font: '{style.heading_font}'",
        f"--section-heading-weight: {style.heading_weight}",
        f"font-family: '{style.body_font}'",
        f"font-weight: {style.body_weight}",
    ])


def branding_css_variables(branding: BrandingSettings) -> Dict[str, str]:
    """CSS custom properties for :root, both raw HEX and "H S% L%" forms."""
    c, t = branding.colors, branding.typography
    out: Dict[str, str] = {
        "--brand-primary": c.primary,
        "--brand-secondary": c.secondary,
        "--brand-accent": c.accent,
        "--brand-background": c.background,
        "--brand-foreground": c.foreground,
        "--brand-muted": c.muted,
    }
    hsl = {
        "--background": hex_to_hsl_var(c.background),
        "--foreground": hex_to_hsl_var(c.foreground),
        "--primary": hex_to_hsl_var(c.primary),
        "--secondary": hex_to_hsl_var(c.secondary),
        "--accent": hex_to_hsl_var(c.accent),
        "--muted": hex_to_hsl_var(c.muted),
    }
    out.update({k: v for k, v in hsl.items() if v})

    out["--primary-foreground"] = hex_to_hsl_var(readable_text_on(c.primary)) or "0 0% 100%"
    out["--secondary-foreground"] = hex_to_hsl_var(readable_text_on(c.secondary)) or "240 10% 10%"
    out["--accent-foreground"] = hex_to_hsl_var(readable_text_on(c.accent)) or "240 10% 10%"
    out["--muted-foreground"] = hsl["--foreground"] or "240 5% 45%"
    if hsl["--primary"]:
        out["--ring"] = hsl["--primary"]

    out["--brand-heading-font"] = t.heading_font
    out["--brand-body-font"] = t.body_font
    out["--brand-base-size"] = f"{t.base_size}px"
    out["--brand-heading-weight"] = t.heading_weight
    out["--brand-body-weight"] = t.body_weight
    return out


def root_font_size(branding: BrandingSettings) -> Optional[str]:
    """Base size applied to <html> only when it is a sane number of pixels."""
    try:
        size = float(branding.typography.base_size)
    except ValueError:
        return None
    if BASE_SIZE_MIN <= size <= BASE_SIZE_MAX:
        return f"{branding.typography.base_size}px"
    return None
