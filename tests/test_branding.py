# tests/test_branding.py
import pytest

from pagecraft.schemas.settings import DEFAULT_BRANDING, BrandingSettings, HeaderConfig
from pagecraft.services import branding_service, layout_service
from pagecraft.services.settings_store import SiteSettingsStore
from pagecraft.services.site_settings import BRANDING_KEY, HEADER_KEY, upsert_setting
from pagecraft.utils.color import hex_to_hsl_var, normalize_hex, readable_text_on


# -------- color helpers --------
@pytest.mark.parametrize(
    "raw, expected",
    [("#abc", "#AABBCC"), ("2b3a67", "#2B3A67"), ("  #FfFfFf ", "#FFFFFF"), ("#abcd", None), ("red", None), ("", None)],
)
def test_normalize_hex(raw, expected):
    assert normalize_hex(raw) == expected


def test_hex_to_hsl_var():
    assert hex_to_hsl_var("#FFFFFF") == "0 0% 100%"
    assert hex_to_hsl_var("#000000") == "0 0% 0%"
    assert hex_to_hsl_var("#FF0000") == "0 100% 50%"
    assert hex_to_hsl_var("#2B3A67") == "225 41% 29%"
    assert hex_to_hsl_var("nope") is None


def test_readable_text_on():
    assert readable_text_on("#FFFFFF") == "#000000"
    assert readable_text_on("#2B3A67") == "#FFFFFF"


# -------- load / save --------
def test_get_branding_defaults_when_nothing_stored(db):
    assert branding_service.get_branding(db) == DEFAULT_BRANDING


def test_partial_save_merges_over_current(db):
    branding_service.save_branding(db, colors={"primary": "#f00"})
    branding_service.save_branding(db, typography={"headingFont": "Lato"})
    b = branding_service.get_branding(db)
    assert b.colors.primary == "#FF0000"
    assert b.colors.accent == DEFAULT_BRANDING.colors.accent
    assert b.typography.heading_font == "Lato"
    assert b.typography.body_font == DEFAULT_BRANDING.typography.body_font


def test_save_rejects_bad_input(db):
    with pytest.raises(ValueError):
        branding_service.save_branding(db, colors={"primary": "blue"})
    with pytest.raises(ValueError):
        branding_service.save_branding(db, colors={"tertiary": "#000"})
    with pytest.raises(ValueError):
        branding_service.save_branding(db, typography={"lineHeight": "1.5"})


def test_malformed_stored_branding_falls_back_to_defaults():
    assert branding_service.merge_branding({"colors": "oops"}) == DEFAULT_BRANDING
    assert branding_service.merge_branding(None) == DEFAULT_BRANDING


# -------- css output --------
def test_css_variables():
    css = branding_service.branding_css_variables(DEFAULT_BRANDING)
    assert css["--brand-primary"] == "#2B3A67"
    assert css["--primary"] == "225 41% 29%"
    assert css["--primary-foreground"] == "0 0% 100%"
    assert css["--ring"] == css["--primary"]
    assert css["--brand-base-size"] == "16px"


@pytest.mark.parametrize("size, expected", [("16", "16px"), ("11", None), ("25", None), ("big", None), ("18.5", "18.5px")])
def test_root_font_size_bounds(size, expected):
    b = BrandingSettings.model_validate({"typography": {"baseSize": size}})
    assert branding_service.root_font_size(b) == expected


def test_resolve_styles_ignores_malformed_overrides():
    style = branding_service.resolve_styles({"useCustomStyles": "sometimes"}, DEFAULT_BRANDING)
    assert style.primary_color == DEFAULT_BRANDING.colors.primary


# -------- snapshot store --------
def test_store_refetches_after_publish(db):
    store = SiteSettingsStore()
    first = store.snapshot(db)
    assert first.version == 1
    assert store.snapshot(db) is first

    branding_service.save_branding(db, colors={"accent": "#00FF00"}, store=store)
    second = store.snapshot(db)
    assert second.version == 2
    assert second.branding.colors.accent == "#00FF00"
    assert first.branding.colors.accent == DEFAULT_BRANDING.colors.accent


def test_store_sees_writes_from_another_store(db):
    worker_a = SiteSettingsStore()
    worker_b = SiteSettingsStore()
    first = worker_a.snapshot(db)
    assert first.branding.colors.primary == DEFAULT_BRANDING.colors.primary

    branding_service.save_branding(db, colors={"primary": "#112233"}, store=worker_b)
    second = worker_a.snapshot(db)
    assert second.branding.colors.primary == "#112233"
    assert second.version == first.version + 1


def test_store_sees_direct_row_writes(db):
    store = SiteSettingsStore()
    layout_service.save_header_config(
        db, config=HeaderConfig.model_validate({"siteName": "Acme"}), store=store
    )
    assert store.snapshot(db).header.site_name == "Acme"

    upsert_setting(db, key=HEADER_KEY, value={"siteName": "Globex"})
    db.commit()
    assert store.snapshot(db).header.site_name == "Globex"


def test_store_tracks_layout_changes(db):
    store = SiteSettingsStore()
    store.snapshot(db)
    layout_service.save_header_config(
        db, config=HeaderConfig.model_validate({"siteName": "Acme"}), store=store
    )
    snap = store.snapshot(db)
    assert snap.header.site_name == "Acme"
    assert snap.version == 2


def test_store_subscribe_and_unsubscribe():
    store = SiteSettingsStore()
    seen = []
    unsubscribe = store.subscribe(BRANDING_KEY, seen.append)
    store.publish(BRANDING_KEY)
    store.publish(HEADER_KEY)
    unsubscribe()
    store.publish(BRANDING_KEY)
    assert seen == [BRANDING_KEY]


def test_failing_handler_does_not_block_others():
    store = SiteSettingsStore()
    seen = []

    def _bad(key):
        raise RuntimeError("boom")

    store.subscribe(BRANDING_KEY, _bad)
    store.subscribe(BRANDING_KEY, seen.append)
    store.publish(BRANDING_KEY)
    assert seen == [BRANDING_KEY]
