# tests/test_layout.py
import pytest

from pagecraft.core.settings import settings
from pagecraft.schemas.settings import FooterConfig, HeaderConfig
from pagecraft.services import layout_service
from pagecraft.services.site_settings import HEADER_KEY, upsert_setting

API = settings.API_V1_STR


def test_defaults_when_nothing_stored(db):
    header = layout_service.get_header_config(db)
    assert header.site_name == "My Site" and header.sticky is True
    assert layout_service.get_footer_config(db).show_copyright is True


def test_stored_values_merge_over_defaults(db):
    upsert_setting(db, key=HEADER_KEY, value={"siteName": "Acme"})
    db.commit()
    header = layout_service.get_header_config(db)
    assert header.site_name == "Acme"
    assert header.layout == "left"


def test_malformed_stored_layout_falls_back(db):
    upsert_setting(db, key=HEADER_KEY, value={"layout": "diagonal"})
    db.commit()
    assert layout_service.get_header_config(db).layout == "left"


@pytest.mark.parametrize(
    "config, message",
    [
        ({"navigation": [{"id": "n1", "label": "Docs", "url": "not a url"}]}, "Menu item 'Docs'"),
        ({"socialLinks": [{"id": "s1", "platform": "github", "url": ""}]}, "github link: URL is required"),
        ({"contactInfo": {"email": "nobody"}}, "valid email"),
        ({"contactInfo": {"phone": "call me"}}, "valid phone"),
    ],
)
def test_header_save_rejects_bad_links(db, config, message):
    with pytest.raises(ValueError, match=message):
        layout_service.save_header_config(db, config=HeaderConfig.model_validate(config))


def test_nested_footer_links_are_checked(db):
    config = FooterConfig.model_validate({
        "columns": [{
            "id": "c1",
            "title": "Company",
            "links": [{"id": "l1", "label": "About", "url": "/about", "children": [
                {"id": "l2", "label": "Broken", "url": "two words"},
            ]}],
        }],
    })
    with pytest.raises(ValueError, match="Broken"):
        layout_service.save_footer_config(db, config=config)


def test_header_api_round_trip(client, admin_headers, editor_headers):
    payload = {
        "siteName": "Demo Air Supply",
        "navigation": [{"id": "n1", "label": "Shop", "url": "/pages/shop"}],
        "contactInfo": {"email": "hello@example.com", "phone": "+1 (555) 010-0000"},
    }
    r = client.put(f"{API}/settings/header", json=payload, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["siteName"] == "Demo Air Supply"
    assert client.get(f"{API}/settings/header", headers=editor_headers).json()["navigation"][0]["label"] == "Shop"

    assert client.put(f"{API}/settings/header", json=payload, headers=editor_headers).status_code == 403
    bad = {**payload, "contactInfo": {"email": "nope"}}
    assert client.put(f"{API}/settings/header", json=bad, headers=admin_headers).status_code == 400


def test_footer_change_reaches_public_page(client, db, admin_headers, page):
    page.status = "published"
    db.commit()
    r = client.put(f"{API}/settings/footer", json={"copyrightText": "(c) Demo Air Supply"}, headers=admin_headers)
    assert r.status_code == 200
    assert "(c) Demo Air Supply" in client.get("/pages/home").text
