# tests/test_delivery.py
import pytest

from pagecraft.core.settings import settings
from pagecraft.services import content_type_service as cts
from pagecraft.services import section_service

API = settings.API_V1_STR


@pytest.fixture()
def published(db, page):
    page.status = "published"
    page.seo_description = "Cooling and heating"
    db.commit()
    return page


def test_draft_page_is_hidden(client, page):
    assert client.get("/delivery/v1/pages/home").status_code == 404
    assert client.get("/delivery/v1/pages/nowhere").status_code == 404
    assert client.get("/pages/home").status_code == 404


def test_published_page_render_model(client, db, published):
    section_service.add_section(db, page_id=published.id, section_type="hero")
    r = client.get("/delivery/v1/pages/home")
    assert r.status_code == 200
    assert r.headers["cache-control"].startswith("public")
    body = r.json()
    assert body["page"]["slug"] == "home"
    assert body["page"]["published_at"] is None or body["page"]["published_at"].endswith("+00:00")
    render = body["render"]
    assert render["mode"] == "sections"
    [unit] = render["units"]
    assert unit["type"] == "hero" and unit["kind"] == "section"
    assert {"name": "headline", "value": "Welcome to Our Platform"}.items() <= next(
        n for n in unit["fields"] if n["name"] == "headline"
    ).items()
    assert render["cssVariables"]["--primary"]


def test_etag_revalidation(client, published):
    first = client.get("/delivery/v1/pages/home")
    etag = first.headers["etag"]
    again = client.get("/delivery/v1/pages/home", headers={"If-None-Match": etag})
    assert again.status_code == 304
    assert again.headers["etag"] == etag
    other = client.get("/delivery/v1/pages/home", headers={"If-None-Match": '"stale"'})
    assert other.status_code == 200


def test_etag_changes_with_content(client, db, published):
    before = client.get("/delivery/v1/pages/home").headers["etag"]
    section_service.add_section(db, page_id=published.id, section_type="cta")
    after = client.get("/delivery/v1/pages/home").headers["etag"]
    assert before != after


def test_branding_and_layout(client, admin_headers):
    first = client.get("/delivery/v1/branding").json()
    assert first["branding"]["colors"]["primary"] == "#2B3A67"

    r = client.put(f"{API}/settings/branding", json={"colors": {"primary": "#112233"}}, headers=admin_headers)
    assert r.status_code == 200
    second = client.get("/delivery/v1/branding").json()
    assert second["branding"]["colors"]["primary"] == "#112233"
    assert second["version"] > first["version"]

    layout = client.get("/delivery/v1/layout").json()
    assert layout["header"]["siteName"] == "My Site"
    assert "copyrightText" in layout["footer"]


def test_editor_cannot_change_branding(client, editor_headers):
    r = client.put(f"{API}/settings/branding", json={"colors": {"primary": "#112233"}}, headers=editor_headers)
    assert r.status_code == 403


def test_content_endpoint(client, db):
    assert client.get("/delivery/v1/content/products").status_code == 404
    ct = cts.create_from_preset(db, preset_id="shop")
    cts.create_item(db, content_type_id=ct.id, title="Heat Pump", status="published", data={"price": 4200})
    cts.create_item(db, content_type_id=ct.id, title="Prototype")

    body = client.get("/delivery/v1/content/products").json()
    assert body["content_type"]["slug"] == "products"
    assert [i["title"] for i in body["items"]] == ["Heat Pump"]
    assert client.get("/delivery/v1/content/products?limit=0").status_code == 422


def test_public_html_empty_page(client, published):
    r = client.get("/pages/home")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "This page has no content yet." in r.text
    assert "My Site" in r.text


def test_public_html_sections_and_legacy(client, db, published):
    published.content = [{"type": "text", "content": {"text": "Old body copy"}}]
    db.commit()
    assert "Old body copy" in client.get("/pages/home").text

    section_service.add_section(db, page_id=published.id, section_type="hero")
    html = client.get("/pages/home").text
    assert "Old body copy" not in html
    assert "Welcome to Our Platform" in html
    assert 'class="section section-hero"' in html

