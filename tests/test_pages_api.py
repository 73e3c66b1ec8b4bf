# tests/test_pages_api.py
from pagecraft.core.settings import settings
from pagecraft.models.content import PageSection

API = settings.API_V1_STR


def test_create_generates_slug(client, editor_headers, editor):
    r = client.post(f"{API}/pages", json={"title": "About Our Team"}, headers=editor_headers)
    assert r.status_code == 201
    page = r.json()
    assert page["slug"] == "about-our-team"
    assert page["status"] == "draft" and page["content"] == []

    dup = client.post(f"{API}/pages", json={"title": "About", "slug": "about-our-team"}, headers=editor_headers)
    assert dup.status_code == 400
    assert dup.json()["detail"] == "A page with slug 'about-our-team' already exists"

    bad = client.post(f"{API}/pages", json={"title": "X", "slug": "Not A Slug"}, headers=editor_headers)
    assert bad.status_code == 400


def test_publish_lifecycle(client, editor_headers, page):
    r = client.post(f"{API}/pages/{page.id}/publish", headers=editor_headers)
    assert r.json()["status"] == "published"
    published_at = r.json()["published_at"]
    assert published_at

    assert client.get("/delivery/v1/pages/home").status_code == 200

    r = client.post(f"{API}/pages/{page.id}/unpublish", headers=editor_headers)
    assert r.json()["status"] == "draft"
    assert client.get("/delivery/v1/pages/home").status_code == 404

    r = client.post(f"{API}/pages/{page.id}/archive", headers=editor_headers)
    assert r.json()["status"] == "archived"
    listed = client.get(f"{API}/pages?status=archived", headers=editor_headers).json()
    assert [p["id"] for p in listed] == [page.id]


def test_update_rejects_malformed_blocks(client, editor_headers, page):
    r = client.patch(f"{API}/pages/{page.id}", json={"seo_title": "Home | Demo"}, headers=editor_headers)
    assert r.json()["seo_title"] == "Home | Demo"
    r = client.patch(f"{API}/pages/{page.id}", json={"content": [{"type": "text"}, "oops"]}, headers=editor_headers)
    assert r.status_code == 422


def test_delete_cascades_to_sections(client, db, editor_headers, page):
    client.post(f"{API}/pages/{page.id}/sections", json={"section_type": "hero"}, headers=editor_headers)
    assert client.delete(f"{API}/pages/{page.id}", headers=editor_headers).status_code == 204
    assert db.query(PageSection).count() == 0
    assert client.get(f"{API}/pages/{page.id}", headers=editor_headers).status_code == 404
