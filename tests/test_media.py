# tests/test_media.py
import pytest

from pagecraft.core.settings import settings
from pagecraft.services import media_service

API = settings.API_V1_STR


@pytest.fixture()
def library(db, editor):
    rows = [
        ("Boiler room", "media/boiler.jpg", "Gas boiler install", ["hvac", "install"]),
        ("Team photo", "media/team.jpg", "Our crew", ["people"]),
        ("Heat pump", "media/pump.png", None, ["hvac"]),
    ]
    return [
        media_service.create_media(
            db, name=n, file_path=p, file_type="image/jpeg", alt_text=a, tags=t, uploaded_by=editor.id
        )
        for n, p, a, t in rows
    ]


def test_tag_filter_requires_every_tag(db, library):
    names = [m.name for m in media_service.list_media(db, tags=["hvac"])]
    assert sorted(names) == ["Boiler room", "Heat pump"]
    names = [m.name for m in media_service.list_media(db, tags=["hvac", "install"])]
    assert names == ["Boiler room"]
    assert media_service.list_media(db, tags=["hvac", "people"]) == []


def test_search_matches_name_or_alt(db, library):
    assert [m.name for m in media_service.list_media(db, search="CREW")] == ["Team photo"]
    assert [m.name for m in media_service.list_media(db, search="pump")] == ["Heat pump"]


def test_tags_are_cleaned_and_listed(db, library):
    m = media_service.create_media(
        db, name="Logo", file_path="/brand/logo.svg", file_type="image/svg+xml", tags=[" brand ", "brand", ""]
    )
    assert m.tags == ["brand"]
    assert media_service.available_tags(db) == ["brand", "hvac", "install", "people"]


def test_public_url(db, library, monkeypatch):
    assert media_service.public_url(library[0]) == "/media/boiler.jpg"
    monkeypatch.setattr(settings, "MEDIA_PUBLIC_BASE_URL", "https://cdn.example.com/")
    assert media_service.public_url(library[0]) == "https://cdn.example.com/media/boiler.jpg"


def test_media_api(client, editor_headers, library):
    r = client.get(f"{API}/media?tags=hvac&tags=install", headers=editor_headers)
    assert [m["name"] for m in r.json()] == ["Boiler room"]
    assert r.json()[0]["url"] == "/media/boiler.jpg"

    r = client.post(
        f"{API}/media",
        json={"name": "Van", "file_path": "media/van.jpg", "tags": ["fleet"]},
        headers=editor_headers,
    )
    assert r.status_code == 201
    mid = r.json()["id"]
    assert r.json()["file_type"] == "application/octet-stream"

    r = client.patch(f"{API}/media/{mid}", json={"alt_text": "Service van"}, headers=editor_headers)
    assert r.json()["alt_text"] == "Service van"
    r = client.patch(f"{API}/media/{mid}", json={"name": "  "}, headers=editor_headers)
    assert r.status_code == 400

    assert "fleet" in client.get(f"{API}/media/tags", headers=editor_headers).json()
    assert client.delete(f"{API}/media/{mid}", headers=editor_headers).status_code == 204
    assert client.get(f"{API}/media/{mid}", headers=editor_headers).status_code == 404
