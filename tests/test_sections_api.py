# tests/test_sections_api.py
from pagecraft.core.settings import settings

API = settings.API_V1_STR


def _add(client, headers, page_id, section_type):
    r = client.post(f"{API}/pages/{page_id}/sections", json={"section_type": section_type}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_requires_authentication(client, page):
    assert client.get(f"{API}/pages/{page.id}/sections").status_code == 401


def test_user_without_role_is_forbidden(client, make_user, headers_for, page):
    nobody = make_user("visitor@example.com", role=None)
    r = client.get(f"{API}/pages/{page.id}/sections", headers=headers_for(nobody))
    assert r.status_code == 403


def test_add_list_and_unknown_type(client, editor_headers, page):
    hero = _add(client, editor_headers, page.id, "hero")
    assert hero["order"] == 0 and hero["content_json"]["headline"] == "Welcome to Our Platform"
    _add(client, editor_headers, page.id, "faq")
    listed = client.get(f"{API}/pages/{page.id}/sections", headers=editor_headers).json()
    assert [s["section_type"] for s in listed] == ["hero", "faq"]

    r = client.post(f"{API}/pages/{page.id}/sections", json={"section_type": "marquee"}, headers=editor_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Unknown section type: marquee"

    r = client.post(f"{API}/pages/999/sections", json={"section_type": "hero"}, headers=editor_headers)
    assert r.status_code == 404


def test_locked_section_conflicts(client, editor_headers, page):
    hero = _add(client, editor_headers, page.id, "hero")
    r = client.post(f"{API}/sections/{hero['id']}/toggle-lock", headers=editor_headers)
    assert r.json()["is_locked"] is True

    r = client.delete(f"{API}/sections/{hero['id']}", headers=editor_headers)
    assert r.status_code == 409
    r = client.put(f"{API}/sections/{hero['id']}/fields/headline", json={"value": "x"}, headers=editor_headers)
    assert r.status_code == 409
    assert client.get(f"{API}/sections/{hero['id']}", headers=editor_headers).status_code == 200

    client.post(f"{API}/sections/{hero['id']}/toggle-lock", headers=editor_headers)
    assert client.delete(f"{API}/sections/{hero['id']}", headers=editor_headers).status_code == 204
    assert client.get(f"{API}/sections/{hero['id']}", headers=editor_headers).status_code == 404


def test_oversized_content_is_rejected(client, editor_headers, page):
    hero = _add(client, editor_headers, page.id, "hero")
    big = "x" * (settings.MAX_SECTION_CONTENT_KB * 1024 + 10)
    r = client.put(
        f"{API}/sections/{hero['id']}/content",
        json={"content": {"headline": big}},
        headers=editor_headers,
    )
    assert r.status_code == 413


def test_field_change_and_invalid_value(client, editor_headers, page):
    block = _add(client, editor_headers, page.id, "text-block")
    sid = block["id"]
    r = client.put(f"{API}/sections/{sid}/fields/alignment", json={"value": "center"}, headers=editor_headers)
    assert r.status_code == 200
    assert r.json()["content_json"]["alignment"] == "center"

    r = client.put(f"{API}/sections/{sid}/fields/alignment", json={"value": "diagonal"}, headers=editor_headers)
    assert r.status_code == 422
    r = client.put(f"{API}/sections/{sid}/fields/nope", json={"value": "x"}, headers=editor_headers)
    assert r.status_code == 422


def test_repeater_endpoints(client, editor_headers, page):
    faq = _add(client, editor_headers, page.id, "faq")
    base = f"{API}/sections/{faq['id']}/fields/items"

    assert client.post(f"{base}/items", headers=editor_headers).status_code == 201
    r = client.post(f"{base}/items", headers=editor_headers)
    items = r.json()["content_json"]["items"]
    assert len(items) == 2 and all(i["id"] for i in items)

    r = client.patch(f"{base}/items/1", json={"changes": {"question": "Shipping?"}}, headers=editor_headers)
    assert r.status_code == 200
    assert r.json()["content_json"]["items"][1]["question"] == "Shipping?"

    r = client.post(f"{base}/items/move", json={"from_index": 1, "to_index": 0}, headers=editor_headers)
    assert r.json()["content_json"]["items"][0]["question"] == "Shipping?"

    r = client.delete(f"{base}/items/1", headers=editor_headers)
    assert [i["question"] for i in r.json()["content_json"]["items"]] == ["Shipping?"]

    assert client.delete(f"{base}/items/5", headers=editor_headers).status_code == 404
    r = client.post(f"{API}/sections/{faq['id']}/fields/title/items", headers=editor_headers)
    assert r.status_code == 422


def test_reorder_and_move(client, editor_headers, page):
    a = _add(client, editor_headers, page.id, "hero")
    b = _add(client, editor_headers, page.id, "features")
    c = _add(client, editor_headers, page.id, "cta")

    r = client.post(f"{API}/pages/{page.id}/sections/reorder", json={"from_index": 2, "to_index": 0}, headers=editor_headers)
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == [c["id"], a["id"], b["id"]]
    assert [s["order"] for s in r.json()] == [0, 1, 2]

    assert client.post(f"{API}/sections/{c['id']}/move-up", headers=editor_headers).json() == {"moved": False}
    assert client.post(f"{API}/sections/{c['id']}/move-down", headers=editor_headers).json() == {"moved": True}
    listed = client.get(f"{API}/pages/{page.id}/sections", headers=editor_headers).json()
    assert [s["id"] for s in listed] == [a["id"], c["id"], b["id"]]

    r = client.post(f"{API}/pages/{page.id}/sections/reorder", json={"from_index": 0, "to_index": 9}, headers=editor_headers)
    assert r.status_code == 400


def test_style_and_visibility(client, editor_headers, page):
    hero = _add(client, editor_headers, page.id, "hero")
    r = client.put(
        f"{API}/sections/{hero['id']}/style",
        json={"style_overrides": {"useCustomStyles": True, "accentColor": "#123456"}},
        headers=editor_headers,
    )
    assert r.status_code == 200
    assert r.json()["style_overrides"]["accentColor"] == "#123456"
    r = client.post(f"{API}/sections/{hero['id']}/toggle-visibility", headers=editor_headers)
    assert r.json()["is_visible"] is False


def test_editor_descriptor(client, editor_headers, page):
    hero = _add(client, editor_headers, page.id, "hero")
    r = client.get(f"{API}/sections/{hero['id']}/editor", headers=editor_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["sectionId"] == hero["id"] and body["isLocked"] is False
    assert body["fields"][0]["key"] == "headline"


def test_section_types_endpoints(client, editor_headers):
    listed = client.get(f"{API}/section-types", headers=editor_headers).json()
    keys = [t["type"] for t in listed]
    assert "hero" in keys and "legacy-blocks" not in keys
    assert "defaultContent" not in listed[0]

    everything = client.get(f"{API}/section-types?addable_only=false", headers=editor_headers).json()
    assert "legacy-blocks" in [t["type"] for t in everything]

    hero = client.get(f"{API}/section-types/hero", headers=editor_headers).json()
    assert hero["defaultContent"]["cta_text"] == "Get Started"
    schema = client.get(f"{API}/section-types/hero/schema", headers=editor_headers).json()
    assert schema["required"] == ["headline"]
    assert client.get(f"{API}/section-types/marquee", headers=editor_headers).status_code == 400
