# tests/test_reusable_components.py
import pytest

from pagecraft.section_registry import UnknownSectionType
from pagecraft.services import reusable_service, section_service


def _component(db, **kw):
    data = dict(name="Footer CTA", block_type="cta", content={"headline": "v1"})
    data.update(kw)
    return reusable_service.save_component(db, **data)


def test_save_component_validates_type_and_name(db):
    with pytest.raises(UnknownSectionType):
        _component(db, block_type="marquee")
    with pytest.raises(ValueError):
        _component(db, name="   ")


def test_save_from_section_snapshots_content(db, page):
    section = section_service.add_section(db, page_id=page.id, section_type="faq")
    comp = reusable_service.save_component_from_section(db, section_id=section.id, name="FAQ")
    assert comp.block_type == "faq"
    assert comp.content == section.content_json


def test_update_fans_out_to_linked_sections_only(db, page):
    comp = _component(db)
    linked = section_service.add_section_from_reusable(db, page_id=page.id, reusable_id=comp.id)
    detached = section_service.add_section_from_reusable(db, page_id=page.id, reusable_id=comp.id)
    section_service.unlink_section(db, section_id=detached.id)

    comp, count = reusable_service.update_component(db, component_id=comp.id, content={"headline": "v2"})
    assert count == 1
    assert comp.content == {"headline": "v2"}
    db.expire_all()
    assert section_service.get_section(db, section_id=linked.id).content_json == {"headline": "v2"}
    assert section_service.get_section(db, section_id=detached.id).content_json == {"headline": "v1"}


def test_rename_without_content_touches_no_sections(db, page):
    comp = _component(db)
    section_service.add_section_from_reusable(db, page_id=page.id, reusable_id=comp.id)
    comp, count = reusable_service.update_component(db, component_id=comp.id, name="Renamed")
    assert (comp.name, count) == ("Renamed", 0)


def test_delete_unlinks_sections_and_keeps_their_content(db, page):
    comp = _component(db)
    section = section_service.add_section_from_reusable(db, page_id=page.id, reusable_id=comp.id)
    reusable_service.delete_component(db, component_id=comp.id)
    db.expire_all()
    s = section_service.get_section(db, section_id=section.id)
    assert s.is_linked is False and s.reusable_id is None
    assert s.content_json == {"headline": "v1"}
    with pytest.raises(LookupError):
        reusable_service.get_component(db, component_id=comp.id)


def test_add_from_reusable_with_explicit_content(db, page):
    comp = _component(db)
    s = section_service.add_section_from_reusable(
        db, page_id=page.id, reusable_id=comp.id, content={"headline": "custom"}
    )
    assert s.content_json == {"headline": "custom"} and s.is_linked
    with pytest.raises(LookupError):
        section_service.add_section_from_reusable(db, page_id=page.id, reusable_id=999)


def test_reusable_api(client, editor_headers, page):
    r = client.post(
        "/api/v1/reusable-components",
        json={"name": "Banner", "block_type": "cta", "content": {"headline": "Hi"}},
        headers=editor_headers,
    )
    assert r.status_code == 201, r.text
    comp_id = r.json()["id"]

    r = client.post(
        f"/api/v1/pages/{page.id}/sections/from-reusable",
        json={"reusable_id": comp_id},
        headers=editor_headers,
    )
    assert r.status_code == 201
    section_id = r.json()["id"]
    assert r.json()["is_linked"] is True

    r = client.put(f"/api/v1/sections/{section_id}/content", json={"content": {"headline": "x"}}, headers=editor_headers)
    assert r.status_code == 409

    r = client.patch(f"/api/v1/reusable-components/{comp_id}", json={"content": {"headline": "Hello"}}, headers=editor_headers)
    assert r.status_code == 200
    assert r.json()["linked_sections_updated"] == 1
    assert client.get(f"/api/v1/sections/{section_id}", headers=editor_headers).json()["content_json"] == {"headline": "Hello"}

    r = client.post(
        "/api/v1/reusable-components",
        json={"name": "Bad", "block_type": "marquee"},
        headers=editor_headers,
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Unknown section type: marquee"
