# tests/test_section_service.py
import pytest
from sqlalchemy.exc import SQLAlchemyError

from pagecraft.models.content import PageSection
from pagecraft.section_registry import UnknownSectionType, get_default_content
from pagecraft.services import field_service, section_service
from pagecraft.services.persistence import PersistenceError
from pagecraft.services.section_service import (
    ContentValidationError,
    SectionLinkedError,
    SectionLockedError,
)


def _add(db, page, *types):
    return [section_service.add_section(db, page_id=page.id, section_type=t) for t in types]


def _types(db, page):
    return [s.section_type for s in section_service.list_sections(db, page_id=page.id)]


def test_add_appends_with_default_content(db, page):
    hero, faq = _add(db, page, "hero", "faq")
    assert (hero.order, faq.order) == (0, 1)
    assert hero.content_json == get_default_content("hero")
    assert hero.is_visible and not hero.is_locked and not hero.is_linked


def test_add_unknown_type_or_page(db, page):
    with pytest.raises(UnknownSectionType):
        section_service.add_section(db, page_id=page.id, section_type="marquee")
    with pytest.raises(LookupError):
        section_service.add_section(db, page_id=9999, section_type="hero")


def test_add_after_gaps_uses_max_plus_one(db, page):
    a, b = _add(db, page, "hero", "cta")
    b.order = 7
    db.commit()
    (c,) = _add(db, page, "faq")
    assert c.order == 8


def test_update_content_round_trips(db, page):
    (hero,) = _add(db, page, "hero")
    content = {**hero.content_json, "headline": "Hello", "extra": {"nested": [1, 2]}}
    section_service.update_section_content(db, section_id=hero.id, content=content)
    db.expire_all()
    assert section_service.get_section(db, section_id=hero.id).content_json == content


def test_hero_field_edits_merge_into_whole_object(db, page):
    (hero,) = _add(db, page, "hero")
    content = field_service.apply_field_change("hero", hero.content_json, "headline", "Spring sale")
    section_service.update_section_content(db, section_id=hero.id, content=content)
    content = field_service.apply_field_change(
        "hero", section_service.get_section(db, section_id=hero.id).content_json, "overlay", "false"
    )
    saved = section_service.update_section_content(db, section_id=hero.id, content=content)
    assert saved.content_json["headline"] == "Spring sale"
    assert saved.content_json["overlay"] is False
    assert saved.content_json["cta_text"] == "Get Started"


def test_locked_section_rejects_edits_and_delete(db, page):
    (hero,) = _add(db, page, "hero")
    section_service.toggle_lock(db, section_id=hero.id)
    with pytest.raises(SectionLockedError):
        section_service.update_section_content(db, section_id=hero.id, content={"headline": "x"})
    with pytest.raises(SectionLockedError):
        section_service.update_section_style(db, section_id=hero.id, style_overrides={"useCustomStyles": True})
    with pytest.raises(SectionLockedError):
        section_service.delete_section(db, section_id=hero.id)
    assert section_service.get_section(db, section_id=hero.id) is not None

    # visibility can still change
    assert section_service.toggle_visibility(db, section_id=hero.id).is_visible is False


def test_update_section_unlock_and_edit_in_one_call(db, page):
    (hero,) = _add(db, page, "hero")
    section_service.toggle_lock(db, section_id=hero.id)
    with pytest.raises(SectionLockedError):
        section_service.update_section(db, section_id=hero.id, content_json={"headline": "x"})
    out = section_service.update_section(db, section_id=hero.id, is_locked=False, content_json={"headline": "x"})
    assert out.content_json == {"headline": "x"} and out.is_locked is False


def test_style_overrides_are_normalized(db, page):
    (hero,) = _add(db, page, "hero")
    out = section_service.update_section_style(
        db, section_id=hero.id, style_overrides={"useCustomStyles": True, "primaryColor": "#FF0000"}
    )
    assert out.style_overrides == {"useCustomStyles": True, "primaryColor": "#FF0000"}
    out = section_service.update_section_style(db, section_id=hero.id, style_overrides=None)
    assert out.style_overrides is None
    with pytest.raises(ValueError):
        section_service.update_section(db, section_id=hero.id, style_overrides={"useCustomStyles": "sometimes"})


def test_required_fields_enforced_when_enabled(db, page, monkeypatch):
    from pagecraft.core.settings import settings

    (hero,) = _add(db, page, "hero")
    section_service.update_section_content(db, section_id=hero.id, content={"subheadline": "no headline"})
    monkeypatch.setattr(settings, "SECTION_REQUIRED_FIELDS_ENFORCED", True)
    with pytest.raises(ContentValidationError) as exc:
        section_service.update_section_content(db, section_id=hero.id, content={"subheadline": "still none"})
    assert any("headline" in e for e in exc.value.errors)


def test_reorder_rewrites_orders(db, page):
    _add(db, page, "hero", "features", "faq", "cta")
    moved = section_service.reorder_sections(db, page_id=page.id, from_index=3, to_index=0)
    assert [s.section_type for s in moved] == ["cta", "hero", "features", "faq"]
    assert [s.order for s in section_service.list_sections(db, page_id=page.id)] == [0, 1, 2, 3]
    assert _types(db, page) == ["cta", "hero", "features", "faq"]


def test_reorder_refuses_locked_or_out_of_range(db, page):
    hero, _ = _add(db, page, "hero", "faq")
    section_service.toggle_lock(db, section_id=hero.id)
    with pytest.raises(SectionLockedError):
        section_service.reorder_sections(db, page_id=page.id, from_index=0, to_index=1)
    with pytest.raises(ValueError):
        section_service.reorder_sections(db, page_id=page.id, from_index=0, to_index=5)
    # a locked section elsewhere still shifts
    section_service.reorder_sections(db, page_id=page.id, from_index=1, to_index=0)
    assert _types(db, page) == ["faq", "hero"]


def test_move_up_and_down_at_the_ends(db, page):
    hero, faq = _add(db, page, "hero", "faq")
    assert section_service.move_up(db, section_id=hero.id) is False
    assert section_service.move_down(db, section_id=faq.id) is False
    assert section_service.move_down(db, section_id=hero.id) is True
    assert _types(db, page) == ["faq", "hero"]
    assert section_service.move_up(db, section_id=hero.id) is True
    assert _types(db, page) == ["hero", "faq"]


def test_delete_unlocked_section(db, page):
    hero, faq = _add(db, page, "hero", "faq")
    section_service.delete_section(db, section_id=hero.id)
    assert _types(db, page) == ["faq"]
    with pytest.raises(LookupError):
        section_service.get_section(db, section_id=hero.id)


def test_linked_section_rejects_direct_edits_until_unlinked(db, page):
    from pagecraft.services import reusable_service

    comp = reusable_service.save_component(
        db, name="Shared CTA", block_type="cta", content={"headline": "Shared"}
    )
    section = section_service.add_section_from_reusable(db, page_id=page.id, reusable_id=comp.id)
    assert section.is_linked and section.reusable_id == comp.id
    assert section.content_json == {"headline": "Shared"}

    with pytest.raises(SectionLinkedError):
        section_service.update_section_content(db, section_id=section.id, content={"headline": "Mine"})

    section_service.unlink_section(db, section_id=section.id)
    out = section_service.update_section_content(db, section_id=section.id, content={"headline": "Mine"})
    assert out.content_json == {"headline": "Mine"}


def test_failed_reorder_commit_reports_current_order(db, page, monkeypatch):
    _add(db, page, "hero", "faq")

    def _boom():
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(db, "commit", _boom)
    with pytest.raises(PersistenceError) as exc:
        section_service.reorder_sections(db, page_id=page.id, from_index=1, to_index=0)
    assert exc.value.message == "Failed to save new order"
    assert [s.section_type for s in exc.value.sections] == ["hero", "faq"]


def test_list_sections_ties_break_on_id(db, page):
    a, b = _add(db, page, "hero", "faq")
    db.get(PageSection, b.id).order = 0
    db.commit()
    assert _types(db, page) == ["hero", "faq"]
