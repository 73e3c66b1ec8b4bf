# pagecraft/services/section_service.py
"""
Page sections: the ordered, typed content units of a page.

All writes go straight to the DB through the caller's session and commit
before returning. A failed commit is rolled back, logged, and re-raised as
PersistenceError carrying a short user-facing message; nothing is retried.

Rules enforced here:
  - a locked section cannot be deleted, moved, or have its content/style edited
    (visibility and the lock itself can always be toggled);
  - a linked section mirrors a reusable component and rejects direct content
    edits until it is unlinked;
  - `order` is a sort key only; add appends after the current max, reorder
    rewrites every section of the page to 0..n-1.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pagecraft.core.settings import settings
from pagecraft.models.content import Page, PageSection, ReusableComponent
from pagecraft.schemas.settings import StyleOverrides
from pagecraft.section_registry import get_default_content, get_section_config
from pagecraft.services.persistence import PersistenceError, commit_or_rollback
from pagecraft.services.schema_service import validate_section_content

logger = logging.getLogger(__name__)


# -------- errors --------
class SectionLockedError(ValueError):
    pass


class SectionLinkedError(ValueError):
    pass


class ContentValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


# -------- helpers --------
def _get_page_or_raise(db: Session, page_id: int) -> Page:
    page = db.get(Page, page_id)
    if not page:
        raise LookupError("Page not found")
    return page


def get_section(db: Session, *, section_id: int) -> PageSection:
    section = db.get(PageSection, section_id)
    if not section:
        raise LookupError("Section not found")
    return section


def _next_order(db: Session, page_id: int) -> int:
    current_max = db.scalar(select(func.max(PageSection.order)).where(PageSection.page_id == page_id))
    return 0 if current_max is None else int(current_max) + 1


def _ensure_editable(section: PageSection) -> None:
    if section.is_locked:
        raise SectionLockedError("Cannot edit a locked section")
    if section.is_linked:
        raise SectionLinkedError(
            "This section is linked to a reusable component; edit the component or unlink the section"
        )


def _check_content(section_type: str, content: Dict[str, Any]) -> None:
    if not isinstance(content, dict):
        raise ContentValidationError(["(root): content must be an object"])
    if settings.SECTION_REQUIRED_FIELDS_ENFORCED:
        errors = validate_section_content(section_type, content)
        if errors:
            raise ContentValidationError(errors)


# ===================== reads =====================
def list_sections(db: Session, *, page_id: int) -> List[PageSection]:
    stmt = (
        select(PageSection)
        .where(PageSection.page_id == page_id)
        .order_by(PageSection.order.asc(), PageSection.id.asc())
    )
    try:
        return list(db.scalars(stmt).all())
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to load page sections for page %s", page_id)
        raise PersistenceError("Failed to load page sections") from exc


# ===================== create =====================
def add_section(db: Session, *, page_id: int, section_type: str) -> PageSection:
    """Append a section of `section_type` with the registry's default content."""
    _get_page_or_raise(db, page_id)
    content = get_default_content(section_type)  # raises UnknownSectionType
    section = PageSection(
        page_id=page_id,
        section_type=section_type,
        content_json=content,
        order=_next_order(db, page_id),
        is_locked=False,
        is_visible=True,
        is_linked=False,
    )
    db.add(section)
    commit_or_rollback(db, "Failed to add section")
    db.refresh(section)
    logger.info("Section %s (%s) added to page %s at order %s", section.id, section_type, page_id, section.order)
    return section


def add_section_from_reusable(
    db: Session,
    *,
    page_id: int,
    reusable_id: int,
    content: Optional[Dict[str, Any]] = None,
) -> PageSection:
    """Append a linked copy of a reusable component (content snapshot + link)."""
    _get_page_or_raise(db, page_id)
    component = db.get(ReusableComponent, reusable_id)
    if not component:
        raise LookupError("Reusable component not found")
    get_section_config(component.block_type)  # raises UnknownSectionType
    snapshot = copy.deepcopy(content if content is not None else component.content or {})
    section = PageSection(
        page_id=page_id,
        section_type=component.block_type,
        content_json=snapshot,
        order=_next_order(db, page_id),
        is_locked=False,
        is_visible=True,
        reusable_id=component.id,
        is_linked=True,
    )
    db.add(section)
    commit_or_rollback(db, "Failed to add section")
    db.refresh(section)
    logger.info("Section %s added to page %s from reusable %s", section.id, page_id, reusable_id)
    return section


# ===================== update =====================
def update_section_content(db: Session, *, section_id: int, content: Dict[str, Any]) -> PageSection:
    """Replace the whole content object (last writer wins)."""
    section = get_section(db, section_id=section_id)
    _ensure_editable(section)
    _check_content(section.section_type, content)
    section.content_json = copy.deepcopy(content)
    commit_or_rollback(db, "Failed to update section")
    db.refresh(section)
    return section


def update_section_style(db: Session, *, section_id: int, style_overrides: Optional[Dict[str, Any]]) -> PageSection:
    section = get_section(db, section_id=section_id)
    if section.is_locked:
        raise SectionLockedError("Cannot edit a locked section")
    if style_overrides is None:
        section.style_overrides = None
    else:
        try:
            parsed = StyleOverrides.model_validate(style_overrides)
        except ValidationError as exc:
            raise ValueError(f"Invalid style overrides: {exc.errors()[0]['msg']}") from None
        section.style_overrides = parsed.model_dump(by_alias=True, exclude_none=True)
    commit_or_rollback(db, "Failed to update section")
    db.refresh(section)
    return section


def update_section(
    db: Session,
    *,
    section_id: int,
    content_json: Optional[Dict[str, Any]] = None,
    is_visible: Optional[bool] = None,
    is_locked: Optional[bool] = None,
    style_overrides: Optional[Dict[str, Any]] = None,
) -> PageSection:
    """Generic partial update; each provided attribute follows the same rules as its dedicated operation."""
    section = get_section(db, section_id=section_id)
    # the lock value in the same request wins, so "unlock and edit" works in one call
    locked_after = section.is_locked if is_locked is None else is_locked
    if content_json is not None:
        if locked_after:
            raise SectionLockedError("Cannot edit a locked section")
        if section.is_linked:
            raise SectionLinkedError(
                "This section is linked to a reusable component; edit the component or unlink the section"
            )
        _check_content(section.section_type, content_json)
    parsed_style: Optional[StyleOverrides] = None
    if style_overrides is not None:
        if locked_after:
            raise SectionLockedError("Cannot edit a locked section")
        try:
            parsed_style = StyleOverrides.model_validate(style_overrides)
        except ValidationError as exc:
            raise ValueError(f"Invalid style overrides: {exc.errors()[0]['msg']}") from None

    if is_locked is not None:
        section.is_locked = is_locked
    if is_visible is not None:
        section.is_visible = is_visible
    if content_json is not None:
        section.content_json = copy.deepcopy(content_json)
    if parsed_style is not None:
        section.style_overrides = parsed_style.model_dump(by_alias=True, exclude_none=True)
    commit_or_rollback(db, "Failed to update section")
    db.refresh(section)
    return section


def toggle_visibility(db: Session, *, section_id: int) -> PageSection:
    section = get_section(db, section_id=section_id)
    section.is_visible = not section.is_visible
    commit_or_rollback(db, "Failed to update section")
    db.refresh(section)
    return section


def toggle_lock(db: Session, *, section_id: int) -> PageSection:
    section = get_section(db, section_id=section_id)
    section.is_locked = not section.is_locked
    commit_or_rollback(db, "Failed to update section")
    db.refresh(section)
    return section


def unlink_section(db: Session, *, section_id: int) -> PageSection:
    """Detach from the reusable component; the section keeps its current content as its own."""
    section = get_section(db, section_id=section_id)
    section.is_linked = False
    commit_or_rollback(db, "Failed to update section")
    db.refresh(section)
    return section


# ===================== delete =====================
def delete_section(db: Session, *, section_id: int) -> None:
    section = get_section(db, section_id=section_id)
    if section.is_locked:
        raise SectionLockedError("Cannot delete a locked section")
    db.delete(section)
    commit_or_rollback(db, "Failed to delete section")
    logger.info("Section %s deleted", section_id)


# ===================== ordering =====================
def reorder_sections(db: Session, *, page_id: int, from_index: int, to_index: int) -> List[PageSection]:
    """
    Move the section at position `from_index` to `to_index` and rewrite every
    section's `order` to its new position. The moved section must not be locked;
    locked sections elsewhere in the list are shifted like any other.
    """
    sections = list_sections(db, page_id=page_id)
    if not (0 <= from_index < len(sections)) or not (0 <= to_index < len(sections)):
        raise ValueError("Section index out of range")
    if sections[from_index].is_locked:
        raise SectionLockedError("Cannot move a locked section")

    moved = sections[:]
    item = moved.pop(from_index)
    moved.insert(to_index, item)

    try:
        for position, section in enumerate(moved):
            section.order = position
            db.flush()
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to save new order for page %s", page_id)
        raise PersistenceError("Failed to save new order", sections=list_sections(db, page_id=page_id)) from exc

    logger.info("Page %s sections reordered (%s -> %s)", page_id, from_index, to_index)
    return moved


def _index_of(sections: List[PageSection], section_id: int) -> int:
    for i, s in enumerate(sections):
        if s.id == section_id:
            return i
    raise LookupError("Section not found")


def move_up(db: Session, *, section_id: int) -> bool:
    """False (and no write) when the section is already first."""
    section = get_section(db, section_id=section_id)
    sections = list_sections(db, page_id=section.page_id)
    idx = _index_of(sections, section_id)
    if idx == 0:
        return False
    reorder_sections(db, page_id=section.page_id, from_index=idx, to_index=idx - 1)
    return True


def move_down(db: Session, *, section_id: int) -> bool:
    """False (and no write) when the section is already last."""
    section = get_section(db, section_id=section_id)
    sections = list_sections(db, page_id=section.page_id)
    idx = _index_of(sections, section_id)
    if idx >= len(sections) - 1:
        return False
    reorder_sections(db, page_id=section.page_id, from_index=idx, to_index=idx + 1)
    return True
