# =============================================================================
# Page Sections (add / edit / style / lock / visibility / order / repeater items)
# pagecraft/api/v1/endpoints/sections.py
# =============================================================================
from __future__ import annotations

from typing import Any, Callable, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from pagecraft.api.errors import service_errors
from pagecraft.db.session import get_db
from pagecraft.deps.auth import require_editor
from pagecraft.models.auth import User
from pagecraft.models.content import PageSection
from pagecraft.schemas.content import (
    FieldChange,
    RepeaterItemMove,
    RepeaterItemUpdate,
    SectionContentUpdate,
    SectionCreate,
    SectionFromReusable,
    SectionOut,
    SectionReorder,
    SectionStyleUpdate,
    SectionUpdate,
)
from pagecraft.section_registry import FieldDefinition, get_section_config
from pagecraft.services import field_service, section_service
from pagecraft.services.field_service import FieldValueError
from pagecraft.services.persistence import PersistenceError
from pagecraft.utils.payload_guard import enforce_content_size

router = APIRouter(tags=["sections"])


# ---------- helpers ----------
def _repeater_field(section: PageSection, field_name: str) -> FieldDefinition:
    f = get_section_config(section.section_type).get_field(field_name)
    if f is None:
        raise FieldValueError(f"Section type '{section.section_type}' has no field '{field_name}'")
    return f


def _edit_repeater(
    db: Session,
    section_id: int,
    field_name: str,
    edit: Callable[[Any, FieldDefinition], List[Dict[str, Any]]],
) -> PageSection:
    """Rebuild one repeater list and persist the whole content object."""
    section = section_service.get_section(db, section_id=section_id)
    f = _repeater_field(section, field_name)
    content = dict(section.content_json or {})
    content[field_name] = edit(content.get(field_name), f)
    enforce_content_size(content)
    return section_service.update_section_content(db, section_id=section_id, content=content)


# ---------- per page ----------
@router.get("/pages/{page_id}/sections", response_model=List[SectionOut])
def list_sections(page_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return section_service.list_sections(db, page_id=page_id)


@router.post("/pages/{page_id}/sections", response_model=SectionOut, status_code=201)
def add_section(
    page_id: int,
    body: SectionCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    with service_errors():
        return section_service.add_section(db, page_id=page_id, section_type=body.section_type)


@router.post("/pages/{page_id}/sections/from-reusable", response_model=SectionOut, status_code=201)
def add_section_from_reusable(
    page_id: int,
    body: SectionFromReusable,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    if body.content is not None:
        enforce_content_size(body.content)
    with service_errors():
        return section_service.add_section_from_reusable(
            db, page_id=page_id, reusable_id=body.reusable_id, content=body.content
        )


@router.post("/pages/{page_id}/sections/reorder", response_model=List[SectionOut])
def reorder_sections(
    page_id: int,
    body: SectionReorder,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    try:
        with service_errors():
            return section_service.reorder_sections(
                db, page_id=page_id, from_index=body.from_index, to_index=body.to_index
            )
    except HTTPException as exc:
        cause = exc.__cause__
        if isinstance(cause, PersistenceError) and cause.sections is not None:
            # hand back the re-fetched order so the editor can resync
            raise HTTPException(
                status_code=503,
                detail={
                    "message": cause.message,
                    "sections": [SectionOut.model_validate(s).model_dump(mode="json") for s in cause.sections],
                },
            ) from cause
        raise


# ---------- single section ----------
@router.get("/sections/{section_id}", response_model=SectionOut)
def get_section(section_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return section_service.get_section(db, section_id=section_id)


@router.get("/sections/{section_id}/editor")
def section_editor(section_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    """Field descriptors for the section's current content (what the edit sheet renders)."""
    with service_errors():
        section = section_service.get_section(db, section_id=section_id)
        out = field_service.describe_section_editor(section.section_type, section.content_json, db=db)
    out["sectionId"] = section.id
    out["isLocked"] = section.is_locked
    out["isLinked"] = section.is_linked
    return out


@router.patch("/sections/{section_id}", response_model=SectionOut)
def update_section(
    section_id: int,
    body: SectionUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    if body.content_json is not None:
        enforce_content_size(body.content_json)
    with service_errors():
        return section_service.update_section(
            db,
            section_id=section_id,
            content_json=body.content_json,
            is_visible=body.is_visible,
            is_locked=body.is_locked,
            style_overrides=body.style_overrides,
        )


@router.put("/sections/{section_id}/content", response_model=SectionOut)
def replace_content(
    section_id: int,
    body: SectionContentUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    enforce_content_size(body.content)
    with service_errors():
        return section_service.update_section_content(db, section_id=section_id, content=body.content)


@router.put("/sections/{section_id}/fields/{field_name}", response_model=SectionOut)
def change_field(
    section_id: int,
    field_name: str,
    body: FieldChange,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    with service_errors():
        section = section_service.get_section(db, section_id=section_id)
        content = field_service.apply_field_change(
            section.section_type, section.content_json, field_name, body.value, db=db
        )
        enforce_content_size(content)
        return section_service.update_section_content(db, section_id=section_id, content=content)


@router.post("/sections/{section_id}/fields/{field_name}/items", response_model=SectionOut, status_code=201)
def add_item(
    section_id: int,
    field_name: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    with service_errors():
        return _edit_repeater(
            db, section_id, field_name,
            lambda items, f: field_service.add_repeater_item(items, f),
        )


@router.delete("/sections/{section_id}/fields/{field_name}/items/{index}", response_model=SectionOut)
def remove_item(
    section_id: int,
    field_name: str,
    index: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    with service_errors():
        return _edit_repeater(
            db, section_id, field_name,
            lambda items, f: field_service.remove_repeater_item(items, index),
        )


@router.patch("/sections/{section_id}/fields/{field_name}/items/{index}", response_model=SectionOut)
def update_item(
    section_id: int,
    field_name: str,
    index: int,
    body: RepeaterItemUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    with service_errors():
        return _edit_repeater(
            db, section_id, field_name,
            lambda items, f: field_service.update_repeater_item(items, index, f, body.changes),
        )


@router.post("/sections/{section_id}/fields/{field_name}/items/move", response_model=SectionOut)
def move_item(
    section_id: int,
    field_name: str,
    body: RepeaterItemMove,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    with service_errors():
        return _edit_repeater(
            db, section_id, field_name,
            lambda items, f: field_service.move_repeater_item(items, body.from_index, body.to_index),
        )


@router.put("/sections/{section_id}/style", response_model=SectionOut)
def update_style(
    section_id: int,
    body: SectionStyleUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    with service_errors():
        return section_service.update_section_style(
            db, section_id=section_id, style_overrides=body.style_overrides
        )


@router.post("/sections/{section_id}/toggle-visibility", response_model=SectionOut)
def toggle_visibility(section_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return section_service.toggle_visibility(db, section_id=section_id)


@router.post("/sections/{section_id}/toggle-lock", response_model=SectionOut)
def toggle_lock(section_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return section_service.toggle_lock(db, section_id=section_id)


@router.post("/sections/{section_id}/unlink", response_model=SectionOut)
def unlink(section_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return section_service.unlink_section(db, section_id=section_id)


@router.post("/sections/{section_id}/move-up")
def move_up(section_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return {"moved": section_service.move_up(db, section_id=section_id)}


@router.post("/sections/{section_id}/move-down")
def move_down(section_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return {"moved": section_service.move_down(db, section_id=section_id)}


@router.delete("/sections/{section_id}", status_code=204)
def delete_section(section_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        section_service.delete_section(db, section_id=section_id)
    return Response(status_code=204)
