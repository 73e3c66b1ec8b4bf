# pagecraft/api/v1/endpoints/section_types.py
# Read-only view of the section type registry for the editor's "add section" picker.
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pagecraft.api.errors import service_errors
from pagecraft.db.session import get_db
from pagecraft.deps.auth import require_editor
from pagecraft.models.auth import User
from pagecraft.section_registry import (
    get_addable_section_types,
    get_section_config,
    get_section_types,
)
from pagecraft.services import field_service
from pagecraft.services.schema_service import build_section_json_schema

router = APIRouter(prefix="/section-types", tags=["section-types"])


@router.get("")
def list_section_types(
    addable_only: bool = Query(True, description="Hide the legacy wrapper type"),
    _: User = Depends(require_editor),
):
    keys = get_addable_section_types() if addable_only else get_section_types()
    out = []
    for key in keys:
        data = get_section_config(key).to_dict()
        data.pop("defaultContent")
        out.append(data)
    return out


@router.get("/{section_type}")
def get_section_type(section_type: str, _: User = Depends(require_editor)):
    with service_errors():
        return get_section_config(section_type).to_dict()


@router.get("/{section_type}/schema")
def get_section_type_schema(section_type: str, _: User = Depends(require_editor)):
    with service_errors():
        return build_section_json_schema(section_type)


@router.get("/{section_type}/editor")
def get_section_type_editor(
    section_type: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    """Editor descriptors for a fresh section of this type (default content)."""
    with service_errors():
        cfg = get_section_config(section_type)
        return field_service.describe_section_editor(section_type, cfg.default_content, db=db)
