# pagecraft/api/v1/endpoints/reusable.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from pagecraft.api.errors import service_errors
from pagecraft.db.session import get_db
from pagecraft.deps.auth import require_editor
from pagecraft.models.auth import User
from pagecraft.schemas.content import (
    ReusableCreate,
    ReusableFromSection,
    ReusableOut,
    ReusableUpdate,
    ReusableUpdateOut,
)
from pagecraft.services import reusable_service
from pagecraft.utils.payload_guard import enforce_content_size

router = APIRouter(prefix="/reusable-components", tags=["reusable-components"])


@router.get("", response_model=List[ReusableOut])
def list_components(db: Session = Depends(get_db), _: User = Depends(require_editor)):
    return reusable_service.list_components(db)


@router.post("", response_model=ReusableOut, status_code=201)
def create_component(body: ReusableCreate, db: Session = Depends(get_db), user: User = Depends(require_editor)):
    enforce_content_size(body.content)
    with service_errors():
        return reusable_service.save_component(
            db,
            name=body.name,
            description=body.description,
            block_type=body.block_type,
            content=body.content,
            created_by=user.id,
        )


@router.post("/from-section", response_model=ReusableOut, status_code=201)
def create_from_section(body: ReusableFromSection, db: Session = Depends(get_db), user: User = Depends(require_editor)):
    with service_errors():
        return reusable_service.save_component_from_section(
            db,
            section_id=body.section_id,
            name=body.name,
            description=body.description,
            created_by=user.id,
        )


@router.get("/{component_id}", response_model=ReusableOut)
def get_component(component_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return reusable_service.get_component(db, component_id=component_id)


@router.patch("/{component_id}", response_model=ReusableUpdateOut)
def update_component(
    component_id: int,
    body: ReusableUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    if body.content is not None:
        enforce_content_size(body.content)
    with service_errors():
        comp, count = reusable_service.update_component(
            db,
            component_id=component_id,
            name=body.name,
            description=body.description,
            content=body.content,
        )
    return ReusableUpdateOut(component=ReusableOut.model_validate(comp), linked_sections_updated=count)


@router.delete("/{component_id}", status_code=204)
def delete_component(component_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        reusable_service.delete_component(db, component_id=component_id)
    return Response(status_code=204)
