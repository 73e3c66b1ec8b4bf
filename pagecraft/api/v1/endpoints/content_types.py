# =============================================================================
# Content types, their items, and the built-in presets
# pagecraft/api/v1/endpoints/content_types.py
# =============================================================================
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from pagecraft.api.errors import service_errors
from pagecraft.content_type_presets import list_presets
from pagecraft.db.session import get_db
from pagecraft.deps.auth import require_editor
from pagecraft.models.auth import User
from pagecraft.schemas.site import (
    ContentTypeCreate,
    ContentTypeFromPreset,
    ContentTypeOut,
    ContentTypeUpdate,
    ItemCreate,
    ItemOut,
    ItemStatus,
    ItemUpdate,
)
from pagecraft.services import content_type_service as cts

router = APIRouter(prefix="/content-types", tags=["content-types"])


@router.get("/presets")
def presets(_: User = Depends(require_editor)):
    return list_presets()


@router.get("", response_model=List[ContentTypeOut])
def list_content_types(db: Session = Depends(get_db), _: User = Depends(require_editor)):
    return cts.list_content_types(db)


@router.post("", response_model=ContentTypeOut, status_code=201)
def create_content_type(body: ContentTypeCreate, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return cts.create_content_type(
            db,
            name=body.name,
            slug=body.slug,
            description=body.description,
            icon=body.icon,
            fields=body.fields,
            page_id=body.page_id,
        )


@router.post("/from-preset", response_model=ContentTypeOut, status_code=201)
def create_from_preset(body: ContentTypeFromPreset, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return cts.create_from_preset(db, preset_id=body.preset_id, slug=body.slug)


@router.get("/{content_type_id}", response_model=ContentTypeOut)
def get_content_type(content_type_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return cts.get_content_type(db, content_type_id=content_type_id)


@router.patch("/{content_type_id}", response_model=ContentTypeOut)
def update_content_type(
    content_type_id: int,
    body: ContentTypeUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    with service_errors():
        return cts.update_content_type(
            db, content_type_id=content_type_id, changes=body.model_dump(exclude_unset=True)
        )


@router.delete("/{content_type_id}", status_code=204)
def delete_content_type(content_type_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        cts.delete_content_type(db, content_type_id=content_type_id)
    return Response(status_code=204)


# -------- items --------
@router.get("/{content_type_id}/items", response_model=List[ItemOut])
def list_items(
    content_type_id: int,
    status: Optional[ItemStatus] = Query(None),
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    with service_errors():
        return cts.list_items(db, content_type_id=content_type_id, status=status)


@router.post("/{content_type_id}/items", response_model=ItemOut, status_code=201)
def create_item(
    content_type_id: int,
    body: ItemCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_editor),
):
    with service_errors():
        return cts.create_item(
            db,
            content_type_id=content_type_id,
            title=body.title,
            slug=body.slug,
            status=body.status,
            data=body.data,
            author_id=user.id,
        )


@router.patch("/items/{item_id}", response_model=ItemOut)
def update_item(item_id: int, body: ItemUpdate, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return cts.update_item(db, item_id=item_id, changes=body.model_dump(exclude_unset=True))


@router.delete("/items/{item_id}", status_code=204)
def delete_item(item_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        cts.delete_item(db, item_id=item_id)
    return Response(status_code=204)
