# =============================================================================
# Pages (metadata, status, legacy block array)
# pagecraft/api/v1/endpoints/pages.py
# =============================================================================
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from pagecraft.api.errors import service_errors
from pagecraft.db.session import get_db
from pagecraft.deps.auth import require_editor
from pagecraft.models.auth import User
from pagecraft.schemas.content import PageCreate, PageOut, PageStatus, PageUpdate
from pagecraft.services import page_service
from pagecraft.utils.payload_guard import enforce_content_size

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("", response_model=List[PageOut])
def list_pages(
    status: Optional[PageStatus] = Query(None),
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    return page_service.list_pages(db, status=status)


@router.post("", response_model=PageOut, status_code=201)
def create_page(
    body: PageCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_editor),
):
    enforce_content_size(body.content)
    with service_errors():
        return page_service.create_page(
            db,
            title=body.title,
            slug=body.slug,
            status=body.status,
            seo_title=body.seo_title,
            seo_description=body.seo_description,
            seo_image=body.seo_image,
            content=body.content,
            created_by=user.id,
        )


@router.get("/{page_id}", response_model=PageOut)
def get_page(page_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return page_service.get_page(db, page_id=page_id)


@router.patch("/{page_id}", response_model=PageOut)
def update_page(
    page_id: int,
    body: PageUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    changes = body.model_dump(exclude_unset=True)
    if changes.get("content") is not None:
        enforce_content_size(changes["content"])
    with service_errors():
        return page_service.update_page(db, page_id=page_id, changes=changes)


@router.post("/{page_id}/publish", response_model=PageOut)
def publish_page(page_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return page_service.set_status(db, page_id=page_id, status="published")


@router.post("/{page_id}/unpublish", response_model=PageOut)
def unpublish_page(page_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return page_service.set_status(db, page_id=page_id, status="draft")


@router.post("/{page_id}/archive", response_model=PageOut)
def archive_page(page_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return page_service.set_status(db, page_id=page_id, status="archived")


@router.delete("/{page_id}", status_code=204)
def delete_page(page_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        page_service.delete_page(db, page_id=page_id)
    return Response(status_code=204)
