# pagecraft/api/v1/endpoints/media.py
# Media library metadata; uploads go straight to object storage from the client.
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from pagecraft.api.errors import service_errors
from pagecraft.db.session import get_db
from pagecraft.deps.auth import require_editor
from pagecraft.models.auth import User
from pagecraft.models.site import Media
from pagecraft.schemas.site import MediaCreate, MediaOut, MediaUpdate
from pagecraft.services import media_service

router = APIRouter(prefix="/media", tags=["media"])


def _out(m: Media) -> MediaOut:
    out = MediaOut.model_validate(m)
    return out.model_copy(update={"url": media_service.public_url(m)})


@router.get("", response_model=List[MediaOut])
def list_media(
    q: Optional[str] = Query(None, description="Matches name or alt text"),
    tags: Optional[List[str]] = Query(None, description="Items must carry every tag"),
    db: Session = Depends(get_db),
    _: User = Depends(require_editor),
):
    return [_out(m) for m in media_service.list_media(db, search=q, tags=tags)]


@router.get("/tags", response_model=List[str])
def list_tags(db: Session = Depends(get_db), _: User = Depends(require_editor)):
    return media_service.available_tags(db)


@router.post("", response_model=MediaOut, status_code=201)
def register_media(body: MediaCreate, db: Session = Depends(get_db), user: User = Depends(require_editor)):
    with service_errors():
        m = media_service.create_media(db, uploaded_by=user.id, **body.model_dump())
    return _out(m)


@router.get("/{media_id}", response_model=MediaOut)
def get_media(media_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        return _out(media_service.get_media(db, media_id=media_id))


@router.patch("/{media_id}", response_model=MediaOut)
def update_media(media_id: int, body: MediaUpdate, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        m = media_service.update_media(db, media_id=media_id, changes=body.model_dump(exclude_unset=True))
    return _out(m)


@router.delete("/{media_id}", status_code=204)
def delete_media(media_id: int, db: Session = Depends(get_db), _: User = Depends(require_editor)):
    with service_errors():
        media_service.delete_media(db, media_id=media_id)
    return Response(status_code=204)
