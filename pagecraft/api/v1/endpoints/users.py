# pagecraft/api/v1/endpoints/users.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from pagecraft.db.session import get_db
from pagecraft.deps.auth import require_admin
from pagecraft.models.auth import User
from pagecraft.schemas.site import RoleChange, UserOut
from pagecraft.services.authz import set_user_role
from pagecraft.services.persistence import PersistenceError, commit_or_rollback

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserOut])
def list_users(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return db.scalars(select(User).order_by(User.email)).all()


@router.put("/{user_id}/role", response_model=UserOut)
def change_role(
    user_id: int,
    body: RoleChange,
    db: Session = Depends(get_db),
    current: User = Depends(require_admin),
):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.id == current.id and body.role != "admin":
        raise HTTPException(status_code=400, detail="You cannot remove your own admin role")
    set_user_role(db, user_id=user.id, role=body.role)
    try:
        commit_or_rollback(db, "Failed to update role")
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=e.message)
    db.refresh(user)
    return user


@router.post("/{user_id}/deactivate", response_model=UserOut)
def deactivate(user_id: int, db: Session = Depends(get_db), current: User = Depends(require_admin)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.id == current.id:
        raise HTTPException(status_code=400, detail="You cannot deactivate yourself")
    user.is_active = False
    try:
        commit_or_rollback(db, "Failed to update user")
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=e.message)
    db.refresh(user)
    return user
