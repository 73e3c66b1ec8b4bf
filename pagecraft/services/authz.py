# pagecraft/services/authz.py
# Role checks: users hold one or more app roles (admin, editor) in user_roles.
from __future__ import annotations
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from pagecraft.models.auth import AppRole, UserRole


def user_has_role(db: Session, *, user_id: int, roles: Iterable[AppRole | str]) -> bool:
    """True if the user holds any of `roles`."""
    wanted = [AppRole(r) for r in roles]
    if not wanted:
        return False
    stmt = (
        select(UserRole.id)
        .where(UserRole.user_id == user_id, UserRole.role.in_(wanted))
        .limit(1)
    )
    return db.scalar(stmt) is not None


def is_admin(db: Session, *, user_id: int) -> bool:
    return user_has_role(db, user_id=user_id, roles=[AppRole.admin])


def set_user_role(db: Session, *, user_id: int, role: AppRole | str) -> UserRole:
    """Replace whatever roles the user had with exactly `role`."""
    role = AppRole(role)
    existing = db.scalars(select(UserRole).where(UserRole.user_id == user_id)).all()
    for ur in existing:
        if ur.role != role:
            db.delete(ur)
    keep = next((ur for ur in existing if ur.role == role), None)
    if keep is None:
        keep = UserRole(user_id=user_id, role=role)
        db.add(keep)
    db.flush()
    return keep
