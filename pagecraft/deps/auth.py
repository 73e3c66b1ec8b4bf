# pagecraft/deps/auth.py
from __future__ import annotations

from typing import Optional, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from pagecraft.db.session import get_db
from pagecraft.models.auth import AppRole, User
from pagecraft.security.jwt import decode_token
from pagecraft.services.authz import user_has_role

# non-fatal if the header is missing; we raise our own 401
_bearer = HTTPBearer(auto_error=False)


# -----------------------------
# Helpers
# -----------------------------
def _load_user_from_sub(db: Session, sub: str | int | None) -> Optional[User]:
    try:
        uid = int(sub)
    except (TypeError, ValueError):
        return None
    user = db.get(User, uid)
    if not user or not user.is_active:
        return None
    return user


def _decode_and_get_user(db: Session, token: str) -> User:
    try:
        payload = decode_token(token, expected_type="access")
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = _load_user_from_sub(db, payload.get("sub"))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")
    return user


# -----------------------------
# Public dependencies
# -----------------------------
def get_current_user(
    db: Session = Depends(get_db),
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> User:
    if not creds or not creds.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return _decode_and_get_user(db, creds.credentials)


def get_current_user_id(current_user: User = Depends(get_current_user)) -> int:
    return int(current_user.id)


def require_role(*roles: AppRole | str, detail: Optional[str] = None) -> Callable:
    """
    Usage:
        @router.post(..., dependencies=[Depends(require_role(AppRole.admin))])
    Any one of `roles` is enough. Returns the current user so it can also be
    injected as a parameter.
    """
    wanted = [AppRole(r) for r in roles] or list(AppRole)
    message = detail or f"Requires role: {' or '.join(r.value for r in wanted)}"

    def _dep(
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ) -> User:
        if not user_has_role(db, user_id=current_user.id, roles=wanted):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)
        return current_user

    return _dep


# editors and admins may edit content; only admins manage users and site settings
require_editor = require_role(AppRole.admin, AppRole.editor)
require_admin = require_role(AppRole.admin)
