# pagecraft/api/v1/auth.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from jose import JWTError
from pydantic import BaseModel, EmailStr
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from pagecraft.api.errors import service_errors
from pagecraft.db.session import get_db
from pagecraft.deps.auth import get_current_user
from pagecraft.models.auth import User
from pagecraft.schemas.site import AcceptInvitationIn
from pagecraft.security.jwt import create_access_token, create_refresh_token, decode_token
from pagecraft.services import invitation_service
from pagecraft.services.passwords import verify_password

router = APIRouter(tags=["auth"])  # prefix comes from api/v1/router.py


# ---------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------
class LoginIn(BaseModel):
    email: EmailStr
    password: str


class TokenOut(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshIn(BaseModel):
    refresh_token: str


class MeOut(BaseModel):
    id: int
    email: EmailStr
    full_name: Optional[str] = None
    roles: List[str]


def _tokens_for(user: User) -> TokenOut:
    extra = {"email": user.email, "roles": user.role_names}
    return TokenOut(
        access_token=create_access_token(user.id, extra),
        refresh_token=create_refresh_token(user.id, extra),
    )


# ---------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------
@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = db.scalar(select(User).where(func.lower(User.email) == payload.email.lower()))
    if not user or not verify_password(payload.password, user.hashed_password or ""):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="User inactive")
    return _tokens_for(user)


@router.post("/refresh", response_model=TokenOut)
def refresh(body: RefreshIn, db: Session = Depends(get_db)):
    try:
        payload = decode_token(body.refresh_token, expected_type="refresh")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    try:
        user = db.get(User, int(payload.get("sub")))
    except (TypeError, ValueError):
        user = None
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    # roles are re-read so a role change shows up at the next refresh
    return _tokens_for(user)


@router.get("/me", response_model=MeOut)
def me(current_user: User = Depends(get_current_user)):
    return MeOut(
        id=current_user.id,
        email=current_user.email,
        full_name=current_user.full_name,
        roles=current_user.role_names,
    )


@router.post("/logout", status_code=204)
def logout(_: Response):
    # stateless JWT: the client drops its tokens
    return Response(status_code=204)


@router.post("/accept-invitation", response_model=TokenOut)
def accept_invitation(body: AcceptInvitationIn, db: Session = Depends(get_db)):
    with service_errors():
        user = invitation_service.accept_invitation(
            db, token=body.token, password=body.password, full_name=body.full_name
        )
    return _tokens_for(user)
