# pagecraft/api/v1/endpoints/invitations.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from pagecraft.api.errors import service_errors
from pagecraft.db.session import get_db
from pagecraft.deps.auth import get_current_user, require_admin
from pagecraft.models.auth import User, UserInvitation
from pagecraft.schemas.site import InvitationOut, InviteIn, InviteResult, ResendIn
from pagecraft.services import invitation_service

router = APIRouter(prefix="/invitations", tags=["invitations"])


def _out(inv: UserInvitation) -> InvitationOut:
    return InvitationOut(
        id=inv.id,
        email=inv.email,
        role=inv.role.value,
        invited_by=inv.invited_by,
        expires_at=inv.expires_at,
        created_at=inv.created_at,
        is_expired=invitation_service.is_expired(inv),
    )


@router.get("", response_model=List[InvitationOut])
def list_pending(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return [_out(i) for i in invitation_service.list_pending_invitations(db)]


# any signed-in user may call these; the service answers 403 for non-admins
@router.post("", response_model=InviteResult)
def invite_user(body: InviteIn, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    with service_errors():
        inv = invitation_service.invite_user(db, inviter=user, email=body.email, role=body.role)
    return InviteResult(message=f"Invitation sent to {inv.email}", invitation=_out(inv))


@router.post("/resend", response_model=InviteResult)
def resend_invitation(body: ResendIn, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    with service_errors():
        inv = invitation_service.resend_invitation(db, requester=user, invitation_id=body.invitation_id)
    return InviteResult(message=f"Invitation resent to {inv.email}", invitation=_out(inv))


@router.delete("/{invitation_id}", status_code=204)
def cancel_invitation(invitation_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    with service_errors():
        invitation_service.cancel_invitation(db, invitation_id=invitation_id)
    return Response(status_code=204)
