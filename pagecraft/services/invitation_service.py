# pagecraft/services/invitation_service.py
"""
Admin-only user invitations.

invite_user      - validate, refuse duplicates, store a token valid for
                   INVITATION_EXPIRE_DAYS, hand it to delivery. If delivery
                   fails the invitation row is removed again.
resend_invitation - fresh token and expiry for a not-yet-accepted invitation,
                   then deliver again.
accept_invitation - redeem a token: creates the account with the invited role.

The admin check lives here (not only in the router) so the messages match
what the admin UI shows.
"""
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from pagecraft.core.settings import settings
from pagecraft.models.auth import AppRole, User, UserInvitation, UserRole
from pagecraft.services.authz import is_admin
from pagecraft.services.invitation_delivery import InvitationDeliveryError, deliver_invitation
from pagecraft.services.passwords import hash_password
from pagecraft.services.persistence import commit_or_rollback
from pagecraft.utils.validation import validate_email, validate_password

logger = logging.getLogger(__name__)


class InvitationForbidden(PermissionError):
    pass


class InvitationSendError(RuntimeError):
    pass


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _aware(dt: datetime) -> datetime:
    # SQLite hands datetimes back naive; they were written as UTC
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def _new_token() -> str:
    return secrets.token_urlsafe(32)


def _expiry() -> datetime:
    return _now() + timedelta(days=settings.INVITATION_EXPIRE_DAYS)


def is_expired(invitation: UserInvitation) -> bool:
    return _aware(invitation.expires_at) <= _now()


def _user_exists(db: Session, email: str) -> bool:
    return db.scalar(select(User.id).where(func.lower(User.email) == email.lower())) is not None


def _pending_exists(db: Session, email: str) -> bool:
    stmt = select(UserInvitation.id).where(
        func.lower(UserInvitation.email) == email.lower(),
        UserInvitation.accepted_at.is_(None),
        UserInvitation.expires_at > _now(),
    )
    return db.scalar(stmt) is not None


# ===================== invite =====================
def invite_user(db: Session, *, inviter: User, email: Optional[str], role: Optional[str]) -> UserInvitation:
    if not is_admin(db, user_id=inviter.id):
        raise InvitationForbidden("Only admins can invite users")

    email = (email or "").strip()
    if not email or not role:
        raise ValueError("Email and role are required")
    try:
        email = validate_email(email)
    except ValueError:
        raise ValueError("Invalid email format") from None
    if role not in (AppRole.admin.value, AppRole.editor.value):
        raise ValueError("Role must be 'admin' or 'editor'")
    if _user_exists(db, email):
        raise ValueError("A user with this email already exists")
    if _pending_exists(db, email):
        raise ValueError("A pending invitation already exists for this email")

    logger.info("Inviting %s with role %s", email, role)
    invitation = UserInvitation(
        email=email,
        role=AppRole(role),
        token=_new_token(),
        invited_by=inviter.id,
        expires_at=_expiry(),
    )
    db.add(invitation)
    commit_or_rollback(db, "Failed to create invitation")
    db.refresh(invitation)

    try:
        deliver_invitation(email=email, role=role, token=invitation.token)
    except InvitationDeliveryError as exc:
        db.delete(invitation)
        commit_or_rollback(db, "Failed to clean up invitation")
        raise InvitationSendError(f"Failed to send invitation email: {exc}") from exc

    logger.info("Invitation %s sent to %s", invitation.id, email)
    return invitation


# ===================== resend =====================
def resend_invitation(db: Session, *, requester: User, invitation_id: Optional[int]) -> UserInvitation:
    if not is_admin(db, user_id=requester.id):
        raise InvitationForbidden("Only admins can resend invitations")
    if not invitation_id:
        raise ValueError("Invitation ID is required")

    invitation = db.scalar(
        select(UserInvitation).where(
            UserInvitation.id == invitation_id,
            UserInvitation.accepted_at.is_(None),
        )
    )
    if not invitation:
        raise LookupError("Invitation not found or already accepted")

    invitation.token = _new_token()
    invitation.expires_at = _expiry()
    commit_or_rollback(db, "Failed to update invitation")
    db.refresh(invitation)

    try:
        deliver_invitation(
            email=invitation.email,
            role=invitation.role.value,
            token=invitation.token,
            event="invitation.resent",
        )
    except InvitationDeliveryError as exc:
        raise InvitationSendError(f"Failed to resend invitation email: {exc}") from exc

    logger.info("Invitation resent to %s", invitation.email)
    return invitation


# ===================== accept / list =====================
def accept_invitation(
    db: Session,
    *,
    token: str,
    password: str,
    full_name: Optional[str] = None,
) -> User:
    invitation = db.scalar(select(UserInvitation).where(UserInvitation.token == token))
    if not invitation or invitation.accepted_at is not None:
        raise LookupError("Invitation not found or already accepted")
    if is_expired(invitation):
        raise ValueError("Invitation has expired")
    if _user_exists(db, invitation.email):
        raise ValueError("A user with this email already exists")

    user = User(
        email=invitation.email,
        hashed_password=hash_password(validate_password(password)),
        full_name=(full_name or "").strip() or None,
        is_active=True,
    )
    db.add(user)
    db.flush()
    db.add(UserRole(user_id=user.id, role=invitation.role))
    invitation.accepted_at = _now()
    commit_or_rollback(db, "Failed to accept invitation")
    db.refresh(user)
    logger.info("Invitation %s accepted; user %s created", invitation.id, user.id)
    return user


def list_pending_invitations(db: Session) -> List[UserInvitation]:
    stmt = (
        select(UserInvitation)
        .where(UserInvitation.accepted_at.is_(None))
        .order_by(UserInvitation.created_at.desc(), UserInvitation.id.desc())
    )
    return list(db.scalars(stmt).all())


def cancel_invitation(db: Session, *, invitation_id: int) -> None:
    invitation = db.get(UserInvitation, invitation_id)
    if not invitation or invitation.accepted_at is not None:
        raise LookupError("Invitation not found or already accepted")
    db.delete(invitation)
    commit_or_rollback(db, "Failed to cancel invitation")
