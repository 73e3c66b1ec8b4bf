# tests/test_invitations.py
import hashlib
import hmac
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from pagecraft.core.settings import settings
from pagecraft.models.auth import UserInvitation
from pagecraft.services import invitation_delivery, invitation_service
from pagecraft.services.invitation_delivery import InvitationDeliveryError

API = settings.API_V1_STR


def _invite(client, headers, email="new@example.com", role="editor"):
    return client.post(f"{API}/invitations", json={"email": email, "role": role}, headers=headers)


def test_invite_and_list(client, admin_headers):
    r = _invite(client, admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Invitation sent to new@example.com"
    assert body["invitation"]["role"] == "editor" and body["invitation"]["is_expired"] is False

    pending = client.get(f"{API}/invitations", headers=admin_headers).json()
    assert [p["email"] for p in pending] == ["new@example.com"]


def test_editor_cannot_invite(client, editor_headers):
    r = _invite(client, editor_headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Only admins can invite users"
    assert client.get(f"{API}/invitations", headers=editor_headers).status_code == 403


@pytest.mark.parametrize(
    "payload, detail",
    [
        ({"email": "", "role": "editor"}, "Email and role are required"),
        ({"email": "a@example.com"}, "Email and role are required"),
        ({"email": "not-an-email", "role": "editor"}, "Invalid email format"),
        ({"email": "user@@example.com", "role": "editor"}, "Invalid email format"),
        ({"email": "user@example..com", "role": "editor"}, "Invalid email format"),
        ({"email": "a..b@example.com", "role": "editor"}, "Invalid email format"),
        ({"email": "a@example.com", "role": "owner"}, "Role must be 'admin' or 'editor'"),
        ({"email": "EDITOR@example.com", "role": "editor"}, "A user with this email already exists"),
    ],
)
def test_invite_validation(client, admin_headers, editor, payload, detail):
    r = client.post(f"{API}/invitations", json=payload, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == detail


def test_duplicate_pending_invitation(client, admin_headers):
    assert _invite(client, admin_headers).status_code == 200
    r = _invite(client, admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "A pending invitation already exists for this email"


def test_failed_delivery_removes_invitation(client, db, admin_headers, monkeypatch):
    def _boom(**kwargs):
        raise InvitationDeliveryError("smtp down")

    monkeypatch.setattr(invitation_service, "deliver_invitation", _boom)
    r = _invite(client, admin_headers)
    assert r.status_code == 502
    assert "smtp down" in r.json()["detail"]
    assert db.query(UserInvitation).count() == 0


def test_resend_rotates_token(client, db, admin_headers):
    inv_id = _invite(client, admin_headers).json()["invitation"]["id"]
    old_token = db.get(UserInvitation, inv_id).token

    r = client.post(f"{API}/invitations/resend", json={"invitationId": inv_id}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Invitation resent to new@example.com"
    db.expire_all()
    assert db.get(UserInvitation, inv_id).token != old_token

    r = client.post(f"{API}/invitations/resend", json={}, headers=admin_headers)
    assert r.status_code == 400 and r.json()["detail"] == "Invitation ID is required"
    r = client.post(f"{API}/invitations/resend", json={"invitationId": 999}, headers=admin_headers)
    assert r.status_code == 404


def test_editor_cannot_resend(client, admin_headers, editor_headers):
    inv_id = _invite(client, admin_headers).json()["invitation"]["id"]
    r = client.post(f"{API}/invitations/resend", json={"invitationId": inv_id}, headers=editor_headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Only admins can resend invitations"


def test_cancel(client, admin_headers):
    inv_id = _invite(client, admin_headers).json()["invitation"]["id"]
    assert client.delete(f"{API}/invitations/{inv_id}", headers=admin_headers).status_code == 204
    assert client.delete(f"{API}/invitations/{inv_id}", headers=admin_headers).status_code == 404


def test_accept_creates_user_with_role(db, admin):
    inv = invitation_service.invite_user(db, inviter=admin, email="joiner@example.com", role="admin")
    user = invitation_service.accept_invitation(db, token=inv.token, password="long-enough-pw", full_name=" Jo ")
    assert user.full_name == "Jo"
    assert user.role_names == ["admin"]
    with pytest.raises(LookupError):
        invitation_service.accept_invitation(db, token=inv.token, password="long-enough-pw")


def test_accept_expired(db, admin):
    inv = invitation_service.invite_user(db, inviter=admin, email="late@example.com", role="editor")
    inv.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()
    assert invitation_service.is_expired(inv)
    with pytest.raises(ValueError, match="expired"):
        invitation_service.accept_invitation(db, token=inv.token, password="long-enough-pw")


def test_webhook_payload_is_signed(monkeypatch):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = request.content
        seen["headers"] = request.headers
        return httpx.Response(202)

    real_client = httpx.Client
    monkeypatch.setattr(
        invitation_delivery.httpx, "Client",
        lambda **kw: real_client(transport=httpx.MockTransport(handler), **kw),
    )
    monkeypatch.setattr(settings, "INVITATION_WEBHOOK_URL", "https://mail.example.com/hook")
    monkeypatch.setattr(settings, "INVITATION_WEBHOOK_SECRET", "s3cret")

    invitation_delivery.deliver_invitation(email="x@example.com", role="editor", token="tok")

    payload = json.loads(seen["body"])
    assert payload["event"] == "invitation.created"
    assert payload["accept_url"].endswith("?token=tok")
    ts = seen["headers"]["X-Webhook-Timestamp"]
    expected = hmac.new(b"s3cret", (ts + ".").encode() + seen["body"], hashlib.sha256).hexdigest()
    assert seen["headers"]["X-Webhook-Signature"] == expected


def test_webhook_error_status_raises(monkeypatch):
    real_client = httpx.Client
    monkeypatch.setattr(
        invitation_delivery.httpx, "Client",
        lambda **kw: real_client(transport=httpx.MockTransport(lambda req: httpx.Response(500)), **kw),
    )
    monkeypatch.setattr(settings, "INVITATION_WEBHOOK_URL", "https://mail.example.com/hook")
    with pytest.raises(InvitationDeliveryError, match="500"):
        invitation_delivery.deliver_invitation(email="x@example.com", role="editor", token="tok")
