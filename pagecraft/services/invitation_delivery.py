# pagecraft/services/invitation_delivery.py
# Hands an invitation to whatever sends the email. The transport itself is
# external: we POST a signed JSON payload to INVITATION_WEBHOOK_URL.
from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict

import httpx

from pagecraft.core.settings import settings

logger = logging.getLogger(__name__)


class InvitationDeliveryError(RuntimeError):
    pass


def _sign(secret: str, timestamp: str, body: bytes) -> str:
    # HMAC-SHA256 over "<ts>." + body
    msg = (timestamp + ".").encode("utf-8") + body
    return hmac.new(secret.encode("utf-8"), msg, hashlib.sha256).hexdigest()


def accept_link(token: str) -> str:
    return f"{settings.INVITATION_ACCEPT_URL}?token={token}"


def deliver_invitation(*, email: str, role: str, token: str, event: str = "invitation.created") -> None:
    """
    One attempt, no retries. With no webhook configured the link is only
    logged (local/dev). Raises InvitationDeliveryError on any failure.
    """
    payload: Dict[str, Any] = {
        "event": event,
        "email": email,
        "role": role,
        "accept_url": accept_link(token),
    }
    url = settings.INVITATION_WEBHOOK_URL
    if not url:
        logger.info("No invitation webhook configured; %s for %s -> %s", event, email, payload["accept_url"])
        return

    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    ts = str(int(time.time()))
    headers = {
        "Content-Type": "application/json",
        "X-Webhook-Event": event,
        "X-Webhook-Timestamp": ts,
    }
    if settings.INVITATION_WEBHOOK_SECRET:
        headers["X-Webhook-Signature"] = _sign(settings.INVITATION_WEBHOOK_SECRET, ts, body)

    try:
        with httpx.Client(timeout=settings.INVITATION_WEBHOOK_TIMEOUT_SECONDS) as client:
            resp = client.post(url, content=body, headers=headers)
    except httpx.HTTPError as exc:
        logger.warning("Invitation delivery to %s failed: %s", url, exc)
        raise InvitationDeliveryError(str(exc)) from exc
    if not (200 <= resp.status_code < 300):
        logger.warning("Invitation delivery to %s returned %s", url, resp.status_code)
        raise InvitationDeliveryError(f"delivery endpoint returned {resp.status_code}")
