# pagecraft/security/jwt.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from pagecraft.core.settings import settings

ALGO = settings.JWT_ALGORITHM or "HS256"
SECRET = settings.JWT_SECRET_KEY or "dev-secret"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _encode(subject: int | str, token_type: str, minutes: int, extra: Dict[str, Any] | None) -> str:
    now = _utcnow()
    payload: Dict[str, Any] = {
        "sub": str(subject),
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=minutes)).timestamp()),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, SECRET, algorithm=ALGO)


def create_access_token(subject: int | str, extra: Dict[str, Any] | None = None) -> str:
    return _encode(subject, "access", settings.ACCESS_MIN, extra)


def create_refresh_token(subject: int | str, extra: Dict[str, Any] | None = None) -> str:
    return _encode(subject, "refresh", settings.REFRESH_MIN, extra)


def decode_token(token: str, expected_type: Optional[str] = None) -> Dict[str, Any]:
    """Raises jose's JWTError (ExpiredSignatureError included); callers map it to 401."""
    payload = jwt.decode(
        token,
        SECRET,
        algorithms=[ALGO],
        options={"verify_aud": False, "verify_iss": False},
    )
    if expected_type and payload.get("type") != expected_type:
        raise JWTError(f"Expected a {expected_type} token")
    return payload
