# pagecraft/utils/validation.py
# Shared input checks. Each validator returns the cleaned value or raises ValueError.
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email as _validate_email

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
PHONE_RE = re.compile(r"^[\d\s\-+()]+$")


def validate_slug(value: Optional[str]) -> str:
    slug = (value or "").strip()
    if not slug:
        raise ValueError("Slug is required")
    if len(slug) > 100:
        raise ValueError("Slug must be less than 100 characters")
    if not SLUG_RE.match(slug):
        raise ValueError("Slug must be lowercase letters, numbers, and hyphens only")
    return slug


def validate_title(value: Optional[str]) -> str:
    title = (value or "").strip()
    if not title:
        raise ValueError("Title is required")
    if len(title) > 200:
        raise ValueError("Title must be less than 200 characters")
    return title


def validate_email(value: Optional[str]) -> str:
    email = (value or "").strip()
    if not email:
        raise ValueError("Email is required")
    if len(email) > 255:
        raise ValueError("Email must be less than 255 characters")
    try:
        return _validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        raise ValueError("Please enter a valid email address") from None


def _looks_like_url(candidate: str) -> bool:
    parsed = urlparse(candidate)
    return bool(parsed.scheme) and bool(parsed.netloc) and " " not in candidate


def validate_url(value: Optional[str], *, required: bool = False) -> str:
    """Accepts empty, relative ('/about'), mailto:/tel:, absolute or scheme-less host URLs."""
    url = (value or "").strip()
    if not url:
        if required:
            raise ValueError("URL is required")
        return url
    if url.startswith("/") or url.startswith("#"):
        return url
    if url.startswith("mailto:") or url.startswith("tel:"):
        return url
    if _looks_like_url(url) or _looks_like_url("https://" + url):
        return url
    raise ValueError("Please enter a valid URL")


def validate_password(value: Optional[str]) -> str:
    pw = value or ""
    if len(pw) < 8:
        raise ValueError("Password must be at least 8 characters")
    if len(pw) > 72:
        raise ValueError("Password must be less than 72 characters")
    return pw


def validate_phone(value: Optional[str]) -> str:
    phone = (value or "").strip()
    if phone and not PHONE_RE.match(phone):
        raise ValueError("Please enter a valid phone number")
    return phone


def generate_slug(title: str) -> str:
    slug = (title or "").lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")
