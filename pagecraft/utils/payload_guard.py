from __future__ import annotations

import json
from fastapi import HTTPException

from pagecraft.core.settings import settings


def enforce_content_size(content: dict | list) -> None:
    """
    Enforces a maximum serialized JSON size (in KB) for section/block content.
    Raises HTTP 413 on overflow, or 400 if the payload cannot be serialized.
    """
    limit_kb = float(getattr(settings, "MAX_SECTION_CONTENT_KB", 0) or 0)
    if limit_kb <= 0:
        return
    try:
        # compact JSON to measure true wire-size
        b = json.dumps(content, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="Invalid JSON in content")
    kb = len(b) / 1024.0
    if kb > limit_kb:
        raise HTTPException(
            status_code=413,
            detail=f"Payload too large: content is {kb:.1f}KB, limit is {limit_kb:.0f}KB",
        )
