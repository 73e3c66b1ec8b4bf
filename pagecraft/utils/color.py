from __future__ import annotations

import math
import re
from typing import Optional, Tuple

_HEX_RE = re.compile(r"^[0-9a-fA-F]{3}$|^[0-9a-fA-F]{6}$")


def _clamp(n: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, n))


def _round_half_up(n: float) -> int:
    return int(math.floor(n + 0.5))


def normalize_hex(value: Optional[str]) -> Optional[str]:
    """'#abc' / 'aabbcc' -> '#AABBCC'; None when not a 3 or 6 digit hex color."""
    raw = (value or "").strip()
    if not raw:
        return None
    v = raw[1:] if raw.startswith("#") else raw
    if not _HEX_RE.match(v):
        return None
    if len(v) == 3:
        v = "".join(c + c for c in v)
    return f"#{v.upper()}"


def hex_to_rgb(value: str) -> Optional[Tuple[int, int, int]]:
    n = normalize_hex(value)
    if not n:
        return None
    return int(n[1:3], 16), int(n[3:5], 16), int(n[5:7], 16)


def hex_to_hsl_var(value: str) -> Optional[str]:
    """CSS custom-property payload "H S% L%" (no hsl() wrapper)."""
    rgb = hex_to_rgb(value)
    if not rgb:
        return None
    r, g, b = (c / 255 for c in rgb)
    hi, lo = max(r, g, b), min(r, g, b)
    delta = hi - lo

    h = 0.0
    s = 0.0
    lum = (hi + lo) / 2
    if delta != 0:
        s = delta / (1 - abs(2 * lum - 1))
        if hi == r:
            h = math.fmod((g - b) / delta, 6)
        elif hi == g:
            h = (b - r) / delta + 2
        else:
            h = (r - g) / delta + 4
        h *= 60
        if h < 0:
            h += 360

    H = _round_half_up(_clamp(h, 0, 360))
    S = _round_half_up(_clamp(s * 100, 0, 100))
    L = _round_half_up(_clamp(lum * 100, 0, 100))
    return f"{H} {S}% {L}%"


def readable_text_on(background: str) -> str:
    """Black or white, whichever reads better on `background` (WCAG relative luminance)."""
    rgb = hex_to_rgb(background)
    if not rgb:
        return "#000000"

    def _lin(v: int) -> float:
        c = v / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (_lin(v) for v in rgb)
    luminance = 0.2126 * r + 0.7152 * g + 0.0722 * b
    return "#000000" if luminance > 0.5 else "#FFFFFF"
