# pagecraft/services/site_settings.py
# Key/value rows in global_settings ("branding", "header_config", "footer_config").
from __future__ import annotations
from typing import Any, Iterable, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from pagecraft.models.site import GlobalSetting

BRANDING_KEY = "branding"
HEADER_KEY = "header_config"
FOOTER_KEY = "footer_config"


def get_setting(db: Session, key: str) -> Optional[Any]:
    row = db.scalar(select(GlobalSetting).where(GlobalSetting.key == key))
    return row.value if row else None


def upsert_setting(db: Session, *, key: str, value: Any) -> GlobalSetting:
    row = db.scalar(select(GlobalSetting).where(GlobalSetting.key == key))
    if row is None:
        row = GlobalSetting(key=key, value=value, revision=1)
        db.add(row)
    else:
        row.value = value
        row.revision = (row.revision or 0) + 1
    db.flush()
    return row


def settings_marker(db: Session, keys: Iterable[str]) -> Tuple[Tuple[Any, ...], ...]:
    """
    (key, revision, updated_at) for each stored key. Changes whenever any
    process saves one of `keys`; reading it is one small indexed query.
    """
    rows = db.execute(
        select(GlobalSetting.key, GlobalSetting.revision, GlobalSetting.updated_at)
        .where(GlobalSetting.key.in_(list(keys)))
        .order_by(GlobalSetting.key)
    ).all()
    return tuple(tuple(r) for r in rows)
