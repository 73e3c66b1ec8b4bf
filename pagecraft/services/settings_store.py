# pagecraft/services/settings_store.py
"""
Versioned, read-only snapshots of site-wide configuration.

The store owns a single SiteSnapshot (branding + header + footer). Writers
never touch the snapshot: they commit their row and `publish(key)`. Change
handlers mark the snapshot stale, and the next `snapshot(db)` call performs a
full re-fetch under the store's lock, so the store is the only writer of its
own state. Writes made by other processes (more workers, seed scripts) never
reach our handlers, so each read also compares the rows' revision marker and
re-fetches when it moved. Readers always get a complete, frozen snapshot; a
version number increments on every re-fetch.

One store is created per application (see pagecraft.main) and handed to
request handlers through a dependency, never imported as a module global.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from pagecraft.schemas.settings import BrandingSettings, FooterConfig, HeaderConfig
from pagecraft.services.branding_service import get_branding
from pagecraft.services.layout_service import get_footer_config, get_header_config
from pagecraft.services.site_settings import BRANDING_KEY, FOOTER_KEY, HEADER_KEY, settings_marker

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[str], None]


@dataclass(frozen=True)
class SiteSnapshot:
    version: int
    branding: BrandingSettings
    header: HeaderConfig
    footer: FooterConfig
    loaded_at: datetime


class SiteSettingsStore:
    WATCHED_KEYS = (BRANDING_KEY, HEADER_KEY, FOOTER_KEY)

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot: Optional[SiteSnapshot] = None
        self._stale = True
        self._marker: Optional[tuple] = None
        self._version = 0
        self._handlers: Dict[str, List[ChangeHandler]] = {}
        for key in self.WATCHED_KEYS:
            self.subscribe(key, self._mark_stale)

    # -------- change feed --------
    def subscribe(self, key: str, handler: ChangeHandler) -> Callable[[], None]:
        """Register `handler(key)` for changes to `key`; returns an unsubscribe callable."""
        with self._lock:
            self._handlers.setdefault(key, []).append(handler)

        def _unsubscribe() -> None:
            with self._lock:
                handlers = self._handlers.get(key, [])
                if handler in handlers:
                    handlers.remove(handler)

        return _unsubscribe

    def publish(self, key: str) -> None:
        with self._lock:
            handlers = list(self._handlers.get(key, []))
        for handler in handlers:
            try:
                handler(key)
            except Exception:
                logger.exception("Settings change handler failed for %s", key)

    def _mark_stale(self, key: str) -> None:
        logger.debug("Site settings %s changed; snapshot marked stale", key)
        with self._lock:
            self._stale = True

    # -------- reads --------
    @property
    def version(self) -> int:
        return self._version

    def snapshot(self, db: Session) -> SiteSnapshot:
        # publish() only reaches this process; the row marker catches other workers and scripts
        marker = settings_marker(db, self.WATCHED_KEYS)
        with self._lock:
            if self._snapshot is None or self._stale or marker != self._marker:
                self._snapshot = self._load(db)
                self._marker = marker
                self._stale = False
            return self._snapshot

    def refresh(self, db: Session) -> SiteSnapshot:
        marker = settings_marker(db, self.WATCHED_KEYS)
        with self._lock:
            self._snapshot = self._load(db)
            self._marker = marker
            self._stale = False
            return self._snapshot

    def _load(self, db: Session) -> SiteSnapshot:
        # full re-fetch; callers hold the lock
        self._version += 1
        snap = SiteSnapshot(
            version=self._version,
            branding=get_branding(db),
            header=get_header_config(db),
            footer=get_footer_config(db),
            loaded_at=datetime.now(timezone.utc),
        )
        logger.info("Loaded site settings snapshot v%s", snap.version)
        return snap


def get_settings_store(request: Request) -> SiteSettingsStore:
    """FastAPI dependency: the store owned by the running application."""
    return request.app.state.site_settings
