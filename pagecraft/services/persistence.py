# pagecraft/services/persistence.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """A write (or load) failed and was rolled back. `sections` is the re-fetched list, when known."""

    def __init__(self, message: str, sections: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.sections = sections


def commit_or_rollback(db: Session, message: str) -> None:
    """Commit; on failure roll back, log, and raise PersistenceError(message)."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(message)
        raise PersistenceError(message) from exc
