# pagecraft/api/errors.py
# Maps service-layer exceptions onto HTTP responses. Services never raise HTTPException.
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status

from pagecraft.section_registry import UnknownSectionType
from pagecraft.services.field_service import FieldValueError
from pagecraft.services.invitation_service import InvitationForbidden, InvitationSendError
from pagecraft.services.persistence import PersistenceError
from pagecraft.services.section_service import (
    ContentValidationError,
    SectionLinkedError,
    SectionLockedError,
)


def to_http(exc: Exception) -> HTTPException:
    # order matters: several of these subclass ValueError / LookupError
    if isinstance(exc, (SectionLockedError, SectionLinkedError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, ContentValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors)
    if isinstance(exc, FieldValueError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    if isinstance(exc, UnknownSectionType):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown section type: {exc.args[0]}")
    if isinstance(exc, IndexError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, LookupError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvitationForbidden):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, InvitationSendError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    if isinstance(exc, PersistenceError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@contextmanager
def service_errors() -> Iterator[None]:
    """
    with service_errors():
        section_service.delete_section(db, section_id=...)
    """
    try:
        yield
    except (ValueError, LookupError, PermissionError, PersistenceError, InvitationSendError) as exc:
        raise to_http(exc) from exc
