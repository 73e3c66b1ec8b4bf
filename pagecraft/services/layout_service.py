# pagecraft/services/layout_service.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from pagecraft.schemas.settings import ContactInfo, FooterConfig, HeaderConfig, MenuItem, SocialLink
from pagecraft.services.persistence import commit_or_rollback
from pagecraft.services.site_settings import FOOTER_KEY, HEADER_KEY, get_setting, upsert_setting
from pagecraft.utils.validation import validate_email, validate_phone, validate_url

if TYPE_CHECKING:
    from pagecraft.services.settings_store import SiteSettingsStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _merge(model: Type[M], stored: Any) -> M:
    defaults = model().model_dump(by_alias=True)
    if not isinstance(stored, Mapping):
        return model.model_validate(defaults)
    try:
        return model.model_validate({**defaults, **stored})
    except ValidationError:
        logger.warning("Stored %s is malformed; using defaults", model.__name__)
        return model.model_validate(defaults)


def get_header_config(db: Session) -> HeaderConfig:
    return _merge(HeaderConfig, get_setting(db, HEADER_KEY))


def get_footer_config(db: Session) -> FooterConfig:
    return _merge(FooterConfig, get_setting(db, FOOTER_KEY))


def _check_menu(items: Iterable[MenuItem]) -> None:
    for item in items:
        try:
            validate_url(item.url)
        except ValueError as exc:
            raise ValueError(f"Menu item '{item.label}': {exc}") from None
        _check_menu(item.children)


def _check_links(social: Iterable[SocialLink], contact: ContactInfo) -> None:
    """Raises ValueError on the first bad URL, email or phone."""
    for link in social:
        try:
            validate_url(link.url, required=True)
        except ValueError as exc:
            raise ValueError(f"{link.platform} link: {exc}") from None
    if contact.email:
        validate_email(contact.email)
    validate_phone(contact.phone)


def _save(db: Session, key: str, config: BaseModel, store: Optional["SiteSettingsStore"]) -> None:
    upsert_setting(db, key=key, value=config.model_dump(by_alias=True))
    commit_or_rollback(db, f"Failed to save {key}")
    logger.info("Site layout %s updated", key)
    if store is not None:
        store.publish(key)


def save_header_config(db: Session, *, config: HeaderConfig, store: Optional["SiteSettingsStore"] = None) -> HeaderConfig:
    _check_menu(config.navigation)
    _check_links(config.social_links, config.contact_info)
    _save(db, HEADER_KEY, config, store)
    return config


def save_footer_config(db: Session, *, config: FooterConfig, store: Optional["SiteSettingsStore"] = None) -> FooterConfig:
    for column in config.columns:
        _check_menu(column.links)
    _check_links(config.social_links, config.contact_info)
    _save(db, FOOTER_KEY, config, store)
    return config
