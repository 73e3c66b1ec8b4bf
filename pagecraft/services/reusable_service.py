# pagecraft/services/reusable_service.py
# Library of reusable section content. Linked sections hold a snapshot that
# is rewritten whenever the component's content changes.
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from pagecraft.models.content import PageSection, ReusableComponent
from pagecraft.section_registry import get_section_config
from pagecraft.services.persistence import commit_or_rollback
from pagecraft.services.section_service import get_section

logger = logging.getLogger(__name__)


def list_components(db: Session) -> List[ReusableComponent]:
    return list(db.scalars(select(ReusableComponent).order_by(ReusableComponent.name)).all())


def get_component(db: Session, *, component_id: int) -> ReusableComponent:
    comp = db.get(ReusableComponent, component_id)
    if not comp:
        raise LookupError("Reusable component not found")
    return comp


def save_component(
    db: Session,
    *,
    name: str,
    block_type: str,
    content: Dict[str, Any],
    description: Optional[str] = None,
    created_by: Optional[int] = None,
) -> ReusableComponent:
    get_section_config(block_type)  # raises UnknownSectionType
    name = (name or "").strip()
    if not name:
        raise ValueError("Component name is required")
    comp = ReusableComponent(
        name=name,
        description=description,
        block_type=block_type,
        content=copy.deepcopy(content or {}),
        created_by=created_by,
    )
    db.add(comp)
    commit_or_rollback(db, "Failed to save component")
    db.refresh(comp)
    logger.info("Reusable component %s (%s) saved", comp.id, block_type)
    return comp


def save_component_from_section(
    db: Session,
    *,
    section_id: int,
    name: str,
    description: Optional[str] = None,
    created_by: Optional[int] = None,
) -> ReusableComponent:
    section = get_section(db, section_id=section_id)
    return save_component(
        db,
        name=name,
        description=description,
        block_type=section.section_type,
        content=section.content_json,
        created_by=created_by,
    )


def update_component(
    db: Session,
    *,
    component_id: int,
    name: Optional[str] = None,
    description: Optional[str] = None,
    content: Optional[Dict[str, Any]] = None,
) -> Tuple[ReusableComponent, int]:
    """
    Update a component. A content change is written to every section still
    linked to it in the same transaction. Returns (component, linked sections updated).
    """
    comp = get_component(db, component_id=component_id)
    if name is not None:
        if not name.strip():
            raise ValueError("Component name is required")
        comp.name = name.strip()
    if description is not None:
        comp.description = description

    fanned_out = 0
    if content is not None:
        comp.content = copy.deepcopy(content)
        linked_ids = db.scalars(
            select(PageSection.id).where(
                PageSection.reusable_id == comp.id,
                PageSection.is_linked.is_(True),
            )
        ).all()
        if linked_ids:
            db.execute(
                update(PageSection)
                .where(PageSection.id.in_(linked_ids))
                .values(content_json=copy.deepcopy(content))
                .execution_options(synchronize_session="fetch")
            )
        fanned_out = len(linked_ids)

    commit_or_rollback(db, "Failed to update component")
    db.refresh(comp)
    logger.info("Reusable component %s updated; %s linked section(s) refreshed", comp.id, fanned_out)
    return comp, fanned_out


def delete_component(db: Session, *, component_id: int) -> None:
    """Linked sections keep their last snapshot and become ordinary sections."""
    comp = get_component(db, component_id=component_id)
    db.execute(
        update(PageSection)
        .where(PageSection.reusable_id == comp.id)
        .values(is_linked=False, reusable_id=None)
        .execution_options(synchronize_session="fetch")
    )
    db.delete(comp)
    commit_or_rollback(db, "Failed to delete component")
    logger.info("Reusable component %s deleted", component_id)
