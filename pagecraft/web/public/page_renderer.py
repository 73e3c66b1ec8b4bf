# pagecraft/web/public/page_renderer.py
"""
Builds the render model for a public page. No HTML here: the Jinja template
and the delivery API both consume the same RenderedPage.

Which content wins:
  - any section record on the page (visible or not)  -> "sections"
  - no sections, a non-empty block array in content  -> "legacy"
  - otherwise                                        -> "empty"

A page whose sections are all hidden therefore renders a blank content area
instead of falling back to its old blocks.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from pagecraft.models.content import Page, PageSection
from pagecraft.schemas.settings import BrandingSettings, EffectiveStyle
from pagecraft.section_registry import (
    FEED_SECTION_TYPES,
    LEGACY_BLOCKS_TYPE,
    UnknownSectionType,
    get_section_config,
)
from pagecraft.services.branding_service import (
    branding_css_variables,
    resolve_styles,
    root_font_size,
    style_css_declarations,
)
from pagecraft.services.field_service import field_view

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "This page has no content yet."

LEGACY_BLOCK_TYPES = ("hero", "text", "image", "button", "columns", "card-grid", "accordion")

# feed_loader(content_type_slug, limit) -> plain item dicts
FeedLoader = Callable[[str, Optional[int]], List[Dict[str, Any]]]


@dataclass(frozen=True)
class RenderedUnit:
    kind: str  # "section" | "block"
    type: str
    id: Any
    style: EffectiveStyle
    style_css: str
    fields: List[Dict[str, Any]] = field(default_factory=list)
    content: Dict[str, Any] = field(default_factory=dict)
    children: List[List["RenderedUnit"]] = field(default_factory=list)
    feed_items: Optional[List[Dict[str, Any]]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "kind": self.kind,
            "type": self.type,
            "id": self.id,
            "style": self.style.model_dump(),
        }
        if self.kind == "section":
            out["fields"] = self.fields
        else:
            out["content"] = self.content
        if self.children:
            out["children"] = [[c.to_dict() for c in col] for col in self.children]
        if self.feed_items is not None:
            out["feedItems"] = self.feed_items
        return out


@dataclass(frozen=True)
class RenderedPage:
    title: str
    seo_title: Optional[str]
    seo_description: Optional[str]
    mode: str  # "sections" | "legacy" | "empty"
    units: List[RenderedUnit]
    css_variables: Dict[str, str]
    root_font_size: Optional[str]
    base_style: EffectiveStyle
    empty_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "seoTitle": self.seo_title,
            "seoDescription": self.seo_description,
            "mode": self.mode,
            "units": [u.to_dict() for u in self.units],
            "cssVariables": self.css_variables,
            "rootFontSize": self.root_font_size,
            "emptyMessage": self.empty_message,
        }


def is_block_array(value: Any) -> bool:
    """A list whose every entry is an object with a string `type` and a `content`."""
    if not isinstance(value, list):
        return False
    return all(
        isinstance(b, Mapping) and isinstance(b.get("type"), str) and "content" in b
        for b in value
    )


# ===================== legacy blocks =====================
def _block_content(block: Mapping[str, Any]) -> Dict[str, Any]:
    content = block.get("content")
    return dict(content) if isinstance(content, Mapping) else {}


def _legacy_visible(block_type: str, content: Mapping[str, Any]) -> bool:
    # mirrors what each block view shows when it has nothing to say
    if block_type == "image":
        return bool(content.get("url"))
    if block_type == "button":
        return bool(content.get("text"))
    if block_type == "accordion":
        return bool(content.get("items"))
    return True


def render_block(block: Mapping[str, Any], branding: BrandingSettings) -> Optional[RenderedUnit]:
    """One legacy block; None for types that render nothing (e.g. headline)."""
    block_type = block.get("type")
    if block_type not in LEGACY_BLOCK_TYPES:
        return None
    content = _block_content(block)
    if not _legacy_visible(block_type, content):
        return None

    style = resolve_styles(content.get("styleOverrides"), branding)
    children: List[List[RenderedUnit]] = []
    if block_type == "columns":
        cols = 3 if content.get("columns") == 3 else 2
        content["columns"] = cols
        for column in (content.get("blocks") or [])[:cols]:
            nested = column if is_block_array(column) else []
            children.append([u for u in (render_block(b, branding) for b in nested) if u])
        content.pop("blocks", None)
    return RenderedUnit(
        kind="block",
        type=block_type,
        id=block.get("id"),
        style=style,
        style_css=style_css_declarations(style),
        content=content,
        children=children,
    )


def render_blocks(blocks: Sequence[Mapping[str, Any]], branding: BrandingSettings) -> List[RenderedUnit]:
    return [u for u in (render_block(b, branding) for b in blocks) if u]


# ===================== sections =====================
def render_section(
    section: PageSection,
    branding: BrandingSettings,
    feed_loader: Optional[FeedLoader] = None,
) -> Optional[RenderedUnit]:
    try:
        cfg = get_section_config(section.section_type)
    except UnknownSectionType:
        logger.warning("Section %s has unknown type %r; skipped", section.id, section.section_type)
        return None

    content = section.content_json if isinstance(section.content_json, Mapping) else {}
    style = resolve_styles(section.style_overrides, branding)

    if cfg.type == LEGACY_BLOCKS_TYPE:
        blocks = content.get("blocks")
        return RenderedUnit(
            kind="section",
            type=cfg.type,
            id=section.id,
            style=style,
            style_css=style_css_declarations(style),
            children=[render_blocks(blocks, branding)] if is_block_array(blocks) else [],
        )

    nodes = [n for n in (field_view(f, content.get(f.name)) for f in cfg.fields) if n]

    feed_items = None
    if cfg.type in FEED_SECTION_TYPES:
        feed_items = []
        slug = content.get("content_type_slug")
        if feed_loader is not None and isinstance(slug, str) and slug:
            limit = content.get("items_per_page")
            feed_items = feed_loader(slug, limit if isinstance(limit, int) and not isinstance(limit, bool) else None)

    return RenderedUnit(
        kind="section",
        type=cfg.type,
        id=section.id,
        style=style,
        style_css=style_css_declarations(style),
        fields=nodes,
        feed_items=feed_items,
    )


# ===================== page =====================
def render_page(
    page: Page,
    sections: Sequence[PageSection],
    branding: BrandingSettings,
    feed_loader: Optional[FeedLoader] = None,
) -> RenderedPage:
    base_style = resolve_styles(None, branding)
    common = dict(
        title=page.title,
        seo_title=page.seo_title,
        seo_description=page.seo_description,
        css_variables=branding_css_variables(branding),
        root_font_size=root_font_size(branding),
        base_style=base_style,
    )

    if sections:
        units = [
            u for u in (render_section(s, branding, feed_loader) for s in sections if s.is_visible) if u
        ]
        return RenderedPage(mode="sections", units=units, **common)

    blocks = page.content if is_block_array(page.content) else []
    if blocks:
        return RenderedPage(mode="legacy", units=render_blocks(blocks, branding), **common)

    return RenderedPage(mode="empty", units=[], empty_message=EMPTY_MESSAGE, **common)
