# pagecraft/services/field_service.py
"""
Schema-driven field handling for section content.

One table, keyed by the closed FieldType enum, gives each field kind four
behaviours:
  - describe: the editor descriptor (widget, label, current value, options...)
  - coerce:   turn an incoming value into what gets stored
  - view:     the node the public renderer prints (None = nothing to show)
  - empty:    the value a new repeater item starts with when no default exists

The table is checked for completeness at import time, so adding a FieldType
without handlers fails loudly instead of silently rendering nothing.

Content updates are always whole-object: `apply_field_change` returns the
full content with one top-level key replaced, and callers persist that object
through the section store.
"""
from __future__ import annotations

import copy
import math
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from pagecraft.models.site import ContentType
from pagecraft.section_registry import (
    FieldDefinition,
    FieldType,
    SelectOption,
    get_section_config,
)

Options = Sequence[SelectOption]

# select fields with this name list content types instead of static options
CONTENT_TYPE_SELECT = "content_type_slug"


class FieldValueError(ValueError):
    """A value cannot be stored in the given field."""


# ===================== small helpers =====================
def _options_for(f: FieldDefinition, options: Optional[Options]) -> Options:
    return options if options is not None else f.options


def _default_or(f: FieldDefinition, fallback: Any) -> Any:
    return f.default_value if f.default_value is not None else fallback


def _norm_image(value: Any) -> Optional[Dict[str, Any]]:
    if value in (None, ""):
        return None
    if isinstance(value, str):
        return {"mediaId": None, "url": value, "alt": ""}
    if isinstance(value, Mapping) and isinstance(value.get("url"), str) and value.get("url"):
        return {
            "mediaId": value.get("mediaId"),
            "url": value["url"],
            "alt": value.get("alt") or "",
        }
    return None


def _as_items(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [it for it in value if isinstance(it, dict)]


# ===================== coerce =====================
def _coerce_text(f: FieldDefinition, value: Any, options: Optional[Options]) -> str:
    if value is None:
        return ""
    if isinstance(value, bool) or isinstance(value, (dict, list)):
        raise FieldValueError(f"{f.label} expects text")
    return value if isinstance(value, str) else str(value)


def _coerce_image(f: FieldDefinition, value: Any, options: Optional[Options]) -> Optional[Dict[str, Any]]:
    if value in (None, ""):
        return None
    img = _norm_image(value)
    if img is None:
        raise FieldValueError(f"{f.label} expects an image with a url")
    return img


def _coerce_select(f: FieldDefinition, value: Any, options: Optional[Options]) -> str:
    if value is None or value == "":
        return ""
    value = str(value)
    allowed = _options_for(f, options)
    if allowed and value not in {o.value for o in allowed}:
        raise FieldValueError(f"'{value}' is not a valid option for {f.label}")
    return value


_TRUE = {"true", "1", "on", "yes"}
_FALSE = {"false", "0", "off", "no", ""}


def _coerce_checkbox(f: FieldDefinition, value: Any, options: Optional[Options]) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE:
            return True
        if v in _FALSE:
            return False
    raise FieldValueError(f"{f.label} expects true or false")


def _coerce_number(f: FieldDefinition, value: Any, options: Optional[Options]) -> int | float:
    # unparsable or non-finite input (nan, inf, 1e999) stores 0, like an emptied numeric input
    if isinstance(value, bool):
        raise FieldValueError(f"{f.label} expects a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        s = value.strip()
        try:
            return int(s)
        except ValueError:
            try:
                number = float(s)
            except ValueError:
                return 0
            return number if math.isfinite(number) else 0
    if value is None:
        return 0
    raise FieldValueError(f"{f.label} expects a number")


def _coerce_repeater(f: FieldDefinition, value: Any, options: Optional[Options]) -> List[Dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise FieldValueError(f"{f.label} expects a list of items")
    out: List[Dict[str, Any]] = []
    for i, item in enumerate(value):
        if not isinstance(item, Mapping):
            raise FieldValueError(f"{f.label} item {i} must be an object")
        clean = dict(item)
        clean.setdefault("id", str(uuid.uuid4()))
        for sub in f.fields:
            if sub.name in clean:
                clean[sub.name] = coerce_field_value(sub, clean[sub.name])
        out.append(clean)
    return out


# ===================== describe (editor) =====================
def _base_descriptor(f: FieldDefinition, widget: str, path: str) -> Dict[str, Any]:
    node: Dict[str, Any] = {
        "key": f.name,
        "path": path,
        "type": f.type.value,
        "widget": widget,
        "label": f.label,
        "required": f.required,
    }
    if f.placeholder is not None:
        node["placeholder"] = f.placeholder
    return node


def _describe_text_like(widget: str) -> Callable[..., Dict[str, Any]]:
    def _describe(f: FieldDefinition, value: Any, path: str, options: Optional[Options]) -> Dict[str, Any]:
        node = _base_descriptor(f, widget, path)
        node["value"] = value if isinstance(value, str) else _default_or(f, "")
        return node
    return _describe


def _describe_image(f: FieldDefinition, value: Any, path: str, options: Optional[Options]) -> Dict[str, Any]:
    node = _base_descriptor(f, "media", path)
    node["value"] = _norm_image(value)
    return node


def _describe_select(f: FieldDefinition, value: Any, path: str, options: Optional[Options]) -> Dict[str, Any]:
    node = _base_descriptor(f, "select", path)
    node["options"] = [o.to_dict() for o in _options_for(f, options)]
    node["value"] = value if isinstance(value, str) and value != "" else _default_or(f, "")
    return node


def _describe_checkbox(f: FieldDefinition, value: Any, path: str, options: Optional[Options]) -> Dict[str, Any]:
    node = _base_descriptor(f, "switch", path)
    node["value"] = value if isinstance(value, bool) else bool(_default_or(f, False))
    return node


def _describe_color(f: FieldDefinition, value: Any, path: str, options: Optional[Options]) -> Dict[str, Any]:
    node = _base_descriptor(f, "color", path)
    node["value"] = value if isinstance(value, str) and value else _default_or(f, "#000000")
    return node


def _describe_number(f: FieldDefinition, value: Any, path: str, options: Optional[Options]) -> Dict[str, Any]:
    node = _base_descriptor(f, "number", path)
    if f.min is not None:
        node["minimum"] = f.min
    if f.max is not None:
        node["maximum"] = f.max
    is_num = isinstance(value, (int, float)) and not isinstance(value, bool)
    node["value"] = value if is_num else _default_or(f, 0)
    return node


def _describe_repeater(f: FieldDefinition, value: Any, path: str, options: Optional[Options]) -> Dict[str, Any]:
    node = _base_descriptor(f, "array", path)
    node["item_fields"] = [describe_field(sub, None, path=f"{path}[].{sub.name}") for sub in f.fields]
    node["items"] = [
        {
            "index": i,
            "id": item.get("id"),
            "fields": [
                describe_field(sub, item.get(sub.name), path=f"{path}[{i}].{sub.name}")
                for sub in f.fields
            ],
        }
        for i, item in enumerate(_as_items(value))
    ]
    return node


# ===================== view (public renderer) =====================
def _view_text(kind: str) -> Callable[[FieldDefinition, Any], Optional[Dict[str, Any]]]:
    def _view(f: FieldDefinition, value: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(value, str) or not value.strip():
            return None
        return {"kind": kind, "name": f.name, "label": f.label, "value": value}
    return _view


def _view_image(f: FieldDefinition, value: Any) -> Optional[Dict[str, Any]]:
    img = _norm_image(value)
    if not img:
        return None
    return {"kind": "image", "name": f.name, "label": f.label, "value": img}


def _view_select(f: FieldDefinition, value: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(value, str) or not value:
        return None
    label = next((o.label for o in f.options if o.value == value), value)
    return {"kind": "choice", "name": f.name, "label": f.label, "value": value, "display": label}


def _view_checkbox(f: FieldDefinition, value: Any) -> Optional[Dict[str, Any]]:
    return {"kind": "flag", "name": f.name, "label": f.label, "value": bool(value)}


def _view_number(f: FieldDefinition, value: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    return {"kind": "number", "name": f.name, "label": f.label, "value": value}


def _view_repeater(f: FieldDefinition, value: Any) -> Optional[Dict[str, Any]]:
    items = []
    for item in _as_items(value):
        nodes = [n for n in (field_view(sub, item.get(sub.name)) for sub in f.fields) if n]
        if nodes:
            items.append({"id": item.get("id"), "fields": nodes})
    if not items:
        return None
    return {"kind": "list", "name": f.name, "label": f.label, "items": items}


# ===================== dispatch table =====================
@dataclass(frozen=True)
class _FieldKind:
    describe: Callable[..., Dict[str, Any]]
    coerce: Callable[..., Any]
    view: Callable[[FieldDefinition, Any], Optional[Dict[str, Any]]]
    empty: Callable[[], Any]


_KINDS: Dict[FieldType, _FieldKind] = {
    FieldType.text: _FieldKind(_describe_text_like("text"), _coerce_text, _view_text("text"), lambda: ""),
    FieldType.textarea: _FieldKind(_describe_text_like("textarea"), _coerce_text, _view_text("paragraph"), lambda: ""),
    FieldType.richtext: _FieldKind(_describe_text_like("richtext"), _coerce_text, _view_text("html"), lambda: ""),
    FieldType.link: _FieldKind(_describe_text_like("url"), _coerce_text, _view_text("link"), lambda: ""),
    FieldType.image: _FieldKind(_describe_image, _coerce_image, _view_image, lambda: None),
    FieldType.select: _FieldKind(_describe_select, _coerce_select, _view_select, lambda: ""),
    FieldType.checkbox: _FieldKind(_describe_checkbox, _coerce_checkbox, _view_checkbox, lambda: False),
    FieldType.color: _FieldKind(_describe_color, _coerce_text, _view_text("color"), lambda: ""),
    FieldType.number: _FieldKind(_describe_number, _coerce_number, _view_number, lambda: 0),
    FieldType.repeater: _FieldKind(_describe_repeater, _coerce_repeater, _view_repeater, list),
}

_missing = set(FieldType) - set(_KINDS)
if _missing:
    raise RuntimeError(f"No field handlers for: {sorted(t.value for t in _missing)}")


def _kind(f: FieldDefinition) -> _FieldKind:
    return _KINDS[f.type]


# ===================== public API =====================
def describe_field(
    f: FieldDefinition,
    value: Any,
    *,
    path: Optional[str] = None,
    options: Optional[Options] = None,
) -> Dict[str, Any]:
    return _kind(f).describe(f, value, path or f.name, options)


def coerce_field_value(f: FieldDefinition, value: Any, *, options: Optional[Options] = None) -> Any:
    return _kind(f).coerce(f, value, options)


def field_view(f: FieldDefinition, value: Any) -> Optional[Dict[str, Any]]:
    return _kind(f).view(f, value)


def content_type_options(db: Session) -> List[SelectOption]:
    rows = db.scalars(select(ContentType).order_by(ContentType.name)).all()
    return [SelectOption(label=ct.name, value=ct.slug) for ct in rows]


def resolve_field_options(f: FieldDefinition, db: Optional[Session]) -> Optional[Options]:
    """Dynamic options for fields whose choices live in the DB; None = use the static ones."""
    if f.type is FieldType.select and f.name == CONTENT_TYPE_SELECT and db is not None:
        return content_type_options(db)
    return None


def describe_section_editor(
    section_type: str,
    content: Optional[Mapping[str, Any]],
    *,
    db: Optional[Session] = None,
) -> Dict[str, Any]:
    """Full editor contract for one section: every declared field with its current value."""
    cfg = get_section_config(section_type)
    content = content or {}
    return {
        "type": cfg.type,
        "label": cfg.label,
        "description": cfg.description,
        "icon": cfg.icon,
        "fields": [
            describe_field(f, content.get(f.name), options=resolve_field_options(f, db))
            for f in cfg.fields
        ],
    }


def apply_field_change(
    section_type: str,
    content: Optional[Mapping[str, Any]],
    field_name: str,
    value: Any,
    *,
    db: Optional[Session] = None,
) -> Dict[str, Any]:
    """
    Whole updated content with `field_name` replaced by the coerced `value`.
    Unknown top-level keys already in `content` are carried through untouched.
    """
    cfg = get_section_config(section_type)
    f = cfg.get_field(field_name)
    if f is None:
        raise FieldValueError(f"Section type '{section_type}' has no field '{field_name}'")
    coerced = coerce_field_value(f, value, options=resolve_field_options(f, db))
    return {**copy.deepcopy(dict(content or {})), field_name: coerced}


# -------------------- repeater items --------------------
def _require_repeater(f: FieldDefinition) -> None:
    if f.type is not FieldType.repeater:
        raise FieldValueError(f"{f.label} is not a repeater field")


def new_repeater_item(f: FieldDefinition) -> Dict[str, Any]:
    _require_repeater(f)
    item: Dict[str, Any] = {"id": str(uuid.uuid4())}
    for sub in f.fields:
        item[sub.name] = copy.deepcopy(sub.default_value) if sub.default_value is not None else _kind(sub).empty()
    return item


def _check_index(items: Sequence[Any], index: int) -> None:
    if index < 0 or index >= len(items):
        raise IndexError(f"Item index {index} out of range")


def add_repeater_item(items: Any, f: FieldDefinition) -> List[Dict[str, Any]]:
    return [*_as_items(items), new_repeater_item(f)]


def remove_repeater_item(items: Any, index: int) -> List[Dict[str, Any]]:
    current = _as_items(items)
    _check_index(current, index)
    return current[:index] + current[index + 1:]


def move_repeater_item(items: Any, from_index: int, to_index: int) -> List[Dict[str, Any]]:
    current = _as_items(items)
    _check_index(current, from_index)
    _check_index(current, to_index)
    moved = current[:]
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return moved


def update_repeater_item(
    items: Any,
    index: int,
    f: FieldDefinition,
    changes: Mapping[str, Any],
) -> List[Dict[str, Any]]:
    """Shallow-merge `changes` into item `index`; each changed sub-field is coerced."""
    _require_repeater(f)
    current = _as_items(items)
    _check_index(current, index)
    subs = {sub.name: sub for sub in f.fields}
    clean: Dict[str, Any] = {}
    for key, value in changes.items():
        if key == "id":
            continue
        sub = subs.get(key)
        if sub is None:
            raise FieldValueError(f"{f.label} items have no field '{key}'")
        clean[key] = coerce_field_value(sub, value)
    updated = current[:]
    updated[index] = {**current[index], **clean}
    return updated
