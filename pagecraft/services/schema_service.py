# pagecraft/services/schema_service.py
# JSON Schema (draft 2020-12) derived from a section type's field list.
from __future__ import annotations
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from pagecraft.section_registry import FieldDefinition, FieldType, get_section_config

_IMAGE_SCHEMA: Dict[str, Any] = {
    "anyOf": [
        {"type": "null"},
        {"type": "string"},
        {
            "type": "object",
            "properties": {
                "mediaId": {"type": ["string", "integer", "null"]},
                "url": {"type": "string"},
                "alt": {"type": "string"},
            },
            "required": ["url"],
        },
    ]
}


def _field_schema(f: FieldDefinition) -> Dict[str, Any]:
    node: Dict[str, Any]
    if f.type in (FieldType.text, FieldType.textarea, FieldType.richtext, FieldType.link, FieldType.color):
        node = {"type": ["string", "null"]}
    elif f.type is FieldType.image:
        node = dict(_IMAGE_SCHEMA)
    elif f.type is FieldType.select:
        node = {"type": ["string", "null"]}
        if f.options:
            node["enum"] = [o.value for o in f.options] + [""]
    elif f.type is FieldType.checkbox:
        node = {"type": "boolean"}
    elif f.type is FieldType.number:
        # min/max are render hints, not constraints
        node = {"type": "number"}
    elif f.type is FieldType.repeater:
        node = {"type": "array", "items": _object_schema(f.fields)}
    else:
        raise ValueError(f"Unhandled field type: {f.type}")
    node["title"] = f.label
    return node


def _object_schema(fields: tuple[FieldDefinition, ...] | list[FieldDefinition]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {f.name: _field_schema(f) for f in fields},
        "required": [f.name for f in fields if f.required],
    }


def build_section_json_schema(section_type: str) -> Dict[str, Any]:
    cfg = get_section_config(section_type)
    schema = _object_schema(cfg.fields)
    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    schema["title"] = cfg.label
    return schema


def validate_section_content(section_type: str, content: Dict[str, Any]) -> List[str]:
    """Every violation as "path: message"; empty when the content conforms."""
    validator = Draft202012Validator(build_section_json_schema(section_type))
    errors = sorted(validator.iter_errors(content), key=lambda e: list(e.path))
    out: List[str] = []
    for err in errors:
        path = ".".join(str(p) for p in err.path) or "(root)"
        out.append(f"{path}: {err.message}")
    return out
