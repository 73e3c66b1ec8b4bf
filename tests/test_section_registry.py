# tests/test_section_registry.py
import pytest

from pagecraft.section_registry import (
    LEGACY_BLOCKS_TYPE,
    SECTION_REGISTRY,
    FieldType,
    UnknownSectionType,
    get_addable_section_types,
    get_default_content,
    get_section_config,
    get_section_icon,
    get_section_label,
    get_section_types,
    is_registered_type,
)
from pagecraft.services.schema_service import build_section_json_schema, validate_section_content


@pytest.mark.parametrize("section_type", sorted(SECTION_REGISTRY))
def test_default_content_covers_every_field(section_type):
    cfg = get_section_config(section_type)
    missing = [f.name for f in cfg.fields if f.name not in cfg.default_content]
    assert missing == []


@pytest.mark.parametrize("section_type", sorted(SECTION_REGISTRY))
def test_default_content_conforms_to_schema(section_type):
    assert validate_section_content(section_type, get_default_content(section_type)) == []


def test_repeaters_declare_subfields_and_selects_declare_options():
    for cfg in SECTION_REGISTRY.values():
        for f in cfg.fields:
            if f.type is FieldType.repeater:
                assert f.fields, f"{cfg.type}.{f.name} has no sub-fields"
            if f.type is FieldType.select and f.name != "content_type_slug":
                assert f.options, f"{cfg.type}.{f.name} has no options"


def test_unknown_type_raises():
    with pytest.raises(UnknownSectionType):
        get_section_config("marquee")
    with pytest.raises(UnknownSectionType):
        get_default_content("marquee")


def test_default_content_is_a_copy():
    first = get_default_content("features")
    first["items"].append({"title": "mutated"})
    assert get_default_content("features")["items"] == []


def test_legacy_wrapper_is_not_addable():
    assert LEGACY_BLOCKS_TYPE in get_section_types()
    assert LEGACY_BLOCKS_TYPE not in get_addable_section_types()
    assert "hero" in get_addable_section_types()


def test_schema_marks_required_fields():
    schema = build_section_json_schema("hero")
    assert schema["required"] == ["headline"]
    assert schema["properties"]["overlay"]["type"] == "boolean"
    errors = validate_section_content("hero", {"overlay": "yes"})
    assert any(e.startswith("(root):") and "headline" in e for e in errors)
    assert any(e.startswith("overlay:") for e in errors)


def test_to_dict_shape():
    data = get_section_config("text-block").to_dict()
    assert data["type"] == "text-block"
    names = [f["name"] for f in data["fields"]]
    assert names == ["heading", "content", "alignment"]
    alignment = data["fields"][2]
    assert [o["value"] for o in alignment["options"]] == ["left", "center", "right"]
    assert alignment["defaultValue"] == "left"


def test_label_icon_and_registration_lookups():
    assert get_section_label("hero") == "Hero Section"
    assert get_section_icon("faq") == "help-circle"
    assert is_registered_type("legacy-blocks")
    assert not is_registered_type("marquee")
