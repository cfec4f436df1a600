from __future__ import annotations

import pytest

from shapecheck.engine import ConfigurationError, RuleRegistry, SchemaWalker, parse_schema


def _walk(data, schema, strict: bool = False):
    walker = SchemaWalker(RuleRegistry(), strict_collections=strict)
    return walker.walk(data, parse_schema(schema))


def _keys(tree):
    if isinstance(tree, dict):
        return {key: _keys(value) for key, value in tree.items()}
    return None


def test_all_fields_pass() -> None:
    schema = {
        "name": "string",
        "age": "number",
        "active": "boolean",
        "joined": "date",
        "contact": {"email": "email", "site": "url"},
    }
    data = {
        "name": "Ada",
        "age": 36,
        "active": True,
        "joined": "10/12/2015",
        "contact": {"email": "ada@example.com", "site": "https://example.com"},
    }
    ok, tree = _walk(data, schema)
    assert ok is True
    assert tree == {
        "name": "success",
        "age": "success",
        "active": "success",
        "joined": "success",
        "contact": {"email": "success", "site": "success"},
    }


def test_failures_do_not_short_circuit() -> None:
    schema = {"name": "string", "age": "number", "contact": {"email": "email", "site": "url"}}
    data = {"name": 5, "age": None, "contact": {"email": "nope", "site": "https://example.com"}}
    ok, tree = _walk(data, schema)
    assert ok is False
    assert tree == {
        "name": "must be a string",
        "age": "is required",
        "contact": {"email": "email is invalid", "site": "success"},
    }


def test_error_tree_mirrors_schema_not_input() -> None:
    schema = {"a": "string", "b": {"c": "number"}}
    data = {"a": "x", "extra": 1, "b": {"c": 2, "d": "ignored"}}
    ok, tree = _walk(data, schema)
    assert ok is True
    assert _keys(tree) == {"a": None, "b": {"c": None}}


def test_missing_key_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        _walk({"name": "Ada"}, {"name": "string", "contact": {"email": "email"}})
    assert excinfo.value.path == "contact"
    assert excinfo.value.reason == "key does not exist"


def test_missing_nested_key_reports_full_path() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        _walk({"contact": {}}, {"contact": {"email": "email"}})
    assert excinfo.value.path == "contact.email"


def test_unknown_type_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        _walk({"a": "x"}, {"a": "uuid"})


def test_nested_value_must_be_an_object() -> None:
    with pytest.raises(ConfigurationError):
        _walk({"contact": "ada@example.com"}, {"contact": {"email": "email"}})


def test_suffix_is_inert() -> None:
    ok, tree = _walk({"slug": "hello world"}, {"slug": "string:slug"})
    assert ok is True
    assert tree == {"slug": "success"}


def test_scalar_collection_elements_are_not_checked_by_default() -> None:
    ok, tree = _walk({"key": [1, "x", 3]}, {"key": [{"type": "number", "required": True}]})
    assert ok is True
    assert tree == {"key": "success"}


def test_strict_collections_check_scalar_elements() -> None:
    ok, tree = _walk({"key": [1, "x", None]}, {"key": [{"type": "number"}]}, strict=True)
    assert ok is False
    assert tree == {"key": ["success", "must be a number", "is required"]}


def test_strict_collection_honours_optional_and_error_message() -> None:
    schema = {"tags": [{"type": "string", "required": False, "params": {"max": 3}, "errorMessage": "bad tag"}]}
    ok, tree = _walk({"tags": ["ok", None, "toolong"]}, schema, strict=True)
    assert ok is False
    assert tree == {"tags": ["success", "success", "bad tag"]}


def test_collection_of_objects_recurses_per_element() -> None:
    schema = {"items": [{"sku": "string", "quantity": "number"}]}
    data = {"items": [{"sku": "A1", "quantity": 2}, {"sku": "", "quantity": "two"}]}
    ok, tree = _walk(data, schema)
    assert ok is False
    assert tree == {
        "items": [
            {"sku": "success", "quantity": "success"},
            {"sku": "must be min=1 characters.", "quantity": "must be a number"},
        ]
    }


def test_collection_of_objects_skips_scalars_in_lenient_mode() -> None:
    ok, tree = _walk({"items": [{"sku": "A1"}, 7]}, {"items": [{"sku": "string"}]})
    assert ok is True
    assert tree == {"items": [{"sku": "success"}, "success"]}


def test_collection_of_objects_rejects_scalars_in_strict_mode() -> None:
    ok, tree = _walk({"items": [{"sku": "A1"}, 7]}, {"items": [{"sku": "string"}]}, strict=True)
    assert ok is False
    assert tree == {"items": [{"sku": "success"}, "must be an object"]}


def test_collection_element_missing_key_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        _walk({"items": [{"sku": "A1"}, {}]}, {"items": [{"sku": "string"}]})
    assert excinfo.value.path == "items[1].sku"


def test_empty_collection() -> None:
    schema = {"scores": [{"type": "number"}]}
    assert _walk({"scores": []}, schema) == (True, {"scores": "success"})
    assert _walk({"scores": []}, schema, strict=True) == (True, {"scores": []})


def test_singular_value_against_collection_schema() -> None:
    schema = {"bio": [{"type": "string", "params": {"min": 3}}]}
    assert _walk({"bio": "hello"}, schema) == (True, {"bio": "success"})
    assert _walk({"bio": "hi"}, schema) == (False, {"bio": "must be min=3 characters."})
    assert _walk({"bio": None}, schema) == (False, {"bio": "is required"})


def test_singular_value_optional_and_override() -> None:
    schema = {"bio": [{"type": "number", "required": False, "errorMessage": "bio must be numeric"}]}
    assert _walk({"bio": None}, schema) == (True, {"bio": "success"})
    assert _walk({"bio": "text"}, schema) == (False, {"bio": "bio must be numeric"})


def test_singular_value_against_object_collection_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        _walk({"items": "A1"}, {"items": [{"sku": "string"}]})
    assert excinfo.value.reason == "param 'type' must be a string"


def test_descriptor_params_reach_the_rule() -> None:
    schema = {"link": [{"type": "url", "params": {"simple_host": True}}]}
    ok, tree = _walk({"link": "http://intranet"}, schema)
    assert ok is True
    assert tree == {"link": "success"}


def test_bad_string_params_name_the_field() -> None:
    schema = {"profile": {"bio": [{"type": "string", "params": {"min": "3"}}]}}
    with pytest.raises(ConfigurationError) as excinfo:
        _walk({"profile": {"bio": "hello"}}, schema)
    assert excinfo.value.path == "profile.bio"
    assert excinfo.value.reason == "params 'min' and 'max' must be numbers or nulls"


def test_unknown_format_option_names_the_field() -> None:
    schema = {"contact": [{"type": "email", "params": {"allow_display_name": True}}]}
    with pytest.raises(ConfigurationError) as excinfo:
        _walk({"contact": "ada@example.com"}, schema)
    assert excinfo.value.path == "contact"
