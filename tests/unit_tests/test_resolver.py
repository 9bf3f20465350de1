"""Tests for placeholder resolution."""

import pytest

from operations import ResolutionError, resolve_params
from operations.resolver import find_placeholders


def test_replaces_whole_string_placeholder():
    assert resolve_params({"id": "{{foo}}"}, {"foo": "bar"}) == {"id": "bar"}


def test_empty_context_leaves_payload_unchanged():
    params = {"id": "{{foo}}", "nested": {"list": ["{{bar}}", 3]}}
    assert resolve_params(params, {}) == params


def test_whole_placeholder_keeps_value_type():
    context = {"count": 5, "flag": True, "variant": {"id": "gid://1"}}
    resolved = resolve_params(
        {"first": "{{count}}", "active": "{{flag}}", "variant": "{{variant}}"},
        context,
    )
    assert resolved == {"first": 5, "active": True, "variant": {"id": "gid://1"}}


def test_embedded_placeholders_are_rendered_as_text():
    context = {"productId": "gid://shopify/Product/1", "limit": 10}
    resolved = resolve_params(
        {"query": 'query { product(id: "{{productId}}") { variants(first: {{limit}}) { id } } }'},
        context,
    )
    assert resolved["query"] == 'query { product(id: "gid://shopify/Product/1") { variants(first: 10) { id } } }'


def test_embedded_object_is_rendered_as_compact_json():
    resolved = resolve_params({"note": "input={{input}}"}, {"input": {"a": [1, 2]}})
    assert resolved["note"] == 'input={"a":[1,2]}'


def test_nested_structures_are_walked():
    params = {
        "variables": {
            "input": {"id": "{{variantId}}", "tags": ["{{tag}}", "static"]},
        }
    }
    resolved = resolve_params(params, {"variantId": "gid://1", "tag": "sale"})
    assert resolved == {"variables": {"input": {"id": "gid://1", "tags": ["sale", "static"]}}}


def test_unknown_placeholders_are_left_in_place():
    resolved = resolve_params({"a": "{{known}}-{{missing}}", "b": "{{missing}}"}, {"known": "x"})
    assert resolved == {"a": "x-{{missing}}", "b": "{{missing}}"}


def test_input_payload_is_not_mutated():
    params = {"variables": {"id": "{{id}}"}}
    resolve_params(params, {"id": "1"})
    assert params == {"variables": {"id": "{{id}}"}}


def test_non_mapping_payload_raises():
    with pytest.raises(ResolutionError):
        resolve_params(["{{id}}"], {"id": "1"})


def test_unrenderable_embedded_value_raises():
    with pytest.raises(ResolutionError, match="cannot be substituted"):
        resolve_params({"q": "value: {{obj}}"}, {"obj": object()})


def test_find_placeholders_collects_names_from_nested_payload():
    params = {"q": "{{a}} and {{b}}", "vars": {"x": ["{{c}}", 1]}, "n": 2}
    assert find_placeholders(params) == {"a", "b", "c"}
