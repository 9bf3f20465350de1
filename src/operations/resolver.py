"""Placeholder substitution for step parameters."""

import json
import re
from typing import Any, Dict, Mapping, Set

from .errors import ResolutionError

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


def resolve_params(params: Mapping[str, Any], context: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Replace {{name}} placeholders in a parameter payload with context values.

    The payload is walked structurally and only string leaves are rewritten.
    A leaf that is exactly one known placeholder takes the context value as is,
    so numbers, booleans and objects keep their type. Placeholders embedded in
    longer text are replaced by the value's text form. Unknown names are left
    untouched; waiting on them is the scheduler's concern.

    Args:
        params: Step parameters (nested dicts, lists and scalars)
        context: Plan context

    Returns:
        A new payload with known placeholders substituted

    Raises:
        ResolutionError: If the payload is not a mapping or a value cannot be rendered as text
    """
    if not isinstance(params, Mapping):
        raise ResolutionError(f"Step parameters must be an object, got {type(params).__name__}")
    return {key: _resolve_value(value, context) for key, value in params.items()}


def find_placeholders(params: Any) -> Set[str]:
    """Return every placeholder name referenced anywhere in a payload."""
    names: Set[str] = set()
    if isinstance(params, str):
        names.update(match.group(1) for match in PLACEHOLDER_PATTERN.finditer(params))
    elif isinstance(params, Mapping):
        for value in params.values():
            names |= find_placeholders(value)
    elif isinstance(params, (list, tuple)):
        for item in params:
            names |= find_placeholders(item)
    return names


def _resolve_value(value: Any, context: Mapping[str, Any]) -> Any:
    if isinstance(value, str):
        return _resolve_string(value, context)
    if isinstance(value, Mapping):
        return {key: _resolve_value(item, context) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve_value(item, context) for item in value]
    if isinstance(value, tuple):
        return tuple(_resolve_value(item, context) for item in value)
    return value


def _resolve_string(text: str, context: Mapping[str, Any]) -> Any:
    whole = PLACEHOLDER_PATTERN.fullmatch(text)
    if whole and whole.group(1) in context:
        return context[whole.group(1)]

    def substitute(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in context:
            return match.group(0)
        return _as_text(name, context[name])

    return PLACEHOLDER_PATTERN.sub(substitute, text)


def _as_text(name: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise ResolutionError(f"Context value '{name}' cannot be substituted into text: {e}")
