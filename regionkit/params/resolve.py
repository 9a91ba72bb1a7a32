"""
Option resolution: deep-merge DEFAULT_OPTIONS with incoming overrides.
Overrides win at any nesting level; inputs are never mutated.
"""
import copy
from typing import Any, Dict, Optional

from regionkit.params.defaults import DEFAULT_OPTIONS


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dicts. override values take precedence.
    Returns a new dict (does not mutate inputs).
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def resolve_options(overrides: Optional[dict] = None) -> dict:
    """Defaults with overrides merged on top, as an independent copy."""
    return _deep_merge(copy.deepcopy(DEFAULT_OPTIONS), copy.deepcopy(overrides or {}))
