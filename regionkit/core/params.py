"""
Option lookup over nested dicts.
Keys are dotted paths into option groups, e.g. "waveform.channel_padding".
"""
from typing import Any, Optional


def get_param(options: dict, path: str, default: Any = None) -> Any:
    """
    Value at a dotted path, or default when any segment is missing.
    get_param(o, "fade.in_slope", 0.5) -> o["fade"]["in_slope"].
    """
    if not options or not path:
        return default
    *groups, leaf = path.split(".")
    node = options
    for group in groups:
        node = node.get(group)
        if not isinstance(node, dict):
            return default
    return node.get(leaf, default)


def get_float(options: dict, path: str, default: float = 0.0) -> float:
    """get_param coerced to float; unparsable values give default."""
    try:
        return float(get_param(options, path, default))
    except (TypeError, ValueError):
        return default


def clamp_if_bounds(
    value: float,
    lo: Optional[float] = None,
    hi: Optional[float] = None,
) -> float:
    """Clamp to whichever of lo/hi is set. Non-numeric values pass through."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return value
    if lo is not None:
        v = max(lo, v)
    if hi is not None:
        v = min(hi, v)
    return v
