"""
Clamp resolved options to the bounds declared in PARAM_SCHEMA.
"""
import logging

from regionkit.core.params import clamp_if_bounds, get_param
from regionkit.params.schema import PARAM_SCHEMA

logger = logging.getLogger(__name__)


def clamp_options(options: dict) -> dict:
    """
    Return a copy of options with every schema-listed value clamped to [min, max].
    Unparsable values are replaced by the schema default.
    """
    result = {k: (dict(v) if isinstance(v, dict) else v) for k, v in options.items()}

    for name, entry in PARAM_SCHEMA.items():
        group, key = name.split(".", 1)
        if group not in result or not isinstance(result[group], dict) or key not in result[group]:
            continue
        raw = get_param(result, name)
        value = clamp_if_bounds(raw, entry["min"], entry["max"])
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            logger.warning("Option %s=%r is not numeric, using default %r", name, raw, entry["default"])
            value = entry["default"]
        elif entry["type"] == "int":
            value = int(value)
        result[group][key] = value

    return result
