"""
Option schema: type, default, bounds, group and description per numeric option.
Keys are dotted paths into DEFAULT_OPTIONS.
"""
from typing import Any, Dict, Literal

from regionkit.params.defaults import DEFAULT_OPTIONS
from regionkit.core.params import get_param

ParamType = Literal["float", "int"]
ParamGroup = Literal["waveform", "fade", "preview", "timeline"]

ParamSchemaEntry = Dict[str, Any]


def _make_param(
    name: str,
    param_type: ParamType,
    min_val: float,
    max_val: float,
    group: ParamGroup,
    description: str,
) -> ParamSchemaEntry:
    """Helper to create a schema entry; default is read from DEFAULT_OPTIONS."""
    return {
        "type": param_type,
        "default": get_param(DEFAULT_OPTIONS, name),
        "min": min_val,
        "max": max_val,
        "group": group,
        "description": description,
    }


PARAM_SCHEMA: Dict[str, ParamSchemaEntry] = {
    "waveform.channel_padding": _make_param(
        "waveform.channel_padding", "int", 0, 64, "waveform", "Pixels between channel lanes"
    ),
    "fade.in_slope": _make_param(
        "fade.in_slope", "float", 0.0, 1.0, "fade", "Fade-in curvature (0 log, 0.5 linear, 1 exp)"
    ),
    "fade.out_slope": _make_param(
        "fade.out_slope", "float", 0.0, 1.0, "fade", "Fade-out curvature (0 log, 0.5 linear, 1 exp)"
    ),
    "fade.length_beats": _make_param(
        "fade.length_beats", "float", 0.0, 64.0, "fade", "Default fade length in quarter notes"
    ),
    "preview.width": _make_param(
        "preview.width", "int", 16, 4096, "preview", "Fade preview canvas width"
    ),
    "preview.height": _make_param(
        "preview.height", "int", 16, 4096, "preview", "Fade preview canvas height"
    ),
    "preview.padding": _make_param(
        "preview.padding", "int", 0, 64, "preview", "Fade preview inner padding"
    ),
    "timeline.bpm": _make_param(
        "timeline.bpm", "float", 20.0, 999.0, "timeline", "Project tempo"
    ),
    "timeline.max_duration": _make_param(
        "timeline.max_duration", "float", 0.0, 86400.0, "timeline", "Visible span in seconds"
    ),
}
