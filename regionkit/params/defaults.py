"""
Canonical option defaults: single source for painters, fades, previews and the CLI.
Use resolve_options({}) for a fully resolved copy.
"""
from typing import Any, Dict

DEFAULT_OPTIONS: Dict[str, Any] = {
    "waveform": {
        "channel_padding": 4,
    },
    "fade": {
        "combine": "multiply",
        "in_slope": 0.5,
        "out_slope": 0.5,
        "length_beats": 2,
    },
    "preview": {
        "width": 100,
        "height": 50,
        "padding": 4,
    },
    "timeline": {
        "bpm": 124.0,
        "max_duration": 30.0,
    },
}

# Fade shapes offered by the fade editor, slow-start to fast-start.
FADE_PRESETS: Dict[str, Dict[str, Any]] = {
    "logarithmic": {
        "slope": 0.25,
        "description": "Slow start, fast end - smooth and natural sounding",
        "color": "#f59e0b",
    },
    "linear": {
        "slope": 0.5,
        "description": "Even progression - simple and predictable",
        "color": "#3b82f6",
    },
    "exponential": {
        "slope": 0.75,
        "description": "Fast start, slow end - punchy attack",
        "color": "#10b981",
    },
}
