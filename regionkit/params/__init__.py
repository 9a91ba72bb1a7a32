"""
Option defaults, schema and resolution.
Default values: single source is defaults.DEFAULT_OPTIONS; use resolve_options({}) for resolved defaults.
"""
from regionkit.params.defaults import DEFAULT_OPTIONS, FADE_PRESETS
from regionkit.params.schema import PARAM_SCHEMA
from regionkit.params.resolve import resolve_options
from regionkit.params.clamp import clamp_options

__all__ = ["DEFAULT_OPTIONS", "FADE_PRESETS", "PARAM_SCHEMA", "resolve_options", "clamp_options"]
