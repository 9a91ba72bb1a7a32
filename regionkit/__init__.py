"""
regionkit: fade-curve model and region-aware waveform mapping for a headless DAW timeline.
"""
from regionkit.dsp.curves import normalized_at
from regionkit.waveform.mapper import map_regions, map_region, region_fingerprint

__version__ = "0.1.0"

__all__ = ["normalized_at", "map_regions", "map_region", "region_fingerprint", "__version__"]
