"""
Region-aware waveform rendering: mapping, peak reduction and painters.
"""
from regionkit.waveform.mapper import (
    channel_bounds,
    full_buffer_instructions,
    map_region,
    map_regions,
    region_fingerprint,
)
from regionkit.waveform.peaks import compute_peaks, render_blocks, render_instruction
from regionkit.waveform.painter import PeakSubscriptions, WaveformBoard, WaveformPainter

__all__ = [
    "channel_bounds",
    "full_buffer_instructions",
    "map_region",
    "map_regions",
    "region_fingerprint",
    "compute_peaks",
    "render_blocks",
    "render_instruction",
    "PeakSubscriptions",
    "WaveformBoard",
    "WaveformPainter",
]
