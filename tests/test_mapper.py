"""
Tests for regionkit/waveform/mapper: region pixel/frame windows, channel lanes, fallbacks.
Run from project root: python -m pytest tests/test_mapper.py -v
"""
import sys
import os
import math

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import numpy as np
from regionkit.core.timebase import BAR, QUARTER, pulses_to_seconds
from regionkit.core.types import PeakBuffer, Region, RenderWindow
from regionkit.waveform.mapper import (
    channel_bounds,
    full_buffer_instructions,
    map_region,
    map_regions,
    region_fingerprint,
)

BPM = 124.0


def _peaks(num_frames: int, num_channels: int = 2) -> PeakBuffer:
    return PeakBuffer(np.zeros((num_channels, num_frames, 2), dtype=np.float32))


# -----------------------------------------------------------------------------
# map_region
# -----------------------------------------------------------------------------

def test_end_to_end_two_bars_at_124():
    """BPM 124, two bars from 0 on a 1000px / 30s canvas, 2000 peak frames over 30s of audio."""
    region = Region("a", position=0, duration=2 * BAR, loop_offset=0)
    window = map_region(region, 1000, 30.0, BPM, 2000, 30.0)
    seconds = pulses_to_seconds(2 * BAR, BPM)
    assert window.pixel_start == 0
    assert window.pixel_end == math.floor(seconds / 30.0 * 1000) == 129
    assert window.frame_start == 0
    assert window.frame_end == math.floor(seconds / 30.0 * 2000) == 258


def test_region_covering_whole_audio_maps_full_buffer():
    duration = 6 * BAR
    region = Region("a", position=0, duration=duration)
    audio_duration = pulses_to_seconds(duration, BPM)
    window = map_region(region, 800, 60.0, BPM, 1234, audio_duration)
    assert (window.frame_start, window.frame_end) == (0, 1234)


def test_back_to_back_regions_are_contiguous():
    a = Region("a", position=0, duration=3 * BAR)
    b = Region("b", position=3 * BAR, duration=2 * BAR, loop_offset=3 * BAR)
    wa = map_region(a, 997, 30.0, BPM, 5000, 30.0)
    wb = map_region(b, 997, 30.0, BPM, 5000, 30.0)
    assert abs(wa.pixel_end - wb.pixel_start) <= 1
    assert abs(wa.frame_end - wb.frame_start) <= 1


def test_loop_offset_shifts_frames_not_pixels():
    base = Region("a", position=BAR, duration=BAR, loop_offset=0)
    shifted = Region("a", position=BAR, duration=BAR, loop_offset=BAR)
    w0 = map_region(base, 1000, 30.0, BPM, 3000, 30.0)
    w1 = map_region(shifted, 1000, 30.0, BPM, 3000, 30.0)
    assert (w0.pixel_start, w0.pixel_end) == (w1.pixel_start, w1.pixel_end)
    assert w1.frame_start > w0.frame_start


def test_frames_clamped_to_buffer():
    past_end = Region("a", position=0, duration=BAR, loop_offset=100 * BAR)
    window = map_region(past_end, 1000, 30.0, BPM, 500, 10.0)
    assert window.frame_start == 500
    assert window.frame_end == 500
    assert window.is_empty

    negative = Region("b", position=0, duration=BAR, loop_offset=-BAR)
    window = map_region(negative, 1000, 30.0, BPM, 500, 10.0)
    assert window.frame_start == 0


def test_map_region_degenerate_inputs():
    region = Region("a", position=0, duration=BAR)
    assert map_region(region, 1000, 0.0, BPM, 100, 10.0) is None
    assert map_region(region, 1000, -1.0, BPM, 100, 10.0) is None
    assert map_region(region, 1000, 30.0, BPM, 0, 10.0) is None
    assert map_region(region, 1000, 30.0, BPM, 100, 0.0) is None


# -----------------------------------------------------------------------------
# channel lanes
# -----------------------------------------------------------------------------

def test_channel_bounds_stereo():
    assert channel_bounds(100, 2, 4) == [(2.0, 48.0), (52.0, 98.0)]


def test_channel_bounds_mono_no_padding():
    assert channel_bounds(64, 1, 0) == [(0.0, 64.0)]


# -----------------------------------------------------------------------------
# map_regions
# -----------------------------------------------------------------------------

def test_map_regions_one_instruction_per_channel_per_region():
    regions = [
        Region("a", position=0, duration=BAR),
        Region("b", position=2 * BAR, duration=BAR, loop_offset=2 * BAR),
    ]
    out = map_regions(regions, 1000, 100, BPM, _peaks(2000), max_duration=30.0, audio_duration=30.0)
    assert len(out) == 4
    assert [ins.channel for ins in out] == [0, 1, 0, 1]
    assert out[0].channel_top == 2.0 and out[0].channel_bottom == 48.0
    assert out[1].channel_top == 52.0 and out[1].channel_bottom == 98.0
    assert all(ins.value_min == -1.0 and ins.value_max == 1.0 for ins in out)
    assert out[2].pixel_start > out[0].pixel_end


def test_map_regions_empty_when_no_frames():
    regions = [Region("a", position=0, duration=BAR)]
    assert map_regions(regions, 1000, 100, BPM, _peaks(0), max_duration=30.0, audio_duration=30.0) == []
    assert map_regions(regions, 1000, 100, BPM, None, max_duration=30.0, audio_duration=30.0) == []


def test_map_regions_empty_when_max_duration_zero():
    regions = [Region("a", position=0, duration=BAR)]
    assert map_regions(regions, 1000, 100, BPM, _peaks(100), max_duration=0.0, audio_duration=30.0) == []
    assert map_regions([], 1000, 100, BPM, _peaks(100), max_duration=0.0) == []


def test_map_regions_falls_back_to_full_buffer_without_regions():
    peaks = _peaks(777, num_channels=1)
    out = map_regions([], 640, 80, BPM, peaks, max_duration=30.0, audio_duration=30.0)
    assert len(out) == 1
    ins = out[0]
    assert (ins.pixel_start, ins.pixel_end) == (0, 640)
    assert (ins.frame_start, ins.frame_end) == (0, 777)


def test_map_regions_falls_back_without_audio_or_span():
    regions = [Region("a", position=BAR, duration=BAR)]
    peaks = _peaks(300)
    no_audio = map_regions(regions, 500, 100, BPM, peaks, max_duration=30.0)
    no_span = map_regions(regions, 500, 100, BPM, peaks, audio_duration=30.0)
    expected = full_buffer_instructions(500, 100, peaks)
    assert no_audio == expected
    assert no_span == expected


def test_map_regions_falls_back_when_audio_duration_not_positive():
    regions = [Region("a", position=BAR, duration=BAR)]
    peaks = _peaks(300)
    expected = full_buffer_instructions(500, 100, peaks)
    assert map_regions(regions, 500, 100, BPM, peaks, max_duration=30.0, audio_duration=0.0) == expected
    assert map_regions(regions, 500, 100, BPM, peaks, max_duration=30.0, audio_duration=-1.0) == expected
    # the single-region mapper has no fallback of its own
    assert map_region(regions[0], 500, 30.0, BPM, 300, 0.0) is None


def test_map_regions_empty_without_tempo():
    regions = [Region("a", position=0, duration=BAR)]
    peaks = _peaks(300)
    assert map_regions(regions, 500, 100, 0.0, peaks, max_duration=30.0, audio_duration=30.0) == []
    assert map_regions([], 500, 100, -1.0, peaks) == []


def test_map_regions_skips_empty_windows():
    regions = [
        Region("tiny", position=0, duration=1),
        Region("gone", position=BAR, duration=BAR, loop_offset=1000 * BAR),
        Region("ok", position=2 * BAR, duration=BAR),
    ]
    out = map_regions(regions, 1000, 100, BPM, _peaks(2000), max_duration=30.0, audio_duration=30.0)
    assert len(out) == 2
    assert all(ins.pixel_end > ins.pixel_start for ins in out)


def test_map_regions_is_pure():
    regions = [Region("a", position=QUARTER, duration=BAR, loop_offset=QUARTER)]
    peaks = _peaks(1000)
    before = peaks.data.copy()
    first = map_regions(regions, 900, 120, BPM, peaks, max_duration=20.0, audio_duration=20.0)
    second = map_regions(regions, 900, 120, BPM, peaks, max_duration=20.0, audio_duration=20.0)
    assert first == second
    assert np.array_equal(before, peaks.data)
    assert regions == [Region("a", position=QUARTER, duration=BAR, loop_offset=QUARTER)]


# -----------------------------------------------------------------------------
# Fingerprint
# -----------------------------------------------------------------------------

def test_fingerprint_tracks_geometry():
    a = [Region("a", 0, BAR, 0), Region("b", BAR, BAR, BAR)]
    same = [Region("x", 0, BAR, 0), Region("y", BAR, BAR, BAR)]
    moved = [Region("a", QUARTER, BAR, 0), Region("b", BAR, BAR, BAR)]
    assert region_fingerprint(a) == region_fingerprint(same)
    assert region_fingerprint(a) != region_fingerprint(moved)
    assert region_fingerprint([]) == ""


def test_render_window_empty_flag():
    assert RenderWindow(0, 0, 0, 10).is_empty
    assert RenderWindow(0, 10, 5, 5).is_empty
    assert not RenderWindow(0, 10, 0, 10).is_empty
