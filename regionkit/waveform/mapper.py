"""
Region -> waveform mapping.

Places each region on a fixed-width canvas (pixels) and picks the matching
frame range of the track's peak buffer, then splits the canvas height into
one padded lane per channel. Pure: nothing is cached or mutated here; callers
memoise on (peaks identity, canvas size, region_fingerprint).
"""
import logging
import math
from typing import List, Optional, Sequence, Tuple

from regionkit.core.timebase import pulses_to_seconds
from regionkit.core.types import DrawInstruction, PeakBuffer, Region, RenderWindow

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_PADDING = 4


def region_fingerprint(regions: Sequence[Region]) -> str:
    """Stable key for region geometry; equal geometry -> equal key."""
    return "|".join(
        f"{r.position}:{r.duration}:{r.loop_offset}:{r.effective_loop_duration}"
        for r in regions
    )


def channel_bounds(height: float, num_channels: int, padding: float) -> List[Tuple[float, float]]:
    """(top, bottom) of each channel lane, with padding / 2 trimmed from both sides."""
    if num_channels <= 0:
        return []
    lane = height / num_channels
    half = padding / 2.0
    return [(ch * lane + half, (ch + 1) * lane - half) for ch in range(num_channels)]


def _frame_index(seconds: float, audio_duration: float, num_frames: int) -> int:
    index = math.floor(seconds / audio_duration * num_frames)
    return max(0, min(num_frames, index))


def map_region(
    region: Region,
    width: int,
    max_duration: float,
    bpm: float,
    num_frames: int,
    audio_duration: float,
) -> Optional[RenderWindow]:
    """
    Pixel and peak-frame window of one region.
    Returns None when max_duration, num_frames or audio_duration is not positive.
    Frame indices are clamped into [0, num_frames]; pixels are not clamped.
    """
    if max_duration <= 0 or num_frames <= 0 or audio_duration <= 0:
        return None

    start_s = pulses_to_seconds(region.position, bpm)
    duration_s = pulses_to_seconds(region.duration, bpm)
    pixel_start = math.floor(start_s / max_duration * width)
    pixel_end = math.floor((start_s + duration_s) / max_duration * width)

    offset_s = pulses_to_seconds(region.loop_offset, bpm)
    frame_start = _frame_index(offset_s, audio_duration, num_frames)
    frame_end = _frame_index(offset_s + duration_s, audio_duration, num_frames)

    return RenderWindow(pixel_start, pixel_end, frame_start, frame_end)


def _instructions(
    window: RenderWindow, lanes: List[Tuple[float, float]]
) -> List[DrawInstruction]:
    return [
        DrawInstruction(
            channel=ch,
            pixel_start=window.pixel_start,
            pixel_end=window.pixel_end,
            channel_top=top,
            channel_bottom=bottom,
            frame_start=window.frame_start,
            frame_end=window.frame_end,
        )
        for ch, (top, bottom) in enumerate(lanes)
    ]


def full_buffer_instructions(
    width: int,
    height: float,
    peaks: PeakBuffer,
    channel_padding: float = DEFAULT_CHANNEL_PADDING,
) -> List[DrawInstruction]:
    """Whole peak buffer stretched across the whole canvas, one lane per channel."""
    if peaks is None or peaks.num_frames <= 0 or width <= 0:
        return []
    window = RenderWindow(0, int(width), 0, peaks.num_frames)
    return _instructions(window, channel_bounds(height, peaks.num_channels, channel_padding))


def map_regions(
    regions: Sequence[Region],
    width: int,
    height: float,
    bpm: float,
    peaks: Optional[PeakBuffer],
    max_duration: Optional[float] = None,
    audio_duration: Optional[float] = None,
    channel_padding: float = DEFAULT_CHANNEL_PADDING,
) -> List[DrawInstruction]:
    """
    Draw instructions for every region of a track sharing one canvas.

    - No peaks, or an empty peak buffer: nothing to draw.
    - max_duration given but not positive, or bpm not positive: nothing to draw.
    - No regions, max_duration unknown, or audio_duration unknown or not
      positive: the whole buffer across the whole canvas.
    """
    if peaks is None or peaks.num_frames <= 0:
        return []
    if bpm <= 0:
        logger.debug("Tempo %s is not positive, nothing to draw", bpm)
        return []
    if max_duration is not None and max_duration <= 0:
        return []
    if not regions or max_duration is None or audio_duration is None or audio_duration <= 0:
        return full_buffer_instructions(width, height, peaks, channel_padding)

    lanes = channel_bounds(height, peaks.num_channels, channel_padding)
    out: List[DrawInstruction] = []
    for region in regions:
        window = map_region(region, width, max_duration, bpm, peaks.num_frames, audio_duration)
        if window is None or window.is_empty:
            logger.debug("Region %s has nothing to draw: %s", region.id, window)
            continue
        out.extend(_instructions(window, lanes))
    return out
