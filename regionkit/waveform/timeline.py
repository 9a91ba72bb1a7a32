"""
Timeline helpers shared by the waveform lanes: playhead placement, click-to-seek
and the seconds ruler. All positions are fractions of the visible span.
"""
import math
from dataclasses import dataclass
from typing import List, Optional

from regionkit.core.timebase import pulses_to_seconds, seconds_to_pulses


@dataclass(frozen=True)
class Tick:
    seconds: int
    fraction: float
    major: bool


def playhead_fraction(position: float, bpm: float, max_duration: float) -> Optional[float]:
    """Playhead position as a fraction of the visible span, clamped to [0, 1]. None if hidden."""
    if max_duration <= 0 or bpm <= 0:
        return None
    seconds = pulses_to_seconds(position, bpm)
    return max(0.0, min(1.0, seconds / max_duration))


def seek_position(click_x: float, width: float, max_duration: float, bpm: float) -> float:
    """Timeline position in pulses for a click at click_x on a lane `width` pixels wide."""
    if width <= 0 or max_duration <= 0 or bpm <= 0:
        return 0.0
    percent = max(0.0, min(1.0, click_x / width))
    return seconds_to_pulses(percent * max_duration, bpm)


def ruler_ticks(max_duration: float, major_every: int = 5) -> List[Tick]:
    """One tick per second from 0 to ceil(max_duration); every `major_every` seconds is major."""
    if max_duration <= 0:
        return []
    total = math.ceil(max_duration)
    return [
        Tick(s, s / max_duration, major_every > 0 and s % major_every == 0)
        for s in range(total + 1)
    ]
