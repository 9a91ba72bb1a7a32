"""
Musical time base: pulses (PPQN) <-> seconds.
Timeline positions are integer pulses; QUARTER pulses make one quarter note.
"""
import math
from typing import Union

Number = Union[int, float]

QUARTER = 960
BAR = QUARTER * 4
SEMI_QUAVER = QUARTER // 4


def _check_bpm(bpm: float) -> float:
    bpm = float(bpm)
    if not bpm > 0.0:
        raise ValueError(f"bpm must be positive, got {bpm}")
    return bpm


def pulses_to_seconds(pulses: Number, bpm: float) -> float:
    """Convert timeline pulses to seconds at a fixed tempo."""
    return float(pulses) * 60.0 / (QUARTER * _check_bpm(bpm))


def seconds_to_pulses(seconds: Number, bpm: float) -> float:
    """Convert seconds to pulses. Not rounded; callers decide how to snap."""
    return float(seconds) * _check_bpm(bpm) / 60.0 * QUARTER


def from_signature(nominator: int, denominator: int) -> int:
    """Length of one bar in pulses for a time signature (e.g. 3/4 -> 2880)."""
    return math.floor(BAR / denominator) * nominator


def bars_to_pulses(bars: Number, nominator: int = 4, denominator: int = 4) -> int:
    """Length of `bars` bars in pulses."""
    return int(round(bars * from_signature(nominator, denominator)))
