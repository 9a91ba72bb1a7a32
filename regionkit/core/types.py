from dataclasses import dataclass
import numpy as np
from typing import Optional, Tuple


@dataclass(frozen=True)
class Region:
    """Snapshot of a placed audio region. All times are integer pulses."""
    id: str
    position: int
    duration: int
    loop_offset: int = 0
    loop_duration: Optional[int] = None

    @property
    def effective_loop_duration(self) -> int:
        return self.duration if self.loop_duration is None else self.loop_duration


@dataclass(eq=False)
class PeakBuffer:
    """
    Downsampled min/max pairs per channel. Compared by identity.
    data has shape (num_channels, num_frames, 2); [..., 0] is min, [..., 1] is max.
    """
    data: np.ndarray
    samples_per_peak: int = 1

    def __post_init__(self):
        self.data = np.asarray(self.data, dtype=np.float32)
        if self.data.ndim != 3 or self.data.shape[-1] != 2:
            raise ValueError(
                f"peak data must have shape (channels, frames, 2), got {self.data.shape}"
            )
        if self.data.shape[0] < 1:
            raise ValueError("peak data needs at least one channel")
        if self.samples_per_peak <= 0:
            raise ValueError(f"samples_per_peak must be positive, got {self.samples_per_peak}")

    @property
    def num_channels(self) -> int:
        return int(self.data.shape[0])

    @property
    def num_frames(self) -> int:
        return int(self.data.shape[1])

    def frame(self, channel: int, index: int) -> Tuple[float, float]:
        lo, hi = self.data[channel, index]
        return float(lo), float(hi)


@dataclass(frozen=True)
class RenderWindow:
    pixel_start: int
    pixel_end: int
    frame_start: int
    frame_end: int

    @property
    def is_empty(self) -> bool:
        return self.pixel_end <= self.pixel_start or self.frame_end <= self.frame_start


@dataclass(frozen=True)
class DrawInstruction:
    """One channel lane of one region, ready for render_blocks."""
    channel: int
    pixel_start: int
    pixel_end: int
    channel_top: float
    channel_bottom: float
    frame_start: int
    frame_end: int
    value_min: float = -1.0
    value_max: float = 1.0
