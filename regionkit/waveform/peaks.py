"""
Peak data: per-channel min/max reduction of raw samples, and the block
painter reduction that turns a frame range into per-pixel columns.
"""
import math
from typing import Union

import numpy as np
import torch

from regionkit.core.types import DrawInstruction, PeakBuffer


def _to_channels(samples: Union[torch.Tensor, np.ndarray]) -> np.ndarray:
    if isinstance(samples, torch.Tensor):
        data = samples.detach().cpu().numpy()
    else:
        data = np.asarray(samples)
    data = data.astype(np.float32, copy=False)
    if data.ndim == 1:
        data = data[np.newaxis, :]
    if data.ndim != 2:
        raise ValueError(f"samples must be (n,) or (channels, n), got shape {data.shape}")
    return data


def compute_peaks(
    samples: Union[torch.Tensor, np.ndarray], samples_per_peak: int = 512
) -> PeakBuffer:
    """
    Downsample audio into min/max pairs, one pair per `samples_per_peak` block.
    The last block may be shorter. Empty audio gives a buffer with zero frames.
    """
    if samples_per_peak <= 0:
        raise ValueError(f"samples_per_peak must be positive, got {samples_per_peak}")

    data = _to_channels(samples)
    num_channels, n = data.shape
    num_frames = math.ceil(n / samples_per_peak)
    peaks = np.zeros((num_channels, num_frames, 2), dtype=np.float32)
    if num_frames == 0:
        return PeakBuffer(peaks, samples_per_peak)

    starts = np.arange(0, n, samples_per_peak)
    peaks[:, :, 0] = np.minimum.reduceat(data, starts, axis=1)
    peaks[:, :, 1] = np.maximum.reduceat(data, starts, axis=1)
    return PeakBuffer(peaks, samples_per_peak)


def render_blocks(
    peaks: PeakBuffer,
    channel: int,
    x0: int,
    x1: int,
    y0: float,
    y1: float,
    u0: int,
    u1: int,
    v0: float = -1.0,
    v1: float = 1.0,
) -> np.ndarray:
    """
    Reduce peak frames [u0, u1) onto pixel columns [x0, x1).

    Returns an array of shape (columns, 3): x, y_top, y_bottom. Value v1 maps
    to y0 and v0 maps to y1. When there are more pixels than frames, each
    column repeats the frame underneath it.
    """
    empty = np.zeros((0, 3), dtype=np.float64)
    width = int(x1) - int(x0)
    u0 = max(0, int(u0))
    u1 = min(peaks.num_frames, int(u1))
    if width <= 0 or u1 <= u0 or not 0 <= channel < peaks.num_channels or v1 == v0:
        return empty

    frames = peaks.data[channel, u0:u1]
    count = u1 - u0
    starts = (np.arange(width, dtype=np.int64) * count) // width
    lo = np.minimum.reduceat(frames[:, 0], starts)
    hi = np.maximum.reduceat(frames[:, 1], starts)

    scale = (y1 - y0) / (v0 - v1)
    columns = np.empty((width, 3), dtype=np.float64)
    columns[:, 0] = np.arange(int(x0), int(x1))
    columns[:, 1] = y0 + (hi - v1) * scale
    columns[:, 2] = y0 + (lo - v1) * scale
    return columns


def render_instruction(peaks: PeakBuffer, instruction: DrawInstruction) -> np.ndarray:
    return render_blocks(
        peaks,
        instruction.channel,
        instruction.pixel_start,
        instruction.pixel_end,
        instruction.channel_top,
        instruction.channel_bottom,
        instruction.frame_start,
        instruction.frame_end,
        instruction.value_min,
        instruction.value_max,
    )
