"""
Quality checks for fade curves and region draw windows.
Detects the failure modes that would make a preview disagree with the rendered fade:
broken endpoints, non-monotonic segments, non-finite values, frames outside the buffer.
"""
import math
from typing import Dict, Optional, Sequence

import numpy as np
import torch

from regionkit.core.types import DrawInstruction
from regionkit.dsp.curves import normalized_at
from regionkit.qc.thresholds import QC_THRESHOLDS


def analyze_curve(slope: float, num_points: int = 257, thresholds: Optional[Dict] = None) -> Dict:
    """
    Sample the curve on a uniform grid over [0, 1] and report metrics with pass flags.

    Args:
        slope: Curve slope in [0, 1]
        num_points: Grid size (including both endpoints)
        thresholds: Overrides for QC_THRESHOLDS["curve"]

    Returns:
        Dict with metrics and pass/fail flags
    """
    th = dict(QC_THRESHOLDS["curve"])
    th.update(thresholds or {})

    x = torch.linspace(0.0, 1.0, max(2, num_points), dtype=torch.float64)
    y = normalized_at(x, slope)
    y_np = y.numpy()

    finite = bool(np.all(np.isfinite(y_np)))
    start = float(y_np[0])
    end = float(y_np[-1])
    steps = np.diff(y_np)
    max_step_down = float(max(0.0, -steps.min())) if steps.size else 0.0
    deviation = float(np.max(np.abs(y_np - x.numpy()))) if finite else math.inf

    endpoints_ok = (
        finite
        and abs(start) <= th["endpoint_tolerance"]
        and abs(end - 1.0) <= th["endpoint_tolerance"]
    )
    monotonic_ok = finite and max_step_down <= th["monotonic_tolerance"]

    return {
        "slope": float(slope),
        "start": start,
        "end": end,
        "max_step_down": max_step_down,
        "max_deviation_from_linear": deviation,
        "finite": finite,
        "endpoints_ok": endpoints_ok,
        "monotonic_ok": monotonic_ok,
        "finite_ok": finite,
        "passed": endpoints_ok and monotonic_ok and finite,
    }


def analyze_windows(
    instructions: Sequence[DrawInstruction],
    width: int,
    num_frames: int,
    thresholds: Optional[Dict] = None,
) -> Dict:
    """Coverage and bounds check for a draw list on a canvas `width` pixels wide."""
    th = dict(QC_THRESHOLDS["windows"])
    th.update(thresholds or {})

    covered = np.zeros(max(0, int(width)), dtype=bool)
    frames_in_bounds = True
    narrow = 0
    for ins in instructions:
        lo = max(0, ins.pixel_start)
        hi = min(int(width), ins.pixel_end)
        if hi > lo:
            covered[lo:hi] = True
        if ins.pixel_end - ins.pixel_start < th["min_pixels"]:
            narrow += 1
        if not (0 <= ins.frame_start <= ins.frame_end <= num_frames):
            frames_in_bounds = False

    coverage = float(covered.mean()) if covered.size else 0.0
    return {
        "count": len(instructions),
        "channels": len({ins.channel for ins in instructions}),
        "pixel_coverage": coverage,
        "narrow_windows": narrow,
        "frames_in_bounds": frames_in_bounds,
        "passed": frames_in_bounds and narrow == 0,
    }
