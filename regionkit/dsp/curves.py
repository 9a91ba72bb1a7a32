"""
Single-parameter fade curve family.
slope 0 -> logarithmic (slow start), 0.5 -> linear, 1 -> exponential (fast start).
Preview canvases and the fade envelopes both evaluate normalized_at, so the
drawn shape matches the rendered gain.
"""
from typing import List, Tuple, Union

import numpy as np
import torch

LINEAR_SLOPE = 0.5
LINEAR_WINDOW = 1.0e-6
SLOPE_EPSILON = 1.0e-15


def _is_linear(slope: float) -> bool:
    return LINEAR_SLOPE - LINEAR_WINDOW < slope < LINEAR_SLOPE + LINEAR_WINDOW


def _coefficients(slope: float) -> Tuple[float, float]:
    """(scale, base) of scale * (base ** (2x) - 1) for a non-linear slope."""
    p = max(SLOPE_EPSILON, min(1.0 - SLOPE_EPSILON, slope))
    return (p * p) / (1.0 - p * 2.0), (1.0 - p) / p


def normalized_at(
    x: Union[float, torch.Tensor], slope: float
) -> Union[float, torch.Tensor]:
    """
    Curve value at position x for the given slope. Accepts scalar or tensor x.

    No bounds check on x: values outside [0, 1] extrapolate the same formula,
    overflow gives inf and NaN propagates. Never raises.
    """
    slope = float(slope)
    if _is_linear(slope):
        return x

    scale, base = _coefficients(slope)

    if isinstance(x, torch.Tensor):
        if not x.is_floating_point():
            x = x.to(torch.get_default_dtype())
        return scale * (torch.pow(base, 2.0 * x) - 1.0)

    with np.errstate(over="ignore", invalid="ignore"):
        return float(scale * (np.power(base, 2.0 * float(x)) - 1.0))


def preview_points(
    slope: float,
    width: int = 100,
    height: int = 50,
    padding: int = 4,
    fade_out: bool = False,
) -> List[Tuple[float, float]]:
    """
    Canvas polyline for a fade preview: one point per pixel of the padded area.
    y grows downwards, so full level sits at the top padding edge.
    Fade-out previews draw 1 - curve.
    """
    draw_width = width - padding * 2
    draw_height = height - padding * 2
    if draw_width <= 0 or draw_height <= 0:
        return []

    points = []
    for i in range(draw_width + 1):
        x = i / draw_width
        y = normalized_at(x, slope)
        if fade_out:
            y = 1.0 - y
        points.append((float(padding + i), padding + (1.0 - y) * draw_height))
    return points
