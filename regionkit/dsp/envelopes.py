import logging
from dataclasses import dataclass
from typing import Union

import torch

from regionkit.core.params import get_float, get_param
from regionkit.core.timebase import QUARTER, pulses_to_seconds
from regionkit.dsp.curves import LINEAR_SLOPE, normalized_at

logger = logging.getLogger(__name__)

COMBINE_MODES = ("multiply", "min")


# -----------------------------------------------------------------------------
# Helpers (reusable across envelopes and previews)
# -----------------------------------------------------------------------------

def clamp01(x: Union[float, torch.Tensor]) -> Union[float, torch.Tensor]:
    """Clamp value(s) to [0, 1]. Accepts scalar or tensor."""
    if isinstance(x, torch.Tensor):
        return torch.clamp(x, 0.0, 1.0)
    return max(0.0, min(1.0, float(x)))


# -----------------------------------------------------------------------------
# Scalar fade gains (pulses)
# -----------------------------------------------------------------------------

@dataclass
class Fading:
    """Fade-in/out lengths in pulses and their curve slopes."""
    in_pulses: float = 0.0
    out_pulses: float = 0.0
    in_slope: float = LINEAR_SLOPE
    out_slope: float = LINEAR_SLOPE


def fade_in_gain(elapsed: float, length: float, slope: float) -> float:
    """Gain of a fade-in at `elapsed` pulses into the region."""
    if length <= 0:
        return 1.0
    if elapsed <= 0:
        return 0.0
    if elapsed >= length:
        return 1.0
    return clamp01(normalized_at(elapsed / length, slope))


def fade_out_gain(elapsed: float, duration: float, length: float, slope: float) -> float:
    """Gain of a fade-out occupying the last `length` pulses of a `duration` region."""
    if length <= 0:
        return 1.0
    if elapsed >= duration:
        return 0.0
    start = duration - length
    if elapsed <= start:
        return 1.0
    return clamp01(1.0 - normalized_at((elapsed - start) / length, slope))


# -----------------------------------------------------------------------------
# Region fade envelope
# -----------------------------------------------------------------------------

class FadeEnvelope:
    """
    Fade-in and fade-out gain over one region.
    When both windows overlap (region shorter than in + out) the two gains are
    combined with `combine`: "multiply" (default) or "min".
    """

    def __init__(self, fading: Fading, combine: str = "multiply"):
        self.fading = fading
        if combine not in COMBINE_MODES:
            logger.warning("Unknown fade combine mode %r, using 'multiply'", combine)
            combine = "multiply"
        self.combine = combine

    def overlaps(self, duration: float) -> bool:
        f = self.fading
        return f.in_pulses > 0 and f.out_pulses > 0 and f.in_pulses + f.out_pulses > duration

    def _combine(self, a, b):
        if self.combine == "min":
            if isinstance(a, torch.Tensor):
                return torch.minimum(a, b)
            return min(a, b)
        return a * b

    def gain_at(self, elapsed: float, duration: float) -> float:
        f = self.fading
        g_in = fade_in_gain(elapsed, f.in_pulses, f.in_slope)
        g_out = fade_out_gain(elapsed, duration, f.out_pulses, f.out_slope)
        return self._combine(g_in, g_out)

    def render(self, duration: float, bpm: float, sample_rate: int) -> torch.Tensor:
        """
        Sample-accurate gain for a region of `duration` pulses.
        Length is int(seconds * sample_rate); float32 in [0, 1].
        """
        n = int(pulses_to_seconds(duration, bpm) * sample_rate)
        if n <= 0:
            return torch.zeros(0)

        f = self.fading
        if self.overlaps(duration):
            logger.debug(
                "Fade windows overlap (in=%s out=%s duration=%s), combining with %s",
                f.in_pulses, f.out_pulses, duration, self.combine,
            )

        # Elapsed pulses at each sample
        elapsed = torch.arange(n, dtype=torch.float64) / sample_rate * (bpm / 60.0 * QUARTER)

        g_in = torch.ones(n, dtype=torch.float64)
        if f.in_pulses > 0:
            pos = elapsed / f.in_pulses
            g_in = torch.where(pos < 1.0, normalized_at(pos.clamp(0.0, 1.0), f.in_slope), g_in)

        g_out = torch.ones(n, dtype=torch.float64)
        if f.out_pulses > 0:
            pos = (elapsed - (duration - f.out_pulses)) / f.out_pulses
            g_out = torch.where(pos > 0.0, 1.0 - normalized_at(pos.clamp(0.0, 1.0), f.out_slope), g_out)

        env = clamp01(self._combine(g_in, g_out))
        return env.to(torch.float32)


def apply_fades(audio: torch.Tensor, envelope: torch.Tensor) -> torch.Tensor:
    """
    Multiply mono (n,) or multi-channel (channels, n) audio by a fade envelope.
    The envelope is zero-padded or truncated to the audio length.
    """
    n = audio.shape[-1]
    env = envelope.to(audio.dtype)
    if env.shape[-1] < n:
        env = torch.nn.functional.pad(env, (0, n - env.shape[-1]))
    elif env.shape[-1] > n:
        env = env[:n]
    return audio * env


def envelope_from_options(options: dict) -> FadeEnvelope:
    """
    FadeEnvelope from resolved options: equal fade-in/out of fade.length_beats
    quarter notes, fade.in_slope / fade.out_slope, fade.combine.
    """
    length = max(0.0, get_float(options, "fade.length_beats", 0.0)) * QUARTER
    fading = Fading(
        in_pulses=length,
        out_pulses=length,
        in_slope=get_float(options, "fade.in_slope", LINEAR_SLOPE),
        out_slope=get_float(options, "fade.out_slope", LINEAR_SLOPE),
    )
    return FadeEnvelope(fading, str(get_param(options, "fade.combine", "multiply")))
