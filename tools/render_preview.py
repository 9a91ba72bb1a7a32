#!/usr/bin/env python3
"""
Preview tool: fade curve polylines, region draw layouts and preset checks as JSON.

Usage:
    python tools/render_preview.py <subcommand> [options]

Subcommands:
    curve --slope S [--fade-out]            Fade preview polyline + curve QC
    layout --region POS:DUR:OFFSET ...      Draw instructions for regions on one canvas
    envelope --duration-beats N              Fade envelope gains over one region
    presets                                 Fade presets with curve QC summary

Options:
    --log-level <str>     Logging level (default: $REGIONKIT_LOG_LEVEL or WARNING)
"""
import sys
import os
import json
import logging
import argparse
from dataclasses import asdict

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import numpy as np

from regionkit.core.timebase import QUARTER
from regionkit.core.types import PeakBuffer, Region
from regionkit.dsp.envelopes import envelope_from_options
from regionkit.dsp.curves import preview_points
from regionkit.params import FADE_PRESETS, clamp_options, resolve_options
from regionkit.qc import analyze_curve, analyze_windows
from regionkit.waveform.mapper import map_regions

logger = logging.getLogger("regionkit")


def parse_region(text: str, index: int) -> Region:
    """POS:DUR[:OFFSET] in pulses."""
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"region must be POS:DUR[:OFFSET], got {text!r}")
    try:
        values = [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"region values must be integers, got {text!r}")
    offset = values[2] if len(values) == 3 else 0
    return Region(id=f"region-{index}", position=values[0], duration=values[1], loop_offset=offset)


def cmd_curve(args, options):
    preview = options["preview"]
    points = preview_points(
        args.slope,
        width=preview["width"],
        height=preview["height"],
        padding=preview["padding"],
        fade_out=args.fade_out,
    )
    return {
        "slope": args.slope,
        "fade_out": args.fade_out,
        "points": points,
        "qc": analyze_curve(args.slope),
    }


def cmd_layout(args, options):
    timeline = options["timeline"]
    regions = [parse_region(text, i) for i, text in enumerate(args.region or [])]
    # Geometry only; peak values are irrelevant for the layout.
    peaks = PeakBuffer(np.zeros((args.channels, args.frames, 2), dtype=np.float32))
    instructions = map_regions(
        regions,
        args.width,
        args.height,
        timeline["bpm"],
        peaks,
        max_duration=timeline["max_duration"],
        audio_duration=args.audio_duration,
        channel_padding=options["waveform"]["channel_padding"],
    )
    logger.info("Mapped %d regions to %d draw instructions", len(regions), len(instructions))
    return {
        "instructions": [asdict(ins) for ins in instructions],
        "qc": analyze_windows(instructions, args.width, args.frames),
    }


def cmd_envelope(args, options):
    timeline = options["timeline"]
    envelope = envelope_from_options(options)
    duration = args.duration_beats * QUARTER
    gains = envelope.render(duration, timeline["bpm"], args.sample_rate)
    steps = max(1, args.points - 1)
    return {
        "fading": asdict(envelope.fading),
        "combine": envelope.combine,
        "overlaps": envelope.overlaps(duration),
        "num_samples": int(gains.numel()),
        "points": [envelope.gain_at(duration * i / steps, duration) for i in range(steps + 1)],
    }


def cmd_presets(args, options):
    out = {}
    for name, preset in FADE_PRESETS.items():
        qc = analyze_curve(preset["slope"])
        out[name] = {
            "slope": preset["slope"],
            "description": preset["description"],
            "passed": qc["passed"],
            "max_deviation_from_linear": qc["max_deviation_from_linear"],
        }
    return out


def main(argv=None):
    parser = argparse.ArgumentParser(description="Fade curve and waveform layout previews")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("REGIONKIT_LOG_LEVEL", "WARNING"),
        help="Logging level (default: $REGIONKIT_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_curve = sub.add_parser("curve", help="Fade preview polyline")
    p_curve.add_argument("--slope", type=float, required=True)
    p_curve.add_argument("--fade-out", action="store_true", help="Preview 1 - curve")
    p_curve.add_argument("--width", type=int, help="Canvas width (default from options)")
    p_curve.add_argument("--height", type=int, help="Canvas height (default from options)")
    p_curve.add_argument("--padding", type=int, help="Inner padding (default from options)")
    p_curve.set_defaults(func=cmd_curve)

    p_layout = sub.add_parser("layout", help="Region draw instructions")
    p_layout.add_argument("--region", action="append", help="POS:DUR[:OFFSET] in pulses (repeatable)")
    p_layout.add_argument("--bpm", type=float, help="Tempo (default from options)")
    p_layout.add_argument("--max-duration", type=float, help="Visible span in seconds")
    p_layout.add_argument("--width", type=int, default=1000)
    p_layout.add_argument("--height", type=float, default=100.0)
    p_layout.add_argument("--frames", type=int, default=2000, help="Peak frames")
    p_layout.add_argument("--channels", type=int, default=2)
    p_layout.add_argument("--audio-duration", type=float, default=None, help="Source audio seconds")
    p_layout.add_argument("--channel-padding", type=int, help="Pixels between channel lanes")
    p_layout.set_defaults(func=cmd_layout)

    p_env = sub.add_parser("envelope", help="Fade envelope over one region")
    p_env.add_argument("--duration-beats", type=float, default=8.0, help="Region length in quarter notes")
    p_env.add_argument("--length-beats", type=float, help="Fade length in quarter notes")
    p_env.add_argument("--in-slope", type=float)
    p_env.add_argument("--out-slope", type=float)
    p_env.add_argument("--combine", choices=["multiply", "min"])
    p_env.add_argument("--bpm", type=float, help="Tempo (default from options)")
    p_env.add_argument("--sample-rate", type=int, default=48000)
    p_env.add_argument("--points", type=int, default=17, help="Gain samples to report")
    p_env.set_defaults(func=cmd_envelope)

    p_presets = sub.add_parser("presets", help="Fade presets")
    p_presets.set_defaults(func=cmd_presets)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))

    overrides = {}
    for group, key, attr in (
        ("preview", "width", "width"),
        ("preview", "height", "height"),
        ("preview", "padding", "padding"),
        ("timeline", "bpm", "bpm"),
        ("timeline", "max_duration", "max_duration"),
        ("waveform", "channel_padding", "channel_padding"),
        ("fade", "length_beats", "length_beats"),
        ("fade", "in_slope", "in_slope"),
        ("fade", "out_slope", "out_slope"),
        ("fade", "combine", "combine"),
    ):
        # layout's --width/--height are canvas sizes, not preview sizes
        if args.command == "layout" and group == "preview":
            continue
        value = getattr(args, attr, None)
        if value is not None:
            overrides.setdefault(group, {})[key] = value
    options = clamp_options(resolve_options(overrides))

    result = args.func(args, options)
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
