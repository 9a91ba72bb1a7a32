"""
Tests for tools/render_preview.py subcommands (JSON on stdout).
Run from project root: python -m pytest tests/test_render_preview.py -v
"""
import sys
import os
import json

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import argparse
import pytest
from tools.render_preview import main, parse_region


def _run(capsys, argv):
    assert main(argv) == 0
    return json.loads(capsys.readouterr().out)


def test_curve_subcommand(capsys):
    out = _run(capsys, ["curve", "--slope", "0.25", "--width", "40", "--height", "20", "--padding", "2"])
    assert out["slope"] == 0.25
    assert len(out["points"]) == 37
    assert out["qc"]["passed"]


def test_layout_subcommand(capsys):
    out = _run(capsys, [
        "layout", "--bpm", "124", "--max-duration", "30", "--width", "1000",
        "--frames", "2000", "--channels", "1", "--audio-duration", "30",
        "--region", "0:7680:0",
    ])
    assert len(out["instructions"]) == 1
    ins = out["instructions"][0]
    assert ins["pixel_start"] == 0
    assert ins["pixel_end"] == 129
    assert ins["frame_end"] == 258
    assert out["qc"]["passed"]


def test_layout_without_regions_falls_back(capsys):
    out = _run(capsys, ["layout", "--frames", "500", "--channels", "2", "--width", "300"])
    assert len(out["instructions"]) == 2
    assert out["instructions"][0]["pixel_end"] == 300
    assert out["instructions"][0]["frame_end"] == 500


def test_presets_subcommand(capsys):
    out = _run(capsys, ["presets"])
    assert set(out) == {"logarithmic", "linear", "exponential"}
    assert all(p["passed"] for p in out.values())


def test_parse_region():
    region = parse_region("960:3840", 3)
    assert region.id == "region-3"
    assert (region.position, region.duration, region.loop_offset) == (960, 3840, 0)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_region("1:2:3:4", 0)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_region("a:b", 0)


def test_envelope_subcommand_defaults(capsys):
    out = _run(capsys, ["envelope", "--bpm", "120", "--sample-rate", "1000", "--duration-beats", "8"])
    assert out["fading"]["in_pulses"] == 1920.0
    assert out["combine"] == "multiply"
    assert out["overlaps"] is False
    assert out["num_samples"] == 4000
    points = out["points"]
    assert len(points) == 17
    assert points[0] == 0.0
    assert points[2] == pytest.approx(0.5)
    assert points[8] == 1.0
    assert points[-1] == 0.0


def test_envelope_subcommand_overlap_and_slopes(capsys):
    out = _run(capsys, [
        "envelope", "--duration-beats", "2", "--length-beats", "2",
        "--in-slope", "0.9", "--out-slope", "0.1", "--combine", "min", "--points", "5",
    ])
    assert out["overlaps"] is True
    assert out["combine"] == "min"
    assert out["fading"]["in_slope"] == 0.9
    assert out["fading"]["out_slope"] == 0.1
    assert all(0.0 <= p <= 1.0 for p in out["points"])
