import argparse

import pytest

from ryutai.core.clock import ClockReading
from ryutai.main import build_parser, parse_size, parse_time, run_headless
from ryutai.settings import Settings


def test_parse_size():
    assert parse_size("1000x800") == (1000, 800)
    assert parse_size("64X48") == (64, 48)
    for bad in ("1000", "axb", "0x10", "10x-5"):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_size(bad)


def test_parse_time():
    assert parse_time("08:15") == ClockReading(8, 15, 0)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_time("99:00")


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.headless is False
    assert args.frames == 400
    assert args.size is None
    assert args.time is None


def test_parser_options():
    args = build_parser().parse_args(
        ["--headless", "--frames", "12", "--size", "320x240", "--time", "10:09:08", "--seed", "3"]
    )
    assert args.headless
    assert args.frames == 12
    assert args.size == (320, 240)
    assert args.time == ClockReading(10, 9, 8)
    assert args.seed == 3


def test_run_headless_writes_image(tmp_path, monkeypatch):
    pytest.importorskip("pygame")
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")

    output = tmp_path / "frames" / "last.png"
    args = build_parser().parse_args(
        ["--headless", "--frames", "20", "--size", "160x120", "--time", "12:00", "--output", str(output)]
    )

    result = run_headless(Settings(seed=1), args)

    assert result == output
    assert output.exists()
    assert output.stat().st_size > 0
