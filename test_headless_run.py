#!/usr/bin/env python3
"""
Test the headless runner end to end
"""

import argparse

import pytest

import config
import headless_run
from chip8 import Chip8


def write_rom(tmp_path, data, name="test.ch8"):
    path = tmp_path / name
    path.write_bytes(bytes(data))
    return str(path)


def test_parse_keys():
    assert headless_run.parse_keys("0,5,a") == [0x0, 0x5, 0xA]
    assert headless_run.parse_keys("") == []
    with pytest.raises(argparse.ArgumentTypeError):
        headless_run.parse_keys("10")


def test_run_frames_ticks_once_per_frame_at_60hz():
    chip8 = Chip8(bytes([0x12, 0x00]))
    timing = config.apply_overrides(cpu_hz=720)
    assert headless_run.run_frames(chip8, 5, timing) == 5
    assert chip8.cycles == 60
    assert chip8.ticks == 5


@pytest.mark.parametrize("frame_hz,frames", [(30, 15), (120, 60), (50, 25), (60, 30)])
def test_timer_rate_does_not_follow_frame_rate(frame_hz, frames):
    # Half an emulated second at any frame rate is 30 ticks of a 60 Hz timer
    chip8 = Chip8(bytes([0x12, 0x00]))
    timing = config.apply_overrides(frame_hz=frame_hz)
    headless_run.run_frames(chip8, frames, timing)
    assert chip8.ticks == 30


def test_delay_timer_runs_at_60hz_with_slow_frames(tmp_path, capsys):
    # DT = 60, then loop: after 15 frames at 30 Hz (half a second) DT is 30
    rom = write_rom(tmp_path, [0x60, 0x3C, 0xF0, 0x15, 0x12, 0x04])
    status = headless_run.main([rom, "--frames", "15", "--frame-hz", "30"])
    assert status == 0
    out = capsys.readouterr().out
    assert "ticks=30" in out
    assert "DT=30" in out


def test_headless_run_draws_and_saves(tmp_path, capsys):
    # I = glyph "0", draw at (0, 0), loop forever
    rom = write_rom(tmp_path, [0xA0, 0x50, 0xD0, 0x05, 0x12, 0x04])
    png = str(tmp_path / "out.png")
    status = headless_run.main([rom, "--frames", "3", "--png", png, "--text"])
    assert status == 0
    out = capsys.readouterr().out
    assert "Headless run complete" in out
    assert "lit=14" in out
    assert "####" in out
    assert (tmp_path / "out.png").exists()


def test_headless_run_held_keys(tmp_path, capsys):
    # Wait for a key into V0, then loop
    rom = write_rom(tmp_path, [0xF0, 0x0A, 0x12, 0x02])
    status = headless_run.main([rom, "--frames", "1", "--keys", "C"])
    assert status == 0
    assert "V0=0C" in capsys.readouterr().out


def test_headless_run_reports_fault(tmp_path, capsys):
    rom = write_rom(tmp_path, [0xFF, 0xFF])
    status = headless_run.main([rom, "--frames", "1"])
    assert status == 1
    assert "Illegal instruction 0xFFFF" in capsys.readouterr().out


def test_headless_run_missing_rom(tmp_path, capsys):
    status = headless_run.main([str(tmp_path / "nope.ch8")])
    assert status == 1
    assert "Failed to load ROM" in capsys.readouterr().out


def test_headless_run_rom_too_large(tmp_path, capsys):
    rom = write_rom(tmp_path, bytes(4000))
    assert headless_run.main([rom]) == 1
    assert "must be smaller than 3584" in capsys.readouterr().out
