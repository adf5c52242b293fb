#!/usr/bin/env python3
import argparse
import time

import config
from chip8 import Chip8
from errors import Chip8Error
from screenshot import save_screenshot
from timers import TickScheduler
from utils import format_state, set_debug


def parse_keys(text):
    """'0,5,A' -> [0x0, 0x5, 0xA]"""
    if not text:
        return []
    keys = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        value = int(part, 16)
        if not 0 <= value <= 0xF:
            raise argparse.ArgumentTypeError(f"Key out of range: {part}")
        keys.append(value)
    return keys


def run_frames(chip8, frames, timing):
    """Run `frames` frames of steps, ticking the timers at timing["timer_hz"].

    Returns the number of frames completed; a fatal error propagates.
    """
    cycles = config.cycles_per_frame(timing["cpu_hz"], timing["frame_hz"])
    scheduler = TickScheduler(timing["timer_hz"], timing["frame_hz"])
    for _ in range(frames):
        chip8.run_for_cycles(cycles)
        for _ in range(scheduler.ticks_for_frame()):
            chip8.tick()
    return frames


def main(argv=None):
    parser = argparse.ArgumentParser(description="Headless CHIP-8 run without SDL.")
    parser.add_argument("rom", help="Path to CHIP-8 program")
    parser.add_argument("--frames", type=int, default=60, help="Number of frames to run")
    parser.add_argument("--frame-hz", type=int, default=None, help="Frames per emulated second")
    parser.add_argument("--cpu-hz", type=int, default=None, help="Instructions per second")
    parser.add_argument("--keys", type=parse_keys, default=[], help="Hex keys held down, e.g. 0,5,A")
    parser.add_argument("--png", default=None, help="Save the final framebuffer to this image file")
    parser.add_argument("--scale", type=int, default=None, help="Image pixels per CHIP-8 pixel")
    parser.add_argument("--text", action="store_true", help="Print the final framebuffer as text")
    parser.add_argument("--debug", action="store_true", help="Print instruction traces")
    args = parser.parse_args(argv)

    set_debug(args.debug)

    try:
        with open(args.rom, "rb") as f:
            program = f.read()
    except OSError as e:
        print(f"Failed to load ROM: {args.rom} ({e})")
        return 1

    try:
        chip8 = Chip8(program)
    except Chip8Error as e:
        print(f"Failed to load ROM: {e}")
        return 1

    for key in args.keys:
        chip8.set_key(key, True)

    timing = config.apply_overrides(cpu_hz=args.cpu_hz, frame_hz=args.frame_hz)

    status = 0
    start = time.time()
    try:
        run_frames(chip8, args.frames, timing)
    except Chip8Error as e:
        print(f"CHIP-8 halted: {e}")
        status = 1
    elapsed = time.time() - start

    print(
        f"Headless run complete: cycles={chip8.cycles}, ticks={chip8.ticks}, "
        f"elapsed={elapsed:.3f}s, lit={chip8.display.lit_count()}"
    )
    print(format_state(chip8.get_cpu_state()))

    if args.text:
        print(chip8.display.render_text())
    if args.png:
        saved = save_screenshot(chip8.framebuffer(), args.png, args.scale)
        print(f"Framebuffer saved as: {saved}")
    return status


if __name__ == "__main__":
    raise SystemExit(main())
