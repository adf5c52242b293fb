"""
CHIP-8 Emulator with SDL2 Graphics
Main entry point for the emulator
"""

import argparse
import os
import sys
import time

import sdl2

import config
from beeper import Beeper
from chip8 import Chip8
from errors import Chip8Error
from screenshot import save_screenshot
from timers import TickScheduler
from utils import debug_print, format_state, set_debug

# Standard layout: the 4x4 block at the left of a QWERTY keyboard
KEYMAP = {
    sdl2.SDLK_1: 0x1,
    sdl2.SDLK_2: 0x2,
    sdl2.SDLK_3: 0x3,
    sdl2.SDLK_4: 0xC,
    sdl2.SDLK_q: 0x4,
    sdl2.SDLK_w: 0x5,
    sdl2.SDLK_e: 0x6,
    sdl2.SDLK_r: 0xD,
    sdl2.SDLK_a: 0x7,
    sdl2.SDLK_s: 0x8,
    sdl2.SDLK_d: 0x9,
    sdl2.SDLK_f: 0xE,
    sdl2.SDLK_z: 0xA,
    sdl2.SDLK_x: 0x0,
    sdl2.SDLK_c: 0xB,
    sdl2.SDLK_v: 0xF,
}


class Chip8Emulator:
    def __init__(self, chip8, timing=None, scale=None):
        self.chip8 = chip8
        self.running = False

        # Timing
        self.timing = timing or dict(config.TIMING)
        self.frame_time = 1.0 / self.timing["frame_hz"]
        self.cycles_per_frame = config.cycles_per_frame(
            self.timing["cpu_hz"], self.timing["frame_hz"]
        )
        self.tick_scheduler = TickScheduler(
            self.timing["timer_hz"], self.timing["frame_hz"]
        )

        # Display settings
        self.scale = scale or config.DISPLAY["scale"]
        self.width = chip8.display.width
        self.height = chip8.display.height
        self.window_width = self.width * self.scale
        self.window_height = self.height * self.scale

        # SDL components
        self.window = None
        self.renderer = None
        self.texture = None
        self.audio_device = None
        self.beeper = Beeper()

    def initialize_sdl(self):
        """Initialize SDL2"""
        if (
            sdl2.SDL_Init(
                sdl2.SDL_INIT_VIDEO | sdl2.SDL_INIT_AUDIO | sdl2.SDL_INIT_EVENTS
            )
            != 0
        ):
            print(f"SDL2 initialization failed: {sdl2.SDL_GetError()}")
            return False

        self.window = sdl2.SDL_CreateWindow(
            config.DISPLAY["title"].encode(),
            sdl2.SDL_WINDOWPOS_CENTERED,
            sdl2.SDL_WINDOWPOS_CENTERED,
            self.window_width,
            self.window_height,
            sdl2.SDL_WINDOW_SHOWN,
        )
        if not self.window:
            print(f"Window creation failed: {sdl2.SDL_GetError()}")
            return False

        self.renderer = sdl2.SDL_CreateRenderer(
            self.window,
            -1,
            sdl2.SDL_RENDERER_ACCELERATED | sdl2.SDL_RENDERER_PRESENTVSYNC,
        )
        if not self.renderer:
            print(f"Renderer creation failed: {sdl2.SDL_GetError()}")
            return False

        # One texel per CHIP-8 pixel, stretched to the window by RenderCopy
        self.texture = sdl2.SDL_CreateTexture(
            self.renderer,
            sdl2.SDL_PIXELFORMAT_ABGR8888,
            sdl2.SDL_TEXTUREACCESS_STREAMING,
            self.width,
            self.height,
        )
        if not self.texture:
            print(f"Texture creation failed: {sdl2.SDL_GetError()}")
            return False

        audio = config.AUDIO
        desired = sdl2.SDL_AudioSpec(audio["sample_rate"], sdl2.AUDIO_S16, 1, 1024)
        obtained = sdl2.SDL_AudioSpec(0, 0, 0, 0)
        self.audio_device = sdl2.SDL_OpenAudioDevice(None, 0, desired, obtained, 0)
        if self.audio_device == 0:
            # Run without sound
            print(f"Audio device creation failed: {sdl2.SDL_GetError()}")
        else:
            self.beeper.init_audio_device(self.audio_device)
            sdl2.SDL_PauseAudioDevice(self.audio_device, 0)

        debug_print("SDL2 initialized successfully")
        return True

    def cleanup_sdl(self):
        """Clean up SDL2 resources"""
        if self.audio_device:
            sdl2.SDL_CloseAudioDevice(self.audio_device)
        if self.texture:
            sdl2.SDL_DestroyTexture(self.texture)
        if self.renderer:
            sdl2.SDL_DestroyRenderer(self.renderer)
        if self.window:
            sdl2.SDL_DestroyWindow(self.window)
        sdl2.SDL_Quit()

    def take_screenshot(self, filename):
        try:
            saved = save_screenshot(self.chip8.framebuffer(), filename, self.scale)
            print(f"Screenshot saved as: {saved}")
        except OSError as e:
            print(f"Error taking screenshot: {e}")

    def handle_events(self):
        """Handle SDL events"""
        event = sdl2.SDL_Event()
        while sdl2.SDL_PollEvent(event):
            if event.type == sdl2.SDL_QUIT:
                self.running = False
            elif event.type == sdl2.SDL_KEYDOWN:
                self.handle_key(event.key.keysym.sym, True)
            elif event.type == sdl2.SDL_KEYUP:
                self.handle_key(event.key.keysym.sym, False)

    def handle_key(self, key, pressed):
        if key in KEYMAP:
            self.chip8.set_key(KEYMAP[key], pressed)
        elif not pressed:
            return
        elif key == sdl2.SDLK_ESCAPE:
            self.running = False
        elif key == sdl2.SDLK_F5:
            self.chip8.reset()
            print("Reset CHIP-8")
        elif key == sdl2.SDLK_F12:
            self.take_screenshot(f"screenshot_{int(time.time())}.png")

    def update_texture(self):
        """Update SDL texture with the framebuffer"""
        fg = config.DISPLAY["foreground"] + (0xFF,)
        bg = config.DISPLAY["background"] + (0xFF,)
        # ABGR8888 on little-endian is R, G, B, A in memory
        on, off = bytes(fg), bytes(bg)
        pixels_bytes = b"".join(
            on if lit else off for row in self.chip8.framebuffer() for lit in row
        )
        sdl2.SDL_UpdateTexture(self.texture, None, pixels_bytes, self.width * 4)

    def render(self):
        """Render the current frame"""
        sdl2.SDL_SetRenderDrawColor(self.renderer, 0, 0, 0, 255)
        sdl2.SDL_RenderClear(self.renderer)
        sdl2.SDL_RenderCopy(self.renderer, self.texture, None, None)
        sdl2.SDL_RenderPresent(self.renderer)

    def run_frame(self):
        """Run one frame's worth of instructions, then the timer ticks due.

        A halted machine stays frozen until F5 resets it.
        """
        if self.chip8.halted:
            return
        try:
            self.chip8.run_for_cycles(self.cycles_per_frame)
        finally:
            for _ in range(self.tick_scheduler.ticks_for_frame()):
                self.chip8.tick()

    def run(self):
        """Run the emulator, returns False if it was left halted by a fault"""
        if not self.initialize_sdl():
            self.cleanup_sdl()
            return False

        print("Starting emulator...")
        print("Controls:")
        print("  1234 / QWER / ASDF / ZXCV: CHIP-8 keypad")
        print("  F5: Reset")
        print("  F12: Take screenshot")
        print("  Escape: Quit")

        self.running = True
        while self.running:
            frame_start = time.time()
            self.handle_events()

            try:
                self.run_frame()
            except Chip8Error as e:
                print(f"CHIP-8 halted: {e}")
                print(format_state(self.chip8.get_cpu_state()))
                print("Press F5 to reset or Escape to quit")

            self.beeper.update(self.chip8.sound_active(), self.timing["frame_hz"])
            self.update_texture()
            self.render()

            frame_duration = time.time() - frame_start
            if frame_duration < self.frame_time:
                sleep_time = self.frame_time - frame_duration
                if sleep_time > 0.001:
                    time.sleep(sleep_time)

        self.cleanup_sdl()
        return not self.chip8.halted


def build_parser():
    parser = argparse.ArgumentParser(description="CHIP-8 emulator")
    parser.add_argument("rom", help="Path to CHIP-8 program")
    parser.add_argument("--cpu-hz", type=int, default=None, help="Instructions per second")
    parser.add_argument("--frame-hz", type=int, default=None, help="Window refresh rate")
    parser.add_argument("--scale", type=int, default=None, help="Window pixels per CHIP-8 pixel")
    parser.add_argument("--debug", action="store_true", help="Print instruction traces")
    return parser


def main(argv=None):
    """Main entry point"""
    args = build_parser().parse_args(argv)
    set_debug(args.debug)

    if not os.path.exists(args.rom):
        print(f"ROM file not found: {args.rom}")
        return 1

    with open(args.rom, "rb") as f:
        program = f.read()

    try:
        chip8 = Chip8(program)
    except Chip8Error as e:
        print(f"Error: {e}")
        return 1

    timing = config.apply_overrides(cpu_hz=args.cpu_hz, frame_hz=args.frame_hz)
    print("Settings:")
    for line in config.describe(timing):
        print(line)

    emulator = Chip8Emulator(chip8, timing, args.scale)
    try:
        return 0 if emulator.run() else 1
    except KeyboardInterrupt:
        print("\nEmulator stopped by user")
        return 0


if __name__ == "__main__":
    sys.exit(main())
