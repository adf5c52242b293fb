#!/usr/bin/env python3
"""
Test framebuffer to image conversion
"""

import os

from PIL import Image

from chip8 import Chip8
from config import DISPLAY
from screenshot import framebuffer_to_image, save_screenshot


def lit_corner_machine():
    # V0 = 0: draw glyph "0" at (0, 0)
    return Chip8(bytes([0xA0, 0x50, 0xD0, 0x05]))


def test_image_size_and_colors():
    chip8 = lit_corner_machine()
    chip8.run_for_cycles(2)
    img = framebuffer_to_image(chip8.framebuffer())
    assert img.size == (64, 32)
    assert img.getpixel((0, 0)) == DISPLAY["foreground"]
    assert img.getpixel((1, 1)) == DISPLAY["background"]
    assert img.getpixel((63, 31)) == DISPLAY["background"]


def test_scaled_image():
    chip8 = lit_corner_machine()
    chip8.run_for_cycles(2)
    img = framebuffer_to_image(chip8.framebuffer(), scale=4, foreground=(255, 0, 0))
    assert img.size == (256, 128)
    assert img.getpixel((3, 3)) == (255, 0, 0)
    assert img.getpixel((4, 0)) == (255, 0, 0)
    # Pixel (1, 1) of the glyph is off
    assert img.getpixel((5, 5)) == DISPLAY["background"]


def test_save_png_adds_extension(tmp_path):
    chip8 = lit_corner_machine()
    chip8.run_for_cycles(2)
    saved = save_screenshot(chip8.framebuffer(), str(tmp_path / "shot"), scale=2)
    assert saved.endswith(".png")
    assert os.path.exists(saved)
    with Image.open(saved) as img:
        assert img.size == (128, 64)


def test_save_jpeg(tmp_path):
    chip8 = lit_corner_machine()
    saved = save_screenshot(chip8.framebuffer(), str(tmp_path / "shot.jpg"), scale=1)
    with Image.open(saved) as img:
        assert img.format == "JPEG"
