#!/usr/bin/env python3
"""
Test sprite drawing, collision and wraparound on the display buffer
"""

import pytest

from display import HEIGHT, WIDTH, Display
from memory import FONT

GLYPH_0 = FONT[0:5]


def test_starts_blank():
    display = Display()
    rows = display.rows()
    assert len(rows) == HEIGHT
    assert all(len(row) == WIDTH for row in rows)
    assert display.lit_count() == 0


def test_draw_sets_pixels_msb_first():
    display = Display()
    collision = display.draw_sprite(10, 5, bytes([0b10100000]))
    assert collision is False
    assert display.get_pixel(10, 5)
    assert not display.get_pixel(11, 5)
    assert display.get_pixel(12, 5)
    assert display.lit_count() == 2


def test_draw_twice_restores_and_collides():
    display = Display()
    display.draw_sprite(3, 4, bytes([0xFF]))
    before = display.rows()

    assert display.draw_sprite(20, 10, GLYPH_0) is False
    assert display.draw_sprite(20, 10, GLYPH_0) is True
    assert display.rows() == before


def test_partial_overlap_collides():
    display = Display()
    display.draw_sprite(0, 0, bytes([0x80]))
    assert display.draw_sprite(0, 0, bytes([0xC0])) is True
    assert not display.get_pixel(0, 0)
    assert display.get_pixel(1, 0)


def test_non_overlapping_draw_no_collision():
    display = Display()
    display.draw_sprite(0, 0, bytes([0xF0]))
    assert display.draw_sprite(4, 0, bytes([0xF0])) is False


def test_wraps_horizontally_and_vertically():
    display = Display()
    display.draw_sprite(62, 31, bytes([0xF0, 0x90]))
    rows = display.rows()
    # First row wraps from column 63 to column 0
    assert rows[31][62] and rows[31][63] and rows[31][0] and rows[31][1]
    assert not rows[31][2]
    # Second row wraps from row 31 to row 0
    assert rows[0][62] and rows[0][1]
    assert not rows[0][63] and not rows[0][0]


def test_start_coordinates_wrap():
    display = Display()
    display.draw_sprite(64 + 5, 32 + 2, bytes([0x80]))
    assert display.get_pixel(5, 2)


def test_clear():
    display = Display()
    for x in range(0, 64, 8):
        display.draw_sprite(x, x % 32, GLYPH_0)
    display.clear()
    assert display.lit_count() == 0


def test_zero_row_sprite_draws_nothing():
    display = Display()
    assert display.draw_sprite(0, 0, b"") is False
    assert display.lit_count() == 0


def test_render_text():
    display = Display()
    display.draw_sprite(0, 0, bytes([0xC0]))
    lines = display.render_text().splitlines()
    assert len(lines) == HEIGHT
    assert lines[0].startswith("##.")
    assert set(lines[1]) == {"."}


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
