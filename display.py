"""
CHIP-8 Display Buffer
64x32 monochrome pixels, drawn by XOR-ing sprites with coordinate wraparound
"""

WIDTH = 64
HEIGHT = 32


class Display:
    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width = width
        self.height = height
        # Row-major, pixel (x, y) lives at y * width + x
        self.pixels = [False] * (width * height)

    def clear(self):
        """Turn every pixel off"""
        self.pixels = [False] * (self.width * self.height)

    def get_pixel(self, x, y):
        return self.pixels[(y % self.height) * self.width + (x % self.width)]

    def draw_sprite(self, x, y, sprite_rows):
        """XOR an 8-pixel-wide sprite onto the buffer.

        Args:
            x (int): column of the sprite's left edge, wrapped mod width
            y (int): row of the sprite's top edge, wrapped mod height
            sprite_rows (bytes): one byte per row, MSB is the leftmost pixel

        Returns:
            bool: True if any lit pixel was turned off (collision)
        """
        collision = False
        pixels = self.pixels
        for row, bits in enumerate(sprite_rows):
            py = (y + row) % self.height
            base = py * self.width
            for col in range(8):
                if bits & (0x80 >> col):
                    idx = base + (x + col) % self.width
                    if pixels[idx]:
                        collision = True
                    pixels[idx] = not pixels[idx]
        return collision

    def rows(self):
        """Read-only snapshot of the buffer as a tuple of row tuples"""
        w = self.width
        return tuple(
            tuple(self.pixels[r * w : (r + 1) * w]) for r in range(self.height)
        )

    def lit_count(self):
        return sum(self.pixels)

    def render_text(self, on="#", off="."):
        """Framebuffer as text lines, handy for debug output"""
        return "\n".join(
            "".join(on if p else off for p in row) for row in self.rows()
        )
