# 64x32 monochrome framebuffer. Cells hold PIXEL_ON / PIXEL_OFF, rows first
# so buffer[y, x] is the pixel at column x, row y.

import numpy as np

from .constants import WIDTH, HEIGHT, PIXEL_ON, PIXEL_OFF, SPRITE_WIDTH

# bit masks for each sprite column, MSB is the left-most pixel
_COLUMN_BITS = np.array([0x80 >> bit for bit in range(SPRITE_WIDTH)], dtype=np.uint8)


class Display:

    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width = width
        self.height = height
        self.buffer = np.zeros((height, width), dtype=np.uint8)

    def clear(self):
        self.buffer[:] = PIXEL_OFF

    def draw_sprite(self, x, y, rows):
        """XOR the sprite rows onto the screen at (x, y), wrapping at the edges.

        Returns True if any pixel went from ON to OFF.
        """
        collision = False
        cols = (x + np.arange(SPRITE_WIDTH)) % self.width
        for row, sprite in enumerate(rows):
            if sprite == 0:
                continue
            bits = ((sprite & _COLUMN_BITS) != 0).astype(np.uint8)
            line = self.buffer[(y + row) % self.height]
            before = line[cols]
            after = before ^ bits
            if np.any((before == PIXEL_ON) & (after == PIXEL_OFF)):
                collision = True
            line[cols] = after
        return collision

    def snapshot(self):
        return self.buffer.copy()

    def to_text(self, on="#", off="."):
        return "\n".join("".join(on if p else off for p in row) for row in self.buffer)
