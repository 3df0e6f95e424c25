## headless numpy rasterizer for pyrtle turtle screens
## Copyright (c) 2026 pyrtle contributors
## All rights reserved
## See licensing terms in the LICENSE file at the top of the repository

import math
from typing import Optional, Tuple

import numpy as np

from .drawable import Color, Fill, Line, Point, TurtleScreen

## size of the turtle marker triangle, in pixels
MARKER_LENGTH = 12.0
MARKER_HALF_WIDTH = 5.0


def to_rgba8(color: Color) -> np.ndarray:
    """Convert a float RGBA color in [0, 1] to four bytes."""
    return np.array([int(round(min(1.0, max(0.0, c)) * 255)) for c in color],
                    dtype=np.uint8)


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _clip_segment(x0: float, y0: float, x1: float, y1: float,
                  width: float, height: float) -> Optional[Tuple[float, float, float, float]]:
    """
    Liang-Barsky clip of a segment to the rectangle ``[0, width] x [0, height]``.

    Returns the clipped endpoints, or None when no part of the segment is
    inside or a coordinate is not finite.
    """
    dx, dy = x1 - x0, y1 - y0
    if not _finite(x0, y0, x1, y1, dx, dy):
        return None
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0), (dx, width - x0), (-dy, y0), (dy, height - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)


class RasterScreen(TurtleScreen):
    """
    ``TurtleScreen`` that renders into an ``H x W x 4`` RGBA byte buffer.

    Every ``draw_and_update`` replays the display list onto a fresh
    buffer: background first, then lines and flood fills in the order
    they were issued, then the turtle marker when shown. Flood fills see
    exactly the pixels drawn before them. Text is kept in the display list
    but is not rasterized here; windowed subclasses overlay it.
    """

    def __init__(self, size: Tuple[int, int] = (640, 480), title: str = "pyrtle"):
        super().__init__(size, title)
        width, height = size
        if width <= 0 or height <= 0:
            raise ValueError(f'bad screen size: {size}')
        self.buffer = np.zeros((height, width, 4), dtype=np.uint8)
        self.update_count = 0
        self.render()

    def to_pixel(self, p: Point) -> Tuple[int, int]:
        """Map turtle coordinates to ``(column, row)`` pixel indices."""
        col = int(math.floor(p[0] + self.width / 2.0))
        row = int(math.floor(self.height / 2.0 - p[1]))
        return col, row

    def _in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def render(self) -> np.ndarray:
        buf = self.buffer
        buf[:, :] = to_rgba8(self.background_color)
        for prim in self.primitives:
            if isinstance(prim, Line):
                self._raster_line(prim.start, prim.end, to_rgba8(prim.color))
            elif isinstance(prim, Fill):
                self._raster_fill(prim.seed, to_rgba8(prim.color))
        if not self.turtle_hidden:
            self._raster_marker()
        return buf

    def draw_and_update(self) -> None:
        self.render()
        self.update_count += 1

    def capture_bitmap(self) -> np.ndarray:
        """Return a copy of the rendered RGBA buffer, top row first."""
        return self.render().copy()

    def pixel(self, p: Point) -> Tuple[int, int, int, int]:
        """Return the RGBA bytes at a turtle-coordinate point."""
        col, row = self.to_pixel(p)
        return tuple(int(c) for c in self.buffer[row, col])

    ## rasterization helpers

    def _raster_line(self, start: Point, end: Point, rgba: np.ndarray) -> None:
        half_w, half_h = self.width / 2.0, self.height / 2.0
        clipped = _clip_segment(start[0] + half_w, half_h - start[1],
                                end[0] + half_w, half_h - end[1],
                                self.width, self.height)
        if clipped is None:
            return
        c0, r0, c1, r1 = (int(math.floor(v)) for v in clipped)
        steps = max(abs(c1 - c0), abs(r1 - r0)) + 1
        cols = np.rint(np.linspace(c0, c1, steps)).astype(int)
        rows = np.rint(np.linspace(r0, r1, steps)).astype(int)
        keep = (cols >= 0) & (cols < self.width) & (rows >= 0) & (rows < self.height)
        self.buffer[rows[keep], cols[keep]] = rgba

    def _raster_fill(self, seed: Point, rgba: np.ndarray) -> None:
        """Scanline flood fill of the region of equal color around ``seed``."""
        if not _finite(*seed):
            return
        col, row = self.to_pixel(seed)
        if not self._in_bounds(col, row):
            return
        buf = self.buffer
        target = buf[row, col].copy()
        if np.array_equal(target, rgba):
            return
        match = np.all(buf == target, axis=2)
        filled = np.zeros_like(match)
        stack = [(col, row)]
        while stack:
            x, y = stack.pop()
            if filled[y, x]:
                continue
            open_row = match[y] & ~filled[y]
            if not open_row[x]:
                continue
            # extend the span left and right of x
            left = open_row[:x + 1][::-1]
            xl = x - (len(left) if left.all() else int(np.argmin(left))) + 1
            right = open_row[x:]
            xr = x + (len(right) if right.all() else int(np.argmin(right))) - 1
            filled[y, xl:xr + 1] = True
            for ny in (y - 1, y + 1):
                if not 0 <= ny < self.height:
                    continue
                seg = match[ny, xl:xr + 1] & ~filled[ny, xl:xr + 1]
                idx = np.flatnonzero(seg)
                if idx.size:
                    starts = idx[np.insert(np.diff(idx) != 1, 0, True)]
                    stack.extend((xl + int(s), ny) for s in starts)
        buf[filled] = rgba

    def _raster_marker(self) -> None:
        """Draw the turtle as a triangle outline pointing along its heading."""
        x, y = self.turtle_position
        if not _finite(x, y, self.turtle_orientation):
            return
        rad = math.radians(self.turtle_orientation)
        hx, hy = -math.sin(rad), math.cos(rad)
        tip = (x + hx * MARKER_LENGTH, y + hy * MARKER_LENGTH)
        left = (x - hy * MARKER_HALF_WIDTH, y + hx * MARKER_HALF_WIDTH)
        right = (x + hy * MARKER_HALF_WIDTH, y - hx * MARKER_HALF_WIDTH)
        rgba = to_rgba8(self.turtle_color)
        self._raster_line(left, tip, rgba)
        self._raster_line(tip, right, rgba)
        self._raster_line(right, left, rgba)
