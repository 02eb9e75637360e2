"""
8-bit grayscale pixel surface with scoped updates and dirty tracking.

The PixelSurface class owns the off-screen buffer that both the fractal
renderer and the line rasterizer draw into. It handles:
- Bounds-checked pixel reads and writes (row-major, index = y*stride + x)
- Exclusive write access through begin_update()/end_update() or update()
- Dirty rectangle publication for partial redisplay

Out-of-bounds writes fail fast with PixelOutOfBoundsError and leave the
buffer untouched.
"""

import numbers
import threading
from contextlib import contextmanager
from dataclasses import dataclass

import numpy as np


class SurfaceError(Exception):
    """Base class for pixel surface errors."""


class PixelOutOfBoundsError(SurfaceError, IndexError):
    """A pixel coordinate fell outside the surface."""

    def __init__(self, x, y, width, height):
        super().__init__(
            f"pixel ({x}, {y}) outside {width}x{height} surface"
        )
        self.x = x
        self.y = y


class SurfaceLockError(SurfaceError, RuntimeError):
    """Write access to the surface could not be acquired or was not held."""


@dataclass(frozen=True)
class DirtyRect:
    """Axis-aligned integer rectangle marking a changed region."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def full(cls, width, height):
        return cls(0, 0, width, height)

    @classmethod
    def bounding(cls, p0, p1):
        """
        Bounding box of two points.

        Width and height are the coordinate differences, so a horizontal
        line from (0, 0) to (5, 0) gives (0, 0, 5, 0).
        """
        xmin, xmax = min(p0[0], p1[0]), max(p0[0], p1[0])
        ymin, ymax = min(p0[1], p1[1]), max(p0[1], p1[1])
        return cls(xmin, ymin, xmax - xmin, ymax - ymin)

    def union(self, other):
        """Smallest rectangle covering both rectangles."""
        if other is None:
            return self
        x0 = min(self.x, other.x)
        y0 = min(self.y, other.y)
        x1 = max(self.x + self.width, other.x + other.width)
        y1 = max(self.y + self.height, other.y + other.height)
        return DirtyRect(x0, y0, x1 - x0, y1 - y0)


class UpdateScope:
    """
    Write access to a surface for the duration of one update.

    Tracks the bounding box of completed writes so that a failed
    operation can still publish exactly what it changed.
    """

    def __init__(self, surface):
        self.surface = surface
        self.declared = None
        self._xmin = self._ymin = None
        self._xmax = self._ymax = None

    def set_pixel(self, x, y, value):
        self.surface._write_pixel(x, y, value)
        self._mark(x, y, x, y)

    def write_column(self, x, y, values):
        """Write a run of values downward from (x, y)."""
        count = self.surface._write_column(x, y, values)
        if count:
            self._mark(x, y, x, y + count - 1)

    def add_dirty_rect(self, rect):
        self.declared = rect.union(self.declared)

    def written_rect(self):
        """Pixel-exact bounds of the writes done so far, or None."""
        if self._xmin is None:
            return None
        return DirtyRect(
            self._xmin, self._ymin,
            self._xmax - self._xmin + 1, self._ymax - self._ymin + 1
        )

    def _mark(self, x0, y0, x1, y1):
        if self._xmin is None:
            self._xmin, self._ymin, self._xmax, self._ymax = x0, y0, x1, y1
            return
        self._xmin = min(self._xmin, x0)
        self._ymin = min(self._ymin, y0)
        self._xmax = max(self._xmax, x1)
        self._ymax = max(self._ymax, y1)


class PixelSurface:
    """
    Fixed-size 8-bit grayscale buffer.

    Usage:
        surface = PixelSurface(800, 600)
        with surface.update() as scope:
            scope.set_pixel(10, 20, 255)
            scope.add_dirty_rect(DirtyRect(10, 20, 1, 1))

        for rect in surface.take_dirty_rects():
            present(rect)

    Attributes:
        width, height: Dimensions in pixels
        stride: Number of bytes per row
        pixels: Flat row-major uint8 buffer
        grid: (height, width) view sharing memory with pixels
    """

    def __init__(self, width, height):
        if not isinstance(width, numbers.Integral) or not isinstance(height, numbers.Integral):
            raise TypeError(f"surface size must be integers, got {width!r}x{height!r}")
        if width <= 0 or height <= 0:
            raise ValueError(f"surface size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.stride = self.width
        self.pixels = np.zeros(self.height * self.stride, dtype=np.uint8)
        self.grid = self.pixels.reshape(self.height, self.stride)

        self._lock = threading.Lock()
        self._scope = None
        self._dirty = []

    @property
    def locked(self):
        """True while an update holds write access."""
        return self._lock.locked()

    def index(self, x, y):
        self._check_bounds(x, y)
        return y * self.stride + x

    def get_pixel(self, x, y):
        return int(self.pixels[self.index(x, y)])

    def set_pixel(self, x, y, value):
        """Write a single pixel through the active update."""
        if self._scope is None:
            raise SurfaceLockError("set_pixel called outside an update")
        self._scope.set_pixel(x, y, value)

    def begin_update(self):
        """
        Acquire exclusive write access.

        Raises:
            SurfaceLockError: Another update is already in progress.
        """
        if not self._lock.acquire(blocking=False):
            raise SurfaceLockError("surface is already being updated")
        self._scope = UpdateScope(self)
        return self._scope

    def end_update(self, dirty_rect=None):
        """
        Release write access and publish the changed region.

        If dirty_rect is None the scope's declared rectangle is used,
        falling back to the bounds of the pixels actually written.

        Returns:
            The published DirtyRect, or None if nothing changed.
        """
        scope = self._scope
        if scope is None:
            raise SurfaceLockError("end_update called without begin_update")
        try:
            if dirty_rect is None:
                dirty_rect = scope.declared or scope.written_rect()
            if dirty_rect is not None:
                self._dirty.append(dirty_rect)
            return dirty_rect
        finally:
            self._scope = None
            self._lock.release()

    @contextmanager
    def update(self):
        """
        Scoped write access.

        On an exception only the completed writes are published, then the
        exception propagates.
        """
        scope = self.begin_update()
        try:
            yield scope
        except BaseException:
            scope.declared = None
            self.end_update()
            raise
        self.end_update()

    def take_dirty_rects(self):
        """Return and forget the rectangles published since the last call."""
        rects, self._dirty = self._dirty, []
        return rects

    def clear(self):
        with self.update() as scope:
            self.grid[:, :] = 0
            scope.add_dirty_rect(DirtyRect.full(self.width, self.height))

    def _check_bounds(self, x, y):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise PixelOutOfBoundsError(x, y, self.width, self.height)

    def _write_pixel(self, x, y, value):
        if not 0 <= value <= 255:
            raise ValueError(f"pixel value {value} outside 0..255")
        self.pixels[self.index(x, y)] = value

    def _write_column(self, x, y, values):
        values = np.asarray(values)
        count = len(values)
        if count == 0:
            return 0
        self._check_bounds(x, y)
        self._check_bounds(x, y + count - 1)
        if values.min() < 0 or values.max() > 255:
            raise ValueError("column values outside 0..255")
        self.grid[y:y + count, x] = values
        return count
