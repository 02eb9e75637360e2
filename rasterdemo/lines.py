"""
Integer line rasterization (Bresenham).
"""

import numbers

from .surface import DirtyRect


def bresenham(p0, p1):
    """
    Yield every pixel on the line from p0 to p1, both ends included.

    The line is one pixel wide and 8-connected. p0 == p1 yields a single
    pixel.
    """
    x0, y0 = p0
    x1, y1 = p1
    dx = abs(x1 - x0)
    sx = 1 if x0 <= x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 <= y1 else -1
    error = dx + dy

    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * error
        if e2 >= dy:
            if x0 == x1:
                return
            error += dy
            x0 += sx
        if e2 <= dx:
            if y0 == y1:
                return
            error += dx
            y0 += sy


def _check_point(p):
    if len(p) != 2 or not all(isinstance(v, numbers.Integral) for v in p):
        raise TypeError(f"line endpoints must be integer pairs, got {p!r}")
    return int(p[0]), int(p[1])


class LineRasterizer:
    """
    Draws straight lines of a fixed intensity into a PixelSurface.

    The reported dirty rectangle is the bounding box of the two endpoints,
    not the exact set of pixels touched.
    """

    DEFAULT_INTENSITY = 255

    def __init__(self, intensity=None):
        self.intensity = self.DEFAULT_INTENSITY if intensity is None else intensity

    def rasterize(self, surface, p0, p1, intensity=None):
        """
        Draw the line from p0 to p1 inside one scoped update.

        Args:
            surface: PixelSurface to draw into
            p0, p1: Integer (x, y) endpoints
            intensity: Gray value 0-255 (default: the rasterizer's intensity)

        Returns:
            DirtyRect bounding both endpoints.

        Raises:
            TypeError: An endpoint is not an integer pair.
            PixelOutOfBoundsError: The line leaves the surface. Pixels before
                the offending one stay written and are published as dirty.
        """
        p0 = _check_point(p0)
        p1 = _check_point(p1)
        if intensity is None:
            intensity = self.intensity

        rect = DirtyRect.bounding(p0, p1)
        with surface.update() as scope:
            for x, y in bresenham(p0, p1):
                scope.set_pixel(x, y, intensity)
            scope.add_dirty_rect(rect)
        return rect
