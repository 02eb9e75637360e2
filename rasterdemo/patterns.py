"""
Test patterns for checking the grayscale display path.
"""

import numpy as np

from .surface import DirtyRect


def draw_gray_ramp(surface, size=256):
    """
    Draw a size x size square whose gray value equals its x coordinate.

    Args:
        surface: PixelSurface to draw into
        size: Edge length in pixels, at most 256

    Returns:
        DirtyRect covering the square.
    """
    if not 0 < size <= 256:
        raise ValueError(f"ramp size must be in 1..256, got {size}")
    rect = DirtyRect(0, 0, size, size)
    column = np.empty(size, dtype=np.uint8)
    with surface.update() as scope:
        for x in range(size):
            column[:] = x
            scope.write_column(x, 0, column)
        scope.add_dirty_rect(rect)
    return rect
