"""
Mandelbrot renderer writing into a PixelSurface.

The FractalRenderer class handles:
- Mapping pixel coordinates to the complex plane (Viewport)
- Running the JIT-compiled escape-time kernel over the whole frame
- Writing the intensities through one scoped surface update

The frame is computed first and then written column by column, so if a
write fails part way through, the published dirty rectangle covers only
the columns that were written.
"""

import logging
import time
from dataclasses import dataclass

from .compute import ComplexPoint, compute_escape_grid
from .surface import DirtyRect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    """
    Window onto the complex plane for a given output size.

    The vertical extent is always 2.0 / zoom world units; the horizontal
    extent follows from the aspect ratio.
    """

    center_x: float
    center_y: float
    zoom: float
    width: int
    height: int

    def __post_init__(self):
        if not self.zoom > 0:
            raise ValueError(f"zoom must be positive, got {self.zoom}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"viewport size must be positive, got {self.width}x{self.height}"
            )

    @classmethod
    def for_surface(cls, surface, center, zoom):
        return cls(float(center[0]), float(center[1]), float(zoom),
                   surface.width, surface.height)

    @property
    def step(self):
        """World units per pixel."""
        return 2.0 / self.height / self.zoom

    @property
    def origin(self):
        """World coordinate of pixel (0, 0), the top-left corner."""
        step = self.step
        return (self.center_x - step * self.width / 2,
                self.center_y + step * self.height / 2)

    def pixel_to_world(self, x, y):
        x1, y1 = self.origin
        step = self.step
        return ComplexPoint(x1 + x * step, y1 - y * step)


class FractalRenderer:
    """
    Renders the Mandelbrot set as grayscale escape-time intensities.

    Usage:
        renderer = FractalRenderer()
        rect = renderer.render(surface, (-0.5, 0.0), 0.8)
    """

    def render(self, surface, center, zoom):
        """
        Render the full surface.

        Args:
            surface: PixelSurface to draw into
            center: (x, y) world coordinate shown at the middle of the surface
            zoom: Magnification, 1.0 shows two world units vertically

        Returns:
            The DirtyRect covering the whole surface.

        Raises:
            ValueError: zoom is not positive.
            SurfaceLockError: The surface is already being updated.
        """
        viewport = Viewport.for_surface(surface, center, zoom)
        x1, y1 = viewport.origin

        start = time.perf_counter()
        frame = compute_escape_grid(x1, y1, viewport.step,
                                    viewport.width, viewport.height)
        rect = DirtyRect.full(surface.width, surface.height)
        with surface.update() as scope:
            for x in range(viewport.width):
                scope.write_column(x, 0, frame[:, x])
            scope.add_dirty_rect(rect)

        logger.debug("rendered %dx%d at center=%s zoom=%s in %.3fs",
                     viewport.width, viewport.height, center, zoom,
                     time.perf_counter() - start)
        return rect
