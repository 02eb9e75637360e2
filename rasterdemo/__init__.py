"""
Raster Demo Package

A small interactive raster-drawing demo: a grayscale Mandelbrot image
rendered into an 8-bit off-screen buffer, plus straight lines drawn
between two mouse clicks. Pygame provides the window, Numba compiles
the escape-time kernel.

Quick Start:
    from rasterdemo import run
    run()

Or from command line:
    python -m rasterdemo

Package Structure:
    - surface.py: 8-bit pixel buffer, scoped updates, dirty rectangles
    - compute.py: JIT-compiled escape-time kernels
    - renderer.py: Viewport mapping and the fractal renderer
    - lines.py: Bresenham line rasterizer
    - gesture.py: Two-click gesture state
    - patterns.py: Gray ramp test pattern
    - app.py: Main application and event loop

Controls:
    - Click twice: Draw a line between the two points
    - R: Redraw the fractal
    - G: Draw a gray ramp
    - C: Clear
    - ESC: Quit
"""

from .surface import (
    DirtyRect,
    PixelOutOfBoundsError,
    PixelSurface,
    SurfaceError,
    SurfaceLockError,
)
from .compute import ComplexPoint, escape_time
from .renderer import FractalRenderer, Viewport
from .lines import LineRasterizer, bresenham
from .gesture import ClickGesture, GestureState
from .patterns import draw_gray_ramp
from .app import run, RasterApp

__version__ = "1.0.0"
__all__ = [
    "run",
    "RasterApp",
    "PixelSurface",
    "DirtyRect",
    "SurfaceError",
    "PixelOutOfBoundsError",
    "SurfaceLockError",
    "ComplexPoint",
    "escape_time",
    "FractalRenderer",
    "Viewport",
    "LineRasterizer",
    "bresenham",
    "ClickGesture",
    "GestureState",
    "draw_gray_ramp",
]
