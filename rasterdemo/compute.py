"""
Escape-time computation functions using Numba JIT compilation.

This module contains the performance-critical Mandelbrot evaluation used by
the fractal renderer:
- A pure-Python reference evaluation on ComplexPoint values
- A JIT-compiled scalar kernel with identical semantics
- A JIT-compiled grid kernel that fills a whole frame of intensities

Escape rule (pinned for rendering fidelity):
    z starts at 0. For i = 1 .. MAX_ITER - 1, |z|^2 is tested *before*
    z := z*z + c. If the test fails at index i the point escaped and its
    intensity is min(255, i * INTENSITY_STEP). Points that survive every
    test are inside the set and get intensity 0. A non-finite |z|^2 counts
    as escaped at the current index.
"""

from dataclasses import dataclass

import numpy as np
from numba import jit


MAX_ITER = 32           # Iteration indices run 1 .. MAX_ITER - 1
INTENSITY_STEP = 8      # Gray levels per iteration
ESCAPE_NORM_SQ = 4.0    # |z|^2 threshold (escape radius 2)


@dataclass(frozen=True)
class ComplexPoint:
    """A point in the complex plane as a pair of float64 values."""

    real: float
    imag: float

    def __add__(self, other):
        return ComplexPoint(self.real + other.real, self.imag + other.imag)

    def __mul__(self, other):
        return ComplexPoint(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    def norm_sq(self):
        return self.real * self.real + self.imag * self.imag


ZERO = ComplexPoint(0.0, 0.0)


def escape_time(c):
    """
    Evaluate the escape-time intensity of a single point.

    Reference implementation on ComplexPoint; escape_intensity() is the
    JIT-compiled equivalent used for whole frames.

    Args:
        c: ComplexPoint to test

    Returns:
        Intensity in {0} | {8, 16, ..., 248}
    """
    z = ZERO
    for i in range(1, MAX_ITER):
        # NaN fails this comparison, so non-finite orbits escape here
        if not z.norm_sq() <= ESCAPE_NORM_SQ:
            return min(255, i * INTENSITY_STEP)
        z = z * z + c
    return 0


@jit(nopython=True, cache=True)
def escape_intensity(cr, ci):
    """
    Escape-time intensity for c = cr + ci*i.

    Args:
        cr, ci: Real and imaginary parts of c

    Returns:
        Intensity in {0} | {8, 16, ..., 248}
    """
    zr = 0.0
    zi = 0.0
    for i in range(1, MAX_ITER):
        if not zr * zr + zi * zi <= ESCAPE_NORM_SQ:
            return min(255, i * INTENSITY_STEP)
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
    return 0


# No fastmath here: it lets LLVM assume finite values and breaks the
# non-finite escape test.
@jit(nopython=True, cache=True)
def compute_escape_grid(x1, y1, step, width, height):
    """
    Compute escape intensities for a full frame.

    Pixel (px, py) samples c = (x1 + px*step, y1 - py*step), so x grows to
    the right and the imaginary axis grows upward on screen.

    Args:
        x1, y1: World coordinate of the top-left pixel
        step: World units per pixel
        width, height: Output dimensions in pixels

    Returns:
        2D numpy array (height, width) of uint8 intensities.
    """
    result = np.zeros((height, width), dtype=np.uint8)
    for px in range(width):
        cr = x1 + px * step
        for py in range(height):
            result[py, px] = escape_intensity(cr, y1 - py * step)
    return result


def warmup_jit():
    """
    Warm up JIT compilation with a tiny grid.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real frame.
    """
    compute_escape_grid(-2.0, 1.0, 0.3, 10, 10)
