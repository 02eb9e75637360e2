"""
Main application module for the raster demo.

Contains the RasterApp class which handles:
- Window setup and main loop
- User input (two-click lines, keyboard)
- Presenting the grayscale surface, redrawing only dirty regions
"""

import logging
import os

import pygame

from .compute import warmup_jit
from .gesture import ClickGesture, GestureState
from .lines import LineRasterizer
from .patterns import draw_gray_ramp
from .renderer import FractalRenderer
from .surface import PixelSurface

logger = logging.getLogger(__name__)


class RasterApp:
    """
    Main application class for the raster demo.

    Handles the pygame window, event loop, and coordinates between the
    pixel surface, the fractal renderer and the line rasterizer.
    """

    # Default configuration
    DEFAULT_WIDTH = 800
    DEFAULT_HEIGHT = 600
    WINDOW_POS = (50, 50)
    FPS = 60

    # Initial view of the complex plane
    DEFAULT_CENTER = (-0.5, 0.0)
    DEFAULT_ZOOM = 0.8

    LINE_INTENSITY = 255

    CAPTION = "Raster demo - click twice to draw a line, R to redraw, Esc to quit"

    def __init__(self, width=None, height=None, center=None, zoom=None):
        """
        Initialize the application.

        Args:
            width: Window width in pixels (default 800)
            height: Window height in pixels (default 600)
            center: World coordinate at the window center (default (-0.5, 0))
            zoom: Fractal magnification (default 0.8)
        """
        self.width = width or self.DEFAULT_WIDTH
        self.height = height or self.DEFAULT_HEIGHT
        self.center = center or self.DEFAULT_CENTER
        self.zoom = zoom or self.DEFAULT_ZOOM

        self.surface = PixelSurface(self.width, self.height)
        self.renderer = FractalRenderer()
        self.rasterizer = LineRasterizer(self.LINE_INTENSITY)
        self.gesture = ClickGesture()

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.gray_surface = None

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._warmup_and_initial_render()

        self.running = True
        while self.running:
            self._handle_events()
            self.clock.tick(self.FPS)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create a borderless window at a fixed position."""
        os.environ.setdefault(
            "SDL_VIDEO_WINDOW_POS", "%d,%d" % self.WINDOW_POS
        )
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.NOFRAME
        )
        pygame.display.set_caption(self.CAPTION)
        self.clock = pygame.time.Clock()

        # 8-bit surface with a linear gray palette mirrors the pixel buffer
        self.gray_surface = pygame.Surface((self.width, self.height), depth=8)
        self.gray_surface.set_palette([(i, i, i) for i in range(256)])

    def _warmup_and_initial_render(self):
        """Warm up JIT and do initial render."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit()
        self.redraw_fractal()
        pygame.display.set_caption(self.CAPTION)
        print(f"Rendered {self.width}x{self.height} view at center {self.center}, zoom {self.zoom}")

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_mouse_down(event)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_mouse_down(self, event):
        """Collect left clicks; every second click draws a line."""
        if event.button != 1:
            return
        if self.gesture.press(event.pos) is GestureState.READY:
            p0, p1 = self.gesture.take()
            self.rasterizer.rasterize(self.surface, p0, p1)
            logger.debug("line %s -> %s", p0, p1)
            self.present()

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_r:
            self.gesture.reset()
            self.redraw_fractal()
        elif event.key == pygame.K_g:
            draw_gray_ramp(self.surface, min(256, self.width, self.height))
            self.present()
        elif event.key == pygame.K_c:
            self.gesture.reset()
            self.surface.clear()
            self.present()

    def redraw_fractal(self):
        """Render the fractal for the current view and show it."""
        self.renderer.render(self.surface, self.center, self.zoom)
        self.present()

    def present(self):
        """
        Copy dirty regions of the pixel buffer to the window.

        Returns:
            List of pygame.Rect regions that were updated.
        """
        rects = self.surface.take_dirty_rects()
        if not rects:
            return []

        pygame.surfarray.blit_array(self.gray_surface, self.surface.grid.T)
        bounds = self.screen.get_rect()
        areas = []
        for rect in rects:
            # Endpoint bounding boxes stop one pixel short of the far edge
            area = pygame.Rect(rect.x, rect.y, rect.width + 1, rect.height + 1)
            area = area.clip(bounds)
            if area.width and area.height:
                self.screen.blit(self.gray_surface, area, area)
                areas.append(area)
        pygame.display.update(areas)
        return areas


def run(width=None, height=None):
    """
    Run the raster demo.

    Args:
        width: Window width (default 800)
        height: Window height (default 600)
    """
    app = RasterApp(width, height)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
