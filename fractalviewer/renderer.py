"""
Synchronous fractal renderer.

The FractalRenderer class turns a Viewport into a FrameBuffer:
- escape times for every pixel (compute.compute_escape_grid)
- colors from the active Palette
- a flat, row-major uint8 buffer of shape (width * height, 3)

A render is all-or-nothing: the buffer is returned only once every
pixel has been written. The renderer never touches the display.
"""

import time

from .colormaps import DEFAULT_COLORMAP, INTERIOR_COLOR, Palette
from .compute import DEFAULT_BAILOUT_RADIUS, NO_CYCLE_CHECK, compute_escape_grid

# Cycle-detection tolerance as a fraction of one pixel's width
CYCLE_FRACTION = 0.25


def as_image(buffer, width, height):
    """View a flat FrameBuffer as a (height, width, 3) image."""
    return buffer.reshape((height, width, 3))


class FractalRenderer:
    """
    Renders Mandelbrot/Julia frames for a viewport.

    Usage:
        renderer = FractalRenderer(max_iter=256)
        frame = renderer.render(viewport, 800, 600)
        display(as_image(frame, 800, 600))

    With cycle_detection on, an orbit that returns within CYCLE_FRACTION of
    a pixel's width of an earlier point is called interior. A few slow
    escapers near the set's edge can be caught this way, so those pixels
    draw as interior even though compute.escape_time (exact matches only)
    reports them escaped. Pixels drawn as escaped always agree with
    escape_time. With cycle_detection=False every pixel matches it exactly.

    Attributes:
        max_iter: Maximum iteration count
        escape_radius: Bailout radius
        palette: Palette used to color escape results
        cycle_detection: Whether periodic orbits are cut short
        last_render_seconds: Wall time of the most recent render
    """

    def __init__(self, max_iter, escape_radius=DEFAULT_BAILOUT_RADIUS,
                 palette=None, cycle_detection=True):
        self.max_iter = max_iter
        self.escape_radius = escape_radius
        self.palette = palette if palette is not None else Palette(DEFAULT_COLORMAP, INTERIOR_COLOR)
        self.cycle_detection = cycle_detection
        self.last_render_seconds = None

    def render_counts(self, viewport, width, height):
        """
        Compute escape times for every pixel.

        Returns:
            (counts, escaped) arrays of shape (height, width)
        """
        seed = complex(viewport.seed)
        return compute_escape_grid(
            float(viewport.center_x), float(viewport.center_y), float(viewport.scale),
            int(width), int(height), int(self.max_iter),
            int(viewport.mode), seed.real, seed.imag,
            float(self.escape_radius),
            CYCLE_FRACTION if self.cycle_detection else NO_CYCLE_CHECK
        )

    def render(self, viewport, width, height):
        """
        Render a full frame.

        Returns:
            uint8 FrameBuffer of shape (width * height, 3), row-major
        """
        start = time.perf_counter()
        counts, escaped = self.render_counts(viewport, width, height)
        frame = self.palette.apply(counts, escaped, self.max_iter)
        self.last_render_seconds = time.perf_counter() - start
        return frame

    def update_settings(self, max_iter=None, palette=None, escape_radius=None,
                        cycle_detection=None):
        """
        Update rendering settings for subsequent frames.

        Returns:
            True if any setting changed, False otherwise
        """
        changed = False
        if max_iter is not None and max_iter != self.max_iter:
            self.max_iter = max_iter
            changed = True
        if palette is not None and palette is not self.palette:
            self.palette = palette
            changed = True
        if escape_radius is not None and escape_radius != self.escape_radius:
            self.escape_radius = escape_radius
            changed = True
        if cycle_detection is not None and cycle_detection != self.cycle_detection:
            self.cycle_detection = cycle_detection
            changed = True
        return changed


def render(viewport, width, height, max_iterations, bailout_radius=DEFAULT_BAILOUT_RADIUS,
           palette=None, cycle_detection=True):
    """Render one frame with a throwaway FractalRenderer."""
    renderer = FractalRenderer(max_iterations, bailout_radius, palette, cycle_detection)
    return renderer.render(viewport, width, height)
