"""
Viewport state and the pixel <-> complex-plane transform.

A Viewport describes which part of the complex plane is on screen:
its center, its scale (distance from the image center to the nearest
edge, in plane units) and which fractal is being drawn. The scale is
measured along the shorter image side so the whole framing always fits
and both axes share the same step per pixel.

The transform itself lives in a Numba-compiled function so the render
kernels in compute.py can call it per pixel.
"""

from dataclasses import dataclass, replace

from numba import jit


MODE_MANDELBROT = 0
MODE_JULIA = 1

MODE_NAMES = {
    'mandelbrot': MODE_MANDELBROT,
    'julia': MODE_JULIA,
}

# Default framing (whole set visible)
DEFAULT_MANDELBROT_CENTER = (-0.5, 0.0)
DEFAULT_JULIA_CENTER = (0.0, 0.0)
DEFAULT_SCALE = 1.725


@dataclass(frozen=True)
class Viewport:
    """The region of the complex plane mapped onto the screen."""

    center_x: float
    center_y: float
    scale: float
    mode: int = MODE_MANDELBROT
    seed: complex = 0j
    zoom_level: int = 0

    def __post_init__(self):
        if not self.scale > 0:
            raise ValueError(f"Viewport scale must be positive, got {self.scale}")
        if self.mode not in (MODE_MANDELBROT, MODE_JULIA):
            raise ValueError(f"Unknown fractal mode: {self.mode}")

    @property
    def center(self):
        return complex(self.center_x, self.center_y)

    @property
    def is_julia(self):
        return self.mode == MODE_JULIA

    def recentered(self, point, scale, zoom_level):
        """Return a copy centered on `point` with a new scale."""
        return replace(self, center_x=point.real, center_y=point.imag,
                       scale=scale, zoom_level=zoom_level)


def default_viewport(mode=MODE_MANDELBROT, seed=0j, scale=DEFAULT_SCALE):
    """Starting framing for the given fractal mode."""
    if mode == MODE_JULIA:
        cx, cy = DEFAULT_JULIA_CENTER
    else:
        cx, cy = DEFAULT_MANDELBROT_CENTER
    return Viewport(cx, cy, scale, mode=mode, seed=complex(seed))


@jit(nopython=True, cache=True)
def pixel_step(width, height, scale):
    """Plane units covered by one pixel (same on both axes)."""
    return scale / (min(width, height) / 2.0)


@jit(nopython=True, cache=True)
def pixel_to_plane(px, py, width, height, center_x, center_y, scale):
    """
    Map a pixel position to (re, im).

    Pixel (width/2, height/2) lands exactly on the center. Row 0 is the
    top of the image, so the imaginary part decreases downward.
    """
    step = pixel_step(width, height, scale)
    re = center_x + (px - width / 2.0) * step
    im = center_y - (py - height / 2.0) * step
    return re, im


def to_complex(px, py, width, height, viewport):
    """Complex-plane point under pixel (px, py) for the given viewport."""
    re, im = pixel_to_plane(float(px), float(py), width, height,
                            viewport.center_x, viewport.center_y,
                            viewport.scale)
    return complex(re, im)


def plane_bounds(viewport, width, height):
    """Return (x_min, x_max, y_min, y_max) covered by the image."""
    step = pixel_step(width, height, viewport.scale)
    half_w = width / 2.0 * step
    half_h = height / 2.0 * step
    return (viewport.center_x - half_w, viewport.center_x + half_w,
            viewport.center_y - half_h, viewport.center_y + half_h)
