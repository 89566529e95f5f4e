"""
Escape-time computation using Numba JIT compilation.

This module contains the performance-critical iteration functions:
- Single-point escape time for the Mandelbrot and Julia iterations
- Whole-image escape grids for the renderer
- JIT warm-up so the first frame doesn't stall on compilation

Both fractals iterate z -> z² + k:
- Mandelbrot: z₀ = 0, k = c (the pixel's point)
- Julia:      z₀ = c (the pixel's point), k = seed

Bailout compares |z|² against the squared radius so no square root is
taken per iteration. Everything runs single-threaded.
"""

from collections import namedtuple

import numpy as np
from numba import jit

from .colormaps import apply_palette
from .plane import MODE_JULIA, pixel_step, pixel_to_plane


DEFAULT_BAILOUT_RADIUS = 2.0

# Negative tolerance: never treat an orbit as periodic
NO_CYCLE_CHECK = -1.0

IterationResult = namedtuple('IterationResult', ['count', 'escaped'])


@jit(nopython=True, cache=True)
def iterate_orbit(zr, zi, kr, ki, max_iter, escape_r2, cycle_tolerance):
    """
    Iterate z -> z² + k starting from z = (zr, zi).

    A slow copy of the orbit advances one step for every two steps of z.
    If the two meet (exactly when cycle_tolerance is 0, else within
    cycle_tolerance on both axes) the orbit is periodic and the point is
    reported as interior without running to max_iter.

    Returns:
        (count, escaped). count < max_iter whenever escaped is True;
        interior points give (max_iter, False).
    """
    slow_r, slow_i = zr, zi
    n = 0
    while n < max_iter:
        if zr * zr + zi * zi > escape_r2:
            return n, True
        if n > 0 and abs(zr - slow_r) <= cycle_tolerance and abs(zi - slow_i) <= cycle_tolerance:
            return max_iter, False

        zr, zi = zr * zr - zi * zi + kr, 2.0 * zr * zi + ki
        n += 1

        if n % 2 == 0:
            slow_r, slow_i = slow_r * slow_r - slow_i * slow_i + kr, 2.0 * slow_r * slow_i + ki

    return max_iter, False


@jit(nopython=True, cache=True)
def escape_value(re, im, mode, seed_r, seed_i, max_iter, escape_r2, cycle_tolerance):
    """Escape time of one plane point in the given fractal mode."""
    if mode == MODE_JULIA:
        return iterate_orbit(re, im, seed_r, seed_i, max_iter, escape_r2, cycle_tolerance)
    return iterate_orbit(0.0, 0.0, re, im, max_iter, escape_r2, cycle_tolerance)


@jit(nopython=True, cache=True)
def compute_escape_grid(center_x, center_y, scale, width, height, max_iter,
                        mode, seed_r, seed_i, escape_radius, cycle_fraction):
    """
    Compute escape times for every pixel of a width x height image.

    Args:
        center_x, center_y, scale: Viewport (see plane.Viewport)
        width, height: Image dimensions in pixels
        max_iter: Iteration cap
        mode: MODE_MANDELBROT or MODE_JULIA
        seed_r, seed_i: Julia seed (ignored for Mandelbrot)
        escape_radius: Bailout radius
        cycle_fraction: Cycle-detection tolerance as a fraction of the
            pixel step (0 means exact matches only, NO_CYCLE_CHECK
            disables the check)

    Returns:
        (counts, escaped): int64 and bool arrays of shape (height, width)
    """
    counts = np.zeros((height, width), dtype=np.int64)
    escaped = np.zeros((height, width), dtype=np.bool_)

    escape_r2 = escape_radius * escape_radius
    tolerance = pixel_step(width, height, scale) * cycle_fraction

    for py in range(height):
        for px in range(width):
            re, im = pixel_to_plane(np.float64(px), np.float64(py), width, height,
                                    center_x, center_y, scale)
            n, out = escape_value(re, im, mode, seed_r, seed_i,
                                  max_iter, escape_r2, tolerance)
            counts[py, px] = n
            escaped[py, px] = out

    return counts, escaped


def escape_time(c, mode, max_iterations, bailout_radius=DEFAULT_BAILOUT_RADIUS,
                seed=0j, cycle_tolerance=0.0):
    """
    Escape time of a single complex point.

    Args:
        c: The point (a complex number)
        mode: MODE_MANDELBROT or MODE_JULIA
        max_iterations: Hard iteration cap
        bailout_radius: Orbit is considered divergent once |z| exceeds this
        seed: Julia constant (ignored in Mandelbrot mode)
        cycle_tolerance: Periodicity tolerance in plane units (0 = exact)

    Returns:
        IterationResult(count, escaped)
    """
    c = complex(c)
    seed = complex(seed)
    count, escaped = escape_value(c.real, c.imag, mode, seed.real, seed.imag,
                                  int(max_iterations), float(bailout_radius) ** 2,
                                  float(cycle_tolerance))
    return IterationResult(int(count), bool(escaped))


def warmup_jit(colormap, interior):
    """
    Warm up JIT compilation with a tiny render.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real frame.
    """
    counts, escaped = compute_escape_grid(-0.5, 0.0, 1.725, 8, 8, 10,
                                          0, 0.0, 0.0, 2.0, 0.25)
    out = np.zeros((64, 3), dtype=np.uint8)
    apply_palette(counts.ravel(), escaped.ravel(), 10, colormap, interior, out)
    escape_time(0j, 0, 10)
