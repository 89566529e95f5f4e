"""
test_renderer.py
"""
import numpy as np
import pytest

from fractalviewer.colormaps import INTERIOR_COLOR, Palette
from fractalviewer.compute import escape_time
from fractalviewer.plane import MODE_JULIA, Viewport, default_viewport, to_complex
from fractalviewer.renderer import FractalRenderer, as_image, render


def test_default_view_frame():
    frame = render(default_viewport(), 100, 100, max_iterations=50)
    assert frame.shape == (10000, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[50 * 100 + 50]) == INTERIOR_COLOR


def test_render_is_deterministic():
    viewport = Viewport(-0.745, 0.11, 0.02)
    first = render(viewport, 64, 48, max_iterations=200)
    second = render(viewport, 64, 48, max_iterations=200)
    assert np.array_equal(first, second)


@pytest.mark.parametrize('pixel', [(0, 0), (39, 0), (7, 13), (20, 15), (39, 29)])
def test_frame_is_row_major(pixel):
    """
    Each buffer entry is the color of the pixel at offset y * width + x.
    """
    width, height, max_iterations = 40, 30, 60
    viewport = default_viewport()
    palette = Palette('Hot')
    frame = render(viewport, width, height, max_iterations,
                   palette=palette, cycle_detection=False)

    x, y = pixel
    result = escape_time(to_complex(x, y, width, height, viewport), viewport.mode, max_iterations)
    expected = palette.color_for(result, max_iterations)
    assert tuple(frame[y * width + x]) == expected
    assert tuple(as_image(frame, width, height)[y, x]) == expected


def test_cycle_detection_keeps_interior():
    viewport = default_viewport()
    with_cycles = FractalRenderer(300, cycle_detection=True).render_counts(viewport, 60, 60)
    without = FractalRenderer(300, cycle_detection=False).render_counts(viewport, 60, 60)
    # Center of the main cardioid is interior either way
    assert not with_cycles[1][30, 30]
    assert not without[1][30, 30]
    assert with_cycles[0].shape == (60, 60)


def test_julia_frame():
    viewport = default_viewport(MODE_JULIA, 0j)
    frame = as_image(render(viewport, 20, 20, max_iterations=40), 20, 20)
    # Seed 0 draws the unit disk: center inside, corners outside
    assert tuple(frame[10, 10]) == INTERIOR_COLOR
    assert tuple(frame[0, 0]) != INTERIOR_COLOR


def test_renderer_records_timing_and_settings():
    renderer = FractalRenderer(32)
    assert renderer.last_render_seconds is None
    renderer.render(default_viewport(), 16, 16)
    assert renderer.last_render_seconds >= 0

    assert renderer.update_settings(max_iter=64)
    assert not renderer.update_settings(max_iter=64)
    assert renderer.update_settings(palette=Palette('Ocean'), escape_radius=4.0)
    assert renderer.max_iter == 64
    assert renderer.escape_radius == 4.0


@pytest.mark.parametrize('viewport', [
    default_viewport(),
    Viewport(-0.7435, 0.1314, 0.002),
    default_viewport(MODE_JULIA, complex(-0.835, -0.232)),
])
def test_grid_agrees_with_escape_time(viewport):
    """
    Without cycle detection every pixel matches escape_time. With it, only
    pixels escape_time calls escaped may turn interior.
    """
    width, height, max_iterations = 24, 18, 400
    exact_counts, exact_escaped = FractalRenderer(
        max_iterations, cycle_detection=False).render_counts(viewport, width, height)
    counts, escaped = FractalRenderer(
        max_iterations, cycle_detection=True).render_counts(viewport, width, height)

    for y in range(height):
        for x in range(width):
            c = to_complex(x, y, width, height, viewport)
            result = escape_time(c, viewport.mode, max_iterations, seed=viewport.seed)
            assert (exact_counts[y, x], bool(exact_escaped[y, x])) == result
            if escaped[y, x]:
                assert (counts[y, x], True) == result
            else:
                assert counts[y, x] == max_iterations
