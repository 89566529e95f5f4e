"""
test_compute.py
"""
import pytest

from fractalviewer.compute import NO_CYCLE_CHECK, escape_time
from fractalviewer.plane import MODE_JULIA, MODE_MANDELBROT


SAMPLE_POINTS = [
    0j,
    complex(-1.0, 0.0),
    complex(-0.75, 0.1),
    complex(0.25, 0.5),
    complex(-0.1011, 0.9563),
    complex(0.3, 0.0),
    complex(-2.0, 0.0),
    complex(1.0, 1.0),
    complex(2.0, 2.0),
]


@pytest.mark.parametrize('max_iterations', [1, 2, 10, 1000])
def test_origin_never_escapes(max_iterations):
    result = escape_time(0j, MODE_MANDELBROT, max_iterations)
    assert not result.escaped
    assert result.count == max_iterations


def test_far_point_escapes_after_one_iteration():
    result = escape_time(complex(2, 2), MODE_MANDELBROT, 50)
    assert result.escaped
    assert result.count == 1


@pytest.mark.parametrize('c', SAMPLE_POINTS)
@pytest.mark.parametrize('max_iterations', [0, 1, 7, 200])
def test_count_never_exceeds_cap(c, max_iterations):
    result = escape_time(c, MODE_MANDELBROT, max_iterations)
    assert 0 <= result.count <= max_iterations
    if result.escaped:
        assert result.count < max_iterations


@pytest.mark.parametrize('c', SAMPLE_POINTS)
def test_count_grows_with_bailout_radius(c):
    counts = [escape_time(c, MODE_MANDELBROT, 300, bailout_radius=r).count
              for r in (2.0, 3.0, 8.0, 100.0, 1e6)]
    assert counts == sorted(counts)


def test_julia_starts_from_the_point():
    """
    In Julia mode the pixel's point is z0, not the additive constant.
    """
    # |z0| > 2 escapes before any iteration
    assert escape_time(3 + 0j, MODE_JULIA, 50, seed=0j) == (0, True)
    # 1.5 -> 2.25 escapes on the first step
    assert escape_time(1.5 + 0j, MODE_JULIA, 50, seed=0j) == (1, True)
    # Inside the unit disk z -> z^2 collapses to 0
    assert not escape_time(0.5 + 0.5j, MODE_JULIA, 50, seed=0j).escaped


@pytest.mark.parametrize('seed', [complex(-0.835, -0.232), complex(0.3, 0.5), complex(-1.0, 0.0)])
def test_julia_at_origin_matches_mandelbrot_at_seed(seed):
    julia = escape_time(0j, MODE_JULIA, 100, seed=seed)
    mandelbrot = escape_time(seed, MODE_MANDELBROT, 100)
    assert julia == mandelbrot


def test_seed_is_ignored_in_mandelbrot_mode():
    c = complex(-0.75, 0.1)
    assert (escape_time(c, MODE_MANDELBROT, 100, seed=5 + 5j)
            == escape_time(c, MODE_MANDELBROT, 100))


@pytest.mark.parametrize('c', SAMPLE_POINTS)
@pytest.mark.parametrize('mode', [MODE_MANDELBROT, MODE_JULIA])
def test_exact_cycle_detection_agrees_with_full_iteration(c, mode):
    seed = complex(-0.4, 0.6)
    exact = escape_time(c, mode, 500, seed=seed, cycle_tolerance=0.0)
    full = escape_time(c, mode, 500, seed=seed, cycle_tolerance=NO_CYCLE_CHECK)
    assert exact == full


def test_attracting_cycle_is_detected_with_tolerance():
    """
    c = -1 settles on the 2-cycle 0 -> -1 -> 0; a loose tolerance
    still classifies it as interior.
    """
    result = escape_time(-1 + 0j, MODE_MANDELBROT, 10 ** 6, cycle_tolerance=1e-9)
    assert result == (10 ** 6, False)
