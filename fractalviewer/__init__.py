"""
Fractal Viewer Package

An interactive Mandelbrot and Julia set explorer using Pygame for
display and Numba for JIT-compiled escape-time computation.

Quick Start:
    from fractalviewer import render, default_viewport
    frame = render(default_viewport(), 100, 100, max_iterations=50)

Or from command line:
    python -m fractalviewer
    python -m fractalviewer --julia=-0.835,-0.232

Package Structure:
    - plane.py: Viewport and pixel -> complex-plane mapping
    - compute.py: JIT-compiled escape-time iteration
    - colormaps.py: Palettes (classic, hot, ocean, hsv, ...)
    - renderer.py: Full-frame rendering into a flat RGB buffer
    - controller.py: Click-to-zoom viewport navigation
    - config.py: settings.json and command-line configuration
    - app.py: Pygame window and event loop

Controls:
    - Left click: Zoom in, centered on the click
    - Right click: Zoom out, centered on the click
    - R: Reset to default view
    - C: Print coordinates
    - Q / ESC: Quit
"""

from .app import run, main, FractalViewerApp
from .colormaps import COLORMAPS, Palette, get_colormap, list_colormap_names
from .compute import IterationResult, escape_time
from .config import ConfigError, ViewerConfig
from .controller import ClickEvent, ResetEvent, ViewportController, ZoomLimits, apply_event, zoom
from .plane import MODE_JULIA, MODE_MANDELBROT, Viewport, default_viewport, to_complex
from .renderer import FractalRenderer, as_image, render

__version__ = "1.0.0"
__all__ = [
    "run",
    "main",
    "FractalViewerApp",
    "COLORMAPS",
    "Palette",
    "get_colormap",
    "list_colormap_names",
    "IterationResult",
    "escape_time",
    "ConfigError",
    "ViewerConfig",
    "ClickEvent",
    "ResetEvent",
    "ViewportController",
    "ZoomLimits",
    "apply_event",
    "zoom",
    "MODE_JULIA",
    "MODE_MANDELBROT",
    "Viewport",
    "default_viewport",
    "to_complex",
    "FractalRenderer",
    "as_image",
    "render",
]
