"""
Startup configuration for the viewer.

Values are layered, later layers winning:
1. ViewerConfig defaults
2. settings.json next to this file
3. a --settings JSON file given on the command line
4. individual command-line flags

Anything invalid raises ConfigError before a window is opened.
"""

from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from .colormaps import COLORMAPS, DEFAULT_COLORMAP, INTERIOR_COLOR, Palette
from .compute import DEFAULT_BAILOUT_RADIUS
from .controller import DEFAULT_LIMITS, DEFAULT_ZOOM_FACTOR, ZoomLimits
from .plane import MODE_JULIA, MODE_NAMES, default_viewport


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')


class ConfigError(ValueError):
    """Raised for startup configuration the viewer can't run with."""


def load_settings(path=SETTINGS_PATH, required=False):
    """
    Load a settings dictionary from a JSON file.

    A missing or unreadable default file only prints a warning and returns
    None; with required=True the problem is a ConfigError instead.
    """
    try:
        with open(path, 'r') as f:
            settings = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        if required:
            raise ConfigError(f"Could not load settings file {path}: {e}") from e
        print(f"Warning: Could not load {os.path.basename(path)}: {e}")
        return None
    if not isinstance(settings, dict):
        raise ConfigError(f"Settings file {path} must contain a JSON object")
    return settings


def parse_julia_seed(text):
    """Parse an "X,Y" pair into the complex seed X+Yi."""
    parts = text.split(',')
    if len(parts) != 2:
        raise ConfigError(f"The X,Y value in --julia=X,Y ({text}) needs exactly one comma.")
    try:
        x = float(parts[0])
    except ValueError:
        raise ConfigError(f"The X value in --julia=X,Y ({text}) is not a valid number.") from None
    try:
        y = float(parts[1])
    except ValueError:
        raise ConfigError(f"The Y value in --julia=X,Y ({text}) is not a valid number.") from None
    return complex(x, y)


@dataclass(frozen=True)
class ViewerConfig:
    """Everything the viewer needs to start up."""

    width: int = 800
    height: int = 800
    max_iterations: int = 500
    mode: str = 'mandelbrot'
    julia_seed: Optional[complex] = None
    palette: str = DEFAULT_COLORMAP
    interior_color: tuple = INTERIOR_COLOR
    bailout_radius: float = DEFAULT_BAILOUT_RADIUS
    zoom_factor: float = DEFAULT_ZOOM_FACTOR
    min_scale: float = DEFAULT_LIMITS.min_scale
    max_scale: float = DEFAULT_LIMITS.max_scale
    cycle_detection: bool = True

    @classmethod
    def from_settings(cls, settings):
        """Build a config from a settings dictionary (unknown keys rejected)."""
        return cls().merged(settings or {})

    def merged(self, settings):
        """Return a copy with values from a settings dictionary applied."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(settings) - known)
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")

        values = dict(settings)
        try:
            for key in ('width', 'height', 'max_iterations'):
                if key in values:
                    values[key] = _as_int(values[key], key)
            for key in ('bailout_radius', 'zoom_factor', 'min_scale', 'max_scale'):
                if key in values:
                    values[key] = float(values[key])
            if values.get('julia_seed') is not None:
                seed = values['julia_seed']
                if isinstance(seed, str):
                    values['julia_seed'] = parse_julia_seed(seed)
                elif not isinstance(seed, complex):
                    real, imag = seed
                    values['julia_seed'] = complex(float(real), float(imag))
            if 'interior_color' in values:
                values['interior_color'] = tuple(int(v) for v in values['interior_color'])
            if 'cycle_detection' in values and not isinstance(values['cycle_detection'], bool):
                raise ConfigError(
                    f"cycle_detection must be true or false, got {values['cycle_detection']!r}.")
            for key in ('mode', 'palette'):
                if key in values and not isinstance(values[key], str):
                    raise ConfigError(f"{key} must be a name, got {values[key]!r}.")
        except ConfigError:
            raise
        except (TypeError, ValueError, OverflowError) as e:
            raise ConfigError(f"Invalid setting value: {e}") from e
        return replace(self, **values)

    def validate(self):
        """Raise ConfigError if the configuration can't be rendered."""
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(
                f"Window size must be positive, got {self.width}x{self.height}.")
        if self.max_iterations <= 0:
            raise ConfigError(
                f"max_iterations must be more than zero, got {self.max_iterations}.")
        if not isinstance(self.mode, str) or self.mode not in MODE_NAMES:
            raise ConfigError(
                f"Unknown mode {self.mode!r} (expected one of: {', '.join(MODE_NAMES)}).")
        if self.mode == 'julia' and self.julia_seed is None:
            raise ConfigError("Julia mode needs a seed (use --julia=X,Y).")
        if not isinstance(self.palette, str) or self.palette not in COLORMAPS:
            raise ConfigError(
                f"Unknown palette {self.palette!r} (expected one of: {', '.join(COLORMAPS)}).")
        if len(self.interior_color) != 3 or not all(0 <= v <= 255 for v in self.interior_color):
            raise ConfigError(f"interior_color must be three values 0-255, got {self.interior_color}.")
        if not self.bailout_radius > 0:
            raise ConfigError(f"bailout_radius must be positive, got {self.bailout_radius}.")
        if not 0 < self.zoom_factor < 1:
            raise ConfigError(f"zoom_factor must be between 0 and 1, got {self.zoom_factor}.")
        if not 0 < self.min_scale < self.max_scale:
            raise ConfigError(
                f"Scale limits must satisfy 0 < min_scale < max_scale, "
                f"got {self.min_scale} and {self.max_scale}.")
        return self

    @property
    def mode_id(self):
        return MODE_NAMES[self.mode]

    def zoom_limits(self):
        return ZoomLimits(self.min_scale, self.max_scale)

    def make_palette(self):
        return Palette(self.palette, self.interior_color)

    def initial_viewport(self):
        seed = self.julia_seed if self.mode_id == MODE_JULIA else 0j
        scale = self.zoom_limits().clamp(default_viewport().scale)
        return default_viewport(self.mode_id, seed, scale)


def _as_int(value, name):
    if isinstance(value, bool) or int(value) != value:
        raise ConfigError(f"{name} must be a whole number, got {value!r}.")
    return int(value)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='fractalviewer',
        description='Interactive Mandelbrot and Julia set viewer. '
                    'Left-click zooms in, right-click zooms out.')
    parser.add_argument('--width', type=int, help='Window width in pixels.')
    parser.add_argument('--height', type=int, help='Window height in pixels.')
    parser.add_argument('--size', type=int,
                        help='Square window of SIZE by SIZE pixels (overrides --width/--height).')
    parser.add_argument('--max-iterations', type=int, dest='max_iterations',
                        help='Iteration cap; points reaching it count as part of the set.')
    parser.add_argument('--mode', choices=sorted(MODE_NAMES),
                        help='Fractal to draw.')
    parser.add_argument('--julia', metavar='X,Y',
                        help='Draw the Julia set for the seed X+Yi (implies --mode julia).')
    parser.add_argument('--palette', choices=list(COLORMAPS), help='Color scheme.')
    parser.add_argument('--bailout-radius', type=float, dest='bailout_radius',
                        help='Escape radius for the iteration.')
    parser.add_argument('--zoom-factor', type=float, dest='zoom_factor',
                        help='Scale multiplier per left-click, between 0 and 1.')
    parser.add_argument('--settings', metavar='PATH',
                        help='JSON settings file layered over the defaults.')
    parser.add_argument('--no-cycle-detection', action='store_false', dest='cycle_detection',
                        default=None, help='Always iterate interior points up to the cap.')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Print diagnostic messages.')
    return parser


def config_from_args(argv=None, defaults_path=SETTINGS_PATH):
    """
    Parse command-line arguments into a validated ViewerConfig.

    Returns:
        (config, args)
    """
    args = build_parser().parse_args(argv)

    config = ViewerConfig.from_settings(load_settings(defaults_path))
    if args.settings:
        config = config.merged(load_settings(args.settings, required=True))

    overrides = {}
    for key in ('width', 'height', 'max_iterations', 'mode', 'palette',
                'bailout_radius', 'zoom_factor', 'cycle_detection'):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value
    if args.size is not None:
        overrides['width'] = overrides['height'] = args.size
    if args.julia is not None:
        overrides['julia_seed'] = parse_julia_seed(args.julia)
        overrides.setdefault('mode', 'julia')

    return config.merged(overrides).validate(), args
