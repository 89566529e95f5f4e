"""
Viewport navigation.

Zooming is a pure function from (viewport, click) to a new viewport:
the clicked point becomes the new center and the scale shrinks (zoom in)
or grows (zoom out) by the zoom factor, clamped to ZoomLimits.

ViewportController wraps that function around the current state for the
event loop, which only has to translate platform events into ClickEvent
and ResetEvent values.
"""

from collections import namedtuple

from .plane import default_viewport, plane_bounds, to_complex


ZOOM_IN = 1
ZOOM_OUT = -1

# pygame mouse button numbers
BUTTON_LEFT = 1
BUTTON_RIGHT = 3

DEFAULT_ZOOM_FACTOR = 0.5

ClickEvent = namedtuple('ClickEvent', ['x', 'y', 'button'])
ResetEvent = namedtuple('ResetEvent', [])


class ZoomLimits(namedtuple('ZoomLimits', ['min_scale', 'max_scale'])):
    """
    Allowed range for Viewport.scale.

    Below min_scale neighbouring pixels stop being distinguishable in
    double precision; above max_scale there is nothing left to see.
    """

    __slots__ = ()

    def clamp(self, scale):
        return min(max(scale, self.min_scale), self.max_scale)


DEFAULT_LIMITS = ZoomLimits(1e-13, 16.0)


def zoom(current, screen_point, width, height, direction,
         factor=DEFAULT_ZOOM_FACTOR, limits=DEFAULT_LIMITS):
    """
    Zoom in or out around a screen point.

    Args:
        current: Viewport before the zoom
        screen_point: (x, y) pixel position of the click
        width, height: Image dimensions in pixels
        direction: ZOOM_IN or ZOOM_OUT
        factor: Scale multiplier for zooming in, 0 < factor < 1
        limits: ZoomLimits the new scale is clamped to

    Returns:
        New Viewport centered on the clicked point
    """
    if not 0 < factor < 1:
        raise ValueError(f"Zoom factor must be between 0 and 1, got {factor}")

    x, y = screen_point
    point = to_complex(x, y, width, height, current)

    if direction == ZOOM_IN:
        scale = current.scale * factor
        level = current.zoom_level + 1
    elif direction == ZOOM_OUT:
        scale = current.scale / factor
        level = current.zoom_level - 1
    else:
        raise ValueError(f"Unknown zoom direction: {direction}")

    scale = limits.clamp(scale)
    if scale == current.scale:
        # Pinned at a limit: recenter only
        level = current.zoom_level
    return current.recentered(point, scale, level)


def apply_event(viewport, event, width, height, factor=DEFAULT_ZOOM_FACTOR,
                limits=DEFAULT_LIMITS):
    """
    Next viewport after an input event.

    Left click zooms in, right click zooms out, reset restores the default
    framing for the current fractal. Anything else leaves the viewport as is.
    """
    if isinstance(event, ResetEvent):
        return default_viewport(viewport.mode, viewport.seed)
    if isinstance(event, ClickEvent):
        if event.button == BUTTON_LEFT:
            return zoom(viewport, (event.x, event.y), width, height, ZOOM_IN, factor, limits)
        if event.button == BUTTON_RIGHT:
            return zoom(viewport, (event.x, event.y), width, height, ZOOM_OUT, factor, limits)
    return viewport


def _round_point(point, places):
    return (round(point[0], places), round(point[1], places))


class ViewportController:
    """
    Owns the current viewport and applies input events to it.

    Usage:
        controller = ViewportController(default_viewport())
        if controller.handle(ClickEvent(x, y, 1), width, height):
            frame = renderer.render(controller.viewport, width, height)
    """

    def __init__(self, viewport, factor=DEFAULT_ZOOM_FACTOR, limits=DEFAULT_LIMITS):
        if not 0 < factor < 1:
            raise ValueError(f"Zoom factor must be between 0 and 1, got {factor}")
        self.viewport = viewport
        self.factor = factor
        self.limits = limits

    def handle(self, event, width, height):
        """Apply an event. Returns True if the viewport changed."""
        new_viewport = apply_event(self.viewport, event, width, height,
                                   self.factor, self.limits)
        changed = new_viewport != self.viewport
        self.viewport = new_viewport
        return changed

    def describe(self, width, height, mouse=None, places=7):
        """
        Text block with the plane coordinates of the screen corners,
        the center and (optionally) the mouse cursor.
        """
        x_min, x_max, y_min, y_max = plane_bounds(self.viewport, width, height)
        vp = self.viewport
        rule = '-' * 62
        lines = [
            "Screen coordinates:",
            rule,
            f"|{str(_round_point((x_min, y_max), places)):<29}  "
            f"{str(_round_point((x_max, y_max), places)):>29}|",
            f"|{str(_round_point((vp.center_x, vp.center_y), places)):^60}|",
            f"|{str(_round_point((x_min, y_min), places)):<29}  "
            f"{str(_round_point((x_max, y_min), places)):>29}|",
            rule,
        ]
        if mouse is not None:
            point = to_complex(mouse[0], mouse[1], width, height, vp)
            lines.append(f"Mouse coordinates:  {_round_point((point.real, point.imag), places)}")
        lines.append(f"Zoom level {vp.zoom_level}, scale {vp.scale:.6g}")
        return "\n".join(lines)
