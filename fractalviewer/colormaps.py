"""
Color palettes for escape-time images.

Each create_colormap_xxx() function returns a numpy array of shape
(4096, 3) with RGB values (uint8). An escaped point with iteration count
n is colored by looking up t = n / max_iter in the table, interpolating
linearly between neighbouring entries. None of the tables wrap around,
so adjacent iteration counts always get adjacent colors.

Points that never escape get the palette's single interior color.

To add a new colormap:
1. Define a create_colormap_xxx() function that returns the color array
2. Add it to the COLORMAPS dictionary below
"""

import numpy as np
from numba import jit


NUM_COLORS = 4096  # Resolution of colormap for smooth gradients
INTERIOR_COLOR = (0, 0, 0)
DEFAULT_COLORMAP = 'Classic'


def create_colormap_classic():
    """
    Classic colormap: red -> green -> blue -> red.

    Three equal legs; on each leg one channel fades out while the next
    fades in.
    """
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        t = i / (NUM_COLORS - 1) * 3
        leg = min(int(t), 2)  # Last entry stays on the blue -> red leg
        fade_in = int(255 * (t - leg))
        fade_out = 255 - fade_in

        if leg == 0:
            colors[i] = (fade_out, fade_in, 0)
        elif leg == 1:
            colors[i] = (0, fade_out, fade_in)
        else:
            colors[i] = (fade_in, 0, fade_out)
    return colors


def create_colormap_hot():
    """
    Hot colormap: black -> red -> orange -> yellow -> white.

    Uses a power curve to spend more time in the bright colors.
    """
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        t = (i / (NUM_COLORS - 1)) ** 0.8
        colors[i, 0] = int(min(255, 255 * min(1, t * 2.5)))
        colors[i, 1] = int(min(255, 255 * max(0, (t - 0.4) * 2.5)))
        colors[i, 2] = int(min(255, 255 * max(0, (t - 0.7) * 3.3)))
    return colors


def create_colormap_ocean():
    """Ocean colormap: deep blue -> cyan -> white."""
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        t = i / (NUM_COLORS - 1)
        colors[i, 0] = int(min(255, 255 * max(0, (t - 0.5) * 2)))
        colors[i, 1] = int(min(255, 255 * t))
        colors[i, 2] = int(min(255, 50 + 205 * t))  # Starts high
    return colors


def create_colormap_forest():
    """Forest colormap: dark green -> lime -> yellow."""
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        t = i / (NUM_COLORS - 1)
        colors[i, 0] = int(min(255, 255 * max(0, (t - 0.3) * 1.4)))
        colors[i, 1] = int(min(255, 80 + 175 * t))
        colors[i, 2] = int(min(255, 255 * max(0, (t - 0.7) * 3.3)))
    return colors


def create_colormap_purple():
    """Purple colormap: deep purple -> magenta -> pink -> white."""
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        t = i / (NUM_COLORS - 1)
        colors[i, 0] = int(min(255, 100 + 155 * t))
        colors[i, 1] = int(min(255, 255 * max(0, (t - 0.3) * 1.4)))
        colors[i, 2] = int(min(255, 80 + 175 * t))
    return colors


def create_colormap_grayscale():
    """Grayscale colormap: black -> white."""
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        colors[i] = int(255 * i / (NUM_COLORS - 1))
    return colors


def hsv_to_rgb(h, s, v):
    """Convert HSV (0-1 range) to RGB (0-255 range)."""
    if s == 0:
        r = g = b = int(v * 255)
        return (r, g, b)

    h = h * 6
    i = int(h)
    f = h - i
    p = v * (1 - s)
    q = v * (1 - s * f)
    t = v * (1 - s * (1 - f))

    if i == 0:
        r, g, b = v, t, p
    elif i == 1:
        r, g, b = q, v, p
    elif i == 2:
        r, g, b = p, v, t
    elif i == 3:
        r, g, b = p, q, v
    elif i == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return (int(r * 255), int(g * 255), int(b * 255))


def create_colormap_hsv():
    """
    HSV colormap: one sweep of hue from red round to magenta.

    Stops short of a full turn so the last entry doesn't meet the first.
    """
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        t = i / (NUM_COLORS - 1)
        colors[i] = hsv_to_rgb(t * 5 / 6, 1.0, 1.0)
    return colors


def create_colormap_rainbow():
    """
    Rainbow colormap: five passes of a red -> yellow -> blue -> red hue
    triangle, with the hue direction reversing every pass so passes
    join without a jump.
    """
    colors = np.zeros((NUM_COLORS, 3), dtype=np.uint8)
    for i in range(NUM_COLORS):
        t = i / (NUM_COLORS - 1)
        turn = t * 5
        h = turn % 1.0
        if int(turn) % 2 == 1:
            h = 1.0 - h
        colors[i] = hsv_to_rgb(h * 2 / 3, 1.0, 1.0)
    return colors


# Registry of all available colormaps.
# Keys are display names, values are factory functions.
COLORMAPS = {
    'Classic': create_colormap_classic,
    'Hot': create_colormap_hot,
    'Ocean': create_colormap_ocean,
    'Forest': create_colormap_forest,
    'Purple': create_colormap_purple,
    'Rainbow': create_colormap_rainbow,
    'HSV': create_colormap_hsv,
    'Grayscale': create_colormap_grayscale,
}


def get_colormap(name):
    """
    Get a colormap by name.

    Raises:
        KeyError if name not found
    """
    return COLORMAPS[name]()


def list_colormap_names():
    """Get list of available colormap names."""
    return list(COLORMAPS.keys())


@jit(nopython=True, cache=True)
def apply_palette(counts, escaped, max_iter, colormap, interior, out):
    """
    Color a flat run of escape results.

    Args:
        counts: 1D int array of iteration counts
        escaped: 1D bool array, False for interior points
        max_iter: Iteration cap the counts were computed with
        colormap: Nx3 array of RGB colors (uint8)
        interior: RGB color (uint8, length 3) for points in the set
        out: Output array of shape (len(counts), 3), modified in place
    """
    num_colors = colormap.shape[0]

    for i in range(counts.shape[0]):
        if not escaped[i]:
            for ch in range(3):
                out[i, ch] = interior[ch]
            continue

        fidx = (counts[i] / max_iter) * (num_colors - 1)
        idx0 = min(int(fidx), num_colors - 1)
        idx1 = min(idx0 + 1, num_colors - 1)
        t = fidx - idx0

        for ch in range(3):
            out[i, ch] = np.uint8(colormap[idx0, ch] * (1 - t) + colormap[idx1, ch] * t)


class Palette:
    """
    Maps escape results to RGB colors.

    Usage:
        palette = Palette('Ocean')
        rgb = palette.color_for(escape_time(c, mode, 256), 256)
    """

    def __init__(self, name=DEFAULT_COLORMAP, interior_color=INTERIOR_COLOR):
        self.name = name
        self.colormap = get_colormap(name)
        self.interior = np.array(interior_color, dtype=np.uint8)

    @property
    def interior_color(self):
        return tuple(int(v) for v in self.interior)

    def color_for(self, result, max_iterations):
        """RGB tuple for a single IterationResult."""
        out = np.zeros((1, 3), dtype=np.uint8)
        apply_palette(np.array([result.count], dtype=np.int64),
                      np.array([result.escaped], dtype=np.bool_),
                      max_iterations, self.colormap, self.interior, out)
        return tuple(int(v) for v in out[0])

    def apply(self, counts, escaped, max_iterations):
        """
        Color whole count/escaped grids.

        Returns:
            uint8 array of shape (counts.size, 3), row-major
        """
        flat_counts = np.ascontiguousarray(counts, dtype=np.int64).ravel()
        flat_escaped = np.ascontiguousarray(escaped, dtype=np.bool_).ravel()
        out = np.empty((flat_counts.shape[0], 3), dtype=np.uint8)
        apply_palette(flat_counts, flat_escaped, max_iterations,
                      self.colormap, self.interior, out)
        return out
