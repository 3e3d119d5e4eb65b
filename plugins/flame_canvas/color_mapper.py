"""
Color Mapping for Picture Cells

Maps normalized float channels to 8-bit display values. Inputs are
clamped to [0, 1] before scaling so overexposed or NaN cells still
produce a valid color.

The scalar functions serve the per-cell renderer; the array versions
return byte-identical results for the vectorized blit path.
"""

import math
import numpy as np


def clamp01(value):
    """Clamp a float into [0, 1]. NaN maps to 0."""
    value = float(value)
    if value != value:
        return 0.0
    return min(max(value, 0.0), 1.0)


def map_channel(value):
    """One normalized channel -> 0..255."""
    return int(math.floor(255 * clamp01(value)))


def map_color(r, g, b):
    """Normalized RGB floats -> (r, g, b) bytes."""
    return (map_channel(r), map_channel(g), map_channel(b))


def map_gray(value):
    """Single channel with inverted brightness: higher input -> darker."""
    return int(math.floor(255 * (1.0 - clamp01(value))))


def _clamp01_array(values):
    values = np.nan_to_num(np.asarray(values, dtype=np.float64),
                           nan=0.0, posinf=1.0, neginf=0.0)
    return np.clip(values, 0.0, 1.0)


def map_colors(rgb):
    """
    Map an array of normalized RGB triples to uint8.

    Args:
        rgb: (..., 3) float array

    Returns:
        (..., 3) uint8 array
    """
    return np.floor(255 * _clamp01_array(rgb)).astype(np.uint8)


def map_grays(values):
    """Array version of map_gray. Returns uint8 with the input's shape."""
    return np.floor(255 * (1.0 - _clamp01_array(values))).astype(np.uint8)


def to_hex(rgb):
    """(r, g, b) bytes -> '#rrggbb'."""
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


def from_hex(color):
    """'#rrggbb' -> (r, g, b) bytes."""
    color = color.lstrip("#")
    if len(color) != 6:
        raise ValueError(f"Expected a #rrggbb color string, got {color!r}")
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))
