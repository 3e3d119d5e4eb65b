"""
Rendering Configuration

Canvas geometry, render modes and the fixed colors used by the alternate
display paths. Everything here is fixed at startup; the viewer and the
headless snap mode read these as defaults and let CLI flags override them.
"""

import enum


# Pixels per grid cell edge
CELL_SIZE = 1

# Default picture dimensions for the demo pictures
PIC_WIDTH = 512
PIC_HEIGHT = 512

# Gridline-stroke mode separator color
GRID_COLOR = "#cccccc"

# Bicolor counter mode: cells never hit stay dark, visited cells are light
COUNTER_UNHIT_COLOR = "#333333"
COUNTER_HIT_COLOR = "#cccccc"

# Display refresh rate for the interactive viewer
TARGET_FPS = 60


class ConfigurationError(ValueError):
    """Invalid grid geometry or a display surface that cannot be allocated.

    Raised at initialization only. There is no recovery path: the caller
    must fix its arguments.
    """


class RenderMode(str, enum.Enum):
    """Which buffer drives the cell colors."""
    FULL_COLOR = "full_color"
    GRAYSCALE = "grayscale"
    BICOLOR_COUNTER = "bicolor_counter"


RENDER_MODE_ORDER = [m.value for m in RenderMode]


def parse_render_mode(name):
    """Resolve a CLI mode name (``full_color``, ``gray`` ...) to a RenderMode."""
    aliases = {"color": "full_color", "gray": "grayscale", "counter": "bicolor_counter"}
    key = aliases.get(name, name)
    try:
        return RenderMode(key)
    except ValueError:
        raise ConfigurationError(
            f"Unknown render mode: {name!r}. Choose from {RENDER_MODE_ORDER}"
        ) from None


def check_dimensions(width, height):
    """Raise ConfigurationError unless both grid dimensions are positive ints."""
    for label, value in (("width", width), ("height", height)):
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigurationError(
                f"Picture {label} must be a positive integer, got {value!r}"
            )
