"""
Grid Renderer

Paints one filled rectangle per picture cell onto a pygame surface.

Layout: the surface is ``pitch * n + 1`` pixels along each axis, where
pitch is the cell size (plus one when gridlines are drawn). Cell
(row, col) sits at ``(col * pitch + 1, row * pitch + 1)``; the first
pixel row and column are a border that cells never touch.

Render modes are interchangeable strategies selected by RenderMode:
    full_color       - cell RGB through map_color
    grayscale        - cell alpha through map_gray (inverted brightness)
    bicolor_counter  - dark for cells never hit, light otherwise
"""

import numpy as np
import pygame

from .config import (
    CELL_SIZE, GRID_COLOR, COUNTER_UNHIT_COLOR, COUNTER_HIT_COLOR,
    ConfigurationError, RenderMode, check_dimensions, parse_render_mode,
)
from .color_mapper import map_color, map_gray, map_colors, map_grays, from_hex


_UNHIT = from_hex(COUNTER_UNHIT_COLOR)
_HIT = from_hex(COUNTER_HIT_COLOR)


# --- Per-cell strategies ---

def _full_color_cell(view, row, col):
    r, g, b = view.color(row, col)
    return map_color(r, g, b)


def _grayscale_cell(view, row, col):
    g = map_gray(view.alpha(row, col))
    return (g, g, g)


def _counter_cell(view, row, col):
    return _UNHIT if view.counter(row, col) == 1 else _HIT


# --- Whole-grid strategies (same colors, one numpy pass) ---

def _full_color_grid(view):
    return map_colors(view.color_grid)


def _grayscale_grid(view):
    g = map_grays(view.alpha_grid)
    return np.repeat(g[:, :, None], 3, axis=2)


def _counter_grid(view):
    out = np.empty((view.height, view.width, 3), dtype=np.uint8)
    out[:] = _UNHIT
    out[view.counter_grid != 1] = _HIT
    return out


CELL_STRATEGIES = {
    RenderMode.FULL_COLOR: _full_color_cell,
    RenderMode.GRAYSCALE: _grayscale_cell,
    RenderMode.BICOLOR_COUNTER: _counter_cell,
}

GRID_STRATEGIES = {
    RenderMode.FULL_COLOR: _full_color_grid,
    RenderMode.GRAYSCALE: _grayscale_grid,
    RenderMode.BICOLOR_COUNTER: _counter_grid,
}


class GridRenderer:

    def __init__(self, cell_size=CELL_SIZE, mode=RenderMode.FULL_COLOR,
                 gridlines=False):
        """
        Args:
            cell_size: Pixels per cell edge (positive int)
            mode: RenderMode (or its string value)
            gridlines: Draw 1-pixel separators between cells
        """
        if (not isinstance(cell_size, int) or isinstance(cell_size, bool)
                or cell_size <= 0):
            raise ConfigurationError(
                f"cell_size must be a positive integer, got {cell_size!r}")
        self.cell_size = cell_size
        self.mode = parse_render_mode(mode)
        self.gridlines = gridlines

    @property
    def pitch(self):
        """Distance in pixels between the top-left corners of adjacent cells."""
        return self.cell_size + 1 if self.gridlines else self.cell_size

    def surface_size(self, width, height):
        check_dimensions(width, height)
        return (self.pitch * width + 1, self.pitch * height + 1)

    def create_surface(self, width, height):
        """Allocate a 32-bit surface sized for a width x height grid."""
        size = self.surface_size(width, height)
        try:
            surface = pygame.Surface(size, 0, 32)
        except (pygame.error, MemoryError) as e:
            raise ConfigurationError(
                f"Cannot allocate a {size[0]}x{size[1]} surface: {e}") from e
        surface.fill((0, 0, 0))
        return surface

    def _check_view(self, view):
        if self.mode is RenderMode.BICOLOR_COUNTER and not view.has_counter:
            raise ConfigurationError(
                "bicolor_counter mode needs a picture with a cell counter")

    def draw_grid(self, surface, width, height):
        """Stroke the 1-pixel separators at every multiple of pitch."""
        color = from_hex(GRID_COLOR)
        total_w, total_h = self.surface_size(width, height)
        pitch = self.pitch
        for i in range(width + 1):
            x = i * pitch
            pygame.draw.line(surface, color, (x, 0), (x, total_h - 1))
        for j in range(height + 1):
            y = j * pitch
            pygame.draw.line(surface, color, (0, y), (total_w - 1, y))

    def render(self, surface, view):
        """Fill width * height rectangles, row 0 first, left to right."""
        self._check_view(view)
        if self.gridlines:
            self.draw_grid(surface, view.width, view.height)

        cell_color = CELL_STRATEGIES[self.mode]
        size = self.cell_size
        pitch = self.pitch
        fill = surface.fill
        for row in range(view.height):
            y = row * pitch + 1
            for col in range(view.width):
                fill(cell_color(view, row, col), (col * pitch + 1, y, size, size))

    def rasterize(self, view):
        """Return the (height, width, 3) uint8 cell colors for the current mode."""
        self._check_view(view)
        return GRID_STRATEGIES[self.mode](view)

    def blit(self, surface, view):
        """Write the same pixels as render() with numpy slicing.

        Each of the cell_size**2 pixel offsets inside a cell is one strided
        assignment over the whole grid.
        """
        colors = self.rasterize(view)
        if self.gridlines:
            self.draw_grid(surface, view.width, view.height)

        w, h = view.width, view.height
        pitch = self.pitch
        block = colors.swapaxes(0, 1)  # surfarray is indexed [x, y]
        px = pygame.surfarray.pixels3d(surface)
        try:
            for dx in range(self.cell_size):
                for dy in range(self.cell_size):
                    px[1 + dx:1 + dx + pitch * w:pitch,
                       1 + dy:1 + dy + pitch * h:pitch] = block
        finally:
            del px
