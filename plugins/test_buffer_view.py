#!/usr/bin/env python3
"""
Tests for the picture memory layout and its zero-copy views.
"""

import numpy as np
from flame_canvas.buffer_view import BufferView, get_index
from flame_canvas.config import ConfigurationError
from flame_canvas.picture import Picture, PlasmaPicture, create_picture


class StaticPicture(Picture):
    picture_name = "static"

    def paint(self):
        n = self.width() * self.height()
        self.alpha[:] = np.arange(n, dtype=np.float32).reshape(self.alpha.shape) / n
        self.color[:] = np.arange(3 * n, dtype=np.float32).reshape(self.color.shape)

    def tick(self):
        self.color += 1.0
        self.generation += 1


def test_get_index_covers_grid():
    width, height = 7, 4
    seen = {get_index(r, c, width) for r in range(height) for c in range(width)}
    assert seen == set(range(width * height)), "Indices must cover [0, w*h) exactly once"


def test_accessors_index_through_get_index():
    pic = StaticPicture(width=5, height=3)
    pic.paint()
    view = BufferView(pic)
    for row in range(3):
        for col in range(5):
            i = get_index(row, col, 5)
            assert view.color(row, col) == (3.0 * i, 3.0 * i + 1, 3.0 * i + 2), f"Cell {row},{col}"
            assert abs(view.alpha(row, col) - i / 15) < 1e-6


def test_views_read_cells():
    pic = StaticPicture(width=3, height=2)
    pic.paint()
    view = BufferView(pic)

    assert view.width == 3 and view.height == 2
    assert view.color(0, 0) == (0.0, 1.0, 2.0)
    assert view.color(1, 2) == (15.0, 16.0, 17.0), "Cell (1,2) is flat index 5"
    assert abs(view.alpha(1, 0) - 3 / 6) < 1e-6
    assert view.counter(0, 1) == 1, "Counter starts at 1 in every cell"


def test_views_are_zero_copy():
    pic = StaticPicture(width=4, height=4)
    pic.paint()
    view = BufferView(pic)
    before = view.color(2, 3)

    pic.tick()
    after = view.color(2, 3)
    assert after == tuple(c + 1.0 for c in before), "View must see in-place writes"

    assert np.shares_memory(view.color_grid, pic.color)
    assert not view.color_grid.flags.writeable, "Renderer views are read-only"
    assert not view.alpha_grid.flags.writeable


def test_offsets_are_byte_positions():
    pic = PlasmaPicture(width=5, height=3)
    n = 15
    assert pic.cell_counter() == 0
    assert pic.cell_alpha() == 4 * n
    assert pic.cell_color() == 8 * n
    assert len(pic.memory) == 20 * n


def test_explicit_memory_region():
    pic = StaticPicture(width=2, height=2)
    pic.paint()
    view = BufferView(pic, memory=memoryview(pic.memory))
    assert view.color(1, 1) == (9.0, 10.0, 11.0)


def test_undersized_region_rejected():
    pic = StaticPicture(width=4, height=4)
    try:
        BufferView(pic, memory=bytearray(16))
    except ConfigurationError:
        pass
    else:
        raise AssertionError("Too-small memory region should raise ConfigurationError")


def test_bad_dimensions_rejected():
    for w, h in ((0, 4), (4, -1), (2.5, 2)):
        try:
            StaticPicture(width=w, height=h)
        except ConfigurationError:
            continue
        raise AssertionError(f"{w}x{h} should raise ConfigurationError")


def test_registry():
    pic = create_picture("plasma", 8, 6)
    assert isinstance(pic, PlasmaPicture)
    assert (pic.width(), pic.height()) == (8, 6)

    blank = create_picture("blank", 3, 3)
    blank.paint()
    assert BufferView(blank).color(2, 2) == (1.0, 1.0, 1.0), "Blank picture is white"
    try:
        create_picture("nope")
    except ValueError:
        pass
    else:
        raise AssertionError("Unknown picture should raise ValueError")


def test_plasma_ticks_in_place():
    pic = PlasmaPicture(width=16, height=16)
    pic.paint()
    memory_id = id(pic.memory)
    first = pic.color.copy()
    pic.tick()
    assert id(pic.memory) == memory_id
    assert pic.generation == 1
    assert not np.array_equal(first, pic.color), "tick() should change the buffer"
    assert pic.stats["generation"] == 1


if __name__ == "__main__":
    print("\n=== Testing Buffer Views ===\n")

    test_get_index_covers_grid()
    test_accessors_index_through_get_index()
    test_views_read_cells()
    test_views_are_zero_copy()
    test_offsets_are_byte_positions()
    test_explicit_memory_region()
    test_undersized_region_rejected()
    test_bad_dimensions_rejected()
    test_registry()
    test_plasma_ticks_in_place()

    print("\n✓ All tests passed!\n")
