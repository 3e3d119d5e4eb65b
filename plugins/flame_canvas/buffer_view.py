"""
Zero-copy views over a picture's shared memory region.
"""

import numpy as np

from .config import ConfigurationError, check_dimensions
from .picture import COUNTER_ITEMSIZE, FLOAT_ITEMSIZE


def get_index(row, column, width):
    """Flat row-major index of cell (row, column)."""
    return row * width + column


class BufferView:
    """Read-only typed projection of a picture buffer.

    Holds no copy: every read reflects the picture's latest in-place
    write. Views stay valid for the picture's lifetime because the region
    never grows or moves. Indices are not range-checked here; callers
    derive their loop bounds from width/height.
    """

    def __init__(self, picture, memory=None):
        if memory is None:
            memory = picture.memory
        self.width = picture.width()
        self.height = picture.height()
        check_dimensions(self.width, self.height)
        n = self.width * self.height

        spans = [
            ("cell_counter", picture.cell_counter(), n * COUNTER_ITEMSIZE),
            ("cell_alpha", picture.cell_alpha(), n * FLOAT_ITEMSIZE),
            ("cell_color", picture.cell_color(), 3 * n * FLOAT_ITEMSIZE),
        ]
        size = memoryview(memory).nbytes
        for label, offset, nbytes in spans:
            if offset is None:
                continue
            if offset < 0 or offset + nbytes > size:
                raise ConfigurationError(
                    f"{label} [{offset}, {offset + nbytes}) does not fit in "
                    f"a {size}-byte memory region"
                )

        self._alpha = self._view(memory, np.float32, n, picture.cell_alpha())
        self._color = self._view(memory, np.float32, 3 * n, picture.cell_color())
        counter_offset = picture.cell_counter()
        self._counter = (None if counter_offset is None else
                         self._view(memory, np.uint32, n, counter_offset))

    @staticmethod
    def _view(memory, dtype, count, offset):
        arr = np.frombuffer(memory, dtype=dtype, count=count, offset=offset)
        arr.flags.writeable = False
        return arr

    def alpha(self, row, col):
        return float(self._alpha[get_index(row, col, self.width)])

    def color(self, row, col):
        i = 3 * get_index(row, col, self.width)
        c = self._color
        return (float(c[i]), float(c[i + 1]), float(c[i + 2]))

    def counter(self, row, col):
        return int(self._counter[get_index(row, col, self.width)])

    @property
    def has_counter(self):
        return self._counter is not None

    @property
    def alpha_grid(self):
        """(height, width) float32 view."""
        return self._alpha.reshape(self.height, self.width)

    @property
    def color_grid(self):
        """(height, width, 3) float32 view."""
        return self._color.reshape(self.height, self.width, 3)

    @property
    def counter_grid(self):
        """(height, width) uint32 view."""
        return self._counter.reshape(self.height, self.width)
