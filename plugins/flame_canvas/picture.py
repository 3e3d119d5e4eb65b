"""
Picture Collaborator Contract

A picture owns one shared memory region holding three per-cell arrays
and mutates it in place through paint() and tick(). The renderer only
ever sees the region and the byte offsets the picture hands out.

Memory layout (row-major, index = row * width + column):
    cell_counter  uint32[w*h]     at offset 0
    cell_alpha    float32[w*h]    at offset 4*w*h
    cell_color    float32[3*w*h]  at offset 8*w*h
"""

from abc import ABC, abstractmethod
import numpy as np

from .config import PIC_WIDTH, PIC_HEIGHT, check_dimensions


COUNTER_ITEMSIZE = np.dtype(np.uint32).itemsize
FLOAT_ITEMSIZE = np.dtype(np.float32).itemsize


class Picture(ABC):
    """Base class for simulations that expose a picture buffer."""

    picture_name = ""   # e.g. "plasma"
    picture_label = ""  # e.g. "Plasma Bands"

    def __init__(self, width=PIC_WIDTH, height=PIC_HEIGHT):
        check_dimensions(width, height)
        self._width = width
        self._height = height
        n = width * height
        self._counter_offset = 0
        self._alpha_offset = n * COUNTER_ITEMSIZE
        self._color_offset = self._alpha_offset + n * FLOAT_ITEMSIZE
        self.memory = bytearray(self._color_offset + 3 * n * FLOAT_ITEMSIZE)

        # Writable views for subclasses; the renderer builds its own read-only ones
        self.counter = np.frombuffer(
            self.memory, dtype=np.uint32, count=n, offset=self._counter_offset
        ).reshape(height, width)
        self.alpha = np.frombuffer(
            self.memory, dtype=np.float32, count=n, offset=self._alpha_offset
        ).reshape(height, width)
        self.color = np.frombuffer(
            self.memory, dtype=np.float32, count=3 * n, offset=self._color_offset
        ).reshape(height, width, 3)

        self.counter[:] = 1
        self.color[:] = 1.0
        self.generation = 0

    def width(self):
        return self._width

    def height(self):
        return self._height

    def cell_counter(self):
        """Byte offset of the hit-counter array in ``memory``."""
        return self._counter_offset

    def cell_alpha(self):
        """Byte offset of the alpha array in ``memory``."""
        return self._alpha_offset

    def cell_color(self):
        """Byte offset of the RGB array in ``memory``."""
        return self._color_offset

    @abstractmethod
    def paint(self):
        """Initialize (or recompute) the whole buffer."""

    @abstractmethod
    def tick(self):
        """Advance one step, writing the buffer in place."""

    @property
    def stats(self):
        """Return current buffer statistics."""
        return {
            "generation": self.generation,
            "mean_alpha": float(self.alpha.mean()),
            "max_alpha": float(self.alpha.max()),
            "hit_pct": float((self.counter > 1).sum()) / self.counter.size * 100,
        }


class PlasmaPicture(Picture):
    """Drifting sinusoidal color bands.

    A stand-in simulation so the viewer has a live buffer to draw. Each
    tick shifts the phase; alpha follows the mean brightness and the hit
    counter marks cells that have been bright at least once.
    """

    picture_name = "plasma"
    picture_label = "Plasma Bands"

    def __init__(self, width=PIC_WIDTH, height=PIC_HEIGHT, speed=0.05):
        super().__init__(width, height)
        self.speed = speed
        self.phase = 0.0
        Y, X = np.mgrid[:height, :width]
        self._u = (X / width).astype(np.float32)
        self._v = (Y / height).astype(np.float32)

    def paint(self):
        self.phase = 0.0
        self.counter[:] = 1
        self._fill()

    def tick(self):
        self.phase += self.speed
        self.generation += 1
        self._fill()

    def _fill(self):
        t = self.phase
        u, v = self._u, self._v
        radial = np.sqrt((u - 0.5) ** 2 + (v - 0.5) ** 2)
        field = (np.sin(10.0 * u + t) + np.sin(10.0 * v - t)
                 + np.sin(14.0 * radial - 2.0 * t)) / 3.0
        self.color[..., 0] = 0.5 + 0.5 * np.cos(2 * np.pi * (field + 0.00))
        self.color[..., 1] = 0.5 + 0.5 * np.cos(2 * np.pi * (field + 0.33))
        self.color[..., 2] = 0.5 + 0.5 * np.cos(2 * np.pi * (field + 0.67))
        self.alpha[:] = self.color.mean(axis=2)
        self.counter[self.alpha > 0.75] += 1


class BlankPicture(Picture):
    """White picture that never changes. Useful as a render baseline."""

    picture_name = "blank"
    picture_label = "Blank"

    def paint(self):
        self.counter[:] = 1
        self.alpha[:] = 0.0
        self.color[:] = 1.0

    def tick(self):
        self.generation += 1


PICTURES = {
    "plasma": PlasmaPicture,
    "blank": BlankPicture,
}

PICTURE_ORDER = list(PICTURES.keys())


def create_picture(name="plasma", width=PIC_WIDTH, height=PIC_HEIGHT):
    """Instantiate a registered picture by name."""
    cls = PICTURES.get(name)
    if cls is None:
        raise ValueError(f"Unknown picture: {name!r}. "
                         f"Choose from {PICTURE_ORDER}")
    return cls(width=width, height=height)
