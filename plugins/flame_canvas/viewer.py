"""
Interactive Pygame Viewer for Picture Buffers

Paints the picture once, renders it statically, and waits. Pressing
SPACE starts the animation loop (tick + render on every refresh);
pressing it again pauses.

Controls:
  SPACE       Play / Pause
  S           Save screenshot
  Q / ESC     Quit
"""

import os
import time
import pygame

from .animation import AnimationController
from .buffer_view import BufferView
from .config import CELL_SIZE, PIC_WIDTH, PIC_HEIGHT, TARGET_FPS, RenderMode
from .picture import create_picture
from .renderer import GridRenderer
from .scheduler import FrameScheduler


def screenshots_dir():
    path = os.path.join(
        os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
        "screenshots"
    )
    os.makedirs(path, exist_ok=True)
    return path


class Viewer:
    def __init__(self, picture="plasma", width=None, height=None,
                 pic_width=PIC_WIDTH, pic_height=PIC_HEIGHT, cell_size=CELL_SIZE,
                 mode=RenderMode.FULL_COLOR, gridlines=False, play=False):
        if isinstance(picture, str):
            picture = create_picture(picture, pic_width, pic_height)
        self.picture = picture
        self.view = BufferView(picture)
        self.renderer = GridRenderer(cell_size=cell_size, mode=mode,
                                     gridlines=gridlines)
        self.canvas = self.renderer.create_surface(picture.width(), picture.height())

        canvas_w, canvas_h = self.canvas.get_size()
        self.window_w = width or canvas_w
        self.window_h = height or canvas_h
        self.running = True
        self.start_playing = play

        self.scheduler = FrameScheduler()
        self.animation = AnimationController(picture, self.draw, self.scheduler)

    def draw(self):
        """Redraw the canvas from the current buffer contents."""
        self.renderer.blit(self.canvas, self.view)

    def _caption(self):
        label = getattr(self.picture, "picture_label", "") or "Picture"
        stats = self.picture.stats
        line = (f"{label}  |  Frame: {self.animation.frames:,}  |  "
                f"Gen: {stats['generation']:,}  |  "
                f"Mean alpha: {stats['mean_alpha']:.3f}")
        if self.animation.is_paused():
            line = "[PAUSED]  " + line
        return line

    def _save_screenshot(self):
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        name = getattr(self.picture, "picture_name", "") or "picture"
        path = os.path.join(screenshots_dir(), f"flame_{name}_{timestamp}.png")
        pygame.image.save(self.canvas, path)
        print(f"[flame] Screenshot saved: {path}")
        return path

    def _handle_keydown(self, event):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

        elif key == pygame.K_SPACE:
            self.animation.toggle()

        elif key == pygame.K_s:
            self._save_screenshot()

    def run(self):
        """Main viewer loop."""
        pygame.init()

        screen = pygame.display.set_mode((self.window_w, self.window_h))
        clock = pygame.time.Clock()

        self.picture.paint()
        self.draw()
        if self.start_playing:
            self.animation.play()

        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event)

            self.scheduler.run_frame(pygame.time.get_ticks())

            if self.canvas.get_size() == (self.window_w, self.window_h):
                screen.blit(self.canvas, (0, 0))
            else:
                scaled = pygame.transform.scale(self.canvas, (self.window_w, self.window_h))
                screen.blit(scaled, (0, 0))

            pygame.display.set_caption(self._caption())
            pygame.display.flip()
            clock.tick(TARGET_FPS)

        pygame.quit()
