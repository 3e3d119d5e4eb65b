"""
Play/Pause Animation Controller

While playing, every display refresh advances the picture one step and
re-renders it. The pending frame handle is the whole state: PLAYING
means a frame is queued on the scheduler, PAUSED means none is.
"""

import enum


class AnimationState(enum.Enum):
    PAUSED = "paused"
    PLAYING = "playing"


class AnimationController:

    def __init__(self, picture, render, scheduler):
        """
        Args:
            picture: Collaborator with a tick() method
            render: Zero-argument callable that redraws the canvas
            scheduler: FrameScheduler (request_frame / cancel_frame)
        """
        self.picture = picture
        self.render = render
        self.scheduler = scheduler
        self.frames = 0
        self._frame_handle = None

    @property
    def state(self):
        if self._frame_handle is None:
            return AnimationState.PAUSED
        return AnimationState.PLAYING

    def is_paused(self):
        return self._frame_handle is None

    def play(self):
        if not self.is_paused():
            return
        self._frame_handle = self.scheduler.request_frame(self._render_loop)

    def pause(self):
        """Cancel the pending frame. A frame already running still completes."""
        if self.is_paused():
            return
        self.scheduler.cancel_frame(self._frame_handle)
        self._frame_handle = None

    def toggle(self):
        if self.is_paused():
            self.play()
        else:
            self.pause()
        return self.state

    def _render_loop(self, timestamp=None):
        handle = self._frame_handle
        try:
            self.picture.tick()
            self.render()
        except Exception:
            # No next frame gets requested, so the loop is over
            if self._frame_handle == handle:
                self._frame_handle = None
            raise
        self.frames += 1

        # pause() (or pause() then play()) ran during this frame
        if self._frame_handle != handle:
            return
        self._frame_handle = self.scheduler.request_frame(self._render_loop)
