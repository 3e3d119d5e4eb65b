"""
Frame Scheduler

The host's "call me on the next display refresh" facility. The viewer's
main loop calls run_frame() once per refresh; anything that wants to run
on the next frame calls request_frame() and keeps the returned handle so
it can cancel it.

Callbacks requested while a frame is running wait for the following
frame, so a callback that re-requests itself runs exactly once per
refresh.
"""


class FrameScheduler:

    def __init__(self):
        self._next_handle = 1
        self._pending = {}   # handle -> callback, in request order
        self._firing = {}    # snapshot being run by run_frame()

    def request_frame(self, callback):
        """Queue callback(timestamp) for the next refresh. Returns a handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle):
        """Drop a queued callback. Unknown or already-run handles are ignored."""
        self._pending.pop(handle, None)
        self._firing.pop(handle, None)

    @property
    def pending(self):
        """Number of callbacks waiting for a refresh."""
        return len(self._pending) + len(self._firing)

    def run_frame(self, timestamp=None):
        """Run every callback that was pending when this refresh started.

        An exception from a callback propagates; callbacks not yet run in
        this refresh go back to the queue.
        """
        self._firing, self._pending = self._pending, {}
        try:
            while self._firing:
                handle = next(iter(self._firing))
                callback = self._firing.pop(handle)
                callback(timestamp)
        finally:
            if self._firing:
                self._firing.update(self._pending)
                self._pending = self._firing
                self._firing = {}
