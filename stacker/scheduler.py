from abc import ABC, abstractmethod

import pygame


class FrameScheduler(ABC):
    """Calls a frame callback once per tick while armed.

    `stop()` may be called at any time, including from inside the callback,
    and a stopped scheduler never calls back until `start()` arms it again.
    """

    def __init__(self):
        self._callback = None

    @property
    def active(self):
        return self._callback is not None

    def start(self, callback):
        self._callback = callback

    def stop(self):
        self._callback = None

    @abstractmethod
    def tick(self):
        """Run at most one frame; return whether the callback fired."""

    def _fire(self, delta):
        if self._callback is None:
            return False
        self._callback(delta)
        return True


class ManualScheduler(FrameScheduler):
    """Advances only when told to. Used headless and in tests."""

    def __init__(self):
        super().__init__()
        self.frames = 0

    def tick(self, delta=1.0):
        fired = self._fire(delta)
        if fired:
            self.frames += 1
        return fired

    def run(self, frames, delta=1.0):
        for _ in range(frames):
            if not self.tick(delta):
                break


class ClockScheduler(FrameScheduler):
    """Paces ticks with a pygame clock.

    The delta handed to the callback is the elapsed time measured in frames
    at the target rate, so movement speed does not depend on the real frame
    rate.
    """

    MAX_DELTA = 4.0

    def __init__(self, fps=60, clock=None):
        super().__init__()
        self.fps = fps
        self.clock = clock or pygame.time.Clock()

    def tick(self):
        elapsed_ms = self.clock.tick(self.fps)
        delta = elapsed_ms * self.fps / 1000.0 if elapsed_ms else 1.0
        # a stalled window must not teleport the block across the canvas
        delta = min(delta, self.MAX_DELTA)
        return self._fire(delta)
