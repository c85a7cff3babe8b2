import logging
from dataclasses import replace

import numpy as np

from stacker import core
from stacker.config import StackerConfig
from stacker.core import Phase
from stacker.scheduler import ManualScheduler

logger = logging.getLogger(__name__)


class StackerGame:
    """Owns the single game state and wires it to a frame scheduler.

    Placement runs with the scheduler stopped, so a frame update can never
    interleave with it; the scheduler is re-armed only if the block landed.
    """

    def __init__(self, config=None, scheduler=None, seed=None, on_frame=None):
        self.config = config or StackerConfig()
        self.scheduler = scheduler or ManualScheduler()
        self.np_random = np.random.default_rng(seed)
        self.on_frame = on_frame
        self.state = core.new_game(self.config)

    @property
    def score(self):
        return self.state.score

    @property
    def running(self):
        return self.state.running

    @property
    def is_over(self):
        return self.state.is_over

    @property
    def final_score(self):
        return self.state.score if self.state.is_over else None

    def start(self):
        if self.state.phase is not Phase.IDLE:
            logger.debug("start ignored in phase %s", self.state.phase.value)
            return
        self.state = core.start(self.state, self.np_random)
        logger.info("game started")
        self.scheduler.start(self.frame)

    def place(self):
        if self.state.phase is not Phase.MOVING:
            logger.debug("place ignored in phase %s", self.state.phase.value)
            return

        before = self.state
        self.state = replace(before, phase=Phase.PLACING)
        self.scheduler.stop()
        try:
            self.state = core.place_block(self.state, self.np_random)
        except Exception:
            # Leave the game playable: back to the sliding block, loop re-armed
            self.state = before
            self.scheduler.start(self.frame)
            raise

        if self.state.is_over:
            logger.info("game over, final score %d", self.state.score)
            self._notify()
            return
        self.scheduler.start(self.frame)

    def restart(self):
        self.scheduler.stop()
        self.state = core.reset(self.state)
        self.start()

    def frame(self, delta=1.0):
        self.state = core.update(self.state, delta)
        self._notify()

    def _notify(self):
        if self.on_frame is not None:
            self.on_frame(self.state)
