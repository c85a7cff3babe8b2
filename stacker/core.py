"""Game state and the per-frame stacking rules.

Every operation here takes a `GameState` and returns a new one; nothing in
this module touches pygame or the display.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from stacker.config import StackerConfig

logger = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    MOVING = "moving"
    PLACING = "placing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Block:
    x: float
    y: float
    width: float
    height: float
    color: Tuple[int, int, int]

    @property
    def right(self) -> float:
        return self.x + self.width

    def is_off_canvas(self, canvas_width) -> bool:
        return self.right <= 0 or self.x >= canvas_width

    def shifted(self, dy) -> "Block":
        return replace(self, y=self.y + dy)


@dataclass(frozen=True)
class GameState:
    config: StackerConfig = field(default_factory=StackerConfig)
    stacked: Tuple[Block, ...] = ()
    moving: Optional[Block] = None
    direction: int = 1
    score: int = 0
    speed: float = 0.0
    next_width: float = 0.0
    phase: Phase = Phase.IDLE

    @property
    def running(self) -> bool:
        return self.phase in (Phase.MOVING, Phase.PLACING)

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def top(self) -> Optional[Block]:
        return self.stacked[-1] if self.stacked else None


def new_game(config=None) -> GameState:
    config = config or StackerConfig()
    return GameState(config=config, speed=config.base_speed, next_width=config.block_width)


def reset(state: GameState) -> GameState:
    return new_game(state.config)


def start(state: GameState, rng=None) -> GameState:
    """Leave IDLE and put the first moving block on screen."""
    if state.phase is not Phase.IDLE:
        return state
    return _spawn(replace(state, phase=Phase.MOVING), rng)


def tower_height(state: GameState) -> int:
    return len(state.stacked)


def overlap(moving: Block, last: Block) -> Tuple[float, float]:
    """Return ``(start, width)`` of the horizontal intersection.

    The width is zero or negative when the blocks do not intersect.
    """
    start_x = max(moving.x, last.x)
    end_x = min(moving.right, last.right)
    return start_x, end_x - start_x


def update(state: GameState, delta=1.0) -> GameState:
    """Advance the moving block by one frame (scaled by `delta`).

    Hitting an edge in the direction of travel clamps the block to that
    edge and reverses it. A block still sliding in from off the left edge
    is left alone until it reaches the right one.
    """
    if state.phase is not Phase.MOVING or state.moving is None:
        return state

    block = state.moving
    canvas_width = state.config.canvas_width
    direction = state.direction
    x = block.x + state.speed * direction * delta

    if direction > 0 and x + block.width >= canvas_width:
        x = canvas_width - block.width
        direction = -1
    elif direction < 0 and x <= 0:
        x = 0.0
        direction = 1

    return replace(state, moving=replace(block, x=x), direction=direction)


def place_block(state: GameState, rng=None) -> GameState:
    """Drop the moving block onto the tower.

    A miss ends the game with the score untouched; a hit trims the block to
    the overlap, scores a point and spawns the next block. The first block
    lands at full width and becomes the unscored base of the tower.
    """
    if not state.running or state.moving is None:
        return state

    config = state.config
    moving = state.moving
    last = state.top

    if last is None:
        if moving.is_off_canvas(config.canvas_width):
            return _miss(state)
        placed = moving
    else:
        new_x, new_width = overlap(moving, last)
        if new_width <= 0:
            return _miss(state)
        placed = Block(new_x, moving.y, new_width, moving.height, moving.color)

    stacked = state.stacked + (placed,)
    # The base block is not scored: score counts the blocks stacked on it
    scored = last is not None
    score = state.score + 1 if scored else state.score

    # Camera follow: pull the tower down so its top sits on the margin
    if placed.y < config.shift_margin:
        shift = config.shift_margin - placed.y
        stacked = tuple(b.shifted(shift) for b in stacked)

    speed = state.speed
    if scored and score % config.speed_step_every == 0 and speed < config.max_speed:
        speed = min(speed + config.speed_step, config.max_speed)
        logger.debug("speed raised to %.1f at score %d", speed, score)

    placed_state = replace(
        state,
        stacked=stacked,
        score=score,
        speed=speed,
        next_width=placed.width,
        moving=None,
        phase=Phase.MOVING,
    )
    return _spawn(placed_state, rng)


def _miss(state):
    return replace(state, moving=None, phase=Phase.GAME_OVER)


def _spawn(state, rng=None):
    rng = rng if rng is not None else np.random.default_rng()
    config = state.config
    top = state.top
    y = top.y - config.block_height if top else config.canvas_height - config.block_height
    color = tuple(config.colors[int(rng.integers(0, len(config.colors)))])
    width = state.next_width
    block = Block(-width, y, width, config.block_height, color)
    return replace(state, moving=block, direction=1)
