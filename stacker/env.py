import os

import gymnasium as gym
import numpy as np
import pygame
from gymnasium.spaces import Box, Discrete

from stacker.config import StackerConfig
from stacker.game import StackerGame
from stacker.render import draw, render_array

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class StackerEnv(gym.Env):
    """Headless stacker: one step is one frame, or one placement.

    Action 0 lets the block slide for a frame, action 1 drops it. A landed
    block earns 1 plus the fraction of its width that survived the cut, the
    unscored base block included; a miss costs 10 and ends the episode.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    user_guide = "Controls: press Space to drop the sliding block onto the tower."

    game_description = (
        "Time each drop so the sliding block lands on the one below. "
        "Whatever overhangs is sliced off, and a full miss ends the game."
    )

    auto_advance = True

    MISS_PENALTY = -10.0
    MAX_STEPS = 5000

    def __init__(self, render_mode="rgb_array", config=None, max_steps=None):
        super().__init__()
        self.config = config or StackerConfig()
        self.render_mode = render_mode
        self.max_steps = self.MAX_STEPS if max_steps is None else max_steps
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {self.max_steps}")

        self.observation_space = Box(
            low=0, high=255, shape=(self.config.canvas_height, self.config.canvas_width, 3), dtype=np.uint8
        )
        self.action_space = Discrete(2)

        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.config.canvas_width, self.config.canvas_height))
        self.font = pygame.font.Font(None, 32)

        self.game = None
        self.steps = 0

        self.reset()
        self.validate_implementation()

    @property
    def state(self):
        return self.game.state

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        # Block colours come from the env's seeded generator
        self.game = StackerGame(self.config)
        self.game.np_random = self.np_random
        self.game.start()
        self.steps = 0
        return self._get_observation(), self._get_info()

    def step(self, action):
        assert self.action_space.contains(action), f"invalid action {action!r}"

        if self.state.is_over:
            return self._get_observation(), 0.0, True, False, self._get_info()

        reward = 0.0
        if action == 1:
            width_before = self.state.moving.width
            self.game.place()
            if self.state.is_over:
                reward = self.MISS_PENALTY
            else:
                reward = 1.0 + self.state.next_width / width_before
        else:
            self.game.scheduler.tick()

        self.steps += 1
        terminated = self.state.is_over
        truncated = not terminated and self.steps >= self.max_steps

        return self._get_observation(), reward, terminated, truncated, self._get_info()

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        draw(self.screen, self.state, self.font)
        return render_array(self.screen)

    def _get_info(self):
        moving = self.state.moving
        return {
            "score": self.state.score,
            "steps": self.steps,
            "speed": self.state.speed,
            "width": moving.width if moving is not None else self.state.next_width,
        }

    def close(self):
        pygame.font.quit()
        pygame.quit()

    def validate_implementation(self):
        assert self.action_space.n == 2

        test_obs = self._get_observation()
        assert test_obs.shape == self.observation_space.shape
        assert test_obs.dtype == np.uint8

        obs, info = self.reset()
        assert obs.shape == self.observation_space.shape
        assert isinstance(info, dict)

        obs, reward, term, trunc, info = self.step(0)
        assert obs.shape == self.observation_space.shape
        assert isinstance(reward, float)
        assert term is False
        assert isinstance(trunc, bool)
        assert isinstance(info, dict)

        self.reset()
