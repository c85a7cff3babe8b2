from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from stacker.config import StackerConfig
from stacker.game import StackerGame
from stacker.scheduler import ManualScheduler


@pytest.fixture(autouse=True)
def _headless_pygame():
    """Initialise pygame against the dummy video driver.

    Runs for every test because `StackerEnv.close()` shuts pygame down.
    """

    pygame.init()
    pygame.font.init()


@pytest.fixture()
def config() -> StackerConfig:
    return StackerConfig()


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(0)


@pytest.fixture()
def game(config: StackerConfig) -> StackerGame:
    return StackerGame(config, ManualScheduler(), seed=0)
