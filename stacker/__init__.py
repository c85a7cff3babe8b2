from stacker.config import StackerConfig
from stacker.core import Block, GameState, Phase, new_game, place_block, update
from stacker.game import StackerGame

__all__ = [
    "Block",
    "GameState",
    "Phase",
    "StackerConfig",
    "StackerGame",
    "new_game",
    "place_block",
    "update",
]
