import os
from dataclasses import dataclass, fields, replace


COLOR_BG = (70, 130, 180)
COLOR_OUTLINE = (44, 62, 80)
COLOR_TEXT = (236, 240, 241)
COLOR_GAME_OVER = (231, 76, 60)

BLOCK_COLORS = (
    (231, 76, 60), (52, 152, 219), (46, 204, 113), (241, 196, 15),
    (155, 89, 182), (230, 126, 34), (26, 188, 156),
)


@dataclass(frozen=True)
class StackerConfig:
    """Tunable constants for one game.

    Speeds are in pixels per frame; `shift_margin` is the screen y the top
    of the tower is pulled back down to once it climbs above it.
    """

    canvas_width: int = 400
    canvas_height: int = 600
    block_width: float = 100.0
    block_height: float = 40.0
    base_speed: float = 3.0
    speed_step: float = 0.5
    speed_step_every: int = 5
    max_speed: float = 10.0
    shift_margin: float = 100.0
    fps: int = 60
    colors: tuple = BLOCK_COLORS

    def __post_init__(self):
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("canvas dimensions must be positive")
        if not 0 < self.block_width <= self.canvas_width:
            raise ValueError("block_width must be in (0, canvas_width]")
        if not 0 < self.block_height <= self.canvas_height:
            raise ValueError("block_height must be in (0, canvas_height]")
        if self.base_speed <= 0 or self.max_speed < self.base_speed:
            raise ValueError("speeds must satisfy 0 < base_speed <= max_speed")
        if self.speed_step < 0:
            raise ValueError("speed_step must not be negative")
        if self.speed_step_every < 1:
            raise ValueError("speed_step_every must be at least 1")
        if not 0 <= self.shift_margin < self.canvas_height:
            raise ValueError("shift_margin must lie inside the canvas")
        if self.fps <= 0:
            raise ValueError("fps must be positive")
        if not self.colors:
            raise ValueError("at least one block color is required")

    @classmethod
    def from_env(cls, environ=None, prefix="STACKER_"):
        """Build a config from ``STACKER_<FIELD>`` environment variables.

        Unset variables keep their defaults; ``colors`` is not configurable
        this way.
        """
        environ = os.environ if environ is None else environ
        base = cls()
        overrides = {}
        for f in fields(cls):
            if f.name == "colors":
                continue
            raw = environ.get(prefix + f.name.upper())
            if raw is None:
                continue
            kind = type(getattr(base, f.name))
            try:
                overrides[f.name] = kind(raw)
            except ValueError:
                raise ValueError(f"invalid value for {prefix}{f.name.upper()}: {raw!r}") from None
        return replace(base, **overrides)
