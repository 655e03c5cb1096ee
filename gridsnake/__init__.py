"""Deterministic core of a wrap-around grid snake game."""

from .clock import AccumulatorTickLoop, ClockState, ScheduledTickLoop, TickLoop
from .config import GameConfig, Speed
from .food import FoodPlacer
from .game import GameEvent, GameState, Snapshot, SnakeGame
from .geometry import Cell, Direction, step

__version__ = "0.1"

__all__ = [
    "AccumulatorTickLoop",
    "Cell",
    "ClockState",
    "Direction",
    "FoodPlacer",
    "GameConfig",
    "GameEvent",
    "GameState",
    "ScheduledTickLoop",
    "Snapshot",
    "SnakeGame",
    "Speed",
    "TickLoop",
    "step",
]
