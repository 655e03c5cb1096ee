from dataclasses import dataclass
from enum import Enum

from .geometry import Cell, Direction, are_adjacent, in_bounds

GRID_SIZE = 10
INITIAL_SNAKE = (Cell(4, 5), Cell(3, 5), Cell(2, 5), Cell(1, 5), Cell(0, 5))
INITIAL_DIRECTION = Direction.RIGHT
INITIAL_FOOD = Cell(5, 5)


class Speed(Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"

    @property
    def interval_ms(self):
        return SPEEDS[self]["interval_ms"]

    @property
    def label(self):
        return SPEEDS[self]["name"]

    @classmethod
    def coerce(cls, value):
        """Accept a Speed or its name, raise ValueError for anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"invalid speed: {value!r}")


# Tick interval shrinks as speed grows.
SPEEDS = {
    Speed.SLOW: {"name": "Beginner", "interval_ms": 300},
    Speed.NORMAL: {"name": "Standard", "interval_ms": 200},
    Speed.FAST: {"name": "Expert", "interval_ms": 100},
}
DEFAULT_SPEED = Speed.NORMAL


@dataclass(frozen=True)
class GameConfig:
    """Everything needed to (re)build a game: board, opening snake, food and speed."""

    grid_size: int = GRID_SIZE
    initial_snake: tuple = INITIAL_SNAKE
    initial_direction: Direction = INITIAL_DIRECTION
    initial_food: Cell = INITIAL_FOOD
    speed: Speed = DEFAULT_SPEED

    def __post_init__(self):
        if not isinstance(self.grid_size, int) or self.grid_size < 2:
            raise ValueError(f"grid_size must be an integer >= 2, got {self.grid_size!r}")

        snake = tuple(Cell(*segment) for segment in self.initial_snake)
        if not snake:
            raise ValueError("initial_snake must have at least one segment")
        for segment in snake:
            if not in_bounds(segment, self.grid_size):
                raise ValueError(f"initial_snake segment {segment} lies outside the grid")
        if len(set(snake)) != len(snake):
            raise ValueError("initial_snake segments must be distinct")
        for a, b in zip(snake, snake[1:]):
            if not are_adjacent(a, b, self.grid_size):
                raise ValueError(f"initial_snake segments {a} and {b} are not adjacent")
        object.__setattr__(self, "initial_snake", snake)

        object.__setattr__(self, "initial_direction", Direction.coerce(self.initial_direction))
        object.__setattr__(self, "speed", Speed.coerce(self.speed))

        if self.initial_food is not None:
            food = Cell(*self.initial_food)
            if not in_bounds(food, self.grid_size):
                raise ValueError(f"initial_food {food} lies outside the grid")
            if food in snake:
                raise ValueError(f"initial_food {food} is on the snake")
            object.__setattr__(self, "initial_food", food)

    @property
    def initial_length(self):
        return len(self.initial_snake)

    @classmethod
    def centered(cls, grid_size=GRID_SIZE, length=len(INITIAL_SNAKE), **kwargs):
        """Build a horizontal snake centred on the board, head pointing right."""
        if length < 1 or length > grid_size:
            raise ValueError("snake length does not fit within the grid width.")

        tail_x = (grid_size - length) // 2
        head_x = tail_x + length - 1
        head_y = grid_size // 2
        snake = tuple(Cell(head_x - i, head_y) for i in range(length))

        kwargs.setdefault("initial_direction", Direction.RIGHT)
        kwargs.setdefault("initial_food", None)
        return cls(grid_size=grid_size, initial_snake=snake, **kwargs)
