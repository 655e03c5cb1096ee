"""
Game state machine for a single-player grid snake.

SnakeGame owns the snake, the food and the tick loop. Adapters drive it
through start/restart/set_direction/set_speed/pause and read snapshot();
the tick loop calls tick(). Everything runs on one thread, so a tick is
always fully committed before listeners or the next input see the state.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .body import DirectionBuffer, SnakeBody
from .clock import AccumulatorTickLoop
from .collision import is_self_collision, remaining_body
from .config import GameConfig, Speed
from .food import FoodPlacer
from .geometry import Cell, Direction

logger = logging.getLogger(__name__)


class GameState(Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class GameEvent(Enum):
    STARTED = "started"
    MOVED = "moved"
    ATE = "ate"
    GAME_OVER = "game_over"
    PAUSED = "paused"
    RESUMED = "resumed"
    SPEED_CHANGED = "speed_changed"


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only view of the game after the last committed change.

    Attributes:
        snake: segments from head to tail
        food: the single food cell
        direction: the active direction (used by the last committed move)
        game_state: NOT_STARTED, PLAYING or GAME_OVER
        score: snake length minus the opening length (0 before a game starts)
        speed: the current speed setting
        paused: True while a game is in progress but the tick loop is stopped
        game_over_reason: 'self' after a self-collision, otherwise None
        grid_size: side length of the board
    """

    snake: Tuple[Cell, ...]
    food: Cell
    direction: Direction
    game_state: GameState
    score: int
    speed: Speed
    paused: bool
    game_over_reason: Optional[str]
    grid_size: int

    @property
    def head(self):
        return self.snake[0]

    @property
    def length(self):
        return len(self.snake)

    def print_board(self):
        """
        Returns a string representation of the board with:
        . = empty cell
        * = food
        H = snake head
        o = snake body
        Row 0 is printed first, matching screen coordinates.
        """
        board = [["." for _ in range(self.grid_size)] for _ in range(self.grid_size)]
        fx, fy = self.food
        board[fy][fx] = "*"
        for pos_idx, (x, y) in enumerate(self.snake):
            board[y][x] = "H" if pos_idx == 0 else "o"
        return "\n".join("".join(row) for row in board)


class SnakeGame:
    """
    Orchestrates NOT_STARTED -> PLAYING -> GAME_OVER -> PLAYING.

    Args:
        config: GameConfig with board size, opening snake, food and speed
        rng: random.Random or int seed used for food placement
        clock_factory: callable(callback, interval_ms) returning a TickLoop;
            defaults to a frame-driven AccumulatorTickLoop
    """

    def __init__(self, config=None, rng=None, clock_factory=None):
        self.config = config or GameConfig()
        self.placer = FoodPlacer(self.config.grid_size, rng)
        self.speed = self.config.speed
        clock_factory = clock_factory or AccumulatorTickLoop
        self.clock = clock_factory(self.tick, self.speed.interval_ms)

        self.state = GameState.NOT_STARTED
        self.paused = False
        self.game_over_reason = None
        self.closed = False
        self._listeners = []
        self._reset_board()

    # ---- lifecycle ----

    def _reset_board(self):
        self.body = SnakeBody(self.config.initial_snake, self.config.grid_size)
        self.directions = DirectionBuffer(self.config.initial_direction)
        if self.config.initial_food is not None:
            self.food = self.config.initial_food
        else:
            self.food = self.placer.place_food(self.body.occupied())
        self.game_over_reason = None
        self.paused = False

    def _begin(self):
        self.clock.stop()
        self._reset_board()
        self.state = GameState.PLAYING
        self.clock.set_interval(self.speed.interval_ms)
        self.clock.start()
        logger.info(
            "Game started: %d cells, snake length %d, speed %s",
            self.config.grid_size, len(self.body), self.speed.label,
        )
        self._emit(GameEvent.STARTED)
        return self.snapshot()

    def start(self):
        """Begin a game from NOT_STARTED or GAME_OVER; ignored while playing."""
        if self.closed or self.state is GameState.PLAYING:
            return self.snapshot()
        return self._begin()

    def restart(self):
        """Reset to the opening position and play, whatever the current state."""
        if self.closed:
            return self.snapshot()
        return self._begin()

    def close(self):
        """Stop the tick loop and drop listeners; later calls are no-ops."""
        self.clock.stop()
        self._listeners.clear()
        self.closed = True

    # ---- inputs ----

    def set_direction(self, direction):
        """Buffer a turn for the next tick. Returns True if it was accepted."""
        direction = Direction.coerce(direction)
        if self.state is not GameState.PLAYING or self.closed:
            return False
        accepted = self.directions.request(direction)
        if not accepted:
            logger.debug("Rejected reversal %s while moving %s", direction.name, self.directions.active.name)
        return accepted

    def set_speed(self, speed):
        """Change speed; it applies from the next scheduled tick."""
        speed = Speed.coerce(speed)
        if self.state is not GameState.PLAYING or self.closed:
            return False
        if speed is not self.speed:
            self.speed = speed
            self.clock.set_interval(speed.interval_ms)
            logger.debug("Speed changed to %s (%dms)", speed.label, speed.interval_ms)
            self._emit(GameEvent.SPEED_CHANGED)
        return True

    def pause(self):
        if self.state is not GameState.PLAYING or self.paused or self.closed:
            return False
        self.clock.stop()
        self.paused = True
        self._emit(GameEvent.PAUSED)
        return True

    def resume(self):
        if self.state is not GameState.PLAYING or not self.paused or self.closed:
            return False
        self.paused = False
        self.clock.start()
        self._emit(GameEvent.RESUMED)
        return True

    def toggle_pause(self):
        return self.resume() if self.paused else self.pause()

    # ---- simulation ----

    def tick(self):
        """Advance one cell, or end the game on self-collision."""
        if self.state is not GameState.PLAYING or self.paused or self.closed:
            return self.snapshot()

        direction = self.directions.peek()
        new_head = self.body.next_head(direction)
        will_grow = new_head == self.food

        if is_self_collision(new_head, remaining_body(self.body, will_grow)):
            # The colliding move is discarded; snake and food stay as they were.
            self.state = GameState.GAME_OVER
            self.game_over_reason = "self"
            self.paused = False
            self.clock.stop()
            logger.info("Game over at %s, score %d", new_head, self.score)
            self._emit(GameEvent.GAME_OVER)
            return self.snapshot()

        if will_grow:
            # Pick the next food before moving so a full board leaves nothing half-done.
            next_food = self.placer.place_food(self.body.occupied() | {new_head})

        self.directions.commit()
        self.body.advance(new_head, will_grow)
        if will_grow:
            self.food = next_food
            logger.debug("Ate food at %s, next food %s, score %d", new_head, self.food, self.score)
            self._emit(GameEvent.ATE)
        else:
            logger.debug("Moved %s to %s", direction.name, new_head)
            self._emit(GameEvent.MOVED)
        return self.snapshot()

    # ---- read side ----

    @property
    def score(self):
        if self.state is GameState.NOT_STARTED:
            return 0
        return len(self.body) - self.config.initial_length

    def snapshot(self):
        return Snapshot(
            snake=tuple(self.body),
            food=self.food,
            direction=self.directions.active,
            game_state=self.state,
            score=self.score,
            speed=self.speed,
            paused=self.paused,
            game_over_reason=self.game_over_reason,
            grid_size=self.config.grid_size,
        )

    def add_listener(self, callback):
        """Register callback(event, snapshot), called after each committed change."""
        self._listeners.append(callback)

    def remove_listener(self, callback):
        self._listeners.remove(callback)

    def _emit(self, event):
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(event, snap)
