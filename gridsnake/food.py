import random

from .geometry import Cell, all_cells


class FoodPlacer:
    """Picks food cells uniformly at random from the free part of the board."""

    def __init__(self, grid_size, rng=None):
        self.grid_size = grid_size
        if rng is None or isinstance(rng, int):
            rng = random.Random(rng)
        self.rng = rng

    def place_food(self, occupied):
        """Return a random grid position that is not occupied by the snake."""
        occupied = set(occupied)
        if not set(all_cells(self.grid_size)) - occupied:
            raise ValueError("no free cell left for food")

        while True:
            pos = Cell(
                self.rng.randint(0, self.grid_size - 1),
                self.rng.randint(0, self.grid_size - 1),
            )
            if pos not in occupied:
                return pos
