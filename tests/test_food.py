import random

import pytest

from gridsnake.food import FoodPlacer
from gridsnake.geometry import Cell, all_cells


def test_place_food_avoids_snake(rng):
    placer = FoodPlacer(10, rng)
    occupied = {(4, 5), (3, 5), (2, 5), (1, 5), (0, 5)}
    for _ in range(200):
        food = placer.place_food(occupied)
        assert food not in occupied
        assert 0 <= food.x < 10 and 0 <= food.y < 10


def test_place_food_finds_the_only_free_cell(rng):
    placer = FoodPlacer(4, rng)
    occupied = set(all_cells(4)) - {Cell(2, 3)}
    assert placer.place_food(occupied) == Cell(2, 3)


def test_place_food_rejects_a_full_board(rng):
    placer = FoodPlacer(3, rng)
    with pytest.raises(ValueError):
        placer.place_food(all_cells(3))


def test_same_seed_gives_same_food():
    a = FoodPlacer(10, 7)
    b = FoodPlacer(10, random.Random(7))
    assert [a.place_food(set()) for _ in range(5)] == [b.place_food(set()) for _ in range(5)]


def test_place_food_covers_every_free_cell(rng):
    placer = FoodPlacer(3, rng)
    occupied = {Cell(0, 0), Cell(1, 1)}
    seen = {placer.place_food(occupied) for _ in range(500)}
    assert seen == set(all_cells(3)) - occupied


def test_cells_outside_the_grid_do_not_fill_the_board(rng):
    placer = FoodPlacer(2, rng)
    occupied = {Cell(0, 0), Cell(1, 0), Cell(1, 1), Cell(5, 5)}
    assert placer.place_food(occupied) == Cell(0, 1)
