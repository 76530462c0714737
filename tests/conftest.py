from collections import deque

import numpy as np
import pytest

from bug_arena import constants as C
from bug_arena.dialogs import DialogQueue
from bug_arena.level_map import Map, MapObject, ObjectKind, Tile, row_kind
from bug_arena.world import World


class ScriptedRandom:
    """Generator stand-in returning queued values.

    ``integers`` returns the next queued integer (or ``low`` when the queue is
    empty); ``random`` returns the next queued float (or 0.0).
    """

    def __init__(self, randoms=(), integers=()):
        self.randoms = deque(randoms)
        self.ints = deque(integers)
        self.random_calls = 0

    def random(self):
        self.random_calls += 1
        return self.randoms.popleft() if self.randoms else 0.0

    def integers(self, low, high=None):
        if high is None:
            low, high = 0, low
        value = self.ints.popleft() if self.ints else low
        assert low <= value < high, f"scripted {value} outside [{low}, {high})"
        return value


def make_map(start_column=1, end_column=3, rocks=(), level=1):
    tiles = [
        Tile(row_kind(row, column, start_column, end_column), column * C.X_STEP, row * C.Y_STEP, level > C.DARK_LEVELS)
        for row in range(C.ROWS)
        for column in range(C.COLUMNS)
    ]
    start = MapObject(ObjectKind.START, start_column * C.X_STEP, 5 * C.Y_STEP)
    end = MapObject(ObjectKind.DOOR, end_column * C.X_STEP, 0)
    rock_objects = [MapObject(ObjectKind.ROCK, c * C.X_STEP, r * C.Y_STEP) for c, r in rocks]
    return Map(tiles, start, end, rock_objects)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def world():
    w = World(np.random.default_rng(7), DialogQueue())
    w.new_game()
    return w


@pytest.fixture
def quiet_world(world):
    """A running world with no enemies and no items."""
    world.enemies = []
    world.items = []
    return world
