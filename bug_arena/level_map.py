import logging
from collections import namedtuple
from enum import Enum

from bug_arena import constants as C
from bug_arena.randomness import rand_int, take

logger = logging.getLogger(__name__)


class TileKind(Enum):
    GRASS = "grass"
    STONE = "stone"
    WATER = "water"
    WALL = "wall"


# Skins swap once the level passes DARK_LEVELS; behavior does not change.
TILE_SKINS = {
    TileKind.GRASS: ("grass-block", "dead-grass-block"),
    TileKind.STONE: ("stone-block", "dark-stone-block"),
    TileKind.WATER: ("water-block", "lava-block"),
    TileKind.WALL: ("wall", "wall"),
}


class Tile(namedtuple("Tile", ["kind", "x", "y", "dark"])):
    __slots__ = ()

    @property
    def sprite(self):
        light, dark = TILE_SKINS[self.kind]
        return dark if self.dark else light

    @property
    def lethal(self):
        return self.kind is TileKind.WATER

    @property
    def blocking(self):
        return self.kind is TileKind.WALL


class ObjectKind(Enum):
    START = "start"
    DOOR = "door"
    ROCK = "rock"


MapObject = namedtuple("MapObject", ["kind", "x", "y"])


class Map:
    """One level's background grid plus its start point, door and rocks."""

    def __init__(self, tiles, start, end, rocks=None):
        self.tiles = list(tiles)
        self.start = start
        self.end = end
        self.rocks = list(rocks or [])
        self._by_cell = {(t.x, t.y): t for t in self.tiles}

    def tile_at(self, x, y):
        return self._by_cell.get((x, y))

    def rock_at(self, x, y):
        return any(rock.x == x and rock.y == y for rock in self.rocks)

    def is_end(self, x, y):
        return self.end.x == x and self.end.y == y

    def is_start(self, x, y):
        return self.start.x == x and self.start.y == y


def row_kind(row, column, start_column, end_column):
    if row == 0:
        return TileKind.STONE if column == end_column else TileKind.WALL
    if row in (1, 4):
        return TileKind.GRASS
    if row in (2, 3):
        return TileKind.STONE
    return TileKind.STONE if column == start_column else TileKind.WATER


def generate_map(level, rng):
    """Build the map for ``level``.

    The start sits on the bottom (water) row and the door in the top (wall)
    row, each in a column drawn from 1..4. From ``ROCK_MIN_LEVEL`` onward
    1-3 rocks are placed on open tiles outside the start and door columns.
    """
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")

    start_column = rand_int(rng, *C.START_COLUMNS)
    end_column = rand_int(rng, *C.START_COLUMNS)
    dark = level > C.DARK_LEVELS

    tiles = []
    for row in range(C.ROWS):
        for column in range(C.COLUMNS):
            kind = row_kind(row, column, start_column, end_column)
            tiles.append(Tile(kind, column * C.X_STEP, row * C.Y_STEP, dark))

    start = MapObject(ObjectKind.START, start_column * C.X_STEP, (C.ROWS - 1) * C.Y_STEP)
    end = MapObject(ObjectKind.DOOR, end_column * C.X_STEP, C.Y_TOP)

    rocks = []
    if level >= C.ROCK_MIN_LEVEL:
        pool = [
            (t.x, t.y)
            for t in tiles
            if not (t.lethal or t.blocking) and t.x != start.x and t.x != end.x
        ]
        for _ in range(rand_int(rng, *C.ROCK_COUNT)):
            cell = take(rng, pool)
            if cell is None:
                break
            rocks.append(MapObject(ObjectKind.ROCK, *cell))

    logger.debug(
        "Generated map for level %d: start=%s door=%s rocks=%s",
        level, (start.x, start.y), (end.x, end.y), [(r.x, r.y) for r in rocks],
    )
    return Map(tiles, start, end, rocks)
