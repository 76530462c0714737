import logging
from enum import Enum

from bug_arena import constants as C
from bug_arena.randomness import take

logger = logging.getLogger(__name__)


class ItemKind(Enum):
    KEY = "key"
    HEART = "heart"
    GEM = "gem"


ITEM_SPRITES = {
    ItemKind.KEY: "key",
    ItemKind.HEART: "heart",
    ItemKind.GEM: "chest",
}


class Item:
    """A collectible sitting on one grid cell."""

    def __init__(self, kind, x, y):
        self.kind = kind
        self.x = x
        self.y = y
        self.destroyed = False
        # Only gems age; other items never fade.
        self.fading = False
        self.age_ms = 0.0

    @property
    def sprite(self):
        return ITEM_SPRITES[self.kind]

    @property
    def cell(self):
        return (self.x, self.y)

    def tick_lifetime(self, dt):
        if self.kind is not ItemKind.GEM or self.destroyed:
            return
        self.age_ms += dt * 1000.0
        if self.age_ms >= C.GEM_FADE_MS:
            self.fading = True
        if self.age_ms >= C.GEM_DESTROY_MS:
            self.destroyed = True
            logger.debug("Gem at %s expired", self.cell)

    def __repr__(self):
        return f"Item({self.kind.value}, {self.x}, {self.y})"


def near_rock(x, y, rocks):
    return any(
        abs(x - rock.x) <= C.X_STEP and abs(y - rock.y) <= C.Y_STEP
        for rock in rocks
    )


def item_pool(level_map):
    """Cells an item may be placed on, in tile order."""
    pool = []
    for tile in level_map.tiles:
        if tile.lethal or tile.blocking:
            continue
        if level_map.is_start(tile.x, tile.y) or level_map.is_end(tile.x, tile.y):
            continue
        if near_rock(tile.x, tile.y, level_map.rocks):
            continue
        pool.append((tile.x, tile.y))
    return pool


def place_items(level_map, level, rng):
    """Scatter the key, a gem and, on every fifth level, maybe a heart."""
    pool = item_pool(level_map)
    items = []

    def drop(kind):
        cell = take(rng, pool)
        if cell is None:
            logger.warning("No free cell left for %s on level %d", kind.value, level)
            return
        items.append(Item(kind, *cell))

    drop(ItemKind.KEY)
    drop(ItemKind.GEM)
    if level % C.HEART_LEVEL_INTERVAL == 0 and rng.random() > 0.5:
        drop(ItemKind.HEART)
    return items
