import logging

import numpy as np
import pytest

from bug_arena import constants as C
from bug_arena.items import Item, ItemKind, item_pool, place_items
from bug_arena.level_map import Map, MapObject, ObjectKind, Tile, TileKind, generate_map

from tests.conftest import make_map


class TestItemPool:
    def test_excludes_start_end_and_hazards(self):
        level_map = make_map(start_column=2, end_column=3)
        pool = item_pool(level_map)
        assert (2 * C.X_STEP, 5 * C.Y_STEP) not in pool
        assert (3 * C.X_STEP, 0) not in pool
        # Rows 1-4 are the only safe rows.
        assert {y for _, y in pool} == {C.Y_STEP, 2 * C.Y_STEP, 3 * C.Y_STEP, 4 * C.Y_STEP}
        assert len(pool) == 4 * C.COLUMNS

    def test_excludes_cells_next_to_rocks(self):
        level_map = make_map(start_column=1, end_column=1, rocks=[(4, 2)])
        pool = item_pool(level_map)
        for column in (3, 4, 5):
            for row in (1, 2, 3):
                assert (column * C.X_STEP, row * C.Y_STEP) not in pool
        assert (2 * C.X_STEP, 2 * C.Y_STEP) in pool
        assert (4 * C.X_STEP, 4 * C.Y_STEP) in pool
        assert len(pool) == 4 * C.COLUMNS - 9

    @pytest.mark.parametrize("seed", range(25))
    def test_generated_levels_respect_pool(self, seed):
        rng = np.random.default_rng(seed)
        level = 10 + seed
        level_map = generate_map(level, rng)
        pool = item_pool(level_map)
        for x, y in pool:
            assert not level_map.is_start(x, y)
            assert not level_map.is_end(x, y)
            for rock in level_map.rocks:
                assert abs(x - rock.x) > C.X_STEP or abs(y - rock.y) > C.Y_STEP


class TestPlaceItems:
    @pytest.mark.parametrize("seed", range(20))
    def test_key_and_gem_on_distinct_cells(self, seed):
        rng = np.random.default_rng(seed)
        level_map = generate_map(11, rng)
        items = place_items(level_map, 11, rng)
        kinds = [item.kind for item in items]
        assert kinds[:2] == [ItemKind.KEY, ItemKind.GEM]
        cells = [item.cell for item in items]
        assert len(set(cells)) == len(cells)
        pool = item_pool(level_map)
        assert all(cell in pool for cell in cells)

    def test_heart_on_fifth_level_when_lucky(self, scripted):
        rng = scripted(randoms=[0.9])
        items = place_items(make_map(), 5, rng)
        assert [item.kind for item in items] == [ItemKind.KEY, ItemKind.GEM, ItemKind.HEART]
        assert len({item.cell for item in items}) == 3

    def test_no_heart_when_unlucky(self, scripted):
        items = place_items(make_map(), 10, scripted(randoms=[0.5]))
        assert [item.kind for item in items] == [ItemKind.KEY, ItemKind.GEM]

    def test_no_heart_off_the_fifth_level(self, scripted):
        rng = scripted(randoms=[0.99])
        items = place_items(make_map(), 7, rng)
        assert ItemKind.HEART not in [item.kind for item in items]
        assert rng.random_calls == 0

    def test_exhausted_pool_skips_item(self, caplog):
        tile = Tile(TileKind.GRASS, C.X_STEP, C.Y_STEP, False)
        start = MapObject(ObjectKind.START, 0, 5 * C.Y_STEP)
        end = MapObject(ObjectKind.DOOR, 0, 0)
        tiny = Map([tile], start, end)
        with caplog.at_level(logging.WARNING, logger="bug_arena.items"):
            items = place_items(tiny, 1, np.random.default_rng(0))
        assert [item.kind for item in items] == [ItemKind.KEY]
        assert "gem" in caplog.text


class TestGemLifetime:
    def test_fades_then_expires(self):
        gem = Item(ItemKind.GEM, 0, C.Y_STEP)
        for _ in range(4):
            gem.tick_lifetime(0.5)
        assert not gem.fading
        gem.tick_lifetime(0.5)  # 2500 ms
        assert gem.fading
        assert not gem.destroyed
        for _ in range(2):
            gem.tick_lifetime(0.5)
        assert not gem.destroyed  # 3500 ms
        gem.tick_lifetime(0.5)  # 4000 ms
        assert gem.destroyed

    def test_key_never_expires(self):
        key = Item(ItemKind.KEY, 0, C.Y_STEP)
        key.tick_lifetime(60.0)
        assert not key.fading
        assert not key.destroyed
