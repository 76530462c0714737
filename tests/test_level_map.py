import numpy as np
import pytest

from bug_arena import constants as C
from bug_arena.level_map import TileKind, generate_map


def kinds_by_row(level_map):
    rows = {}
    for tile in level_map.tiles:
        rows.setdefault(tile.y // C.Y_STEP, []).append(tile.kind)
    return rows


class TestGenerateMap:
    @pytest.mark.parametrize("seed", range(10))
    def test_grid_shape_and_rows(self, seed):
        level_map = generate_map(1, np.random.default_rng(seed))
        assert len(level_map.tiles) == C.ROWS * C.COLUMNS

        rows = kinds_by_row(level_map)
        assert rows[0].count(TileKind.STONE) == 1
        assert rows[0].count(TileKind.WALL) == C.COLUMNS - 1
        assert set(rows[1]) == {TileKind.GRASS}
        assert set(rows[2]) == set(rows[3]) == {TileKind.STONE}
        assert set(rows[4]) == {TileKind.GRASS}
        assert rows[5].count(TileKind.STONE) == 1
        assert rows[5].count(TileKind.WATER) == C.COLUMNS - 1

    @pytest.mark.parametrize("seed", range(20))
    def test_start_and_door_placement(self, seed):
        level_map = generate_map(1, np.random.default_rng(seed))
        assert level_map.start.x // C.X_STEP in (1, 2, 3, 4)
        assert level_map.end.x // C.X_STEP in (1, 2, 3, 4)
        assert level_map.start.y == 5 * C.Y_STEP
        assert level_map.end.y == 0
        assert level_map.tile_at(level_map.start.x, level_map.start.y).kind is TileKind.STONE
        assert level_map.tile_at(level_map.end.x, level_map.end.y).kind is TileKind.STONE

    @pytest.mark.parametrize("level", [1, 5, 9])
    def test_no_rocks_before_level_ten(self, level, rng):
        assert generate_map(level, rng).rocks == []

    @pytest.mark.parametrize("seed", range(30))
    def test_rock_placement(self, seed):
        level_map = generate_map(10 + seed, np.random.default_rng(seed))
        cells = [(r.x, r.y) for r in level_map.rocks]
        assert 1 <= len(cells) <= 3
        assert len(set(cells)) == len(cells)
        for x, y in cells:
            tile = level_map.tile_at(x, y)
            assert tile.kind not in (TileKind.WATER, TileKind.WALL)
            assert x not in (level_map.start.x, level_map.end.x)

    def test_same_seed_same_map(self):
        a = generate_map(12, np.random.default_rng(99))
        b = generate_map(12, np.random.default_rng(99))
        assert a.tiles == b.tiles
        assert a.start == b.start
        assert a.end == b.end
        assert a.rocks == b.rocks

    def test_scripted_columns(self, scripted):
        level_map = generate_map(1, scripted(integers=[2, 4]))
        assert level_map.start.x == 2 * C.X_STEP
        assert level_map.end.x == 4 * C.X_STEP

    def test_dark_skins_past_threshold(self, rng):
        light = generate_map(C.DARK_LEVELS, rng)
        dark = generate_map(C.DARK_LEVELS + 1, rng)
        assert {t.sprite for t in light.tiles if t.kind is TileKind.WATER} == {"water-block"}
        assert {t.sprite for t in dark.tiles if t.kind is TileKind.WATER} == {"lava-block"}
        assert {t.sprite for t in dark.tiles if t.kind is TileKind.GRASS} == {"dead-grass-block"}

    def test_level_must_be_positive(self, rng):
        with pytest.raises(ValueError):
            generate_map(0, rng)
