import numpy as np
import pytest

from bug_arena.config import GameConfig
from bug_arena.env import GameEnv
from bug_arena.world import Phase


@pytest.fixture
def env():
    env = GameEnv()
    yield env
    env.close()


class TestGameEnv:
    def test_reset(self, env):
        obs, info = env.reset(seed=0)
        assert obs.shape == (606, 707, 3)
        assert obs.dtype == np.uint8
        assert info["level"] == 1
        assert info["lives"] == 3
        assert info["phase"] == Phase.PLAYING.value

    def test_validate_implementation(self, env):
        assert env.validate_implementation()

    def test_seeded_resets_match(self, env):
        obs_a, _ = env.reset(seed=42)
        snapshot_a = env.world.snapshot()
        obs_b, _ = env.reset(seed=42)
        assert np.array_equal(obs_a, obs_b)
        assert snapshot_a == env.world.snapshot()

    def test_step_moves_player(self, env):
        env.reset(seed=1)
        env.world.enemies = []
        start = env.world.player.cell
        obs, reward, terminated, truncated, info = env.step([1, 0, 0])
        assert env.world.player.cell == (start[0], start[1] - 83)
        assert not terminated
        assert not truncated

    def test_pause_is_acknowledged_headless(self, env):
        env.reset(seed=1)
        env.step([0, 0, 1])
        assert env.world.phase is Phase.PLAYING
        assert Phase.PAUSED in env.world.phase_history

    def test_dialogs_wait_without_auto_dismiss(self):
        env = GameEnv(auto_dismiss=False)
        try:
            _, info = env.reset(seed=3)
            assert info["phase"] == Phase.INTRO.value
            env.step([0, 0, 1])
            assert not env.world.running
            env.step([0, 0, 1])
            assert env.world.running
            env.step([0, 0, 1])
            assert env.world.phase is Phase.PAUSED
            env.step([1, 0, 0])
            assert env.world.phase is Phase.PAUSED
            env.step([0, 0, 1])
            assert env.world.phase is Phase.PLAYING
        finally:
            env.close()

    def test_water_is_punished(self, env):
        env.reset(seed=5)
        env.world.enemies = []
        # Sideways from the start is always water.
        _, reward, terminated, _, info = env.step([3, 0, 0])
        assert reward == pytest.approx(-5.0)
        assert not terminated
        assert info["lives"] == 2

    def test_game_over_terminates(self):
        env = GameEnv(config=GameConfig(start_lives=1))
        try:
            env.reset(seed=5)
            env.world.enemies = []
            _, reward, terminated, _, _ = env.step([3, 0, 0])
            assert terminated
            assert reward == pytest.approx(-10.0)
            _, reward, terminated, _, _ = env.step([0, 0, 0])
            assert terminated
            assert reward == 0.0
        finally:
            env.close()

    def test_truncation(self):
        env = GameEnv(config=GameConfig(max_steps=3))
        try:
            env.reset(seed=2)
            results = []
            for _ in range(3):
                env.world.enemies = []
                results.append(env.step([0, 0, 0])[3])
            assert results == [False, False, True]
        finally:
            env.close()

    def test_gymnasium_checker(self, env):
        from gymnasium.utils.env_checker import check_env

        check_env(env.unwrapped, skip_render_check=True)
