"""Bug Arena: grab the key, dodge the bugs, reach the door."""

from bug_arena.config import GameConfig
from bug_arena.world import GameState, Phase, World

__version__ = "0.1.0"

__all__ = ["GameConfig", "GameState", "Phase", "World", "__version__"]
