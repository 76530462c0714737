import os
from dataclasses import dataclass, fields
from typing import Optional

from bug_arena import constants


@dataclass
class GameConfig:
    """Run-time knobs for the environment and the manual player."""

    fps: int = 30
    max_steps: int = 5000
    start_lives: int = constants.START_LIVES
    auto_dismiss: bool = True
    seed: Optional[int] = None
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")
        if not 1 <= self.start_lives <= constants.MAX_LIVES:
            raise ValueError(
                f"start_lives must be between 1 and {constants.MAX_LIVES}, got {self.start_lives}"
            )
        self.log_level = self.log_level.upper()

    @property
    def frame_time(self):
        return 1.0 / self.fps

    @classmethod
    def from_env(cls, environ=None, **overrides):
        """Build a config from ``BUG_ARENA_*`` variables; keyword overrides win."""
        environ = os.environ if environ is None else environ
        values = {}
        for field in fields(cls):
            raw = environ.get(f"BUG_ARENA_{field.name.upper()}")
            if raw is None:
                continue
            values[field.name] = _parse(field.name, raw)
        # BUG_ARENA_LIVES is the documented spelling
        if "BUG_ARENA_LIVES" in environ:
            values["start_lives"] = _parse("start_lives", environ["BUG_ARENA_LIVES"])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _parse(name, raw):
    if name == "log_level":
        return raw
    if name == "auto_dismiss":
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"BUG_ARENA_AUTO_DISMISS must be a boolean, got {raw!r}")
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"BUG_ARENA_{name.upper()} must be an integer, got {raw!r}") from None
