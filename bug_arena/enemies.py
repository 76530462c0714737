import logging
from enum import Enum

from bug_arena import constants as C
from bug_arena.geometry import Box
from bug_arena.randomness import choice, rand_int

logger = logging.getLogger(__name__)


class EnemyKind(Enum):
    BASIC = "enemy"
    CHARGER = "charger"
    BACKTRACKER = "backtracker"
    SIDESTEPPER = "sidestepper"
    SLOWPOKE = "slowpoke"
    CENTIPEDE = "centipede"


# Per-kind construction rules. "interval" is the (low, high) range in ms the
# instance draws its recurring behavior timer from, or None for no timer.
ENEMY_PROFILES = {
    EnemyKind.BASIC: {
        "sprite": "enemy-bug",
        "speed": (C.ENEMY_MIN_SPEED, C.ENEMY_MAX_SPEED),
        "width": C.ENEMY_WIDTH,
        "interval": None,
    },
    EnemyKind.CHARGER: {
        "sprite": "charger",
        "speed": (C.ENEMY_MIN_SPEED, C.ENEMY_MAX_SPEED),
        "width": C.ENEMY_WIDTH,
        "interval": C.CHARGE_INTERVAL_MS,
    },
    EnemyKind.BACKTRACKER: {
        "sprite": "backtracker",
        "speed": (C.ENEMY_MIN_SPEED, C.ENEMY_MAX_SPEED),
        "width": C.ENEMY_WIDTH,
        "interval": C.BACKTRACK_INTERVAL_MS,
    },
    EnemyKind.SIDESTEPPER: {
        "sprite": "sidestepper",
        "speed": (C.ENEMY_MIN_SPEED, C.ENEMY_MAX_SPEED),
        "width": C.ENEMY_WIDTH,
        "interval": C.SIDESTEP_INTERVAL_MS,
    },
    EnemyKind.SLOWPOKE: {
        "sprite": "slowpoke",
        "speed": C.SLOWPOKE_SPEED,
        "width": C.ENEMY_WIDTH,
        "interval": None,
    },
    EnemyKind.CENTIPEDE: {
        "sprite": "centipede",
        "speed": (C.ENEMY_MIN_SPEED, C.ENEMY_MAX_SPEED),
        "width": C.CENTIPEDE_WIDTH,
        "interval": None,
    },
}

CHARGING_SPRITE = "charger-charging"
BACKTRACKER_REVERSE_SPRITE = "backtracker-reverse"


class Enemy(Box):
    """A bug crossing the arena. Behavior is selected by ``kind``."""

    def __init__(self, kind, np_random):
        self.kind = kind
        self.np_random = np_random
        self.alive = True

        profile = ENEMY_PROFILES[kind]
        self.width = profile["width"]
        self.height = C.ENEMY_HEIGHT
        self.min_speed, self.max_speed = profile["speed"]
        self.default_sprite = profile["sprite"]
        self.sprite = self.default_sprite

        self.x = 0
        self.y = 0
        self.speed = 0
        self.start_x().start_y().set_speed()

        # Charger
        self.base_speed = self.speed
        self.charge_ms = 0.0
        # Sidestepper
        self.target_y = self.y
        self.side_step_speed = 0

        interval = profile["interval"]
        self.interval_ms = rand_int(np_random, *interval) if interval else None
        self.timer_ms = self.interval_ms

    def start_x(self):
        self.x = choice(self.np_random, C.ENEMY_START_COLUMNS) * C.X_STEP
        return self

    def start_y(self):
        self.y = choice(self.np_random, C.ENEMY_START_ROWS) * C.Y_STEP
        return self

    def set_speed(self):
        self.speed = rand_int(self.np_random, self.min_speed, self.max_speed)
        return self

    def respawn(self):
        """Fresh start column, row and speed; any running behavior is cancelled."""
        self.start_x().start_y().set_speed()
        self.base_speed = self.speed
        self.charge_ms = 0.0
        self.target_y = self.y
        self.side_step_speed = 0
        self.sprite = self.default_sprite

    @property
    def charging(self):
        return self.charge_ms > 0

    @property
    def stepping(self):
        return self.side_step_speed != 0

    # --- Background timers ---

    def tick_timers(self, dt):
        """Advance behavior timers by ``dt`` seconds. Runs even while paused."""
        if not self.alive:
            return
        if self.charge_ms > 0:
            self.charge_ms -= dt * 1000.0
            if self.charge_ms <= 0:
                self._end_charge()
        if self.interval_ms is None:
            return
        self.timer_ms -= dt * 1000.0
        while self.timer_ms <= 0:
            self.timer_ms += self.interval_ms
            self.on_timer()

    def on_timer(self):
        if self.kind is EnemyKind.CHARGER:
            self._maybe_charge()
        elif self.kind is EnemyKind.SIDESTEPPER:
            self._maybe_sidestep()
        elif self.kind is EnemyKind.BACKTRACKER:
            self._maybe_backtrack()

    def _maybe_charge(self):
        if self.np_random.random() > 0.5:
            self.speed = C.CHARGE_SPEED
            self.sprite = CHARGING_SPRITE
            self.charge_ms = C.CHARGE_DURATION_MS
            logger.debug("Charger at %s charging", self.cell)

    def _end_charge(self):
        self.charge_ms = 0.0
        self.speed = self.base_speed
        self.sprite = self.default_sprite

    def _maybe_sidestep(self):
        if self.stepping:
            return
        if self.np_random.random() <= 0.3:
            return
        # Never into the bottom (start) row or the top (door) row.
        if self.np_random.random() >= 0.5:
            if self.y < C.Y_BOTTOM - 2 * C.Y_STEP:
                self.target_y = self.y + C.Y_STEP
                self.side_step_speed = C.SIDESTEP_SPEED
        elif self.y > C.Y_TOP + C.Y_STEP:
            self.target_y = self.y - C.Y_STEP
            self.side_step_speed = -C.SIDESTEP_SPEED

    def _maybe_backtrack(self):
        if self.np_random.random() > 0.2:
            self.speed *= -1
            self._face()

    def _face(self):
        self.sprite = self.default_sprite if self.speed > 0 else BACKTRACKER_REVERSE_SPRITE

    # --- Movement ---

    def update(self, dt, game_speed, paused=False):
        if not paused:
            self.x += dt * self.speed * game_speed

        if self.kind is EnemyKind.BACKTRACKER:
            self._turn_at_edges()
            return

        if self.x > C.X_RIGHT:
            self.x = -3 * C.X_STEP
            self.start_y()
            self.target_y = self.y
            self.side_step_speed = 0

        if self.kind is EnemyKind.SIDESTEPPER and not paused:
            self._advance_sidestep(dt, game_speed)

    def _turn_at_edges(self):
        if self.left > C.X_RIGHT + 2 * C.X_STEP and self.speed > 0:
            self.speed *= -1
            self._face()
        if self.right < C.X_LEFT - 2 * C.X_STEP and self.speed < 0:
            self.speed *= -1
            self._face()

    def _advance_sidestep(self, dt, game_speed):
        self.y += dt * self.side_step_speed * game_speed
        if (self.side_step_speed > 0 and self.y >= self.target_y) or (
            self.side_step_speed < 0 and self.y <= self.target_y
        ):
            self.y = self.target_y
            self.side_step_speed = 0

    def __repr__(self):
        return f"Enemy({self.kind.value}, x={self.x:.1f}, y={self.y:.1f}, speed={self.speed})"


# --- Spawning ---


def enemy_weights(level):
    """Chance of each kind appearing on ``level``.

    Accumulated in whole percent so the stepwise drain of Basic is exact.
    """
    percent = {kind: 0 for kind in EnemyKind}
    percent[EnemyKind.BASIC] = 100
    if level > 5:
        for _ in range(level - 2):
            if percent[EnemyKind.BASIC] <= 0:
                break
            percent[EnemyKind.BASIC] = max(0, percent[EnemyKind.BASIC] - 5)
            for kind in EnemyKind:
                if kind is not EnemyKind.BASIC:
                    percent[kind] += 1
    return {kind: value / 100 for kind, value in percent.items()}


def weighted_pool(weights):
    pool = []
    for kind, weight in weights.items():
        pool.extend([kind] * max(0, int(round(weight * 100))))
    if not pool:
        pool.append(EnemyKind.BASIC)
    return pool


def enemy_count(level):
    if level > 25:
        return C.MAX_ENEMIES
    return 2 + level // 5


def spawn_enemies(level, rng):
    pool = weighted_pool(enemy_weights(level))
    enemies = [Enemy(choice(rng, pool), rng) for _ in range(enemy_count(level))]
    logger.debug("Spawned for level %d: %s", level, [e.kind.value for e in enemies])
    return enemies
