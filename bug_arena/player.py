from enum import Enum

from bug_arena import constants as C
from bug_arena.geometry import Box


class Command(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    PAUSE = "pause"
    FIRE_LEFT = "fire-left"
    FIRE_RIGHT = "fire-right"

    @classmethod
    def parse(cls, token):
        """Return the command for ``token`` or None when it isn't one."""
        if isinstance(token, cls):
            return token
        try:
            return cls(token)
        except ValueError:
            return None


MOVES = {
    Command.LEFT: (-C.X_STEP, 0),
    Command.RIGHT: (C.X_STEP, 0),
    Command.UP: (0, -C.Y_STEP),
    Command.DOWN: (0, C.Y_STEP),
}


class Player(Box):
    def __init__(self, x=0, y=0, lives=C.START_LIVES):
        self.x = x
        self.y = y
        self.width = C.PLAYER_WIDTH
        self.height = C.PLAYER_HEIGHT
        self.max_lives = C.MAX_LIVES
        self.lives = lives
        self.has_key = False
        self.sprite = "char-boy"

    @property
    def left(self):
        # The sprite has empty space on its left side.
        return self.x + C.PLAYER_HITBOX_INSET

    def place_at(self, point):
        self.x = point.x
        self.y = point.y

    def target(self, direction):
        dx, dy = MOVES[direction]
        return self.x + dx, self.y + dy

    def can_enter(self, x, y, level_map):
        tile = level_map.tile_at(x, y)
        if tile is None:
            return False
        if level_map.is_end(x, y) and not self.has_key:
            return False
        if level_map.rock_at(x, y):
            return False
        return not tile.blocking

    def move(self, direction, level_map):
        """Take one grid step if the target cell allows it. Returns True on a move."""
        direction = Command.parse(direction)
        if direction not in MOVES:
            return False
        new_x, new_y = self.target(direction)
        if not self.can_enter(new_x, new_y, level_map):
            return False
        self.x, self.y = new_x, new_y
        return True

    def gain_life(self):
        if self.lives < self.max_lives:
            self.lives += 1


class Attack(Box):
    """A bullet fired horizontally from the player's cell."""

    def __init__(self, x, y, speed):
        self.x = x
        self.y = y
        self.width = C.ATTACK_WIDTH
        self.height = C.ATTACK_HEIGHT
        self.speed = speed
        self.sprite = "circle"

    @classmethod
    def fired(cls, player, command):
        speed = -C.ATTACK_SPEED if command is Command.FIRE_LEFT else C.ATTACK_SPEED
        return cls(player.x, player.y, speed)

    @property
    def spent(self):
        return self.speed == 0

    def update(self, dt, game_speed, paused=False):
        if not paused:
            self.x += dt * self.speed * game_speed
        if self.x > C.X_RIGHT or self.x < C.X_LEFT - C.X_STEP:
            self.speed = 0
