import logging
from collections import deque
from enum import Enum

import numpy as np

from bug_arena import constants as C
from bug_arena import dialogs as messages
from bug_arena.dialogs import DialogQueue
from bug_arena.enemies import spawn_enemies
from bug_arena.geometry import overlaps
from bug_arena.items import ItemKind, place_items
from bug_arena.level_map import generate_map
from bug_arena.player import MOVES, Attack, Command, Player
from bug_arena.randomness import discard

logger = logging.getLogger(__name__)

# Where the player waits while the game-over dialog is open.
OFFSCREEN = (-100, -100)


class Phase(Enum):
    INTRO = "intro"
    PLAYING = "playing"
    PAUSED = "paused"
    LEVEL_TRANSITION = "level_transition"
    DEAD = "dead"
    GAME_OVER = "game_over"


class GameState:
    def __init__(self):
        self.paused = False
        self.level = 1
        self.speed = 1.0
        self.bullets = 0

    def __repr__(self):
        return (
            f"GameState(level={self.level}, speed={self.speed}, "
            f"bullets={self.bullets}, paused={self.paused})"
        )


class World:
    """Owns every live entity of one running game and advances it tick by tick.

    Dialogs are suspension points: the world pauses itself, hands the message
    to ``dialogs`` and continues from the dismiss callback. ``update`` returns
    the events of the tick as ``(name, detail)`` tuples.
    """

    def __init__(self, np_random=None, dialogs=None, start_lives=C.START_LIVES):
        self.np_random = np_random if np_random is not None else np.random.default_rng()
        self.dialogs = dialogs if dialogs is not None else DialogQueue()
        self.start_lives = start_lives

        self.state = None
        self.map = None
        self.player = None
        self.enemies = []
        self.items = []
        self.attacks = []

        self.phase = Phase.INTRO
        self.phase_history = deque([Phase.INTRO], maxlen=32)
        self.events = []
        self.level_time = 0.0
        self.final_level = None
        self.best_level = 0

    # --- Lifecycle ---

    def start(self):
        """Show the two intro messages, then begin a new game."""
        self._enter(Phase.INTRO)
        self.dialogs.show(
            messages.OPENING_MESSAGE,
            lambda: self.dialogs.show(messages.INSTRUCTION_MESSAGE, self.new_game),
        )

    def new_game(self):
        self.state = GameState()
        self.map = generate_map(self.state.level, self.np_random)
        self.player = Player(lives=self.start_lives)
        self.player.place_at(self.map.start)
        self._populate()
        self.attacks = []
        self.best_level = max(self.best_level, self.state.level)
        self._enter(Phase.PLAYING)

    def _populate(self):
        for enemy in self.enemies:
            enemy.alive = False
        self.enemies = spawn_enemies(self.state.level, self.np_random)
        self.items = place_items(self.map, self.state.level, self.np_random)
        self.level_time = 0.0

    def _enter(self, phase):
        if phase is not self.phase:
            logger.info("Phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        self.phase_history.append(phase)

    def _resume(self):
        self.state.paused = False
        self._enter(Phase.PLAYING)

    def _emit(self, name, detail=None):
        self.events.append((name, detail))

    @property
    def running(self):
        return self.state is not None

    # --- Input ---

    def handle_input(self, token):
        if not self.running or self.state.paused:
            return
        command = Command.parse(token)
        if command is None:
            logger.debug("Ignoring unknown input %r", token)
            return

        if command in MOVES:
            self.player.move(command, self.map)
        elif command is Command.PAUSE:
            self.pause()
        elif self.state.bullets > 0:
            self.attacks.append(Attack.fired(self.player, command))
            self.state.bullets -= 1
            self._emit("fired", command.value)

    def pause(self):
        if not self.running or self.state.paused:
            return
        self.state.paused = True
        self._enter(Phase.PAUSED)
        self.dialogs.show(messages.PAUSE_MESSAGE, self._resume)

    # --- Tick ---

    def update(self, dt):
        self.events = []
        if not self.running:
            return self.events

        # Behavior timers and gem lifetimes ignore the pause flag.
        for enemy in self.enemies:
            enemy.tick_timers(dt)
        for item in self.items:
            item.tick_lifetime(dt)

        paused = self.state.paused
        for enemy in self.enemies:
            enemy.update(dt, self.state.speed, paused)
        for attack in self.attacks:
            attack.update(dt, self.state.speed, paused)

        self.items = [item for item in self.items if not item.destroyed]
        self.attacks = [attack for attack in self.attacks if not attack.spent]

        if paused:
            return self.events
        self.level_time += dt

        if self._check_collisions():
            self._lose_life()
            return self.events

        self._collect_items()
        self._check_level_completion()
        return self.events

    def _check_collisions(self):
        """Resolve bullet hits and report whether the player got hit."""
        player_hit = False
        for enemy in self.enemies[:]:
            if overlaps(self.player, enemy):
                player_hit = True
            for attack in self.attacks[:]:
                if overlaps(enemy, attack):
                    enemy.alive = False
                    discard(self.enemies, enemy)
                    discard(self.attacks, attack)
                    self._emit("enemy_killed", enemy.kind.value)
                    break

        tile = self.map.tile_at(self.player.x, self.player.y)
        if tile is not None and tile.lethal:
            player_hit = True
        return player_hit

    def _lose_life(self):
        if self.player.lives - 1 <= 0:
            self._game_over()
        else:
            self._die()

    def _die(self):
        self.player.lives -= 1
        self._emit("life_lost", self.player.lives)
        logger.info("Player caught on level %d, %d lives left", self.state.level, self.player.lives)
        self.state.paused = True
        self._enter(Phase.DEAD)
        self.player.place_at(self.map.start)
        for enemy in self.enemies:
            enemy.respawn()
        self.dialogs.show(messages.DEATH_MESSAGE, self._resume)

    def _game_over(self):
        self.final_level = self.state.level
        self.best_level = max(self.best_level, self.final_level)
        self._emit("game_over", self.final_level)
        logger.info("Game over on level %d", self.final_level)

        for enemy in self.enemies:
            enemy.alive = False
        self.state = GameState()
        self.state.paused = True
        self.map = generate_map(self.state.level, self.np_random)
        self.player = Player(*OFFSCREEN, lives=self.start_lives)
        self.enemies = []
        self.items = []
        self.attacks = []
        self._enter(Phase.GAME_OVER)
        self.dialogs.show(
            messages.GAME_OVER_MESSAGE.format(level=self.final_level), self._restart
        )

    def _restart(self):
        self.player.place_at(self.map.start)
        self._populate()
        self._resume()

    def _collect_items(self):
        for item in self.items[:]:
            if item.cell != self.player.cell:
                continue
            if item.kind is ItemKind.KEY:
                self.player.has_key = True
            elif item.kind is ItemKind.HEART:
                self.player.gain_life()
            elif item.kind is ItemKind.GEM:
                self.state.bullets += 1
            discard(self.items, item)
            self._emit("pickup", item.kind.value)
            logger.debug("Picked up %s at %s", item.kind.value, item.cell)

    def _check_level_completion(self):
        if self.map.is_end(self.player.x, self.player.y):
            self.next_level()

    def next_level(self):
        self._enter(Phase.LEVEL_TRANSITION)
        cleared = self.state.level
        self.state.level += 1
        if self.state.level > C.DARK_LEVELS and self.state.speed < C.MAX_GAME_SPEED:
            self.state.speed = round(self.state.speed + C.GAME_SPEED_STEP, 2)
        self.map = generate_map(self.state.level, self.np_random)
        self.player.place_at(self.map.start)
        self._populate()
        self.attacks = []
        self.player.has_key = False
        self.best_level = max(self.best_level, self.state.level)
        self._emit("level_complete", cleared)
        logger.info(
            "Level %d cleared in %.1fs, speed now %.2f", cleared, self.level_time, self.state.speed
        )
        self._enter(Phase.PLAYING)

    # --- Read-only view for renderers ---

    def snapshot(self):
        if not self.running:
            return {"phase": self.phase.value, "dialog": self.dialogs.pending}
        return {
            "phase": self.phase.value,
            "dialog": self.dialogs.pending,
            "level": self.state.level,
            "speed": self.state.speed,
            "bullets": self.state.bullets,
            "paused": self.state.paused,
            "lives": self.player.lives,
            "has_key": self.player.has_key,
            "player": (self.player.x, self.player.y),
            "tiles": tuple((t.sprite, t.x, t.y) for t in self.map.tiles),
            "start": (self.map.start.x, self.map.start.y),
            "door": (self.map.end.x, self.map.end.y),
            "rocks": tuple((r.x, r.y) for r in self.map.rocks),
            "enemies": tuple((e.sprite, e.x, e.y, e.width) for e in self.enemies),
            "items": tuple((i.sprite, i.x, i.y, i.fading) for i in self.items),
            "attacks": tuple((a.sprite, a.x, a.y) for a in self.attacks),
        }
