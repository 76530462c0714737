import os

import gymnasium as gym
import numpy as np
import pygame
from gymnasium.spaces import Box, MultiDiscrete

from bug_arena import constants as C
from bug_arena.config import GameConfig
from bug_arena.dialogs import AutoDismiss, DialogQueue
from bug_arena.world import Phase, World

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


MOVE_ACTIONS = {1: "up", 2: "down", 3: "left", 4: "right"}
FIRE_ACTIONS = {1: "fire-left", 2: "fire-right"}

REWARDS = {
    "key": 1.0,
    "gem": 0.5,
    "heart": 1.0,
    "enemy_killed": 2.0,
    "level_complete": 10.0,
    "life_lost": -5.0,
    "game_over": -10.0,
}


class GameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"]}

    user_guide = (
        "Controls: arrow keys move one tile. A / D shoot left / right when you have bullets. "
        "P pauses, Enter closes messages."
    )

    game_description = (
        "Grab the key, dodge the bugs and reach the door. Chests give bullets, water is deadly, "
        "and every level brings more and stranger bugs."
    )

    auto_advance = True

    def __init__(self, render_mode="rgb_array", config=None, auto_dismiss=None):
        super().__init__()
        self.render_mode = render_mode
        self.config = config if config is not None else GameConfig()
        if auto_dismiss is None:
            auto_dismiss = self.config.auto_dismiss
        self.auto_dismiss = auto_dismiss

        self.WIDTH, self.HEIGHT = C.X_CANVAS, C.Y_CANVAS
        self.FPS = self.config.fps
        self.MAX_STEPS = self.config.max_steps

        self.observation_space = Box(
            low=0, high=255, shape=(self.HEIGHT, self.WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 3, 2])

        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.WIDTH, self.HEIGHT))

        self.COLOR_BG = (255, 255, 255)
        self.COLOR_TEXT = (0, 0, 0)
        self.COLOR_DIALOG = (30, 30, 40)
        self.COLOR_DIALOG_TEXT = (240, 240, 240)
        self.SPRITE_COLORS = {
            "grass-block": (90, 170, 70),
            "dead-grass-block": (130, 120, 70),
            "stone-block": (150, 150, 150),
            "dark-stone-block": (80, 80, 90),
            "water-block": (60, 120, 220),
            "lava-block": (220, 80, 30),
            "wall": (70, 50, 40),
            "door": (150, 100, 40),
            "rock": (110, 100, 90),
            "key": (250, 210, 40),
            "heart": (230, 50, 70),
            "chest": (170, 110, 50),
            "circle": (20, 20, 20),
            "enemy-bug": (200, 40, 40),
            "charger": (220, 120, 30),
            "charger-charging": (255, 60, 0),
            "sidestepper": (140, 60, 200),
            "backtracker": (40, 160, 160),
            "backtracker-reverse": (40, 110, 160),
            "slowpoke": (120, 200, 120),
            "centipede": (160, 40, 120),
            "char-boy": (40, 60, 200),
        }

        self.font_ui = pygame.font.Font(None, 28)
        self.font_dialog = pygame.font.Font(None, 24)

        self.world = None
        self.steps = 0
        self.score = 0.0
        self.game_over = False

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        dialogs = AutoDismiss() if self.auto_dismiss else DialogQueue()
        self.world = World(self.np_random, dialogs, start_lives=self.config.start_lives)
        self.world.start()
        self.steps = 0
        self.score = 0.0
        self.game_over = False
        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.game_over:
            return self._get_observation(), 0.0, True, False, self._get_info()

        movement, fire, pause = int(action[0]), int(action[1]), int(action[2]) == 1

        if pause and len(self.world.dialogs):
            self.world.dialogs.dismiss()
        elif self.world.running:
            if movement in MOVE_ACTIONS:
                self.world.handle_input(MOVE_ACTIONS[movement])
            if fire in FIRE_ACTIONS:
                self.world.handle_input(FIRE_ACTIONS[fire])
            if pause:
                self.world.handle_input("pause")

        events = self.world.update(self.config.frame_time)
        reward = self._calculate_reward(events)
        self.score += reward
        self.steps += 1

        terminated = any(name == "game_over" for name, _ in events)
        if terminated:
            self.game_over = True
        truncated = self.steps >= self.MAX_STEPS

        return self._get_observation(), reward, terminated, truncated, self._get_info()

    def _calculate_reward(self, events):
        reward = 0.0
        for name, detail in events:
            key = detail if name == "pickup" else name
            reward += REWARDS.get(key, 0.0)
        return reward

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        self.screen.fill(self.COLOR_BG)
        snapshot = self.world.snapshot() if self.world is not None else None
        if snapshot is not None and self.world.running:
            self._render_game(snapshot)
            self._render_ui(snapshot)
        if snapshot is not None and snapshot["dialog"]:
            self._render_dialog(snapshot["dialog"])
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _color(self, sprite):
        return self.SPRITE_COLORS.get(sprite, (255, 0, 255))

    def _render_game(self, snapshot):
        # Tiles are drawn below the HUD strip, one grid cell each
        offset = 50
        for sprite, x, y in snapshot["tiles"]:
            pygame.draw.rect(self.screen, self._color(sprite), (x, y + offset, C.X_STEP, C.Y_STEP))
            pygame.draw.rect(self.screen, (0, 0, 0), (x, y + offset, C.X_STEP, C.Y_STEP), 1)

        door_x, door_y = snapshot["door"]
        pygame.draw.rect(self.screen, self._color("door"), (door_x + 20, door_y + offset + 5, 60, 73))
        for x, y in snapshot["rocks"]:
            pygame.draw.circle(self.screen, self._color("rock"), (x + 50, y + offset + 42), 30)

        for sprite, x, y, fading in snapshot["items"]:
            color = self._color(sprite)
            if fading:
                # Half-way blend towards the background
                color = tuple((c + 255) // 2 for c in color)
            pygame.draw.circle(self.screen, color, (x + 50, y + offset + 42), 18)

        for sprite, x, y in snapshot["attacks"]:
            pygame.draw.circle(self.screen, self._color(sprite), (int(x) + 10, int(y) + offset + 42), 6)

        for sprite, x, y, width in snapshot["enemies"]:
            rect = pygame.Rect(int(x), int(y) + offset + 10, width, C.ENEMY_HEIGHT - 20)
            pygame.draw.ellipse(self.screen, self._color(sprite), rect)

        px, py = snapshot["player"]
        pygame.draw.rect(
            self.screen, self._color("char-boy"),
            (px + C.PLAYER_HITBOX_INSET, py + offset + 10, C.PLAYER_WIDTH - C.PLAYER_HITBOX_INSET, C.PLAYER_HEIGHT - 20),
        )
        if snapshot["has_key"]:
            pygame.draw.circle(self.screen, self._color("key"), (px + 40, py + offset + 70), 7)

    def _render_ui(self, snapshot):
        for i in range(snapshot["lives"]):
            pygame.draw.circle(self.screen, self._color("heart"), (20 + i * 30, 22), 10)
        bullets = self.font_ui.render(f"Bullets: {snapshot['bullets']}", True, self.COLOR_TEXT)
        self.screen.blit(bullets, (400, 12))
        level = self.font_ui.render(f"Level: {snapshot['level']}", True, self.COLOR_TEXT)
        self.screen.blit(level, (self.WIDTH - level.get_width() - 10, 12))

    def _render_dialog(self, message):
        box = pygame.Rect(60, 150, self.WIDTH - 120, 260)
        pygame.draw.rect(self.screen, self.COLOR_DIALOG, box)
        y = box.top + 15
        for line in message.splitlines():
            for chunk in _wrap(line, 60):
                text = self.font_dialog.render(chunk, True, self.COLOR_DIALOG_TEXT)
                self.screen.blit(text, (box.left + 15, y))
                y += text.get_height() + 4

    def _get_info(self):
        info = {
            "score": self.score,
            "steps": self.steps,
            "phase": self.world.phase.value if self.world is not None else Phase.INTRO.value,
        }
        if self.world is not None and self.world.running:
            info.update(
                level=self.world.state.level,
                lives=self.world.player.lives,
                bullets=self.world.state.bullets,
                has_key=self.world.player.has_key,
            )
        return info

    def close(self):
        pygame.font.quit()
        pygame.quit()

    def validate_implementation(self):
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 3, 2]

        obs, info = self.reset(seed=0)
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert obs.dtype == np.uint8
        assert isinstance(info, dict)

        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert isinstance(trunc, bool)
        assert isinstance(info, dict)
        return True


def _wrap(line, width):
    words = line.split()
    if not words:
        return [""]
    chunks, current = [], words[0]
    for word in words[1:]:
        if len(current) + 1 + len(word) > width:
            chunks.append(current)
            current = word
        else:
            current += " " + word

    chunks.append(current)
    return chunks
