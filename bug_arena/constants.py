# --- Playfield / grid ---
X_LEFT = 0
X_RIGHT = 707
Y_TOP = 0
Y_BOTTOM = 498
X_STEP = 101
Y_STEP = 83
X_CANVAS = 707
Y_CANVAS = 606
COLUMNS = 7
ROWS = 6

# Past this level the tiles go dark and the game starts speeding up.
DARK_LEVELS = 14
MAX_GAME_SPEED = 1.5
GAME_SPEED_STEP = 0.05

# --- Player ---
PLAYER_WIDTH = 60
PLAYER_HEIGHT = 80
PLAYER_HITBOX_INSET = 20
START_LIVES = 3
MAX_LIVES = 5

# --- Enemies ---
ENEMY_WIDTH = 90
ENEMY_HEIGHT = 80
ENEMY_MIN_SPEED = 50
ENEMY_MAX_SPEED = 200
ENEMY_START_COLUMNS = range(-3, 5)
ENEMY_START_ROWS = range(1, 5)

CHARGE_SPEED = 700
CHARGE_DURATION_MS = 500
CHARGE_INTERVAL_MS = (2000, 5000)
SIDESTEP_SPEED = 100
SIDESTEP_INTERVAL_MS = (1000, 3000)
BACKTRACK_INTERVAL_MS = (5000, 10000)
SLOWPOKE_SPEED = (15, 25)
CENTIPEDE_WIDTH = 270

MAX_ENEMIES = 8

# --- Attacks ---
ATTACK_WIDTH = 20
ATTACK_HEIGHT = 80
ATTACK_SPEED = 300

# --- Items ---
GEM_FADE_MS = 2500
GEM_DESTROY_MS = GEM_FADE_MS + 1500
HEART_LEVEL_INTERVAL = 5

# --- Map ---
ROCK_MIN_LEVEL = 10
ROCK_COUNT = (1, 3)
START_COLUMNS = (1, 4)
