"""Game-wide configuration constants for Dragonlight."""

import os

GAME_NAME = "Dragonlight"

BOARD_WIDTH = 15         # Board width in tiles
BOARD_HEIGHT = 15        # Board height in tiles

# Scoring
POINTS_COLLECT_KEY = 200
POINTS_COMPLETE_LEVEL = 1000
POINTS_DESTROY_BLOCK = 100
POINTS_DESTROY_DRAGON = 1000
SERIAL_DESTROY_FACTOR = 1.5      # Combo multiplier per consecutive destruction

# Timing (milliseconds unless noted)
LEVEL_TIME_SECONDS = 30
PLAYER_MOVE_COOLDOWN_MS = 100
BLOCK_SPAWN_INTERVAL_MS = 1000
BLOCK_DESTROY_TIME_MS = 100      # Beam dwell needed per destruction
BLOCK_DESTROY_TIME_AWARD_SECONDS = 1
MAX_FRAME_DELTA_MS = 100         # Countdown never loses more than this per tick

# Dragon behavior
DRAGON_MOVE_INTERVAL_MS = 200
DRAGON_FIRE_INTERVAL_MS = 300
DRAGON_RESPAWN_SECONDS = 30
DRAGON_CHASE_PROBABILITY = 0.7
DRAGON_SPAWN_MIN_DISTANCE = 3    # Manhattan distance from the flashlight

# Fireballs and fire
FIREBALL_MOVE_INTERVAL_MS = 50
FIREBALL_FIZZLE_PROBABILITY = 0.3
FIRE_BURN_MIN_MS = 3000
FIRE_BURN_MAX_MS = 5000

# Campaign structure
STAGES_COUNT = 3
LEVELS_PER_STAGE = 7
INITIAL_KEYS_COUNT = 3

PLACEMENT_ATTEMPTS = 100         # Random placement gives up after this many tries
MAX_EVENT_LOG = 200

LOG_LEVEL = os.environ.get("DRAGONLIGHT_LOG_LEVEL", "INFO")
