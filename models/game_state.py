"""Board, level, and game state models for Dragonlight."""

from enum import Enum

from pydantic import BaseModel

from config import INITIAL_KEYS_COUNT, LEVEL_TIME_SECONDS
from models.entities import Dragon, Entity, Flashlight


class GamePhase(str, Enum):
    """Possible phases of a game.

    Only PLAYING and GAME_OVER are entered by the current rules; the others
    are reserved.
    """
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    LEVEL_COMPLETE = "level_complete"
    PAUSED = "paused"


class GameOverReason(str, Enum):
    """Why a game ended."""
    TIME_UP = "time_up"
    DRAGON = "dragon"
    CAMPAIGN_COMPLETE = "campaign_complete"


class Board(BaseModel):
    """Fixed grid of tiles, each holding at most one entity reference."""
    width: int
    height: int
    tiles: list[list[Entity | None]]        # 2D grid [y][x]

    def in_bounds(self, position: tuple[int, int]) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, position: tuple[int, int]) -> Entity | None:
        """Entity on a tile, or None for empty and out-of-bounds tiles."""
        if not self.in_bounds(position):
            return None
        x, y = position
        return self.tiles[y][x]


class GameLevel(BaseModel):
    """Campaign progress and score."""
    stage: int = 1
    level: int = 1
    keys_required: int = INITIAL_KEYS_COUNT
    keys_collected: int = 0
    time_remaining: float = LEVEL_TIME_SECONDS     # Seconds
    score: int = 0


class FiringState(BaseModel):
    """Held-fire bookkeeping for beam destruction."""
    active: bool = False
    combo: int = 0
    last_destroy_at: float = 0.0    # Arming time, then time of last destruction


class GameEvent(BaseModel):
    """A logged event from the game."""
    stage: int
    level: int
    kind: str                       # "key_collected", "destroyed", ...
    description: str
    details: dict = {}


class GameState(BaseModel):
    """The full state of a game.

    `entities` is the source of truth for existence; `board` is a spatial
    index over the same objects. Fireballs are registry-only.
    """
    board: Board
    entities: dict[str, Entity] = {}        # entity_id -> Entity
    level: GameLevel = GameLevel()
    phase: GamePhase = GamePhase.PLAYING
    game_over_reason: GameOverReason | None = None
    flashlight: Flashlight | None = None
    dragon: Dragon | None = None
    dragon_respawn_at: float = 0.0
    last_update_at: float | None = None
    last_block_spawn_at: float = 0.0
    last_dragon_move_at: float = 0.0
    last_dragon_fire_at: float = 0.0
    firing: FiringState = FiringState()
    event_log: list[GameEvent] = []
