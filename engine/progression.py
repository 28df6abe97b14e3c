"""Level lifecycle, timer, scoring and campaign progression."""

from __future__ import annotations

import logging
import random

from config import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    INITIAL_KEYS_COUNT,
    LEVEL_TIME_SECONDS,
    LEVELS_PER_STAGE,
    MAX_EVENT_LOG,
    MAX_FRAME_DELTA_MS,
    POINTS_COLLECT_KEY,
    POINTS_COMPLETE_LEVEL,
    STAGES_COUNT,
)
from engine.dragon import spawn_dragon
from engine.grid import (
    clear_board,
    create_board,
    empty_positions,
    find_empty_position,
    place_entity,
    remove_entity,
)
from models.entities import Block, Direction, Fireball, Flashlight, Key, KeyVisibility
from models.game_state import (
    FiringState,
    GameEvent,
    GameLevel,
    GameOverReason,
    GamePhase,
    GameState,
)

logger = logging.getLogger(__name__)


def new_game_state() -> GameState:
    """A fresh campaign at stage 1, level 1 with nothing placed yet."""
    return GameState(board=create_board(BOARD_WIDTH, BOARD_HEIGHT))


def keys_required_for(level: int) -> int:
    """Number of keys a level asks for. Grows by one per level in a stage."""
    return INITIAL_KEYS_COUNT + (level - 1)


def record_event(game_state: GameState, kind: str, description: str, **details) -> None:
    """Append to the bounded event log."""
    game_state.event_log.append(
        GameEvent(
            stage=game_state.level.stage,
            level=game_state.level.level,
            kind=kind,
            description=description,
            details=details,
        )
    )
    overflow = len(game_state.event_log) - MAX_EVENT_LOG
    if overflow > 0:
        del game_state.event_log[:overflow]


# ---------------------------------------------------------------------------
# Level setup
# ---------------------------------------------------------------------------


def init_level(game_state: GameState, now: float, rng: random.Random) -> None:
    """Rebuild the board: flashlight in the center, a dragon, then keys.

    Args:
        game_state: State to reset (mutated in place).
        now: Current clock time in ms; all cadences restart from here.
        rng: Random source for placement.
    """
    clear_board(game_state)
    game_state.dragon = None
    game_state.dragon_respawn_at = now

    flashlight = Flashlight(
        position=(game_state.board.width // 2, game_state.board.height // 2),
        direction=Direction.UP,
    )
    place_entity(game_state, flashlight)
    game_state.flashlight = flashlight

    spawn_dragon(game_state, rng)
    place_keys(game_state, rng)

    game_state.last_block_spawn_at = now
    game_state.last_dragon_move_at = now
    game_state.last_dragon_fire_at = now
    logger.info(
        "Stage %d level %d started: %d keys, %.0fs",
        game_state.level.stage,
        game_state.level.level,
        game_state.level.keys_required,
        game_state.level.time_remaining,
    )


def place_keys(game_state: GameState, rng: random.Random) -> list[Key]:
    """Scatter keys 1..keys_required on empty tiles.

    Stage 1 keys are visible from the start; later stages hide them until
    the beam finds them. A key that finds no tile is skipped.
    """
    visibility = (
        KeyVisibility.VISIBLE if game_state.level.stage == 1 else KeyVisibility.INVISIBLE
    )
    keys = []
    for number in range(1, game_state.level.keys_required + 1):
        pos = find_empty_position(game_state.board, rng)
        if pos is None:
            logger.debug("No free tile for key %d", number)
            continue
        key = Key(position=pos, key_number=number, visibility=visibility)
        place_entity(game_state, key)
        keys.append(key)
    return keys


def spawn_block(game_state: GameState, rng: random.Random) -> Block | None:
    """Drop a block on a random empty tile, if one turns up."""
    pos = find_empty_position(game_state.board, rng)
    if pos is None:
        return None
    block = Block(position=pos)
    place_entity(game_state, block)
    return block


def fill_board_with_blocks(game_state: GameState) -> int:
    """Block every empty tile. Returns how many blocks were added."""
    positions = empty_positions(game_state.board)
    for pos in positions:
        place_entity(game_state, Block(position=pos))
    return len(positions)


# ---------------------------------------------------------------------------
# Timer and scoring
# ---------------------------------------------------------------------------


def tick_timer(game_state: GameState, now: float) -> bool:
    """Count the level clock down by the time since the previous tick.

    Each tick removes at most MAX_FRAME_DELTA_MS.

    Returns:
        True once the clock has run out.
    """
    last = game_state.last_update_at
    game_state.last_update_at = now
    if last is not None:
        delta = min(max(now - last, 0.0), MAX_FRAME_DELTA_MS)
        game_state.level.time_remaining -= delta / 1000
    return game_state.level.time_remaining <= 0


def collect_key(game_state: GameState, key: Key) -> None:
    """Take a key off the board and score it."""
    remove_entity(game_state, key)
    game_state.level.keys_collected += 1
    game_state.level.score += POINTS_COLLECT_KEY
    record_event(
        game_state,
        "key_collected",
        f"Key {key.key_number} collected.",
        key_number=key.key_number,
        points=POINTS_COLLECT_KEY,
    )


def award_points(game_state: GameState, points: int) -> None:
    game_state.level.score += points


# ---------------------------------------------------------------------------
# Win / loss
# ---------------------------------------------------------------------------


def end_game(game_state: GameState, reason: GameOverReason) -> None:
    """Move to GAME_OVER. Later reasons never overwrite the first one."""
    if game_state.phase == GamePhase.GAME_OVER:
        return
    game_state.phase = GamePhase.GAME_OVER
    game_state.game_over_reason = reason
    game_state.firing = FiringState()
    record_event(
        game_state,
        "game_over",
        f"Game over ({reason.value}).",
        score=game_state.level.score,
    )
    logger.info("Game over: %s, score %d", reason.value, game_state.level.score)


def is_level_complete(game_state: GameState) -> bool:
    return game_state.level.keys_collected >= game_state.level.keys_required


def complete_level(game_state: GameState, now: float, rng: random.Random) -> None:
    """Award the level bonus and move to the next level or stage.

    Running past the last stage ends the game with CAMPAIGN_COMPLETE and
    leaves `stage` one past the stage count.
    """
    level = game_state.level
    level.score += POINTS_COMPLETE_LEVEL
    record_event(
        game_state,
        "level_complete",
        f"Stage {level.stage} level {level.level} complete.",
        points=POINTS_COMPLETE_LEVEL,
    )
    level.level += 1

    if level.level > LEVELS_PER_STAGE:
        level.stage += 1
        level.level = 1
        if level.stage > STAGES_COUNT:
            end_game(game_state, GameOverReason.CAMPAIGN_COMPLETE)
            return
        record_event(game_state, "stage_advanced", f"Entered stage {level.stage}.")

    level.keys_required = keys_required_for(level.level)
    level.keys_collected = 0
    level.time_remaining = LEVEL_TIME_SECONDS
    init_level(game_state, now, rng)


def restart_campaign(game_state: GameState, now: float, rng: random.Random) -> None:
    """Start over from stage 1 level 1 with a zero score."""
    game_state.level = GameLevel()
    game_state.phase = GamePhase.PLAYING
    game_state.game_over_reason = None
    game_state.firing = FiringState()
    game_state.event_log = []
    game_state.last_update_at = now
    init_level(game_state, now, rng)


def check_board_consistency(game_state: GameState) -> list[str]:
    """List every way the board and registry disagree (empty when sound).

    A diagnostic for tests and debugging. The engine never calls it.
    """
    problems = []
    board = game_state.board
    on_board: set[str] = set()
    for y, row in enumerate(board.tiles):
        for x, entity in enumerate(row):
            if entity is None:
                continue
            on_board.add(entity.id)
            if game_state.entities.get(entity.id) is not entity:
                problems.append(f"tile ({x}, {y}) holds unregistered {entity.type.value}")
            if entity.position != (x, y):
                problems.append(f"{entity.type.value} at ({x}, {y}) thinks it is at {entity.position}")
    for entity_id, entity in game_state.entities.items():
        if isinstance(entity, Fireball):
            continue
        if entity_id not in on_board:
            problems.append(f"registered {entity.type.value} {entity_id} is not on the board")
    return problems
