"""Dragon spawning and server-controlled AI logic."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import TYPE_CHECKING

from config import (
    DRAGON_CHASE_PROBABILITY,
    DRAGON_FIRE_INTERVAL_MS,
    DRAGON_MOVE_INTERVAL_MS,
    DRAGON_SPAWN_MIN_DISTANCE,
)
from engine.grid import (
    direction_towards,
    find_empty_position,
    place_entity,
    random_direction,
    relocate_entity,
    step,
)
from engine.projectiles import launch_fireball
from models.entities import Direction, Dragon

if TYPE_CHECKING:
    from models.game_state import GameState

logger = logging.getLogger(__name__)


class DragonAction(str, Enum):
    """What the dragon did on a fire tick."""
    KILLED_PLAYER = "killed_player"
    MOVED = "moved"
    FIRED = "fired"


# ---------------------------------------------------------------------------
# Spawning
# ---------------------------------------------------------------------------


def spawn_dragon(game_state: GameState, rng: random.Random) -> Dragon | None:
    """Place a new dragon on a random empty tile away from the flashlight.

    No-op if a dragon already exists. Gives up silently when no suitable
    tile turns up within the placement budget.
    """
    if game_state.dragon is not None:
        return game_state.dragon

    avoid = game_state.flashlight.position if game_state.flashlight else None
    pos = find_empty_position(
        game_state.board,
        rng,
        avoid=avoid,
        min_distance=DRAGON_SPAWN_MIN_DISTANCE,
    )
    if pos is None:
        logger.debug("No free tile for dragon spawn")
        return None

    dragon = Dragon(position=pos, direction=random_direction(rng))
    place_entity(game_state, dragon)
    game_state.dragon = dragon
    logger.debug("Dragon spawned at %s facing %s", pos, dragon.direction.value)
    return dragon


def respawn_dragon_if_due(
    game_state: GameState,
    now: float,
    rng: random.Random,
) -> Dragon | None:
    """Bring the dragon back once its respawn deadline has passed."""
    if game_state.dragon is None and now >= game_state.dragon_respawn_at:
        return spawn_dragon(game_state, rng)
    return None


# ---------------------------------------------------------------------------
# Dragon AI, called by the engine every tick
# ---------------------------------------------------------------------------


def choose_direction(dragon: Dragon, target: tuple[int, int], rng: random.Random) -> Direction:
    """Usually head for the target, otherwise wander."""
    if rng.random() < DRAGON_CHASE_PROBABILITY:
        return direction_towards(dragon.position, target)
    return random_direction(rng)


def move_dragon(game_state: GameState, rng: random.Random) -> bool:
    """Take one step. A blocked step only turns the dragon.

    Returns:
        True if the dragon changed tiles.
    """
    dragon = game_state.dragon
    flashlight = game_state.flashlight
    if dragon is None or flashlight is None:
        return False

    direction = choose_direction(dragon, flashlight.position, rng)
    dragon.direction = direction
    return relocate_entity(game_state, dragon, step(dragon.position, direction))


def dragon_fire(game_state: GameState, now: float, rng: random.Random) -> DragonAction | None:
    """Breathe at the tile ahead.

    Facing the flashlight kills the player. Facing any other entity turns
    the breath into an extra move. Otherwise a fireball is launched.
    """
    dragon = game_state.dragon
    flashlight = game_state.flashlight
    if dragon is None or flashlight is None:
        return None

    ahead = step(dragon.position, dragon.direction)
    if ahead == flashlight.position:
        logger.debug("Dragon at %s burned the flashlight", dragon.position)
        return DragonAction.KILLED_PLAYER

    if game_state.board.at(ahead) is not None:
        move_dragon(game_state, rng)
        return DragonAction.MOVED

    launch_fireball(game_state, dragon.position, dragon.direction, now)
    return DragonAction.FIRED


def update_dragon(game_state: GameState, now: float, rng: random.Random) -> DragonAction | None:
    """Run the dragon's move and fire cadences for this tick.

    Returns:
        DragonAction.KILLED_PLAYER if the player died this tick, else the
        fire-tick action (or None when nothing fired).
    """
    if game_state.dragon is None or game_state.flashlight is None:
        return None

    if now - game_state.last_dragon_move_at >= DRAGON_MOVE_INTERVAL_MS:
        move_dragon(game_state, rng)
        game_state.last_dragon_move_at = now

    action = None
    if now - game_state.last_dragon_fire_at >= DRAGON_FIRE_INTERVAL_MS:
        action = dragon_fire(game_state, now, rng)
        game_state.last_dragon_fire_at = now
    return action
