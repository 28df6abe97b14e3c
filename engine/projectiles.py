"""Fireball flight and fire burn-out."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from config import (
    FIRE_BURN_MAX_MS,
    FIRE_BURN_MIN_MS,
    FIREBALL_FIZZLE_PROBABILITY,
    FIREBALL_MOVE_INTERVAL_MS,
)
from engine.grid import place_entity, remove_entity, step
from models.entities import Fire, Fireball

if TYPE_CHECKING:
    from models.entities import Direction
    from models.game_state import GameState

logger = logging.getLogger(__name__)


def launch_fireball(
    game_state: GameState,
    position: tuple[int, int],
    direction: Direction,
    now: float,
) -> Fireball:
    """Register a fireball in flight. It is never put on the board."""
    fireball = Fireball(
        position=position,
        direction=direction,
        created_at=now,
        moved_at=now,
    )
    game_state.entities[fireball.id] = fireball
    return fireball


def ignite(
    game_state: GameState,
    position: tuple[int, int],
    now: float,
    rng: random.Random,
) -> Fire | None:
    """Start a fire on a tile for a random burn time.

    Returns:
        The Fire, or None if the tile was taken and nothing caught.
    """
    fire = Fire(
        position=position,
        created_at=now,
        destroy_at=now + rng.randint(FIRE_BURN_MIN_MS, FIRE_BURN_MAX_MS),
    )
    if not place_entity(game_state, fire):
        return None
    return fire


def advance_fireball(
    game_state: GameState,
    fireball: Fireball,
    now: float,
    rng: random.Random,
) -> Fire | None:
    """Move a fireball one tile, or turn it into fire where it stands.

    The fireball stops at the board edge, in front of any entity, or at
    random.

    Returns:
        The Fire left behind if the fireball stopped, otherwise None.
    """
    target = step(fireball.position, fireball.direction)
    board = game_state.board
    if (
        not board.in_bounds(target)
        or board.at(target) is not None
        or rng.random() < FIREBALL_FIZZLE_PROBABILITY
    ):
        remove_entity(game_state, fireball)
        return ignite(game_state, fireball.position, now, rng)

    fireball.position = target
    fireball.moved_at = now
    return None


def update_fireballs(game_state: GameState, now: float, rng: random.Random) -> None:
    """Advance every fireball whose move interval has elapsed."""
    fireballs = [e for e in game_state.entities.values() if isinstance(e, Fireball)]
    for fireball in fireballs:
        if now - fireball.moved_at >= FIREBALL_MOVE_INTERVAL_MS:
            advance_fireball(game_state, fireball, now, rng)


def update_fires(game_state: GameState, now: float) -> int:
    """Remove fires past their expiry.

    Returns:
        Number of fires that burned out.
    """
    expired = [
        e for e in game_state.entities.values()
        if isinstance(e, Fire) and now >= e.destroy_at
    ]
    for fire in expired:
        remove_entity(game_state, fire)
    if expired:
        logger.debug("%d fire(s) burned out", len(expired))
    return len(expired)
