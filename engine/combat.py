"""Beam combat: held fire, paced destruction and combo scoring."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from config import (
    BLOCK_DESTROY_TIME_AWARD_SECONDS,
    BLOCK_DESTROY_TIME_MS,
    DRAGON_RESPAWN_SECONDS,
    POINTS_DESTROY_BLOCK,
    POINTS_DESTROY_DRAGON,
    SERIAL_DESTROY_FACTOR,
)
from engine.beam import flashlight_beam
from engine.grid import remove_entity
from engine.progression import award_points, record_event
from models.entities import Block, Dragon
from models.game_state import FiringState, GamePhase

if TYPE_CHECKING:
    from models.entities import Entity
    from models.game_state import GameState

logger = logging.getLogger(__name__)


def serial_points(base: int, combo: int) -> int:
    """Points for the combo-th consecutive destruction (0-based).

    Args:
        base: Base points of the destroyed entity.
        combo: How many destructions already happened in this firing session.

    Returns:
        base * SERIAL_DESTROY_FACTOR ** combo, rounded down.
    """
    return math.floor(base * SERIAL_DESTROY_FACTOR ** combo)


def start_firing(game_state: GameState, now: float) -> None:
    """Arm the beam. Already-armed beams keep their combo and dwell timer."""
    if game_state.phase != GamePhase.PLAYING or game_state.firing.active:
        return
    game_state.firing = FiringState(active=True, combo=0, last_destroy_at=now)


def stop_firing(game_state: GameState) -> None:
    """Disarm the beam and drop the combo."""
    game_state.firing = FiringState()


def find_target(game_state: GameState, beam: list[tuple[int, int]]) -> Entity | None:
    """First block or dragon along the beam, if any."""
    for pos in beam:
        entity = game_state.board.at(pos)
        if isinstance(entity, (Block, Dragon)):
            return entity
    return None


def destroy_entity(game_state: GameState, entity: Entity, now: float) -> int:
    """Destroy a block or the dragon and score it with the current combo.

    Blocks refund a little level time. The dragon goes away until its
    respawn deadline.

    Returns:
        Points awarded.
    """
    firing = game_state.firing
    if isinstance(entity, Dragon):
        base = POINTS_DESTROY_DRAGON
        if game_state.dragon is entity:
            game_state.dragon = None
        game_state.dragon_respawn_at = now + DRAGON_RESPAWN_SECONDS * 1000
    else:
        base = POINTS_DESTROY_BLOCK
        game_state.level.time_remaining += BLOCK_DESTROY_TIME_AWARD_SECONDS

    points = serial_points(base, firing.combo)
    award_points(game_state, points)
    firing.combo += 1
    remove_entity(game_state, entity)

    record_event(
        game_state,
        "destroyed",
        f"{entity.type.value.capitalize()} destroyed for {points} points.",
        target=entity.type.value,
        points=points,
        combo=firing.combo,
    )
    logger.debug("Destroyed %s at %s for %d (combo %d)", entity.type.value, entity.position, points, firing.combo)
    return points


def update_firing(game_state: GameState, now: float) -> Entity | None:
    """Destroy the first block or dragon in the beam once the dwell time is up.

    Returns:
        The destroyed entity, or None if nothing was destroyed this tick.
    """
    firing = game_state.firing
    if not firing.active or game_state.flashlight is None:
        return None
    if game_state.phase != GamePhase.PLAYING:
        return None

    beam = flashlight_beam(game_state)
    if now - firing.last_destroy_at < BLOCK_DESTROY_TIME_MS:
        return None

    target = find_target(game_state, beam)
    if target is None:
        return None
    destroy_entity(game_state, target, now)
    firing.last_destroy_at = now
    return target
