"""Flashlight beam tracing and key visibility."""

from __future__ import annotations

from typing import TYPE_CHECKING

from config import STAGES_COUNT
from engine.grid import step
from models.entities import Key, KeyVisibility

if TYPE_CHECKING:
    from models.entities import Direction
    from models.game_state import Board, GameState


def trace_beam(
    board: Board,
    origin: tuple[int, int],
    direction: Direction,
) -> list[tuple[int, int]]:
    """Walk tiles from origin until the board edge or the first entity.

    The origin tile itself is not part of the beam. The blocking tile is.
    """
    beam: list[tuple[int, int]] = []
    pos = step(origin, direction)
    while board.in_bounds(pos):
        beam.append(pos)
        if board.at(pos) is not None:
            break
        pos = step(pos, direction)
    return beam


def illuminate_keys(game_state: GameState, beam: list[tuple[int, int]]) -> None:
    """Apply the stage's key visibility policy for the given beam.

    A key at the end of the beam becomes ILLUMINATED. On the final stage any
    key not in the beam drops back to INVISIBLE; earlier stages keep keys
    revealed once lit.
    """
    if beam:
        hit = game_state.board.at(beam[-1])
        if isinstance(hit, Key):
            hit.visibility = KeyVisibility.ILLUMINATED

    if game_state.level.stage == STAGES_COUNT:
        lit = set(beam)
        for entity in game_state.entities.values():
            if isinstance(entity, Key) and entity.position not in lit:
                entity.visibility = KeyVisibility.INVISIBLE


def flashlight_beam(game_state: GameState) -> list[tuple[int, int]]:
    """Trace the player's beam and update key visibility.

    Returns:
        The beam tiles, nearest first. Empty when there is no flashlight.
    """
    flashlight = game_state.flashlight
    if flashlight is None:
        return []
    beam = trace_beam(game_state.board, flashlight.position, flashlight.direction)
    illuminate_keys(game_state, beam)
    return beam
