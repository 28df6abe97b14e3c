"""Plain-text rendering of board snapshots. Presentation only."""

from __future__ import annotations

import math
from typing import Iterable

from models.entities import Direction, Entity, EntityType, Key, KeyVisibility
from models.game_state import Board, GameLevel, GamePhase

ARROWS = {
    Direction.UP: "^",
    Direction.DOWN: "v",
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
}

GLYPHS = {
    EntityType.BLOCK: "#",
    EntityType.DRAGON: "D",
    EntityType.FIRE: "~",
    EntityType.FIREBALL: "o",
}

EMPTY = "."
BEAM = "*"


def _glyph(entity: Entity) -> str:
    if entity.type == EntityType.FLASHLIGHT:
        return ARROWS.get(entity.direction, "@")
    if isinstance(entity, Key):
        if entity.visibility == KeyVisibility.INVISIBLE:
            return EMPTY
        return str(entity.key_number % 10)
    return GLYPHS.get(entity.type, "?")


def render_board(
    board: Board,
    beam: Iterable[tuple[int, int]],
    stage: int,
    fireballs: Iterable[tuple[int, int]] = (),
) -> str:
    """Draw the board as lines of single-character tiles.

    Hidden keys draw as empty floor, so on later stages a key only shows up
    once the beam has revealed it. `stage` is shown in the header.
    """
    lit = set(beam)
    flying = set(fireballs)
    lines = [f"Stage {stage}"]
    for y, row in enumerate(board.tiles):
        cells = []
        for x, entity in enumerate(row):
            if entity is not None:
                cells.append(_glyph(entity))
            elif (x, y) in flying:
                cells.append(GLYPHS[EntityType.FIREBALL])
            elif (x, y) in lit:
                cells.append(BEAM)
            else:
                cells.append(EMPTY)
        lines.append(" ".join(cells))
    return "\n".join(lines)


def render_status(level: GameLevel, phase: GamePhase) -> str:
    """One-line HUD: stage, level, keys, time, score and phase."""
    seconds = max(0, math.ceil(level.time_remaining))
    return (
        f"Stage {level.stage} | Level {level.level} | "
        f"Keys {level.keys_collected}/{level.keys_required} | "
        f"Time {seconds} | Score {level.score} | {phase.value}"
    )
