"""Player movement and key pickup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from engine.grid import relocate_entity, step
from engine.progression import collect_key
from models.entities import Key
from models.game_state import GamePhase

if TYPE_CHECKING:
    from models.entities import Direction
    from models.game_state import GameState


def move_player(game_state: GameState, direction: Direction) -> bool:
    """Turn the flashlight toward direction and step if the tile allows it.

    Stepping off the board, into a block, the dragon, fire or an
    out-of-order key only turns the flashlight; that still counts as a
    successful intent. Walking onto the next key in order collects it.

    Args:
        game_state: Current game state (mutated in place).
        direction: Requested direction.

    Returns:
        False only when the game is not being played.
    """
    flashlight = game_state.flashlight
    if flashlight is None or game_state.phase != GamePhase.PLAYING:
        return False

    flashlight.direction = direction
    target = step(flashlight.position, direction)
    board = game_state.board
    if not board.in_bounds(target):
        return True

    occupant = board.at(target)
    if occupant is None:
        relocate_entity(game_state, flashlight, target)
        return True

    if isinstance(occupant, Key) and occupant.key_number == game_state.level.keys_collected + 1:
        collect_key(game_state, occupant)
        relocate_entity(game_state, flashlight, target)

    return True
