"""Reference autopilot that plays Dragonlight from frame snapshots.

Plays each frame by picking a simple action:
  - If a block or the dragon sits at the end of the beam, hold fire.
  - Otherwise face the next key in order and walk toward it.
  - If something else is in the way, sidestep in a random perpendicular
    direction.

The autopilot only reads the snapshot the renderer would get, so on later
stages it steers by whatever the board holds, lit or not.
"""

from __future__ import annotations

import random

from engine.grid import direction_towards, step
from models.actions import FrameSnapshot, InputFrame
from models.entities import Block, Direction, Dragon, Entity, Flashlight, Key
from models.game_state import Board, GamePhase

PERPENDICULAR = {
    Direction.UP: (Direction.LEFT, Direction.RIGHT),
    Direction.DOWN: (Direction.LEFT, Direction.RIGHT),
    Direction.LEFT: (Direction.UP, Direction.DOWN),
    Direction.RIGHT: (Direction.UP, Direction.DOWN),
}


def find_flashlight(board: Board) -> Flashlight | None:
    for row in board.tiles:
        for entity in row:
            if isinstance(entity, Flashlight):
                return entity
    return None


def find_key(board: Board, key_number: int) -> Key | None:
    for row in board.tiles:
        for entity in row:
            if isinstance(entity, Key) and entity.key_number == key_number:
                return entity
    return None


def _is_target(entity: Entity | None) -> bool:
    return isinstance(entity, (Block, Dragon))


class Autopilot:
    """Stateless apart from its random source."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def choose(self, snapshot: FrameSnapshot) -> InputFrame:
        """Decide this frame's input from a snapshot."""
        if snapshot.phase != GamePhase.PLAYING:
            return InputFrame()

        board = snapshot.board
        flashlight = find_flashlight(board)
        if flashlight is None:
            return InputFrame()

        if snapshot.beam and _is_target(board.at(snapshot.beam[-1])):
            return InputFrame(fire=True)

        key = find_key(board, snapshot.level.keys_collected + 1)
        if key is None:
            return InputFrame(direction=self.rng.choice(list(Direction)))

        direction = direction_towards(flashlight.position, key.position)
        ahead = board.at(step(flashlight.position, direction))
        if ahead is None or ahead.id == key.id:
            return InputFrame(direction=direction)
        if _is_target(ahead) and flashlight.direction != direction:
            # Turning to face it puts it in the beam next frame
            return InputFrame(direction=direction)
        return InputFrame(direction=self.rng.choice(PERPENDICULAR[direction]))
