"""Per-frame input and output models exchanged with the driver."""

from pydantic import BaseModel

from models.entities import Direction
from models.game_state import Board, GameLevel, GameOverReason, GamePhase


class InputFrame(BaseModel):
    """What the input source reports for one tick."""
    direction: Direction | None = None
    fire: bool = False


class FrameSnapshot(BaseModel):
    """Read-only view of the engine handed to the renderer after a tick."""
    time: float
    phase: GamePhase
    level: GameLevel
    board: Board
    beam: list[tuple[int, int]]
    fireballs: list[tuple[int, int]] = []
    game_over_reason: GameOverReason | None = None
