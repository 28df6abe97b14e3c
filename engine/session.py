"""Headless driver: paces input into the engine and snapshots each frame."""

from __future__ import annotations

import logging
import time
from typing import Callable

from config import PLAYER_MOVE_COOLDOWN_MS, STAGES_COUNT
from engine.game import GameEngine
from models.actions import FrameSnapshot, InputFrame
from models.game_state import GamePhase

logger = logging.getLogger(__name__)


def wall_clock_ms() -> float:
    """Monotonic wall clock in milliseconds."""
    return time.monotonic() * 1000


class ManualClock:
    """A clock that only moves when told to. Used for headless runs and tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError(f"Cannot move the clock backwards by {ms}ms")
        self.now += ms
        return self.now


class GameSession:
    """Drives one engine from an input source, one frame at a time.

    The session owns the player move cooldown and the pause switch. It is
    not re-entrant: call tick() from a single loop.
    """

    def __init__(
        self,
        engine: GameEngine | None = None,
        clock: Callable[[], float] | None = None,
        move_cooldown_ms: float = PLAYER_MOVE_COOLDOWN_MS,
    ) -> None:
        self.clock = clock or wall_clock_ms
        self.engine = engine or GameEngine(now=self.clock())
        self.move_cooldown_ms = move_cooldown_ms
        self.paused = False
        self.frames = 0
        self._last_move_at: float | None = None

    def tick(self, frame: InputFrame | None = None) -> FrameSnapshot:
        """Apply one frame of input, advance the engine, and snapshot it."""
        now = self.clock()
        if self.paused:
            return self.snapshot(now)

        frame = frame or InputFrame()
        if self.engine.get_game_state() == GamePhase.PLAYING:
            self._handle_input(frame, now)

        self.engine.update(now)
        self.engine.update_firing(now)
        self.frames += 1
        return self.snapshot(now)

    def _handle_input(self, frame: InputFrame, now: float) -> None:
        if frame.direction is not None and self._can_move(now):
            if self.engine.move_player(frame.direction):
                self._last_move_at = now

        if frame.fire:
            self.engine.start_firing(now)
        else:
            self.engine.stop_firing()

    def _can_move(self, now: float) -> bool:
        if self._last_move_at is None:
            return True
        return now - self._last_move_at >= self.move_cooldown_ms

    def snapshot(self, now: float | None = None) -> FrameSnapshot:
        """Read-only copy of everything a renderer needs."""
        engine = self.engine
        # Tracing updates key visibility, so it has to happen before the board is copied
        beam = engine.get_flashlight_beam()
        return FrameSnapshot(
            time=self.clock() if now is None else now,
            phase=engine.get_game_state(),
            level=engine.get_game_level(),
            board=engine.get_board(),
            beam=beam,
            fireballs=engine.get_fireballs(),
            game_over_reason=engine.game_over_reason,
        )

    def pause(self) -> None:
        if not self.paused:
            self.paused = True
            logger.info("Session paused")

    def resume(self) -> None:
        """Continue ticking. Time spent paused is not taken off the level clock."""
        if self.paused:
            self.paused = False
            self.engine.resync_clock(self.clock())
            logger.info("Session resumed")

    @property
    def finished(self) -> bool:
        return self.engine.get_game_state() == GamePhase.GAME_OVER

    def final_message(self) -> str | None:
        """End-of-game text, or None while the game is still on."""
        if not self.finished:
            return None
        level = self.engine.get_game_level()
        if level.stage > STAGES_COUNT:
            return f"Congratulations! You completed all stages!\nFinal Score: {level.score}"
        return f"Game Over!\nFinal Score: {level.score}"
