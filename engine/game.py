"""The Dragonlight game engine: one tick-driven owner of all game state."""

from __future__ import annotations

import logging
import random

from config import BLOCK_SPAWN_INTERVAL_MS, STAGES_COUNT
from engine import combat, movement
from engine.beam import flashlight_beam
from engine.dragon import DragonAction, respawn_dragon_if_due, update_dragon
from engine.progression import (
    complete_level,
    end_game,
    fill_board_with_blocks,
    init_level,
    is_level_complete,
    new_game_state,
    restart_campaign,
    spawn_block,
    tick_timer,
)
from engine.projectiles import update_fireballs, update_fires
from models.entities import Direction, Fireball
from models.game_state import Board, GameEvent, GameLevel, GameOverReason, GamePhase

logger = logging.getLogger(__name__)


class GameEngine:
    """Owns the board, the entities, and the campaign for one game.

    Every timed call takes `now`, a millisecond timestamp from a single
    driver-supplied clock. The engine never reads the wall clock itself.
    Query methods hand out copies, never live state.
    """

    def __init__(self, now: float = 0.0, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.state = new_game_state()
        self.state.last_update_at = now
        init_level(self.state, now, self.rng)

    # -- ticks ---------------------------------------------------------------

    def update(self, now: float) -> None:
        """Advance timers, spawns, the dragon, projectiles and win/loss by one tick."""
        state = self.state
        if state.phase != GamePhase.PLAYING:
            return

        if tick_timer(state, now):
            fill_board_with_blocks(state)
            end_game(state, GameOverReason.TIME_UP)
            return

        if now - state.last_block_spawn_at >= BLOCK_SPAWN_INTERVAL_MS:
            spawn_block(state, self.rng)
            state.last_block_spawn_at = now

        if update_dragon(state, now, self.rng) == DragonAction.KILLED_PLAYER:
            end_game(state, GameOverReason.DRAGON)
            return

        update_fires(state, now)
        update_fireballs(state, now, self.rng)

        if is_level_complete(state):
            complete_level(state, now, self.rng)
            if state.phase != GamePhase.PLAYING:
                return

        respawn_dragon_if_due(state, now, self.rng)

    def update_firing(self, now: float) -> None:
        """Advance held-fire destruction by one tick."""
        combat.update_firing(self.state, now)

    def resync_clock(self, now: float) -> None:
        """Treat `now` as the previous tick so the next update loses no time."""
        self.state.last_update_at = now

    def restart(self, now: float) -> None:
        """Throw the current campaign away and start at stage 1 level 1."""
        logger.info("Restarting campaign (previous score %d)", self.state.level.score)
        restart_campaign(self.state, now, self.rng)

    # -- intents -------------------------------------------------------------

    def move_player(self, direction: Direction) -> bool:
        return movement.move_player(self.state, direction)

    def start_firing(self, now: float) -> None:
        combat.start_firing(self.state, now)

    def stop_firing(self) -> None:
        combat.stop_firing(self.state)

    # -- queries -------------------------------------------------------------

    def get_board(self) -> Board:
        return self.state.board.model_copy(deep=True)

    def get_flashlight_beam(self) -> list[tuple[int, int]]:
        """Current beam tiles. Tracing also refreshes key visibility."""
        return flashlight_beam(self.state)

    def get_game_level(self) -> GameLevel:
        return self.state.level.model_copy()

    def get_game_state(self) -> GamePhase:
        return self.state.phase

    def get_fireballs(self) -> list[tuple[int, int]]:
        """Positions of fireballs in flight, which never appear on the board."""
        return [e.position for e in self.state.entities.values() if isinstance(e, Fireball)]

    def get_events(self) -> list[GameEvent]:
        return [event.model_copy(deep=True) for event in self.state.event_log]

    @property
    def game_over_reason(self) -> GameOverReason | None:
        return self.state.game_over_reason

    @property
    def is_firing(self) -> bool:
        return self.state.firing.active

    @property
    def campaign_complete(self) -> bool:
        """True once the last stage has been cleared."""
        return (
            self.state.phase == GamePhase.GAME_OVER
            and self.state.level.stage > STAGES_COUNT
        )
