"""Tests for fireball flight and fire burn-out."""

import random

from config import FIRE_BURN_MAX_MS, FIRE_BURN_MIN_MS
from engine.game import GameEngine
from engine.grid import create_board, place_entity, remove_entity
from engine.progression import check_board_consistency
from engine.projectiles import (
    advance_fireball,
    ignite,
    launch_fireball,
    update_fireballs,
    update_fires,
)
from models.entities import Block, Direction, Dragon, Fire, Fireball
from models.game_state import GameState


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


NEVER_FIZZLE = FixedRandom(0.99)
ALWAYS_FIZZLE = FixedRandom(0.0)


def _make_game_state() -> GameState:
    return GameState(board=create_board(15, 15))


class TestAdvanceFireball:
    """Tests for advance_fireball()."""

    def test_flies_through_empty_tiles(self):
        gs = _make_game_state()
        fireball = launch_fireball(gs, (5, 5), Direction.RIGHT, now=0)
        assert advance_fireball(gs, fireball, 50, NEVER_FIZZLE) is None
        assert fireball.position == (6, 5)
        assert fireball.moved_at == 50
        assert gs.board.at((6, 5)) is None
        assert gs.entities[fireball.id] is fireball

    def test_board_edge_turns_into_fire(self):
        gs = _make_game_state()
        fireball = launch_fireball(gs, (0, 3), Direction.LEFT, now=0)
        fire = advance_fireball(gs, fireball, 50, NEVER_FIZZLE)
        assert isinstance(fire, Fire)
        assert fire.position == (0, 3)
        assert gs.board.at((0, 3)) is fire
        assert fireball.id not in gs.entities

    def test_entity_ahead_turns_into_fire(self):
        gs = _make_game_state()
        place_entity(gs, Block(position=(5, 4)))
        fireball = launch_fireball(gs, (5, 5), Direction.UP, now=0)
        fire = advance_fireball(gs, fireball, 50, NEVER_FIZZLE)
        assert fire is not None
        assert fire.position == (5, 5)

    def test_random_early_stop(self):
        gs = _make_game_state()
        fireball = launch_fireball(gs, (5, 5), Direction.DOWN, now=0)
        fire = advance_fireball(gs, fireball, 50, ALWAYS_FIZZLE)
        assert fire is not None
        assert fire.position == (5, 5)

    def test_stopping_on_occupied_tile_burns_out(self):
        """A fireball still over the dragon's tile leaves no fire behind."""
        gs = _make_game_state()
        dragon = Dragon(position=(0, 0), direction=Direction.UP)
        place_entity(gs, dragon)
        fireball = launch_fireball(gs, (0, 0), Direction.UP, now=0)
        assert advance_fireball(gs, fireball, 50, NEVER_FIZZLE) is None
        assert gs.board.at((0, 0)) is dragon
        assert list(gs.entities.values()) == [dragon]

    def test_fireballs_share_tiles(self):
        gs = _make_game_state()
        a = launch_fireball(gs, (3, 3), Direction.RIGHT, now=0)
        b = launch_fireball(gs, (5, 3), Direction.LEFT, now=0)
        advance_fireball(gs, a, 50, NEVER_FIZZLE)
        advance_fireball(gs, b, 50, NEVER_FIZZLE)
        assert a.position == b.position == (4, 3)


class TestIgnite:
    def test_burn_time_in_range(self):
        gs = _make_game_state()
        rng = random.Random(2)
        for i in range(20):
            fire = ignite(gs, (i % 15, i // 15), 1000, rng)
            assert fire is not None
            assert 1000 + FIRE_BURN_MIN_MS <= fire.destroy_at <= 1000 + FIRE_BURN_MAX_MS
            assert fire.created_at == 1000


class TestUpdates:
    def test_fireball_moves_on_interval(self):
        gs = _make_game_state()
        fireball = launch_fireball(gs, (5, 5), Direction.RIGHT, now=0)
        update_fireballs(gs, 49, NEVER_FIZZLE)
        assert fireball.position == (5, 5)
        update_fireballs(gs, 50, NEVER_FIZZLE)
        assert fireball.position == (6, 5)
        update_fireballs(gs, 99, NEVER_FIZZLE)
        assert fireball.position == (6, 5)
        update_fireballs(gs, 100, NEVER_FIZZLE)
        assert fireball.position == (7, 5)

    def test_fire_expires(self):
        gs = _make_game_state()
        fire = Fire(position=(2, 2), created_at=0, destroy_at=4000)
        place_entity(gs, fire)
        assert update_fires(gs, 3999) == 0
        assert gs.board.at((2, 2)) is fire
        assert update_fires(gs, 4000) == 1
        assert gs.board.at((2, 2)) is None
        assert fire.id not in gs.entities

    def test_engine_keeps_fireballs_off_the_board(self):
        engine = GameEngine(now=0, rng=random.Random(30))
        state = engine.state
        for entity in list(state.entities.values()):
            if entity is not state.flashlight:
                remove_entity(state, entity)
        state.dragon = None
        state.dragon_respawn_at = float("inf")
        launch_fireball(state, (2, 2), Direction.RIGHT, now=0)

        assert engine.get_fireballs() == [(2, 2)]
        assert engine.get_board().at((2, 2)) is None
        assert check_board_consistency(state) == []
        assert any(isinstance(e, Fireball) for e in state.entities.values())
