"""Tests for flashlight beam tracing and the per-stage key visibility policy."""

import random

from engine.beam import flashlight_beam, trace_beam
from engine.game import GameEngine
from engine.grid import create_board, place_entity, relocate_entity, remove_entity
from models.entities import Block, Direction, Key, KeyVisibility


def _make_engine(stage: int = 1) -> GameEngine:
    """Helper: an engine with only the flashlight left on the board, at (7, 7) facing up."""
    engine = GameEngine(now=0, rng=random.Random(5))
    state = engine.state
    for entity in list(state.entities.values()):
        if entity is not state.flashlight:
            remove_entity(state, entity)
    state.dragon = None
    state.dragon_respawn_at = float("inf")
    state.level.stage = stage
    return engine


def _place_key(engine: GameEngine, pos, number=1, visibility=KeyVisibility.INVISIBLE) -> Key:
    key = Key(position=pos, key_number=number, visibility=visibility)
    place_entity(engine.state, key)
    return key


class TestTraceBeam:
    """Tests for trace_beam()."""

    def test_runs_to_edge_on_empty_board(self):
        board = create_board(15, 15)
        beam = trace_beam(board, (7, 7), Direction.UP)
        assert beam == [(7, y) for y in range(6, -1, -1)]

    def test_excludes_origin(self):
        board = create_board(5, 5)
        assert (2, 2) not in trace_beam(board, (2, 2), Direction.RIGHT)

    def test_stops_at_first_entity(self):
        board = create_board(15, 15)
        board.tiles[4][7] = Block(position=(7, 4))
        board.tiles[2][7] = Block(position=(7, 2))
        assert trace_beam(board, (7, 7), Direction.UP) == [(7, 6), (7, 5), (7, 4)]

    def test_facing_the_edge_gives_empty_beam(self):
        board = create_board(5, 5)
        assert trace_beam(board, (0, 3), Direction.LEFT) == []

    def test_never_passes_through_occupied_tiles(self):
        engine = GameEngine(now=0, rng=random.Random(21))
        for direction in Direction:
            engine.state.flashlight.direction = direction
            beam = engine.get_flashlight_beam()
            board = engine.state.board
            for pos in beam[:-1]:
                assert board.at(pos) is None


class TestKeyVisibility:
    """Tests for the beam's effect on keys."""

    def test_lit_key_is_illuminated_on_stage_one(self):
        engine = _make_engine(stage=1)
        key = _place_key(engine, (7, 4), visibility=KeyVisibility.VISIBLE)
        flashlight_beam(engine.state)
        assert key.visibility == KeyVisibility.ILLUMINATED

    def test_key_behind_block_stays_dark(self):
        engine = _make_engine(stage=2)
        place_entity(engine.state, Block(position=(7, 5)))
        key = _place_key(engine, (7, 3))
        flashlight_beam(engine.state)
        assert key.visibility == KeyVisibility.INVISIBLE

    def test_stage_two_illumination_is_sticky(self):
        engine = _make_engine(stage=2)
        key = _place_key(engine, (7, 5))
        engine.get_flashlight_beam()
        assert key.visibility == KeyVisibility.ILLUMINATED

        engine.state.flashlight.direction = Direction.RIGHT
        engine.get_flashlight_beam()
        assert key.visibility == KeyVisibility.ILLUMINATED

    def test_final_stage_illumination_decays(self):
        engine = _make_engine(stage=3)
        key = _place_key(engine, (7, 5))
        engine.get_flashlight_beam()
        assert key.visibility == KeyVisibility.ILLUMINATED

        engine.state.flashlight.direction = Direction.LEFT
        engine.get_flashlight_beam()
        assert key.visibility == KeyVisibility.INVISIBLE

    def test_final_stage_hides_keys_off_the_beam(self):
        engine = _make_engine(stage=3)
        lit = _place_key(engine, (7, 2), number=1)
        dark = _place_key(engine, (3, 3), number=2, visibility=KeyVisibility.ILLUMINATED)
        engine.get_flashlight_beam()
        assert lit.visibility == KeyVisibility.ILLUMINATED
        assert dark.visibility == KeyVisibility.INVISIBLE

    def test_beam_follows_flashlight(self):
        engine = _make_engine()
        relocate_entity(engine.state, engine.state.flashlight, (0, 0))
        engine.state.flashlight.direction = Direction.DOWN
        beam = engine.get_flashlight_beam()
        assert beam[0] == (0, 1)
        assert beam[-1] == (0, 14)
