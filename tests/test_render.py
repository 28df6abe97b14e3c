"""Tests for the plain-text renderer."""

from engine.grid import create_board
from engine.render import render_board, render_status
from models.entities import Block, Direction, Dragon, Fire, Flashlight, Key, KeyVisibility
from models.game_state import GameLevel, GamePhase


def _rows(text: str) -> list[list[str]]:
    """Split rendered output into a grid of glyphs, skipping the header."""
    return [line.split(" ") for line in text.splitlines()[1:]]


def _board_with(*entities):
    board = create_board(5, 5)
    for entity in entities:
        x, y = entity.position
        board.tiles[y][x] = entity
    return board


class TestRenderBoard:
    def test_empty_board(self):
        rows = _rows(render_board(create_board(5, 5), [], stage=1))
        assert len(rows) == 5
        assert all(cell == "." for row in rows for cell in row)

    def test_header_shows_stage(self):
        assert render_board(create_board(3, 3), [], stage=2).splitlines()[0] == "Stage 2"

    def test_entities_and_beam(self):
        board = _board_with(
            Flashlight(position=(2, 4), direction=Direction.UP),
            Block(position=(2, 1)),
            Dragon(position=(0, 0)),
            Fire(position=(4, 4), created_at=0, destroy_at=1),
        )
        rows = _rows(render_board(board, [(2, 3), (2, 2), (2, 1)], stage=1))
        assert rows[4][2] == "^"
        assert rows[3][2] == "*"
        assert rows[2][2] == "*"
        assert rows[1][2] == "#"
        assert rows[0][0] == "D"
        assert rows[4][4] == "~"

    def test_hidden_keys_look_like_floor(self):
        board = _board_with(
            Key(position=(1, 1), key_number=1, visibility=KeyVisibility.INVISIBLE),
            Key(position=(3, 3), key_number=2, visibility=KeyVisibility.ILLUMINATED),
            Key(position=(0, 4), key_number=3, visibility=KeyVisibility.VISIBLE),
        )
        rows = _rows(render_board(board, [], stage=2))
        assert rows[1][1] == "."
        assert rows[3][3] == "2"
        assert rows[4][0] == "3"

    def test_fireballs_drawn_on_empty_tiles(self):
        rows = _rows(render_board(create_board(5, 5), [], stage=1, fireballs=[(3, 0)]))
        assert rows[0][3] == "o"


class TestRenderStatus:
    def test_status_line(self):
        line = render_status(GameLevel(time_remaining=12.2, score=350), GamePhase.PLAYING)
        assert "Stage 1" in line
        assert "Keys 0/3" in line
        assert "Time 13" in line
        assert "Score 350" in line
        assert line.endswith("playing")

    def test_time_never_negative(self):
        line = render_status(GameLevel(time_remaining=-0.5), GamePhase.GAME_OVER)
        assert "Time 0" in line
