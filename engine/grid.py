"""2D board, placement, distance, and direction logic for Dragonlight."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from config import PLACEMENT_ATTEMPTS
from models.entities import Direction
from models.game_state import Board

if TYPE_CHECKING:
    from models.entities import Entity
    from models.game_state import GameState


def create_board(width: int, height: int) -> Board:
    """Initialize an empty board.

    Args:
        width: Number of columns.
        height: Number of rows.

    Returns:
        A Board whose tiles are indexed as tiles[y][x].
    """
    return Board(
        width=width,
        height=height,
        tiles=[[None for _ in range(width)] for _ in range(height)],
    )


def step(position: tuple[int, int], direction: Direction) -> tuple[int, int]:
    """Return the tile one step away from position in direction."""
    dx, dy = direction.delta
    return (position[0] + dx, position[1] + dy)


def distance(pos1: tuple[int, int], pos2: tuple[int, int]) -> int:
    """Manhattan distance in tiles between two positions.

    Args:
        pos1: (x, y) of first position.
        pos2: (x, y) of second position.

    Returns:
        Distance in tiles.
    """
    return abs(pos1[0] - pos2[0]) + abs(pos1[1] - pos2[1])


def direction_towards(source: tuple[int, int], target: tuple[int, int]) -> Direction:
    """Pick the single step that most reduces the distance to target.

    The axis with the larger absolute delta wins; horizontal wins a tie.
    """
    dx = target[0] - source[0]
    dy = target[1] - source[1]
    if abs(dx) >= abs(dy) and dx != 0:
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def random_direction(rng: random.Random) -> Direction:
    return rng.choice(list(Direction))


def random_position(board: Board, rng: random.Random) -> tuple[int, int]:
    return (rng.randrange(board.width), rng.randrange(board.height))


def find_empty_position(
    board: Board,
    rng: random.Random,
    avoid: tuple[int, int] | None = None,
    min_distance: int = 0,
    attempts: int = PLACEMENT_ATTEMPTS,
) -> tuple[int, int] | None:
    """Sample random tiles until an unoccupied one is found.

    Args:
        board: The board to search.
        rng: Random source.
        avoid: Optional position the result must keep away from.
        min_distance: Minimum Manhattan distance from `avoid`.
        attempts: How many samples to draw before giving up.

    Returns:
        An empty (x, y) position, or None if every sample was rejected.
    """
    for _ in range(attempts):
        pos = random_position(board, rng)
        if board.at(pos) is not None:
            continue
        if avoid is not None and distance(pos, avoid) < min_distance:
            continue
        return pos
    return None


def place_entity(game_state: GameState, entity: Entity) -> bool:
    """Put an entity on its tile and index it in the registry.

    Out-of-bounds positions and tiles held by another entity are silently
    refused so a tile never holds more than one entity.

    Returns:
        True if the entity was placed.
    """
    board = game_state.board
    if not board.in_bounds(entity.position):
        return False
    current = board.at(entity.position)
    if current is not None and current is not entity:
        return False
    x, y = entity.position
    board.tiles[y][x] = entity
    game_state.entities[entity.id] = entity
    return True


def remove_entity(game_state: GameState, entity: Entity) -> None:
    """Clear the entity's tile (if it holds it) and drop it from the registry."""
    board = game_state.board
    if board.at(entity.position) is entity:
        x, y = entity.position
        board.tiles[y][x] = None
    game_state.entities.pop(entity.id, None)


def relocate_entity(
    game_state: GameState,
    entity: Entity,
    target: tuple[int, int],
) -> bool:
    """Move a placed entity to an empty in-bounds tile.

    Returns:
        True if the entity moved. The board is left untouched otherwise.
    """
    board = game_state.board
    if not board.in_bounds(target) or board.at(target) is not None:
        return False
    sx, sy = entity.position
    if board.tiles[sy][sx] is entity:
        board.tiles[sy][sx] = None
    entity.position = target
    tx, ty = target
    board.tiles[ty][tx] = entity
    game_state.entities[entity.id] = entity
    return True


def clear_board(game_state: GameState) -> None:
    """Empty every tile and the entity registry."""
    board = game_state.board
    for row in board.tiles:
        for x in range(len(row)):
            row[x] = None
    game_state.entities.clear()


def empty_positions(board: Board) -> list[tuple[int, int]]:
    """All unoccupied tiles in row-major order."""
    return [
        (x, y)
        for y in range(board.height)
        for x in range(board.width)
        if board.tiles[y][x] is None
    ]
