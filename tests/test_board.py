"""
WFCGen - tests/test_board.py
Tests for the resolved Board and the generate() entry points.
"""

import logging
import random
import re
from enum import auto

import pytest

from engine.board import Board, generate, generate_with_retries
from engine.grid import PossibilityGrid
from engine.propagation import Contradiction
from engine.tiles import Direction, GenTile, TileSet
from world.terrain import Tile

# Top-to-bottom: sky, then at most one grass, then dirt. Sky never touches dirt.
COLUMN_PATTERN = re.compile(r"S*(GD*)?|D*")


class Clash(GenTile):
    RED = auto()
    BLUE = auto()

    def is_valid_neighbor(self, other, direction):
        return False


def _column(board: Board, x: int) -> str:
    return "".join(row[x].character_repr() for row in board.iter_rows())


def test_board_accessors():
    board = Board((
        (Tile.SKY, Tile.SKY, Tile.GRASS),
        (Tile.GRASS, Tile.GRASS, Tile.DIRT),
    ))
    assert board.width == 3
    assert board.height == 2
    assert board[0, 2] is Tile.GRASS
    assert board[1, 0] is Tile.GRASS
    assert board.to_text() == "SSG\nGGD"

def test_iter_rows_is_restartable():
    board = generate(Tile, 4, rng=random.Random(1))
    first = list(board.iter_rows())
    second = list(board.iter_rows())
    assert first == second
    assert len(first) == 4
    assert all(len(row) == 4 for row in first)
    assert list(board) == first

def test_board_is_immutable():
    board = generate(Tile, 2, rng=random.Random(1))
    with pytest.raises(AttributeError):
        board.tiles = ()

def test_from_grid_requires_full_collapse():
    grid = PossibilityGrid(Tile, 2, 1)
    grid.set((0, 0), TileSet.only(Tile.SKY))
    with pytest.raises(ValueError):
        Board.from_grid(grid)

    grid.set((1, 0), TileSet.only(Tile.DIRT))
    assert Board.from_grid(grid).tiles == ((Tile.SKY, Tile.DIRT),)

def test_adjacency_violations_found():
    # Sky directly above dirt is illegal in both orientations
    board = Board(((Tile.SKY,), (Tile.DIRT,)))
    assert board.adjacency_violations() == [
        (0, 0, Direction.DOWN),
        (0, 1, Direction.UP),
    ]

def test_generated_boards_satisfy_every_rule():
    for seed in range(40):
        board = generate(Tile, 8, rng=random.Random(seed))
        assert board.adjacency_violations() == []
        for x in range(board.width):
            assert COLUMN_PATTERN.fullmatch(_column(board, x)), board.to_text()

def test_rectangular_generation():
    board = generate(Tile, 7, 3, rng=random.Random(11))
    assert (board.width, board.height) == (7, 3)
    assert board.adjacency_violations() == []

def test_single_cell_generation():
    for seed in range(10):
        board = generate(Tile, 1, rng=random.Random(seed))
        assert board[0, 0] in Tile.all_variants()

def test_generation_determinism():
    board1 = generate(Tile, 10, rng=random.Random(456))
    board2 = generate(Tile, 10, rng=random.Random(456))
    assert board1 == board2, "Boards should be identical for same seed"

def test_generation_different_seeds():
    board1 = generate(Tile, 10, rng=random.Random(789))
    board2 = generate(Tile, 10, rng=random.Random(987))
    assert board1 != board2, "Different seeds should produce different boards"

def test_generate_reports_contradiction():
    with pytest.raises(Contradiction):
        generate(Clash, 3, rng=random.Random(0))

def test_retries_exhausted(caplog):
    caplog.set_level(logging.WARNING, logger="engine.board")
    with pytest.raises(Contradiction):
        generate_with_retries(Clash, 2, 1, rng=random.Random(0), attempts=3)

    warnings = [r for r in caplog.records if r.name == "engine.board" and r.levelno == logging.WARNING]
    assert len(warnings) == 2

def test_retries_succeed_and_validate_attempts():
    board = generate_with_retries(Tile, 5, rng=random.Random(3), attempts=2)
    assert board.adjacency_violations() == []

    with pytest.raises(ValueError):
        generate_with_retries(Tile, 5, attempts=0)
