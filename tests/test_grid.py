import pytest

from engine.grid import PossibilityGrid
from engine.tiles import Direction, TileSet
from world.terrain import Tile


def test_new_grid_holds_full_domain_everywhere():
    grid = PossibilityGrid(Tile, 4)
    assert grid.width == 4
    assert grid.height == 4
    assert grid.masks.shape == (4, 4)
    for pos in grid.positions():
        assert grid.get(pos) == TileSet.all(Tile)
        assert grid.arity(pos) == 3
    assert (grid.arity_map() == 3).all()
    assert not grid.is_collapsed()

def test_rectangular_grid_and_bad_sizes():
    grid = PossibilityGrid(Tile, 2, 1)
    assert (grid.width, grid.height) == (2, 1)
    assert list(grid.positions()) == [(0, 0), (1, 0)]

    with pytest.raises(ValueError):
        PossibilityGrid(Tile, 0)

def test_get_set_and_bounds():
    grid = PossibilityGrid(Tile, 3)
    grid.set((2, 1), TileSet.only(Tile.SKY))
    assert grid.get((2, 1)) == TileSet.only(Tile.SKY)
    # stored [y, x]
    assert grid.masks[1, 2] == TileSet.only(Tile.SKY).mask
    assert grid.arity((2, 1)) == 1

    assert grid.in_bounds((0, 0))
    assert not grid.in_bounds((3, 0))
    assert not grid.in_bounds((0, -1))
    with pytest.raises(IndexError):
        grid.get((3, 0))
    with pytest.raises(IndexError):
        grid.set((-1, 0), TileSet.all(Tile))

def test_neighbors_corner_and_center():
    grid = PossibilityGrid(Tile, 3)

    corner = grid.neighbors((0, 0))
    assert corner == [
        (Direction.LEFT, None),
        (Direction.UP, None),
        (Direction.RIGHT, (1, 0)),
        (Direction.DOWN, (0, 1)),
    ]

    center = dict(grid.neighbors((1, 1)))
    assert center == {
        Direction.LEFT: (0, 1),
        Direction.UP: (1, 0),
        Direction.RIGHT: (2, 1),
        Direction.DOWN: (1, 2),
    }

    far = dict(grid.neighbors((2, 2)))
    assert far[Direction.RIGHT] is None
    assert far[Direction.DOWN] is None

def test_single_cell_has_no_neighbors():
    grid = PossibilityGrid(Tile, 1)
    assert all(pos is None for _, pos in grid.neighbors((0, 0)))

def test_is_collapsed():
    grid = PossibilityGrid(Tile, 2, 1)
    grid.set((0, 0), TileSet.only(Tile.DIRT))
    assert not grid.is_collapsed()
    grid.set((1, 0), TileSet.only(Tile.GRASS))
    assert grid.is_collapsed()

def test_debug_repr_shows_remaining_glyphs():
    grid = PossibilityGrid(Tile, 2, 2)
    grid.set((1, 0), TileSet.only(Tile.SKY))
    grid.set((0, 1), TileSet.only(Tile.DIRT) | TileSet.only(Tile.GRASS))

    lines = grid.debug_repr().split("\n")
    assert lines == [
        "DGS   S",
        "DG  DGS",
    ]
