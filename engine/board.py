"""
WFCGen - engine/board.py
Resolved Board: immutable output grid and the public generation entry point.
============================================================================
Version:     0.2
Stack:       Python 3.11+
Status:      Public surface of the core.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple, Type

from engine.tiles import Direction, GenTile

if TYPE_CHECKING:
    from engine.grid import PossibilityGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Board:
    """Row-major grid of resolved tiles. Index with board[row, col]."""
    tiles: Tuple[Tuple[GenTile, ...], ...]

    @classmethod
    def from_grid(cls, grid: "PossibilityGrid") -> "Board":
        rows = []
        for y in range(grid.height):
            row = []
            for x in range(grid.width):
                domain = grid.get((x, y))
                if len(domain) != 1:
                    raise ValueError(f"Cell {(x, y)} is not collapsed: {domain!r}")
                row.append(next(iter(domain)))
            rows.append(tuple(row))
        return cls(tuple(rows))

    @property
    def height(self) -> int:
        return len(self.tiles)

    @property
    def width(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    def __getitem__(self, index: Tuple[int, int]) -> GenTile:
        row, col = index
        return self.tiles[row][col]

    def iter_rows(self) -> Iterator[Tuple[GenTile, ...]]:
        """Rows top-to-bottom; a new iterator on every call."""
        return iter(self.tiles)

    def __iter__(self) -> Iterator[Tuple[GenTile, ...]]:
        return self.iter_rows()

    def to_text(self) -> str:
        return "\n".join("".join(t.character_repr() for t in row) for row in self.tiles)

    def adjacency_violations(self) -> List[Tuple[int, int, Direction]]:
        """(x, y, direction) for every neighbour pair that breaks the rules."""
        found = []
        for y, row in enumerate(self.tiles):
            for x, tile in enumerate(row):
                for direction in Direction:
                    nx, ny = x + direction.dx, y + direction.dy
                    if 0 <= nx < self.width and 0 <= ny < self.height:
                        if not tile.is_valid_neighbor(self.tiles[ny][nx], direction):
                            found.append((x, y, direction))
        return found


def generate(
    tile_type: Type[GenTile],
    width: int,
    height: Optional[int] = None,
    rng: Optional[random.Random] = None,
    trace: bool = False,
) -> Board:
    """
    Builds a fresh grid and runs it to completion.
    Raises Contradiction if the tile rules paint the grid into a corner.
    """
    from engine.grid import PossibilityGrid
    from engine.propagation import WaveCollapse

    grid = PossibilityGrid(tile_type, width, height)
    logger.debug("Generating %dx%d board of %s", grid.width, grid.height, tile_type.__name__)
    return WaveCollapse(grid, rng=rng, trace=trace).fully_collapse()


def generate_with_retries(
    tile_type: Type[GenTile],
    width: int,
    height: Optional[int] = None,
    rng: Optional[random.Random] = None,
    trace: bool = False,
    attempts: int = 3,
) -> Board:
    """
    Re-runs whole fresh generations after a Contradiction.
    The engine itself never retries; this is a caller-side policy.
    """
    from engine.propagation import Contradiction

    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    rng = rng if rng is not None else random.Random()
    for attempt in range(1, attempts):
        try:
            return generate(tile_type, width, height, rng=rng, trace=trace)
        except Contradiction as exc:
            logger.warning("Generation attempt %d/%d failed at %s; retrying", attempt, attempts, exc.position)
    # Last attempt lets the Contradiction reach the caller
    return generate(tile_type, width, height, rng=rng, trace=trace)
