"""
WFCGen - engine/grid.py
Possibility Grid: per-cell domains over a fixed rectangular grid.
=================================================================
Version:     0.2
Stack:       Python 3.11+ | NumPy
Status:      Core storage layer for the propagation engine.

Domains are uint16 bitmasks in a (height, width) array, indexed [y, x].
Positions handed around the engine are (x, y) tuples.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple, Type

import numpy as np

from engine.tiles import Direction, GenTile, TileSet, check_tile_type

Position = Tuple[int, int]

# Neighbor visiting order; fixes the propagation queue order for a given rng.
NEIGHBOR_ORDER = (Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN)


def _popcount_table(bits: int) -> np.ndarray:
    table = np.zeros(1 << bits, dtype=np.uint8)
    for mask in range(1, 1 << bits):
        table[mask] = table[mask >> 1] + (mask & 1)
    return table


class PossibilityGrid:
    """
    Fixed-size grid where every cell holds the set of variants it may still
    become. Freshly constructed grids hold the full domain everywhere.
    """

    def __init__(self, tile_type: Type[GenTile], width: int, height: Optional[int] = None):
        check_tile_type(tile_type)
        if height is None:
            height = width
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")

        self.tile_type = tile_type
        self.width = width
        self.height = height
        self.variants: List[GenTile] = tile_type.all_variants()
        self._popcount = _popcount_table(len(self.variants))
        full = TileSet.all(tile_type).mask
        self.masks = np.full((height, width), full, dtype=np.uint16)

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, pos: Position) -> None:
        if not self.in_bounds(pos):
            raise IndexError(f"Position {pos} outside {self.width}x{self.height} grid")

    def get(self, pos: Position) -> TileSet:
        self._check(pos)
        x, y = pos
        return TileSet(self.tile_type, int(self.masks[y, x]))

    def set(self, pos: Position, domain: TileSet) -> None:
        self._check(pos)
        x, y = pos
        self.masks[y, x] = domain.mask

    def arity(self, pos: Position) -> int:
        self._check(pos)
        x, y = pos
        return int(self._popcount[self.masks[y, x]])

    def arity_map(self) -> np.ndarray:
        """Domain size of every cell, shaped (height, width)."""
        return self._popcount[self.masks]

    def positions(self) -> Iterator[Position]:
        """Row-major walk over every cell."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def neighbors(self, pos: Position) -> List[Tuple[Direction, Optional[Position]]]:
        x, y = pos
        result = []
        for direction in NEIGHBOR_ORDER:
            candidate = (x + direction.dx, y + direction.dy)
            result.append((direction, candidate if self.in_bounds(candidate) else None))
        return result

    def is_collapsed(self) -> bool:
        return bool(np.all(self.arity_map() == 1))

    def debug_repr(self) -> str:
        """
        One line per row. Each cell lists every variant glyph still possible,
        in ordinal order, with a blank for variants ruled out.
        """
        lines = []
        for y in range(self.height):
            cells = []
            for x in range(self.width):
                mask = int(self.masks[y, x])
                cells.append("".join(
                    tile.character_repr() if mask & (1 << i) else " "
                    for i, tile in enumerate(self.variants)
                ))
            lines.append(" ".join(cells))
        return "\n".join(lines)
