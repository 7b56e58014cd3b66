"""
WFCGen - engine/propagation.py
Propagation Engine: entropy selection, collapse, constraint BFS.
================================================================
Version:     0.3
Stack:       Python 3.11+ | NumPy
Status:      Core algorithm.

Phases per step
---------------
  1. find_to_collapse  - pick a random cell among those with the smallest
                         domain size > 1. None once every cell is singleton.
  2. collapse_single   - pick a random variant from that cell's domain.
  3. collapse (BFS)    - narrow neighbours of every newly singleton cell.
                         Only cells that BECOME singleton are queued again;
                         cells that merely shrink wait for a later collapse.

Contradiction (an empty domain) aborts the run. There is no backtracking.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Deque, Optional

import numpy as np

from engine.board import Board
from engine.grid import PossibilityGrid, Position
from engine.tiles import GenTile, TileSet

logger = logging.getLogger(__name__)


class Contradiction(RuntimeError):
    """A cell's domain became empty. Fatal to the current generation run."""

    def __init__(self, position: Position, grid_dump: str, reason: str = "domain became empty"):
        self.position = position
        self.grid_dump = grid_dump
        super().__init__(f"Contradiction at {position}: {reason}\n{grid_dump}")


class WaveCollapse:
    """
    Drives one PossibilityGrid to a fully resolved Board.
    Single-threaded and synchronous. Pass a seeded random.Random to replay.
    """

    def __init__(self, grid: PossibilityGrid, rng: Optional[random.Random] = None, trace: bool = False):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self.trace = trace
        self.steps = 0

    def _trace(self, message: str, *args) -> None:
        if self.trace and logger.isEnabledFor(logging.DEBUG):
            logger.debug(message + "\n%s", *args, self.grid.debug_repr())

    def find_to_collapse(self) -> Optional[Position]:
        arity = self.grid.arity_map()

        empty = np.argwhere(arity == 0)
        if len(empty):
            y, x = (int(v) for v in empty[0])
            raise Contradiction((x, y), self.grid.debug_repr())

        if int(arity.max()) == 1:
            # Every cell is determined
            return None

        min_arity = int(arity[arity > 1].min())
        ys, xs = np.nonzero(arity == min_arity)
        candidates = list(zip(xs.tolist(), ys.tolist()))
        return self.rng.choice(candidates)

    def collapse_single(self, pos: Position) -> GenTile:
        tile = self.rng.choice(list(self.grid.get(pos)))
        self.grid.set(pos, TileSet.only(tile))
        return tile

    def collapse(self, initial_pos: Position) -> None:
        """
        Collapses one cell, then spreads the consequences outward with a
        modified BFS. A neighbour is revisited only when it has just become
        singleton, so no visited set is needed.
        """
        queue: Deque[Position] = deque([initial_pos])

        self._trace("Before collapse_single at %s", initial_pos)
        self.collapse_single(initial_pos)
        self._trace("After collapse_single at %s", initial_pos)
        self.steps += 1

        while queue:
            pos = queue.popleft()
            (tile,) = self.grid.get(pos)
            self._trace("Processing %s from queue", pos)

            for direction, neighbor_pos in self.grid.neighbors(pos):
                if neighbor_pos is None:
                    continue

                neighbor = self.grid.get(neighbor_pos)
                old_len = len(neighbor)
                narrowed = neighbor.filter(
                    lambda possibility: tile.is_valid_neighbor(possibility, direction)
                )
                self.grid.set(neighbor_pos, narrowed)
                self._trace("After processing %s as neighbor of %s", neighbor_pos, pos)

                if narrowed.is_empty:
                    raise Contradiction(
                        neighbor_pos,
                        self.grid.debug_repr(),
                        reason=f"no variant may sit {direction.name} of {tile.name} at {pos}",
                    )

                # Newly singleton: its own constraints must spread next
                if len(narrowed) == 1 and len(narrowed) != old_len:
                    queue.append(neighbor_pos)

    def fully_collapse(self) -> Board:
        while (to_collapse := self.find_to_collapse()) is not None:
            self.collapse(to_collapse)
        logger.debug(
            "Resolved %dx%d %s grid in %d collapses",
            self.grid.width, self.grid.height, self.grid.tile_type.__name__, self.steps,
        )
        return Board.from_grid(self.grid)
