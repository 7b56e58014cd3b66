"""
WFCGen - engine/slot.py
BoardSlot: lock-guarded holder for the board currently on screen.
=================================================================
Version:     0.1
Stack:       Python 3.11+ | threading

Generation happens off-lock on a worker thread. The lock is held only to
read the current board or to swap a finished one in, so readers never see a
half-built grid. Overlapping regenerations race; the last swap wins.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from engine.board import Board
from engine.propagation import Contradiction

logger = logging.getLogger(__name__)

BoardFactory = Callable[[], Board]


class BoardSlot:
    def __init__(self, board: Board):
        self._lock = threading.Lock()
        self._board = board
        self.generations = 0

    def read(self) -> Board:
        with self._lock:
            return self._board

    def swap(self, board: Board) -> Board:
        """Installs `board` and returns the one it replaced."""
        with self._lock:
            previous, self._board = self._board, board
            self.generations += 1
        return previous

    def regenerate(self, factory: BoardFactory) -> threading.Thread:
        """Builds a new board on a daemon thread and swaps it in when done."""
        worker = threading.Thread(target=self._run, args=(factory,), name="board-regen", daemon=True)
        worker.start()
        return worker

    def _run(self, factory: BoardFactory) -> None:
        try:
            board = factory()
        except Contradiction as exc:
            logger.error("Background generation failed at %s; keeping current board", exc.position)
            logger.debug("Grid at failure:\n%s", exc.grid_dump)
            return
        self.swap(board)
        logger.debug("Swapped in %dx%d board", board.width, board.height)
