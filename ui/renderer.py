"""
WFCGen - ui/renderer.py
TCOD Renderer: console ownership and board drawing.
===================================================
Version:     0.2
Stack:       Python 3.11+ | tcod | NumPy
"""

from __future__ import annotations
from typing import Optional, Tuple
import tcod

from engine.board import Board
from engine.data_loader import DisplayDef, PaletteDef


def console_size(board_width: int, board_height: int, display: DisplayDef) -> Tuple[int, int]:
    """Console (width, height) needed to show a board with margins."""
    return (
        board_width * display.cell_width + 2 * display.margin,
        board_height * display.cell_height + 2 * display.margin,
    )


class Renderer:
    """
    Manages the tcod root console and rendering loop.
    """
    def __init__(self, width: int, height: int, title: str = "WFCGen"):
        self.width = width
        self.height = height
        self.title = title
        self.root_console = tcod.console.Console(width, height)
        self.context: Optional[tcod.context.Context] = None

    def clear(self) -> None:
        """Clear the console with black."""
        self.root_console.clear()

    def present(self, context: tcod.context.Context) -> None:
        """Present the current console to the screen."""
        context.present(self.root_console)

    def draw_board(self, board: Board, palette: PaletteDef, display: DisplayDef) -> None:
        """Paints every tile as a cell_width x cell_height block of its colour."""
        bg = self.root_console.bg
        ch = self.root_console.ch
        for row_num, row in enumerate(board.iter_rows()):
            y0 = display.margin + row_num * display.cell_height
            for col_num, tile in enumerate(row):
                x0 = display.margin + col_num * display.cell_width
                bg[y0:y0 + display.cell_height, x0:x0 + display.cell_width] = palette.color_for(tile)
                if display.show_glyphs:
                    ch[y0 + display.cell_height // 2, x0 + display.cell_width // 2] = ord(tile.character_repr())
