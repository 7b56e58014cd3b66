"""
WFCGen - ui/screens.py
Implementations of the viewer screen states.
"""
import random
from typing import Optional, Type

import tcod

from engine.board import Board, generate_with_retries
from engine.data_loader import SettingsDef
from engine.logging_config import get_logger
from engine.slot import BoardSlot
from engine.tiles import GenTile
from ui.renderer import Renderer
from ui.states import App, BaseState

logger = get_logger("ui.screens")


class BoardViewState(BaseState):
    """
    Shows the current board. [N] regenerates in the background, [Q]/[Esc] quits.
    """

    def __init__(
        self,
        app: App,
        tile_type: Type[GenTile],
        settings: SettingsDef,
        slot: Optional[BoardSlot] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(app)
        self.tile_type = tile_type
        self.settings = settings
        self.rng = rng if rng is not None else random.Random(settings.generation.seed)
        self.slot = slot if slot is not None else BoardSlot(self.build_board())

    def build_board(self, seed: Optional[int] = None) -> Board:
        gen = self.settings.generation
        if seed is None:
            seed = self.rng.getrandbits(64)
        # Each request gets its own Random so concurrent workers never share state
        return generate_with_retries(
            self.tile_type,
            gen.size,
            rng=random.Random(seed),
            trace=gen.trace,
            attempts=gen.max_attempts,
        )

    def on_render(self, renderer: Renderer) -> None:
        renderer.draw_board(
            self.slot.read(),
            self.settings.palette(),
            self.settings.display,
        )

    def ev_keydown(self, event: tcod.event.KeyDown) -> None:
        if event.sym in (tcod.event.KeySym.Q, tcod.event.KeySym.ESCAPE):
            self.app.running = False
        elif event.sym == tcod.event.KeySym.N:
            logger.debug("Regeneration requested")
            seed = self.rng.getrandbits(64)
            self.slot.regenerate(lambda: self.build_board(seed))
