"""
WFCGen - world/terrain.py
Side-view terrain tiles: sky above a single grass line above dirt.
=================================================================
"""

from enum import auto
from typing import Dict, Type

from engine.tiles import Direction, GenTile

HORIZONTAL = (Direction.LEFT, Direction.RIGHT)


class Tile(GenTile):
    DIRT = auto()
    GRASS = auto()
    SKY = auto()

    def is_valid_neighbor(self, other: "Tile", direction: Direction) -> bool:
        pair = (self, other)
        # dirt can always neighbor dirt, sky can always neighbor sky
        if pair in ((Tile.DIRT, Tile.DIRT), (Tile.SKY, Tile.SKY)):
            return True
        # grass only sits beside grass, never above or below it
        if pair == (Tile.GRASS, Tile.GRASS):
            return direction in HORIZONTAL
        # dirt and sky only meet side by side
        if pair in ((Tile.DIRT, Tile.SKY), (Tile.SKY, Tile.DIRT)):
            return direction in HORIZONTAL
        # sky can't be below grass
        if pair == (Tile.GRASS, Tile.SKY):
            return direction != Direction.DOWN
        if pair == (Tile.SKY, Tile.GRASS):
            return direction != Direction.UP
        # dirt can't be above grass
        if pair == (Tile.GRASS, Tile.DIRT):
            return direction != Direction.UP
        if pair == (Tile.DIRT, Tile.GRASS):
            return direction != Direction.DOWN
        raise ValueError(f"No rule for {self.name} -> {other.name}")

    def character_repr(self) -> str:
        return {Tile.DIRT: "D", Tile.GRASS: "G", Tile.SKY: "S"}[self]


TILE_SETS: Dict[str, Type[GenTile]] = {
    "terrain": Tile,
}
