"""
WFCGen - engine/tiles.py
Tile Domain contract: directions, tile variant base class, compact domain sets.
==============================================================================
Version:     0.2
Stack:       Python 3.11+ | stdlib enum
Status:      Core contract. Concrete tile sets live in world/.

Architecture notes
------------------
- A tile type is an Enum subclass of GenTile. Its members ARE the variants.
- Variant ordinal (definition order) is the bit index inside a TileSet.
- is_valid_neighbor() must be total. The engine never checks symmetry;
  use inconsistent_rules() while authoring a rule table.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterator, List, Tuple, Type

MAX_VARIANTS: int = 16  # TileSet masks are stored as uint16 in the grid


class Direction(Enum):
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))


class GenTile(Enum):
    """
    Base for a closed, enumerable set of tile variants.

    Subclasses declare members and implement is_valid_neighbor() and
    character_repr(). Both must be pure.
    """

    @classmethod
    def all_variants(cls) -> List["GenTile"]:
        return list(cls)

    @property
    def ordinal(self) -> int:
        # Member order is stable for the life of the class
        return type(self)._member_names_.index(self.name)

    def is_valid_neighbor(self, other: "GenTile", direction: Direction) -> bool:
        """
        If self occupies a cell, may `other` occupy the cell in `direction`
        from it? In other words, `other` is in `direction` relative to self.
        """
        raise NotImplementedError(f"{type(self).__name__} defines no neighbor rules")

    def character_repr(self) -> str:
        return self.name[0]


def inconsistent_rules(tile_type: Type[GenTile]) -> List[Tuple[GenTile, GenTile, Direction]]:
    """
    Lists (a, b, direction) triples where a->b disagrees with b->a seen from
    the opposite side. An empty list means the rule table is symmetric.
    """
    found = []
    for a in tile_type.all_variants():
        for b in tile_type.all_variants():
            for direction in Direction:
                if a.is_valid_neighbor(b, direction) != b.is_valid_neighbor(a, direction.opposite):
                    found.append((a, b, direction))
    return found


def check_tile_type(tile_type: Type[GenTile]) -> None:
    """Raises ValueError when a tile type cannot back a TileSet."""
    count = len(tile_type.all_variants())
    if count == 0:
        raise ValueError(f"{tile_type.__name__} has no variants")
    if count > MAX_VARIANTS:
        raise ValueError(
            f"{tile_type.__name__} has {count} variants; at most {MAX_VARIANTS} are supported"
        )


class TileSet:
    """
    Immutable subset of one tile type's variants, stored as a bitmask
    indexed by variant ordinal.
    """

    __slots__ = ("tile_type", "mask")

    def __init__(self, tile_type: Type[GenTile], mask: int = 0):
        self.tile_type = tile_type
        self.mask = int(mask)

    @classmethod
    def all(cls, tile_type: Type[GenTile]) -> "TileSet":
        return cls(tile_type, (1 << len(tile_type.all_variants())) - 1)

    @classmethod
    def empty(cls, tile_type: Type[GenTile]) -> "TileSet":
        return cls(tile_type, 0)

    @classmethod
    def only(cls, tile: GenTile) -> "TileSet":
        return cls(type(tile), 1 << tile.ordinal)

    @property
    def is_empty(self) -> bool:
        return self.mask == 0

    def __len__(self) -> int:
        return self.mask.bit_count()

    def __contains__(self, tile: object) -> bool:
        if not isinstance(tile, self.tile_type):
            return False
        return bool(self.mask & (1 << tile.ordinal))

    def __iter__(self) -> Iterator[GenTile]:
        for tile in self.tile_type.all_variants():
            if self.mask & (1 << tile.ordinal):
                yield tile

    def filter(self, predicate: Callable[[GenTile], bool]) -> "TileSet":
        mask = 0
        for tile in self:
            if predicate(tile):
                mask |= 1 << tile.ordinal
        return TileSet(self.tile_type, mask)

    def __and__(self, other: "TileSet") -> "TileSet":
        return TileSet(self.tile_type, self.mask & other.mask)

    def __or__(self, other: "TileSet") -> "TileSet":
        return TileSet(self.tile_type, self.mask | other.mask)

    def issubset(self, other: "TileSet") -> bool:
        return self.mask & ~other.mask == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileSet):
            return NotImplemented
        return self.tile_type is other.tile_type and self.mask == other.mask

    def __hash__(self) -> int:
        return hash((self.tile_type, self.mask))

    def __repr__(self) -> str:
        names = ", ".join(t.name for t in self)
        return f"TileSet({self.tile_type.__name__}: {{{names}}})"
