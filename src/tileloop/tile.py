"""Directions, tiles and the glyph tables used to print and parse them."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from tileloop.finite import EnumSet, Finite


class Direction(IntEnum):
    """Edge of a square tile.  Values are clockwise starting at the top."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def opposite(self) -> "Direction":
        """The direction pointing back from the neighbor in this direction."""
        return Direction((self + len(Direction) // 2) % len(Direction))

    @property
    def delta(self) -> tuple[int, int]:
        """(row, column) offset of the neighbor in this direction."""
        return _DELTAS[self]

    def __str__(self) -> str:
        return self.name.capitalize()


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}

DIRECTIONS: Finite[Direction] = Finite("Direction", len(Direction), int, Direction)


@dataclass(frozen=True, slots=True)
class Tile:
    """A square tile, represented by the set of edges bearing a connector.

    Tiles are values: rotating produces a new tile, there are exactly `2 ** len(Direction)`
    distinct tiles, and `Tile.from_index` returns a shared instance for each of them.
    """

    connectors: EnumSet[Direction]

    NO_CONNECTIONS: ClassVar["Tile"]
    ALL_CONNECTIONS: ClassVar["Tile"]

    @staticmethod
    def from_connectors(directions: Iterable[Direction]) -> "Tile":
        """Tile with connectors on exactly the given edges."""
        return Tile(EnumSet.of(DIRECTIONS, directions))

    @staticmethod
    def from_index(index: int) -> "Tile":
        """Tile whose connector set, read as an integer, is `index`."""
        return _ALL_TILES[index]

    @property
    def index(self) -> int:
        """Connector set as an integer, `Direction` `d` contributing `2 ** d`."""
        return self.connectors.to_index()

    def has(self, direction: Direction) -> bool:
        """Whether the tile has a connector on edge `direction`."""
        return direction in self.connectors

    def rotate(self, turns: int) -> "Tile":
        """Rotate by `turns` quarter turns, clockwise if positive, counterclockwise if negative."""
        n = len(Direction)
        turns %= n
        if turns == 0:
            return self
        index = self.index
        rotated = ((index << turns) | (index >> (n - turns))) & ((1 << n) - 1)
        return Tile.from_index(rotated)

    def rotated_clockwise(self, repetitions: int = 1) -> "Tile":
        return self.rotate(repetitions)

    def rotated_counterclockwise(self, repetitions: int = 1) -> "Tile":
        return self.rotate(-repetitions)

    def all_rotations(self) -> EnumSet["Tile"]:
        """Set of all tiles reachable by rotation, i.e. the orbit of the tile.

        Examples: `┗` -> `{┗, ┏, ┓, ┛}`, `┃` -> `{┃, ━}`, `╋` -> `{╋}`.
        """
        orbit = EnumSet.empty(TILES)
        tile = self
        while tile not in orbit:
            orbit = orbit.inserted(tile)
            tile = tile.rotate(1)
        return orbit

    def shape(self) -> "Tile":
        """Canonical representative of the tile's orbit (the member with the smallest index)."""
        return next(iter(self.all_rotations()))

    def rotation_to(self, other: "Tile") -> int | None:
        """Smallest number of clockwise quarter turns turning `self` into `other`.

        Returns None if `other` is not a rotation of `self`.
        """
        tile = self
        for turns in range(len(Direction)):
            if tile == other:
                return turns
            tile = tile.rotate(1)
        return None

    @property
    def glyph(self) -> str:
        """Box-drawing character showing the connectors."""
        return UNICODE_GLYPHS[self.index]

    @property
    def ascii_glyph(self) -> str:
        """ASCII character naming the tile's shape (rotation is not represented)."""
        return ASCII_GLYPHS[self.shape().index]

    def __str__(self) -> str:
        return self.glyph

    def __repr__(self) -> str:
        names = "|".join(d.name for d in self.connectors) or "NONE"
        return f"Tile({names})"


_ALL_TILES: tuple[Tile, ...] = tuple(
    Tile(EnumSet.from_index(DIRECTIONS, i)) for i in range(2 ** len(Direction))
)

Tile.NO_CONNECTIONS = _ALL_TILES[0]
Tile.ALL_CONNECTIONS = _ALL_TILES[-1]

TILES: Finite[Tile] = Finite("Tile", len(_ALL_TILES), lambda tile: tile.index, Tile.from_index)

UNICODE_GLYPHS = " ╹╺┗╻┃┏┣╸┛━┻┓┫┳╋"
"""Element `i` shows the tile with index `i`."""

ASCII_GLYPHS: dict[int, str] = {
    0: " ",  # empty
    1: "-",  # end
    5: "I",  # straight
    3: "L",  # corner
    7: "T",  # tee
    15: "+",  # cross
}
"""Maps the index of each shape's canonical tile to its ASCII character."""

UNICODE_TO_TILE: dict[str, Tile] = {
    glyph: Tile.from_index(i) for i, glyph in enumerate(UNICODE_GLYPHS)
}
ASCII_TO_TILE: dict[str, Tile] = {glyph: Tile.from_index(i) for i, glyph in ASCII_GLYPHS.items()}
