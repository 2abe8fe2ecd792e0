"""Immutable grid of tiles: the game board as seen by the solver and its callers."""

from collections.abc import Callable, Iterable, Iterator

import numpy as np

from tileloop.coordinate import Coordinate
from tileloop.tile import Direction, Tile


class Grid:
    """Store a rectangle of tiles as a 1D tuple in row-major order.

    Grids are never modified in place: every "change" returns a new Grid.  Lookups outside
    the grid yield the empty tile, which acts as a border of sentinel tiles around the board.
    """

    __slots__ = ("n_rows", "n_cols", "_tiles")

    def __init__(self, n_rows: int, n_cols: int, tiles: Iterable[Tile]) -> None:
        tiles = tuple(tiles)
        if n_rows <= 0 or n_cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {n_rows}x{n_cols}.")
        if len(tiles) != n_rows * n_cols:
            raise ValueError(
                f"Grid of {n_rows}x{n_cols} needs {n_rows * n_cols} tiles, got {len(tiles)}."
            )
        self.n_rows: int = n_rows
        """Number of rows in the grid."""

        self.n_cols: int = n_cols
        """Number of columns in the grid."""

        self._tiles: tuple[Tile, ...] = tiles

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Tile]]) -> "Grid":
        """Build a grid from a sequence of equally long rows."""
        rows = [tuple(row) for row in rows]
        if not rows:
            raise ValueError("A grid needs at least one row.")
        n_cols = len(rows[0])
        if any(len(row) != n_cols for row in rows):
            raise ValueError("All rows of a grid must have the same length.")
        return cls(len(rows), n_cols, (tile for row in rows for tile in row))

    @property
    def rows(self) -> int:
        return self.n_rows

    @property
    def columns(self) -> int:
        return self.n_cols

    height = rows
    width = columns

    @property
    def tiles(self) -> tuple[Tile, ...]:
        """All tiles in row-major order."""
        return self._tiles

    def get_1d_idx(self, coordinate: Coordinate) -> int:
        """Convert a coordinate to an index into `tiles`."""
        return coordinate.row * self.n_cols + coordinate.column

    def get_2d_idx(self, one_d_idx: int) -> Coordinate:
        """Convert an index into `tiles` to a coordinate."""
        return Coordinate(*divmod(one_d_idx, self.n_cols))

    def contains(self, coordinate: Coordinate) -> bool:
        return coordinate.in_bounds(self.n_rows, self.n_cols)

    def __getitem__(self, coordinate: Coordinate | tuple[int, int]) -> Tile:
        """Tile at `coordinate`.

        Raises:
            IndexError: If the coordinate lies outside the grid.
        """
        coordinate = Coordinate(*coordinate)
        if not self.contains(coordinate):
            raise IndexError(
                f"Grid dimensions are {self.n_rows}x{self.n_cols}, but trying to access {coordinate}."
            )
        return self._tiles[self.get_1d_idx(coordinate)]

    def get(self, coordinate: Coordinate | tuple[int, int]) -> Tile:
        """Tile at `coordinate`, or the empty tile if the coordinate lies outside the grid."""
        coordinate = Coordinate(*coordinate)
        if not self.contains(coordinate):
            return Tile.NO_CONNECTIONS
        return self._tiles[self.get_1d_idx(coordinate)]

    def neighbors(self, coordinate: Coordinate) -> dict[Direction, Tile]:
        """Tiles adjacent to `coordinate`, using the empty tile beyond the border."""
        return {
            direction: self.get(neighbor) for direction, neighbor in coordinate.neighbors().items()
        }

    def coordinates(self) -> Iterator[Coordinate]:
        """All coordinates in raster order."""
        for row in range(self.n_rows):
            for column in range(self.n_cols):
                yield Coordinate(row, column)

    def items(self) -> Iterator[tuple[Coordinate, Tile]]:
        """(coordinate, tile) pairs in raster order."""
        return zip(self.coordinates(), self._tiles)

    def with_cell_replaced(self, coordinate: Coordinate, tile: Tile) -> "Grid":
        """Copy of the grid with the tile at `coordinate` replaced.

        Raises:
            IndexError: If the coordinate lies outside the grid.
        """
        coordinate = Coordinate(*coordinate)
        if not self.contains(coordinate):
            raise IndexError(f"Cannot replace {coordinate} in a {self.n_rows}x{self.n_cols} grid.")
        tiles = list(self._tiles)
        tiles[self.get_1d_idx(coordinate)] = tile
        return Grid(self.n_rows, self.n_cols, tiles)

    def rotated(self, coordinate: Coordinate, turns: int = 1) -> "Grid":
        """Copy of the grid with one tile rotated by `turns` clockwise quarter turns."""
        return self.with_cell_replaced(coordinate, self[coordinate].rotate(turns))

    def rotate_clockwise(self, coordinate: Coordinate) -> "Grid":
        return self.rotated(coordinate, 1)

    def rotate_counterclockwise(self, coordinate: Coordinate) -> "Grid":
        return self.rotated(coordinate, -1)

    def map(self, transform: Callable[[Tile], Tile]) -> "Grid":
        """Grid of the same dimensions with `transform` applied to every tile."""
        return Grid(self.n_rows, self.n_cols, map(transform, self._tiles))

    def shapes(self) -> "Grid":
        """Grid of the canonical shape of every tile, i.e. the level without its rotations."""
        return self.map(Tile.shape)

    def same_shapes(self, other: "Grid") -> bool:
        """Whether `other` has the same dimensions and differs only by rotating tiles."""
        return (self.n_rows, self.n_cols) == (other.n_rows, other.n_cols) and all(
            mine.shape() == theirs.shape() for mine, theirs in zip(self._tiles, other._tiles)
        )

    def scrambled(self, seed: int | None = None) -> "Grid":
        """Copy of the grid with every tile rotated by a random number of quarter turns."""
        rng = np.random.default_rng(seed)
        turns = rng.integers(0, len(Direction), size=len(self._tiles))
        return Grid(
            self.n_rows,
            self.n_cols,
            (tile.rotate(int(k)) for tile, k in zip(self._tiles, turns)),
        )

    def to_array(self) -> np.ndarray:
        """Tile indexes as a 2D array of shape (rows, columns)."""
        return np.fromiter(
            (tile.index for tile in self._tiles), dtype=np.uint8, count=len(self._tiles)
        ).reshape(self.n_rows, self.n_cols)

    def is_solved(self) -> bool:
        """Whether every connector meets a connector of the adjacent tile.

        The grid is surrounded by a ring of empty tiles, so connectors pointing off the board
        are unmatched like any other.
        """
        padded = np.pad(self.to_array(), 1, constant_values=Tile.NO_CONNECTIONS.index)

        def connector(cells: np.ndarray, direction: Direction) -> np.ndarray:
            return (cells >> int(direction)) & 1

        rows_match = np.array_equal(
            connector(padded[:, :-1], Direction.RIGHT), connector(padded[:, 1:], Direction.LEFT)
        )
        columns_match = np.array_equal(
            connector(padded[:-1, :], Direction.DOWN), connector(padded[1:, :], Direction.UP)
        )
        return bool(rows_match and columns_match)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.n_rows, self.n_cols, self._tiles) == (other.n_rows, other.n_cols, other._tiles)

    def __hash__(self) -> int:
        return hash((self.n_rows, self.n_cols, self._tiles))

    def __str__(self) -> str:
        """Rows of box-drawing characters separated by newlines."""
        return "\n".join(
            "".join(tile.glyph for tile in self._tiles[row * self.n_cols : (row + 1) * self.n_cols])
            for row in range(self.n_rows)
        )

    def __repr__(self) -> str:
        return f"Grid({self.n_rows}x{self.n_cols}, {str(self)!r})"
