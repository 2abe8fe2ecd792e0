"""Candidate grids: every cell holds the set of tiles it may still become.

Solving a level starts from the superposition of all rotations of every tile.  Constraints
are propagated between neighbors until nothing changes (arc consistency):

* the border rule is modelled as a ring of sentinel cells fixed to the empty tile, so it is
  the same local check as every other edge;
* a connector present in every candidate of a cell forces the neighbor across that edge to
  have the opposite connector, a connector absent from every candidate forbids it.

Cells only ever lose candidates.  Each time an interior cell is narrowed down to a single
tile, the fixation is appended to the trace of the candidate grid.
"""

from functools import lru_cache
from typing import TypeAlias

from sortedcontainers import SortedSet

from tileloop.coordinate import Coordinate
from tileloop.finite import EnumSet
from tileloop.grid import Grid
from tileloop.tile import DIRECTIONS, TILES, Direction, Tile

Superposition: TypeAlias = EnumSet[Tile]
"""Set of tiles a cell may still become.  A cell with a single candidate is fixed."""

Trace: TypeAlias = tuple[tuple[Coordinate, Tile], ...]
"""Fixation events (coordinate, tile) in the order they were determined."""

SENTINEL: Superposition = EnumSet.of(TILES, [Tile.NO_CONNECTIONS])

TILES_WITH: tuple[Superposition, ...] = tuple(
    EnumSet.of(TILES, (tile for tile in TILES.values() if tile.has(direction)))
    for direction in Direction
)
"""Element [d] is the set of all tiles with a connector towards direction d."""

TILES_WITHOUT: tuple[Superposition, ...] = tuple(~tiles for tiles in TILES_WITH)
"""Element [d] is the set of all tiles without a connector towards direction d."""


@lru_cache(maxsize=None)
def neighbor_restrictions(candidates: Superposition) -> tuple[tuple[Direction, Superposition], ...]:
    """Restrictions a cell with the given candidates imposes on its neighbors.

    Returns:
        Tuples (direction, allowed), meaning the neighbor across edge `direction` must
        become a subset of `allowed`.  Directions without a forced connector are omitted.
    """
    assert candidates, "Cannot derive restrictions from an empty superposition."
    present = EnumSet.full(DIRECTIONS)
    possible = EnumSet.empty(DIRECTIONS)
    for tile in candidates:
        present &= tile.connectors
        possible |= tile.connectors

    restrictions: list[tuple[Direction, Superposition]] = []
    for direction in Direction:
        if direction in present:
            restrictions.append((direction, TILES_WITH[direction.opposite]))
        elif direction not in possible:
            restrictions.append((direction, TILES_WITHOUT[direction.opposite]))
    return tuple(restrictions)


@lru_cache(maxsize=64)
def _neighbor_table(n_rows: int, n_cols: int) -> tuple[dict[Direction, int], ...]:
    """For each cell of the padded grid, the padded indexes of its interior neighbors."""
    width = n_cols + 2
    table: list[dict[Direction, int]] = []
    for idx in range((n_rows + 2) * width):
        row, column = divmod(idx, width)
        neighbors: dict[Direction, int] = {}
        for direction in Direction:
            delta_row, delta_column = direction.delta
            n_row, n_column = row + delta_row, column + delta_column
            if 1 <= n_row <= n_rows and 1 <= n_column <= n_cols:
                neighbors[direction] = n_row * width + n_column
        table.append(neighbors)
    return tuple(table)


class CandidateGrid:
    """Immutable grid of superpositions, surrounded by one ring of sentinel cells.

    Attributes:
        shapes: The level the candidate grid was built from.  Every cell's candidates are a
            subset of the rotations of the tile at the same position.
        trace: Fixation events so far, in order.
        depth: Number of branching decisions taken to reach this grid.
    """

    __slots__ = ("shapes", "trace", "depth", "_cells")

    def __init__(
        self,
        shapes: Grid,
        cells: tuple[Superposition, ...],
        trace: Trace = (),
        depth: int = 0,
    ) -> None:
        assert len(cells) == (shapes.n_rows + 2) * (shapes.n_cols + 2)
        self.shapes: Grid = shapes
        self.trace: Trace = trace
        self.depth: int = depth
        self._cells: tuple[Superposition, ...] = cells

    @classmethod
    def from_grid(cls, grid: Grid) -> "CandidateGrid":
        """Superimpose all rotations of every tile of `grid`.

        Cells whose tile looks the same in every rotation are fixed immediately and recorded
        in the trace in raster order.
        """
        cells = [SENTINEL] * ((grid.n_rows + 2) * (grid.n_cols + 2))
        trace: list[tuple[Coordinate, Tile]] = []
        for coordinate, tile in grid.items():
            orbit = tile.all_rotations()
            cells[cls._padded_idx(grid, coordinate)] = orbit
            if orbit.is_singleton():
                trace.append((coordinate, tile))
        return cls(grid, tuple(cells), tuple(trace))

    @staticmethod
    def _padded_idx(grid: Grid, coordinate: Coordinate) -> int:
        return (coordinate.row + 1) * (grid.n_cols + 2) + coordinate.column + 1

    def _coordinate(self, padded_idx: int) -> Coordinate:
        row, column = divmod(padded_idx, self.shapes.n_cols + 2)
        return Coordinate(row - 1, column - 1)

    @property
    def n_rows(self) -> int:
        return self.shapes.n_rows

    @property
    def n_cols(self) -> int:
        return self.shapes.n_cols

    def candidates(self, coordinate: Coordinate) -> Superposition:
        """Remaining candidates of the cell at `coordinate`.  Sentinels lie outside the grid."""
        coordinate = Coordinate(*coordinate)
        if not coordinate.shifted(1, 1).in_bounds(self.n_rows + 2, self.n_cols + 2):
            raise IndexError(f"{coordinate} lies outside the candidate grid.")
        return self._cells[self._padded_idx(self.shapes, coordinate)]

    def cells(self) -> list[tuple[Coordinate, Superposition]]:
        """(coordinate, candidates) for every interior cell in raster order."""
        return [
            (coordinate, self._cells[self._padded_idx(self.shapes, coordinate)])
            for coordinate in self.shapes.coordinates()
        ]

    def undetermined(self) -> list[Coordinate]:
        """Coordinates of cells with more than one candidate, in raster order."""
        return [coordinate for coordinate, candidates in self.cells() if len(candidates) > 1]

    def is_collapsed(self) -> bool:
        """Whether every cell is fixed to a single tile."""
        return all(candidates.is_singleton() for _, candidates in self.cells())

    def extract_grid(self) -> Grid | None:
        """The grid of fixed tiles, or None unless every cell is fixed."""
        if not self.is_collapsed():
            return None
        return Grid(
            self.n_rows,
            self.n_cols,
            (candidates.only_member() for _, candidates in self.cells()),
        )

    def propagate(self) -> "CandidateGrid | None":
        """Propagate neighbor constraints until no candidate set changes.

        Pending cells are revisited in raster order (smallest index first).  Sentinel cells
        restrict their neighbors but are never restricted themselves.

        Returns:
            The propagated candidate grid, or None if some cell ran out of candidates.
        """
        cells = list(self._cells)
        trace = list(self.trace)
        neighbor_table = _neighbor_table(self.n_rows, self.n_cols)

        pending = SortedSet(range(len(cells)))
        while pending:
            idx = pending.pop(0)
            neighbors = neighbor_table[idx]
            for direction, allowed in neighbor_restrictions(cells[idx]):
                neighbor_idx = neighbors.get(direction)
                if neighbor_idx is None:
                    continue
                old = cells[neighbor_idx]
                new = old & allowed
                if new == old:
                    continue
                if new.is_empty():
                    return None
                cells[neighbor_idx] = new
                if new.is_singleton():
                    trace.append((self._coordinate(neighbor_idx), new.only_member()))
                pending.add(neighbor_idx)

        return CandidateGrid(self.shapes, tuple(cells), tuple(trace), self.depth)

    def fixed(self, coordinate: Coordinate, tile: Tile) -> "CandidateGrid":
        """Branch: copy of the grid with the cell at `coordinate` fixed to `tile`.

        Raises:
            ValueError: If `tile` is not a candidate of that cell.
        """
        coordinate = Coordinate(*coordinate)
        if not self.shapes.contains(coordinate):
            raise IndexError(f"Cannot fix {coordinate}, it lies outside the grid.")
        candidates = self.candidates(coordinate)
        if tile not in candidates:
            raise ValueError(f"{tile!r} is not a candidate for {coordinate}.")
        cells = list(self._cells)
        cells[self._padded_idx(self.shapes, coordinate)] = EnumSet.of(TILES, [tile])
        trace = self.trace if candidates.is_singleton() else self.trace + ((coordinate, tile),)
        return CandidateGrid(self.shapes, tuple(cells), trace, self.depth + 1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateGrid):
            return NotImplemented
        return self.shapes == other.shapes and self._cells == other._cells

    def __hash__(self) -> int:
        return hash((self.shapes, self._cells))

    def __str__(self) -> str:
        """Each cell shown as the union of its candidates' connectors, `?` if empty."""

        def glyph(candidates: Superposition) -> str:
            if not candidates:
                return "?"
            union = EnumSet.empty(DIRECTIONS)
            for tile in candidates:
                union |= tile.connectors
            return Tile(union).glyph

        glyphs = [glyph(candidates) for _, candidates in self.cells()]
        return "\n".join(
            "".join(glyphs[row * self.n_cols : (row + 1) * self.n_cols])
            for row in range(self.n_rows)
        )
