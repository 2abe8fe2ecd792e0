"""Grid coordinates and their neighbor arithmetic."""

from typing import NamedTuple

from tileloop.tile import Direction


class Coordinate(NamedTuple):
    """Position of a cell as (row, column), row 0 at the top and column 0 at the left.

    Ordering is structural, which is raster (row-major) order.
    """

    row: int
    column: int

    def neighbor(self, direction: Direction) -> "Coordinate":
        """Position of the adjacent cell across edge `direction`."""
        delta_row, delta_column = direction.delta
        return Coordinate(self.row + delta_row, self.column + delta_column)

    def neighbors(self) -> dict[Direction, "Coordinate"]:
        """Positions of all four adjacent cells, bounds are not checked."""
        return {direction: self.neighbor(direction) for direction in Direction}

    def in_bounds(self, n_rows: int, n_cols: int) -> bool:
        """Whether the coordinate lies in a grid with the given dimensions."""
        return 0 <= self.row < n_rows and 0 <= self.column < n_cols

    def shifted(self, rows: int, columns: int) -> "Coordinate":
        """Coordinate translated by the given offsets."""
        return Coordinate(self.row + rows, self.column + columns)

    def __str__(self) -> str:
        return f"(row: {self.row}, column: {self.column})"
