import numpy as np
import pytest

from tileloop.coordinate import Coordinate
from tileloop.grid import Grid
from tileloop.level import SAMPLE_LEVELS, parse_level
from tileloop.tile import Direction, Tile


def test_dimensions_must_be_positive():
    with pytest.raises(ValueError):
        Grid(0, 3, [])
    with pytest.raises(ValueError):
        Grid(2, 2, [Tile.NO_CONNECTIONS] * 3)


def test_from_rows():
    grid = Grid.from_rows([[Tile.from_index(2), Tile.from_index(8)]])
    assert (grid.rows, grid.columns) == (1, 2)
    assert (grid.height, grid.width) == (1, 2)
    assert str(grid) == "╺╸"
    with pytest.raises(ValueError):
        Grid.from_rows([[Tile.NO_CONNECTIONS], []])


def test_lookups():
    grid = parse_level("┏┓\n┗┛")
    assert grid[0, 1] == Tile.from_connectors([Direction.DOWN, Direction.LEFT])
    assert grid[Coordinate(1, 0)].glyph == "┗"
    assert grid.get(Coordinate(-1, 0)) == Tile.NO_CONNECTIONS
    assert grid.get(Coordinate(0, 2)) == Tile.NO_CONNECTIONS
    with pytest.raises(IndexError):
        grid[2, 0]
    assert grid.get_2d_idx(grid.get_1d_idx(Coordinate(1, 1))) == Coordinate(1, 1)
    assert grid.neighbors(Coordinate(0, 0))[Direction.UP] == Tile.NO_CONNECTIONS
    assert list(grid.coordinates())[1] == Coordinate(0, 1)


def test_replacement_returns_new_grid():
    grid = parse_level("╺╸")
    rotated = grid.rotate_clockwise(Coordinate(0, 0))
    assert str(grid) == "╺╸"
    assert str(rotated) == "╻╸"
    assert str(grid.rotate_counterclockwise(Coordinate(0, 0))) == "╹╸"
    assert grid.with_cell_replaced(Coordinate(0, 1), Tile.NO_CONNECTIONS) != grid
    with pytest.raises(IndexError):
        grid.with_cell_replaced(Coordinate(1, 0), Tile.NO_CONNECTIONS)


@pytest.mark.parametrize(
    "text, solved",
    [
        ("╺╸", True),
        ("╸╺", False),
        ("╻╸", False),
        (" ", True),
        ("╹", False),
        ("┏┓\n┗┛", True),
        ("┏┓\n┗┻", False),
        ("┏┳┓\n┗┻┛", True),
        ("╺━╸", True),
        ("╺┃╸", False),
    ],
)
def test_is_solved(text, solved):
    assert parse_level(text).is_solved() is solved


def test_border_connectors_are_unmatched():
    # Matches its neighbor but points off the board
    assert not parse_level("╺╋").is_solved()


def test_to_array():
    array = parse_level("┏┓\n┗┛").to_array()
    assert array.shape == (2, 2)
    assert array.dtype == np.uint8
    assert array.tolist() == [[6, 12], [3, 9]]


@pytest.mark.parametrize("level", SAMPLE_LEVELS[:5])
def test_scrambled_keeps_shapes(level):
    grid = parse_level(level, "ascii")
    scrambled = grid.scrambled(seed=7)
    assert scrambled.same_shapes(grid)
    assert scrambled.shapes() == grid.shapes()
    assert scrambled == grid.scrambled(seed=7)


def test_same_shapes_checks_dimensions():
    assert not parse_level("--", "ascii").same_shapes(parse_level("-\n-", "ascii"))


def test_hashable():
    assert len({parse_level("╺╸"), parse_level("╺╸"), parse_level("╸╺")}) == 2
