import pytest

from tileloop.tile import ASCII_TO_TILE, UNICODE_GLYPHS, UNICODE_TO_TILE, Direction, Tile

ALL_TILES = [Tile.from_index(i) for i in range(16)]


@pytest.mark.parametrize("tile", ALL_TILES, ids=str)
def test_rotation_is_cyclic(tile):
    assert tile.rotate(4) == tile
    assert tile.rotate(0) == tile
    for k in range(-4, 5):
        assert tile.rotate(k) == tile.rotate(k + 4)
    assert tile.rotated_clockwise().rotated_counterclockwise() == tile


@pytest.mark.parametrize("tile", ALL_TILES, ids=str)
def test_rotation_preserves_connector_count(tile):
    assert len(tile.rotate(1).connectors) == len(tile.connectors)


@pytest.mark.parametrize("direction", list(Direction))
def test_clockwise_turn_moves_each_connector_clockwise(direction):
    tile = Tile.from_connectors([direction])
    assert tile.rotated_clockwise() == Tile.from_connectors([Direction((direction + 1) % 4)])
    assert tile.rotated_counterclockwise() == Tile.from_connectors([Direction((direction - 1) % 4)])


def test_opposite():
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.RIGHT.opposite is Direction.LEFT
    assert Direction.DOWN.opposite is Direction.UP
    assert Direction.LEFT.opposite is Direction.RIGHT


@pytest.mark.parametrize(
    "ascii_glyph, orbit_size",
    [(" ", 1), ("-", 4), ("I", 2), ("L", 4), ("T", 4), ("+", 1)],
)
def test_orbit_sizes(ascii_glyph, orbit_size):
    tile = ASCII_TO_TILE[ascii_glyph]
    orbit = tile.all_rotations()
    assert len(orbit) == orbit_size
    assert all(member.all_rotations() == orbit for member in orbit)


@pytest.mark.parametrize("tile", ALL_TILES, ids=str)
def test_shape_is_smallest_orbit_member(tile):
    shape = tile.shape()
    assert shape.index == min(member.index for member in tile.all_rotations())
    assert shape.ascii_glyph == tile.ascii_glyph


@pytest.mark.parametrize("tile", ALL_TILES, ids=str)
def test_rotation_to(tile):
    for k in range(4):
        turns = tile.rotation_to(tile.rotate(k))
        assert turns is not None
        assert 0 <= turns < 4
        assert tile.rotate(turns) == tile.rotate(k)


def test_rotation_to_other_shape():
    assert ASCII_TO_TILE["L"].rotation_to(ASCII_TO_TILE["I"]) is None


def test_glyphs():
    corner = Tile.from_connectors([Direction.UP, Direction.RIGHT])
    assert corner.index == 3
    assert corner.glyph == "┗"
    assert str(Tile.ALL_CONNECTIONS) == "╋"
    assert Tile.NO_CONNECTIONS.glyph == " "
    assert all(UNICODE_TO_TILE[glyph].glyph == glyph for glyph in UNICODE_GLYPHS)


def test_tiles_are_interned():
    assert Tile.from_index(5) is Tile.from_index(5)
    assert Tile.from_connectors([Direction.UP, Direction.DOWN]) == Tile.from_index(5)
