import pytest

from tileloop.level import (
    MULTIPLE_SOLUTIONS_LEVEL,
    SAMPLE_LEVELS,
    TRIVIAL_LEVEL,
    MalformedLevelText,
    detect_glyphs,
    load_level,
    parse_level,
    serialize_level,
)
from tileloop.tile import Tile


@pytest.mark.parametrize("text", ["╺╸", "┏┓\n┗┛", " ╻ \n╺╋╸\n ╹ ", "┏┳┓\n┗┻┛"])
def test_unicode_round_trip(text):
    assert serialize_level(parse_level(text)) == text


@pytest.mark.parametrize("text", [*SAMPLE_LEVELS, TRIVIAL_LEVEL, MULTIPLE_SOLUTIONS_LEVEL])
def test_ascii_round_trip(text):
    assert serialize_level(parse_level(text, "ascii"), "ascii") == text


def test_ascii_parses_canonical_shapes():
    grid = parse_level(TRIVIAL_LEVEL, "ascii")
    assert (grid.n_rows, grid.n_cols) == (1, 3)
    assert all(tile == tile.shape() for tile in grid.tiles)


@pytest.mark.parametrize("text", ["╺╸\n", "╺╸\r\n", "┏┓\n┗┛\n\n"])
def test_parse_rejects_trailing_line_breaks(text):
    with pytest.raises(MalformedLevelText):
        parse_level(text)


def test_load_level_accepts_trailing_newline(level_file):
    for text in ("╺╸\n", "╺╸\r\n", "┏┓\r\n┗┛\r\n"):
        grid = load_level(level_file(text), "unicode")
        assert serialize_level(grid) == text.replace("\r\n", "\n").removesuffix("\n")


def test_spaces_are_tiles():
    grid = parse_level(" - ", "ascii")
    assert grid.n_cols == 3
    assert grid[0, 0] == Tile.NO_CONNECTIONS


@pytest.mark.parametrize("text", ["", "\n"])
def test_no_rows(text):
    with pytest.raises(MalformedLevelText):
        parse_level(text)


def test_no_columns():
    with pytest.raises(MalformedLevelText) as excinfo:
        parse_level("\n╺╸")
    assert excinfo.value.row == 0


def test_not_rectangular():
    with pytest.raises(MalformedLevelText) as excinfo:
        parse_level("--\n-\n--", "ascii")
    assert excinfo.value.row == 1
    assert excinfo.value.column is None


@pytest.mark.parametrize(
    "text, glyphs, row, column",
    [
        ("╺x", "unicode", 0, 1),
        ("--\n-L", "unicode", 0, 0),
        ("LL\nL╋", "ascii", 1, 1),
        ("L\tL", "ascii", 0, 1),
    ],
)
def test_unknown_glyph(text, glyphs, row, column):
    with pytest.raises(MalformedLevelText) as excinfo:
        parse_level(text, glyphs)
    assert (excinfo.value.row, excinfo.value.column) == (row, column)
    assert isinstance(excinfo.value, ValueError)


def test_unknown_glyph_table():
    with pytest.raises(ValueError):
        parse_level("-", "braille")


def test_detect_glyphs():
    assert detect_glyphs("LT\n-+") == "ascii"
    assert detect_glyphs("┏┓\n┗┛") == "unicode"


def test_load_level(level_file):
    assert load_level(level_file("--\n"), "ascii") == parse_level("--", "ascii")
    assert load_level(level_file("╺╸\n"), "auto") == parse_level("╺╸")
    assert load_level(level_file("┏┓\n┗┛"), "unicode").is_solved()


def test_load_level_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_level(tmp_path / "missing.txt")
