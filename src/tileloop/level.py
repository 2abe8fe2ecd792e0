"""Reading and writing levels as text.

A level is a block of lines, one character per tile.  Two glyph tables exist:

| Table     | Characters                        | Describes                   |
|:----------|:----------------------------------|:----------------------------|
| `unicode` | `' ╹╺┗╻┃┏┣╸┛━┻┓┫┳╋'`              | every tile, rotation included |
| `ascii`   | `' '`, `-`, `I`, `L`, `T`, `+`    | the shape only              |

Spaces are glyphs (the empty tile), so lines are never stripped.
"""

from os import PathLike
from pathlib import Path
from typing import Literal

from tileloop.grid import Grid
from tileloop.solver.config import config as solver_config
from tileloop.tile import ASCII_TO_TILE, UNICODE_TO_TILE, Tile

GlyphTable = Literal["unicode", "ascii"]

GLYPH_TABLES: dict[str, dict[str, Tile]] = {
    "unicode": UNICODE_TO_TILE,
    "ascii": ASCII_TO_TILE,
}


class MalformedLevelText(ValueError):
    """Raised when a level text cannot be parsed into a grid.

    Attributes:
        row: 0-based line of the offending character, if any.
        column: 0-based position of the offending character within its line, if any.
    """

    def __init__(self, message: str, *, row: int | None = None, column: int | None = None):
        super().__init__(message)
        self.row = row
        self.column = column


def _glyph_table(glyphs: str) -> dict[str, Tile]:
    try:
        return GLYPH_TABLES[glyphs]
    except KeyError:
        raise ValueError(
            f"Unknown glyph table '{glyphs}', expected one of {sorted(GLYPH_TABLES)}."
        ) from None


def parse_level(text: str, glyphs: GlyphTable = "unicode") -> Grid:
    """Parse a newline-delimited level into a Grid, the inverse of `serialize_level`.

    The text must be exactly what `serialize_level` writes: rows joined by "\\n", with no
    trailing newline.  Use `load_level` for files.

    Args:
        text: The level, one line per grid row.
        glyphs: Which glyph table the characters come from.

    Raises:
        MalformedLevelText: If the block is empty, not rectangular, or contains a character
            outside the glyph table.
    """
    table = _glyph_table(glyphs)
    if not text:
        raise MalformedLevelText("Level has no rows.")
    lines = text.split("\n")
    n_cols = len(lines[0])
    if n_cols == 0:
        raise MalformedLevelText("Level has no columns.", row=0)
    for row, line in enumerate(lines):
        if len(line) != n_cols:
            raise MalformedLevelText(
                f"All rows must have the same length: row 0 has {n_cols} characters, "
                f"row {row} has {len(line)}.",
                row=row,
            )

    tiles: list[Tile] = []
    for row, line in enumerate(lines):
        for column, ch in enumerate(line):
            tile = table.get(ch)
            if tile is None:
                raise MalformedLevelText(
                    f"Unknown character {ch!r} at row {row}, column {column} "
                    f"for the {glyphs} glyph table.",
                    row=row,
                    column=column,
                )
            tiles.append(tile)

    return Grid(len(lines), n_cols, tiles)


def serialize_level(grid: Grid, glyphs: GlyphTable = "unicode") -> str:
    """Write a grid as text, the inverse of `parse_level`.

    With the `ascii` table only the shape of each tile is written.
    """
    _glyph_table(glyphs)
    if glyphs == "ascii":
        to_char = lambda tile: tile.ascii_glyph  # noqa: E731
    else:
        to_char = lambda tile: tile.glyph  # noqa: E731
    return "\n".join(
        "".join(to_char(grid[row, column]) for column in range(grid.n_cols))
        for row in range(grid.n_rows)
    )


def detect_glyphs(text: str) -> GlyphTable:
    """Guess the glyph table of a level: `ascii` if every character is an ASCII glyph."""
    chars = set(text) - {"\n", "\r"}
    return "ascii" if chars <= ASCII_TO_TILE.keys() else "unicode"


def load_level(
    level_path: PathLike | str, glyphs: GlyphTable | Literal["auto"] | None = None
) -> Grid:
    """Load a level file.

    Windows line endings and a single trailing newline are accepted.

    Args:
        level_path: Path to a UTF-8 text file holding one level.
        glyphs: Glyph table of the file; `auto` detects it, None uses the configured default.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedLevelText: If the file content is not a valid level.
    """
    path = Path(level_path)
    if not path.is_file():
        raise FileNotFoundError(f"Level file not found: {path}")
    # Universal newlines: "\r\n" is read as "\n"
    text = path.read_text(encoding="utf-8").removesuffix("\n")

    if glyphs is None:
        glyphs = solver_config.glyphs
    if glyphs == "auto":
        glyphs = detect_glyphs(text)
    return parse_level(text, glyphs)


TRIVIAL_LEVEL = "-I-"

MULTIPLE_SOLUTIONS_LEVEL = "----\n----\n----\n----"

# First levels of the android game "infinity loop", in the ascii glyph table.
SAMPLE_LEVELS: tuple[str, ...] = (
    "LTL\nLTL",
    "LLLL\nLLLL",
    "LTL\nT+T\nLTL",
    "- -\nI I\n- -",
    "LITL\nTTTI\nITTT\nLTIL",
    " LL-\nL++L\n-II \n -- ",
    "LIIL\nLLLL\n-II-\n----",
    "LIIIL\n--T--\n-I+I-\n--T--\nLIIIL",
    "LTTIL\nIITIT\nTT+TT\nTITII\nLITTL",
    " LLLL \nLLLLLL\nLLLLLL\n LLLL ",
    " LL \n-TT-\nLTTL\nLTTL\nLIIL",
    "- --\nTTLI\nL+IL\n-TL-\nIL+T\nLITL",
    "-T-\n-T-\n-I-\n-I-\n-T-\n-T-",
    "-TL\n-TL\nLL \nIT-\n-LL\n  -",
    "-TL\nLTI\nILT\nI-L\nLI-",
    "-LL-\nL+L-\n-T- \nLL -\nTL -\n-   ",
    "--LL\nL+LI\nLT -\n-TL-\n-LTL\nLTT-\n -L-",
    "--L\n-LL\nL+-\nTTL\nLIL\n-I-",
    "---\nITL\nII \nIT-\nIL-\nLI-",
    "L- \nTL-\nIII\nLTT\nLTL\n-LL\n -L",
    "--  \nITIL\nI-LL\nTLI-\nITTL\n----",
    " -- \nLTTL\nL++L\n LL ",
    "-IIIL\nLTI-I\nT+L I\nI-LIL\nTL- -\nIILL-\nLTIT-",
    "- --\nI --\nI-LL\n-LL-\nLTI-\nILI-\nL-  ",
    "L-L-\nI-TL\nT--T\nL--T\n-ILI\n  LL",
    "LL-L\nITTL\nLTL-\nL+L \nT+T \nIILL\n-L--",
    "LL L-\nLTLT-\nL-TTL\nI-LL-\nIILTL\n--TTL\n -TL ",
    "LLLTL\nTTT+T\nLL LT\nLTLIT\nLTILT\n-TTL-",
    "LLLIL\nII-LT\n-I-LT\nLLI-I\nLTTTT\n-T- -",
    "  LL\n -TL\nLLLL\nT- I\nLL I\nLL--\n- L-",
)
