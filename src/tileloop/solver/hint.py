"""Hints: the next tile a player should rotate, and how far.

The hint follows the order in which the solver determined the tiles of its first solution,
so the suggested tile is one the constraints pin down early rather than an arbitrary wrong
tile.
"""

from dataclasses import dataclass
from enum import Enum

from tileloop.coordinate import Coordinate
from tileloop.grid import Grid
from tileloop.logging_utils import get_logger
from tileloop.solver.policies import BranchPolicy
from tileloop.solver.solver import SolveStatus, find_solution
from tileloop.tile import Tile

logger = get_logger(__name__)


class HintStatus(Enum):
    """Kind of answer `generate_hint` gives."""

    HINT = "hint"
    ALREADY_SOLVED = "already solved"
    UNSOLVABLE = "unsolvable"
    BUDGET_EXHAUSTED = "budget exhausted"


@dataclass(frozen=True)
class Hint:
    """Answer of `generate_hint`.  The last three fields are only set for `HintStatus.HINT`."""

    status: HintStatus
    """Whether there is a hint, and if not, why."""

    coordinate: Coordinate | None = None
    """Cell to rotate."""

    rotation: int | None = None
    """Clockwise quarter turns, in `[0, 4)`, turning the live tile into `tile`."""

    tile: Tile | None = None
    """What the tile at `coordinate` looks like in the solution."""

    def __str__(self) -> str:
        if self.status is not HintStatus.HINT:
            return self.status.value.capitalize() + "."
        turns = "1 quarter turn" if self.rotation == 1 else f"{self.rotation} quarter turns"
        return f"Rotate the tile at {self.coordinate} by {turns} clockwise (to {self.tile})."


def _check_shapes(live: Grid, shapes: Grid) -> None:
    if (live.n_rows, live.n_cols) != (shapes.n_rows, shapes.n_cols):
        raise ValueError(
            f"Live grid is {live.n_rows}x{live.n_cols} but the shapes are "
            f"{shapes.n_rows}x{shapes.n_cols}."
        )
    for coordinate, shape in shapes.items():
        if live[coordinate].rotation_to(shape) is None:
            raise ValueError(
                f"Tile {live[coordinate]} at {coordinate} is not a rotation of {shape}."
            )


def generate_hint(
    live: Grid,
    shapes: Grid | None = None,
    *,
    max_steps: int | None = None,
    policy: str | BranchPolicy | None = None,
) -> Hint:
    """Suggest the next rotation bringing the player's grid closer to a solution.

    Args:
        live: The grid as the player currently sees it.
        shapes: The level the player started from.  If None, the tiles of `live` are used.
        max_steps: Step budget of the search.  If None, the configured default.
        policy: Branch policy of the search.  If None, the configured default.

    Returns:
        The first fixation of the solver's first solution whose tile differs from the live
        one, or a status saying why there is no such hint.

    Raises:
        ValueError: If `shapes` does not have the dimensions and tile shapes of `live`.
    """
    if shapes is not None:
        _check_shapes(live, shapes)

    if live.is_solved():
        return Hint(HintStatus.ALREADY_SOLVED)

    outcome = find_solution(live if shapes is None else shapes, max_steps=max_steps, policy=policy)
    if outcome.status is SolveStatus.UNSATISFIABLE:
        return Hint(HintStatus.UNSOLVABLE)
    if outcome.status is SolveStatus.BUDGET_EXHAUSTED:
        return Hint(HintStatus.BUDGET_EXHAUSTED)

    for coordinate, tile in outcome.trace:
        live_tile = live[coordinate]
        if live_tile != tile:
            rotation = live_tile.rotation_to(tile)
            assert rotation is not None, f"{tile} at {coordinate} is not a rotation of {live_tile}."
            logger.debug("Hint: rotate %s by %d", coordinate, rotation)
            return Hint(HintStatus.HINT, coordinate, rotation, tile)

    # Every traced tile already matches, the live grid is one of the solutions
    return Hint(HintStatus.ALREADY_SOLVED)
