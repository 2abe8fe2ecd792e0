"""Branch policies: which undetermined cell the solver splits on next.

A policy takes a propagated, non-collapsed candidate grid and returns a coordinate whose
cell has more than one candidate.  Ties are always broken by raster order, so the search is
deterministic.
"""

from collections.abc import Callable
from typing import TypeAlias

from tileloop.coordinate import Coordinate
from tileloop.solver.candidates import CandidateGrid
from tileloop.solver.config import config as solver_config

BranchPolicy: TypeAlias = Callable[[CandidateGrid], Coordinate]


def fewest_candidates(grid: CandidateGrid) -> Coordinate:
    """Minimum remaining values: the undetermined cell with the fewest candidates."""
    best: Coordinate | None = None
    best_count = 0
    for coordinate, candidates in grid.cells():
        count = len(candidates)
        if count > 1 and (best is None or count < best_count):
            best, best_count = coordinate, count
            if count == 2:
                break  # cannot do better
    if best is None:
        raise ValueError("Cannot branch on a collapsed candidate grid.")
    return best


def most_candidates(grid: CandidateGrid) -> Coordinate:
    """The undetermined cell with the most candidates."""
    best: Coordinate | None = None
    best_count = 0
    for coordinate, candidates in grid.cells():
        count = len(candidates)
        if count > 1 and count > best_count:
            best, best_count = coordinate, count
    if best is None:
        raise ValueError("Cannot branch on a collapsed candidate grid.")
    return best


def first_undetermined(grid: CandidateGrid) -> Coordinate:
    """The first undetermined cell in raster order."""
    for coordinate, candidates in grid.cells():
        if len(candidates) > 1:
            return coordinate
    raise ValueError("Cannot branch on a collapsed candidate grid.")


POLICIES: dict[str, BranchPolicy] = {
    "fewest_candidates": fewest_candidates,
    "most_candidates": most_candidates,
    "first_undetermined": first_undetermined,
}


def get_policy(policy: str | BranchPolicy | None = None) -> BranchPolicy:
    """Resolve a policy given by name or as a callable.

    Args:
        policy: A key of `POLICIES`, a callable, or None for the configured default.

    Raises:
        ValueError: If no policy has the given name.
    """
    if policy is None:
        policy = solver_config.branch_policy
    if callable(policy):
        return policy
    try:
        return POLICIES[policy]
    except KeyError:
        raise ValueError(
            f"Unknown branch policy '{policy}', expected one of {sorted(POLICIES)}."
        ) from None
