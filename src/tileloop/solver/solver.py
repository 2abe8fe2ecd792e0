"""Depth-first search for solutions of a tileloop level.

The search keeps an explicit stack of candidate grids instead of recursing.  Each step pops
one candidate grid and propagates it:

* a contradiction discards it;
* a collapsed grid is a solution if its tiles connect;
* otherwise the policy picks a cell, and one child per candidate of that cell is pushed.

Children fix the same cell to different tiles, so the subtrees are disjoint and no solution
is produced twice.  The iterator is lazy: asking for the first solution only explores the
tree up to that solution.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from time import time

from tileloop.grid import Grid
from tileloop.logging_utils import get_logger
from tileloop.solver.candidates import CandidateGrid, Trace
from tileloop.solver.config import config as solver_config
from tileloop.solver.policies import BranchPolicy, get_policy
from tileloop.util import int_comma, plural, time_str

logger = get_logger(__name__)


class BudgetExhausted(RuntimeError):
    """Raised when the search reaches its step budget before finishing.

    This does not mean the level is unsolvable: the iterator that raised it can be resumed
    with `SolutionIterator.extend_budget`.
    """

    def __init__(self, steps: int):
        super().__init__(f"Search budget exhausted after {plural(steps, 'step')}.")
        self.steps = steps


@dataclass
class SolverStats:
    """Statistics collected during solving."""

    steps: int = 0
    """Number of candidate grids popped from the stack and propagated."""

    branches: int = 0
    """Number of candidate grids split on a cell."""

    contradictions: int = 0
    """Number of candidate grids discarded because a cell ran out of candidates."""

    solutions: int = 0
    """Number of solutions produced so far."""

    max_depth: int = 0
    """Maximum number of branching decisions on the current path reached during solving."""

    start_time: float = field(default_factory=time)
    """Timestamp when solving started."""

    @property
    def elapsed(self) -> float:
        """Seconds since solving started."""
        return time() - self.start_time

    def __str__(self) -> str:
        return (
            f"{plural(self.steps, 'step')}, {plural(self.branches, 'branch', 'branches')}, "
            f"{plural(self.contradictions, 'contradiction')}, "
            f"{plural(self.solutions, 'solution')}, max depth {self.max_depth}, "
            f"{time_str(self.elapsed)}"
        )


class SolutionIterator(Iterator[Grid]):
    """Lazy, resumable enumeration of all solutions of a level.

    Iterating yields solved grids.  Use `next_with_trace` to also get the order in which the
    tiles of the solution were determined.
    """

    def __init__(
        self,
        grid: Grid,
        *,
        max_steps: int | None = None,
        policy: str | BranchPolicy | None = None,
    ) -> None:
        """Prepare the search without doing any work yet.

        Args:
            grid: The level.  Only the shapes of its tiles matter.
            max_steps: Number of steps after which `BudgetExhausted` is raised.  If None,
                the configured default is used (itself None for an unlimited search).
            policy: Branch policy, by name or as a callable.  If None, the configured one.
        """
        self.grid: Grid = grid
        """The level being solved."""

        self.max_steps: int | None = solver_config.max_steps if max_steps is None else max_steps
        """Step budget, or None if unlimited."""

        self.policy: BranchPolicy = get_policy(policy)
        """Picks the cell to branch on."""

        self.stats: SolverStats = SolverStats()
        """Statistics collected during solving."""

        self._stack: list[CandidateGrid] = [CandidateGrid.from_grid(grid)]

        logger.info(
            "Solving a %dx%d level with policy %s",
            grid.n_rows,
            grid.n_cols,
            getattr(self.policy, "__name__", repr(self.policy)),
        )

    @property
    def exhausted(self) -> bool:
        """Whether every solution has been produced."""
        return not self._stack

    def extend_budget(self, steps: int) -> None:
        """Allow `steps` more steps, e.g. to resume after `BudgetExhausted`."""
        if steps < 0:
            raise ValueError(f"Cannot extend the budget by a negative amount ({steps}).")
        if self.max_steps is not None:
            self.max_steps = max(self.max_steps, self.stats.steps) + steps

    def next_with_trace(self) -> tuple[Grid, Trace]:
        """Advance to the next solution.

        Returns:
            The solved grid and the fixation events that determined it, in order.

        Raises:
            StopIteration: If there are no more solutions.
            BudgetExhausted: If the step budget runs out first.  The iterator stays usable.
        """
        stats = self.stats
        while self._stack:
            if self.max_steps is not None and stats.steps >= self.max_steps:
                logger.info("Budget exhausted: %s", stats)
                raise BudgetExhausted(stats.steps)

            candidate_grid = self._stack.pop()
            stats.steps += 1
            if stats.steps % solver_config.report_interval == 0:
                logger.info(
                    "%s candidate grids checked, %s on the stack, elapsed %s",
                    int_comma(stats.steps),
                    int_comma(len(self._stack)),
                    time_str(stats.elapsed),
                )

            propagated = candidate_grid.propagate()
            if propagated is None:
                stats.contradictions += 1
                logger.debug("Contradiction at depth %d", candidate_grid.depth)
                continue

            if propagated.is_collapsed():
                solution = propagated.extract_grid()
                assert solution is not None
                if not solution.is_solved():
                    stats.contradictions += 1
                    continue
                stats.solutions += 1
                logger.info("Solution %d found: %s", stats.solutions, stats)
                return solution, propagated.trace

            coordinate = self.policy(propagated)
            candidates = propagated.candidates(coordinate)
            assert len(candidates) > 1, f"Policy picked the determined cell {coordinate}."
            stats.branches += 1
            stats.max_depth = max(stats.max_depth, propagated.depth + 1)
            logger.debug(
                "Branching on %s with %d candidates at depth %d",
                coordinate,
                len(candidates),
                propagated.depth,
            )
            # Reversed, so the candidate with the lowest index is popped first
            for tile in reversed(list(candidates)):
                self._stack.append(propagated.fixed(coordinate, tile))

        logger.info("Search finished: %s", stats)
        raise StopIteration

    def __iter__(self) -> "SolutionIterator":
        return self

    def __next__(self) -> Grid:
        grid, _ = self.next_with_trace()
        return grid


def solve(
    grid: Grid,
    *,
    max_steps: int | None = None,
    policy: str | BranchPolicy | None = None,
) -> SolutionIterator:
    """Lazily enumerate the solutions of a level.  See `SolutionIterator`."""
    return SolutionIterator(grid, max_steps=max_steps, policy=policy)


def solve_first(grid: Grid) -> Grid | None:
    """First solution of a level, or None if there is none.

    Any other function with this signature can stand in as a solver.
    """
    return next(solve(grid), None)


class SolveStatus(Enum):
    """Result of a bounded search for one solution."""

    SOLVED = "solved"
    UNSATISFIABLE = "unsatisfiable"
    BUDGET_EXHAUSTED = "budget exhausted"


@dataclass(frozen=True)
class SolveOutcome:
    """Result of `find_solution`."""

    status: SolveStatus
    """Whether a solution was found, and if not, why."""

    grid: Grid | None
    """The solution, if one was found."""

    trace: Trace
    """Order in which the tiles of the solution were determined.  Empty without a solution."""

    stats: SolverStats
    """Statistics of the search."""


def find_solution(
    grid: Grid,
    *,
    max_steps: int | None = None,
    policy: str | BranchPolicy | None = None,
) -> SolveOutcome:
    """Search for one solution, telling an unsolvable level apart from a search cut short.

    Args:
        grid: The level.
        max_steps: Step budget.  If None, the configured default.
        policy: Branch policy.  If None, the configured default.
    """
    solutions = solve(grid, max_steps=max_steps, policy=policy)
    try:
        solution, trace = solutions.next_with_trace()
    except StopIteration:
        return SolveOutcome(SolveStatus.UNSATISFIABLE, None, (), solutions.stats)
    except BudgetExhausted:
        return SolveOutcome(SolveStatus.BUDGET_EXHAUSTED, None, (), solutions.stats)
    return SolveOutcome(SolveStatus.SOLVED, solution, trace, solutions.stats)


def count_solutions(grid: Grid, limit: int | None = None, *, max_steps: int | None = None) -> int:
    """Number of distinct solutions of a level, counting at most `limit` of them.

    Raises:
        BudgetExhausted: If the step budget runs out before the count is complete.
    """
    count = 0
    if limit is not None and limit <= 0:
        return count
    for _ in solve(grid, max_steps=max_steps):
        count += 1
        if limit is not None and count >= limit:
            break
    return count
