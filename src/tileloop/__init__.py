"""tileloop: rotation puzzle solver.

Every tile of a rectangular board carries connectors on some of its four edges.  The board is
solved when every connector meets a connector of the adjacent tile and none points off the
board; the player may only rotate tiles.  Solves levels by constraint propagation and
depth-first search, and derives hints from the order in which the search determined tiles.
"""

import argparse
import sys
from collections.abc import Sequence
from time import time

from tileloop.grid import Grid
from tileloop.level import MalformedLevelText, load_level, serialize_level
from tileloop.solver.hint import HintStatus, generate_hint
from tileloop.solver.policies import POLICIES
from tileloop.solver.solver import BudgetExhausted, solve
from tileloop.util import plural, time_str

__all__ = ["Grid", "load_level", "serialize_level", "solve", "generate_hint", "main"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tileloop", description="Rotation puzzle solver")
    subparsers = parser.add_subparsers(dest="command", required=True)

    glyphs = argparse.ArgumentParser(add_help=False)
    table = glyphs.add_mutually_exclusive_group()
    table.add_argument(
        "--ascii",
        dest="glyphs",
        action="store_const",
        const="ascii",
        help="Level files use the ascii glyph table (shapes only)",
    )
    table.add_argument(
        "--unicode",
        dest="glyphs",
        action="store_const",
        const="unicode",
        help="Level files use box-drawing characters",
    )
    glyphs.set_defaults(glyphs="auto")

    solve_parser = subparsers.add_parser("solve", parents=[glyphs], help="Print solutions")
    solve_parser.add_argument("level", help="Path to the level file")
    solve_parser.add_argument(
        "-n", type=int, default=1, help="Maximum number of solutions to print (default: 1)"
    )
    solve_parser.add_argument("--max-steps", type=int, default=None, help="Search budget")
    solve_parser.add_argument("--policy", choices=sorted(POLICIES), help="Branch policy")

    hint_parser = subparsers.add_parser("hint", parents=[glyphs], help="Suggest a rotation")
    hint_parser.add_argument("level", help="Path to the level file, as currently played")
    hint_parser.add_argument("--shapes", help="Path to the level file as originally dealt")
    hint_parser.add_argument("--max-steps", type=int, default=None, help="Search budget")

    check_parser = subparsers.add_parser("check", parents=[glyphs], help="Check a level")
    check_parser.add_argument("level", help="Path to the level file")

    scramble_parser = subparsers.add_parser(
        "scramble", parents=[glyphs], help="Rotate every tile randomly"
    )
    scramble_parser.add_argument("level", help="Path to the level file")
    scramble_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    return parser


def _solve(args: argparse.Namespace, grid: Grid) -> int:
    print(grid)
    print()
    solutions = solve(grid, max_steps=args.max_steps, policy=args.policy)
    start = time()
    found = 0
    try:
        for solution in solutions:
            found += 1
            print(f"Solution {found} ({time_str(time() - start)}):")
            print(solution)
            print()
            if found >= args.n:
                break
    except BudgetExhausted as e:
        print(f"{e} Stopped after {plural(found, 'solution')}.")
        return 1
    if found == 0:
        print("No solution found.")
        return 1
    print(f"Stats: {solutions.stats}")
    return 0


def _hint(args: argparse.Namespace, grid: Grid) -> int:
    shapes = load_level(args.shapes, args.glyphs) if args.shapes else None
    hint = generate_hint(grid, shapes, max_steps=args.max_steps)
    print(hint)
    return 0 if hint.status in (HintStatus.HINT, HintStatus.ALREADY_SOLVED) else 1


def _check(args: argparse.Namespace, grid: Grid) -> int:
    if grid.is_solved():
        print("Solved.")
        return 0
    print("Not solved.")
    return 1


def _scramble(args: argparse.Namespace, grid: Grid) -> int:
    print(serialize_level(grid.scrambled(args.seed)))
    return 0


COMMANDS = {
    "solve": _solve,
    "hint": _hint,
    "check": _check,
    "scramble": _scramble,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the tileloop command line.

    Args:
        argv: Command line arguments without the program name.  If None, `sys.argv[1:]`.

    Returns:
        The exit status: 0 on success, 1 for a negative answer, 2 for invalid input.
    """
    args = _build_parser().parse_args(argv)
    try:
        grid = load_level(args.level, args.glyphs)
        return COMMANDS[args.command](args, grid)
    except (FileNotFoundError, MalformedLevelText, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
