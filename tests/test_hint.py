import pytest

from tileloop.coordinate import Coordinate
from tileloop.level import MULTIPLE_SOLUTIONS_LEVEL, SAMPLE_LEVELS, parse_level
from tileloop.solver.hint import Hint, HintStatus, generate_hint
from tileloop.solver.solver import solve_first


def test_already_solved():
    assert generate_hint(parse_level("╺╸")) == Hint(HintStatus.ALREADY_SOLVED)
    assert generate_hint(parse_level("┏┓\n┗┛")).status is HintStatus.ALREADY_SOLVED


@pytest.mark.parametrize("live, rotation", [("╻╸", 3), ("╹╸", 1), ("╸╸", 2)])
def test_two_ends(live, rotation):
    hint = generate_hint(parse_level(live))
    assert hint.status is HintStatus.HINT
    assert hint.coordinate == Coordinate(0, 0)
    assert hint.rotation == rotation
    assert str(hint.tile) == "╺"


def test_hint_points_at_the_only_wrong_tile():
    solved = parse_level("┏┳┓\n┗┻┛")
    live = solved.rotate_clockwise(Coordinate(0, 1))
    hint = generate_hint(live)
    assert hint == Hint(HintStatus.HINT, Coordinate(0, 1), 3, solved[0, 1])
    assert "(row: 0, column: 1)" in str(hint)


@pytest.mark.parametrize("level", SAMPLE_LEVELS[:10])
def test_applying_hints_solves_the_level(level):
    live = parse_level(level, "ascii").scrambled(seed=3)
    shapes = live
    for _ in range(live.n_rows * live.n_cols):
        hint = generate_hint(live, shapes)
        if hint.status is HintStatus.ALREADY_SOLVED:
            break
        assert hint.status is HintStatus.HINT
        assert hint.rotation in (1, 2, 3)
        live = live.rotated(hint.coordinate, hint.rotation)
        assert live[hint.coordinate] == hint.tile
    assert live.is_solved()


def test_shapes_default_to_live_grid():
    live = parse_level("╻╸")
    assert generate_hint(live, parse_level("--", "ascii")) == generate_hint(live)


def test_hint_follows_first_solution():
    live = parse_level(MULTIPLE_SOLUTIONS_LEVEL, "ascii")
    hint = generate_hint(live)
    assert hint.status is HintStatus.HINT
    assert solve_first(live)[hint.coordinate] == hint.tile


def test_unsolvable():
    assert generate_hint(parse_level("╹")) == Hint(HintStatus.UNSOLVABLE)


def test_budget_exhausted():
    live = parse_level(MULTIPLE_SOLUTIONS_LEVEL, "ascii")
    assert generate_hint(live, max_steps=1).status is HintStatus.BUDGET_EXHAUSTED


def test_shapes_must_match():
    live = parse_level("╺╸")
    with pytest.raises(ValueError):
        generate_hint(live, parse_level("-\n-", "ascii"))
    with pytest.raises(ValueError):
        generate_hint(live, parse_level("L-", "ascii"))
