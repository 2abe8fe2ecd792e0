import pytest
from pydantic import ValidationError

from tileloop.solver.config import SolverConfig

FIELDS = ["MAX_STEPS", "BRANCH_POLICY", "REPORT_INTERVAL", "GLYPHS", "LOG_LEVEL"]


@pytest.fixture
def clean_env(monkeypatch):
    for field in FIELDS:
        monkeypatch.delenv(f"TILELOOP_{field}", raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = SolverConfig(_env_file=None)
    assert config.max_steps is None
    assert config.branch_policy == "fewest_candidates"
    assert config.report_interval == 10_000
    assert config.glyphs == "unicode"
    assert config.log_level == "WARNING"


def test_environment_overrides(clean_env):
    clean_env.setenv("TILELOOP_MAX_STEPS", "5000")
    clean_env.setenv("TILELOOP_BRANCH_POLICY", "most_candidates")
    config = SolverConfig(_env_file=None)
    assert config.max_steps == 5000
    assert config.branch_policy == "most_candidates"


def test_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TILELOOP_GLYPHS=ascii\n", encoding="utf-8")
    assert SolverConfig(_env_file=env_file).glyphs == "ascii"


def test_invalid_values(clean_env):
    with pytest.raises(ValidationError):
        SolverConfig(_env_file=None, branch_policy="random")
    with pytest.raises(ValidationError):
        SolverConfig(_env_file=None, unknown_option=1)
