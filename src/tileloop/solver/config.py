"""tileloop solver configuration."""

from typing import Literal

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the tileloop solver.

    Every field can be set through an environment variable prefixed with `TILELOOP_`,
    e.g. `TILELOOP_MAX_STEPS=5000`, or in a `.env` file.
    """

    max_steps: int | None = None
    """Default search budget, in candidate grids examined. If None (default), no limit."""

    branch_policy: Literal["fewest_candidates", "most_candidates", "first_undetermined"] = (
        "fewest_candidates"
    )
    """How the solver picks the cell to branch on. Default: fewest remaining candidates."""

    report_interval: int = 10_000
    """Interval (in number of candidate grids examined) at which to log progress. Default: 10000."""

    glyphs: Literal["unicode", "ascii", "auto"] = "unicode"
    """Glyph table used when loading level files. Default: unicode."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    """Level of the package logger. Default: WARNING."""

    model_config = SettingsConfigDict(
        env_prefix="TILELOOP_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )


config = SolverConfig()
