from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def level_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write a level text to a file and return its path."""
    counter = 0

    def write(text: str) -> Path:
        nonlocal counter
        counter += 1
        path = tmp_path / f"level{counter}.txt"
        path.write_text(text, encoding="utf-8")
        return path

    return write
