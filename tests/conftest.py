"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed stormdefs package.
"""

from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


@pytest.fixture
def definitions_fixture_dir() -> Path:
    """Folder with sample definitions plus one non-xml file."""
    return FIXTURES / "definitions"


@pytest.fixture
def write_definition(tmp_path):
    """Write an XML document into tmp_path/defs and return its path."""
    defs_dir = tmp_path / "defs"
    defs_dir.mkdir(exist_ok=True)

    def _write(name: str, text: str) -> Path:
        path = defs_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write

