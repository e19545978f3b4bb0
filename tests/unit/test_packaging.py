"""Unit tests for the project metadata."""

import re
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


class TestPyproject:
    """Test the packaging metadata in pyproject.toml."""

    def test_readme_is_a_shipped_readme(self):
        """Test that the long description, if any, is a README file."""
        text = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
        match = re.search(r'^readme\s*=\s*"([^"]+)"', text, re.MULTILINE)
        if match is None:
            return
        assert Path(match.group(1)).stem.upper() == "README"
        assert (ROOT / match.group(1)).is_file()

    def test_package_sources(self):
        text = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
        assert 'where = ["src"]' in text
        assert (ROOT / "src" / "db_access" / "__init__.py").is_file()
