"""Tests for project metadata in pyproject.toml.

Python 3.13+.
"""

import tomllib
from pathlib import Path
from typing import Any

import pytest

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


@pytest.fixture(scope="module")
def project() -> dict[str, Any]:
    with PYPROJECT.open("rb") as f:
        return tomllib.load(f)["project"]


class TestProjectMetadata:
    """Test the [project] table."""

    def test_console_script(self, project: dict[str, Any]) -> None:
        """get-translations runs the CLI entry point."""
        assert project["scripts"] == {"get-translations": "locoexport.cli:main"}

    def test_no_readme_metadata(self, project: dict[str, Any]) -> None:
        """No design document is published as the package description."""
        assert "readme" not in project

    def test_runtime_dependencies(self, project: dict[str, Any]) -> None:
        """Every third-party runtime import is declared."""
        names = {dep.split(">")[0].split("=")[0].lower() for dep in project["dependencies"]}
        assert names == {"babel", "requests", "pyyaml"}
