"""Pytest configuration and fixtures for E2E tests.

E2E tests drive the installed Typer application through CliRunner with the
current directory switched to a temporary project root, exactly as a user
would run `docs-mirror` from their repository.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from tests.fixtures.source_trees import seed_sample_tree


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch) -> Path:
    """Empty project root that is also the current working directory."""
    for name in ("GDOC_URL", "GDRIVE_URL", "GDOC_EXPORTS", "YADISK_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def seeded_project(project) -> Path:
    """Project root with the sample tree under source/."""
    seed_sample_tree(project / "source")
    return project

