"""Pytest configuration and fixtures for integration tests.

Integration tests run the full orchestrator against a real temporary
filesystem. HTTP is served by httpx.MockTransport; nothing touches the
network.
"""

from pathlib import Path

import pytest

from src.mirror.models import SyncOptions
from src.remote_client.auth import Authenticator
from tests.fixtures.source_trees import seed_sample_tree


@pytest.fixture
def workspace(tmp_path) -> Path:
    """Temporary project root holding source/ (seeded) and, after a run, docs/."""
    seed_sample_tree(tmp_path / "source")
    return tmp_path


@pytest.fixture
def authenticator() -> Authenticator:
    """Authenticator that reads only the process environment."""
    return Authenticator(load_env_file=False)


@pytest.fixture
def options() -> SyncOptions:
    """Default options with paths relative to the workspace."""
    return SyncOptions(source_dir="source", output_dir="docs")
