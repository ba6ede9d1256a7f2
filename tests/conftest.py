"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from rootvcs.core import Repository


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create an empty workspace directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def repo(workspace: Path) -> Repository:
    """Create an initialized repository."""
    repository = Repository(workspace)
    repository.init()
    return repository


@pytest.fixture
def hello_file(workspace: Path) -> Path:
    """Create a.txt containing "hello"."""
    path = workspace / "a.txt"
    path.write_text("hello")
    return path
