"""Fixtures for CLI integration tests."""

import os
from pathlib import Path
from typing import Iterator

import pytest
from typer.testing import CliRunner

from rootvcs.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_workspace(tmp_path: Path) -> Iterator[Path]:
    """Run the test with the current directory set to an empty workspace."""
    workspace = tmp_path / "test_workspace"
    workspace.mkdir()

    original_cwd = Path.cwd()
    os.chdir(workspace)
    try:
        yield workspace
    finally:
        os.chdir(original_cwd)


@pytest.fixture
def initialized_repo(runner: CliRunner, cli_workspace: Path) -> Path:
    """Workspace with an initialized RootVCS repository.

    Returns:
        Path: Path to the workspace root
    """
    result = runner.invoke(app, ["init", "--quiet"])
    if result.exit_code != 0:
        raise RuntimeError(f"Failed to initialize repo: {result.stdout}")
    return cli_workspace
