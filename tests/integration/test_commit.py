"""Integration tests for rootvcs commit command."""

from pathlib import Path

from typer.testing import CliRunner

from rootvcs.cli.main import app
from rootvcs.constants import ROOT_DIR


class TestCommitCommand:
    """Test rootvcs commit command."""

    def test_commit_basic(self, runner: CliRunner, initialized_repo: Path) -> None:
        (initialized_repo / "a.txt").write_text("hello")
        assert runner.invoke(app, ["add", "a.txt"]).exit_code == 0

        result = runner.invoke(app, ["commit", "-m", "Initial commit"])

        assert result.exit_code == 0
        assert "Committed" in result.stdout
        assert "Initial commit" in result.stdout

        head = (initialized_repo / ROOT_DIR / "HEAD").read_text().strip()
        assert len(head) == 64
        assert head[:7] in result.stdout

    def test_commit_requires_message(self, runner: CliRunner, initialized_repo: Path) -> None:
        result = runner.invoke(app, ["commit"])

        assert result.exit_code == 1
        assert "message is required" in result.stdout.lower()

    def test_commit_blank_message(self, runner: CliRunner, initialized_repo: Path) -> None:
        (initialized_repo / "a.txt").write_text("hello")
        runner.invoke(app, ["add", "a.txt"])

        result = runner.invoke(app, ["commit", "-m", "   "])

        assert result.exit_code == 1
        assert (initialized_repo / ROOT_DIR / "HEAD").read_text() == ""

    def test_commit_empty_staging_fails(
        self, runner: CliRunner, initialized_repo: Path
    ) -> None:
        result = runner.invoke(app, ["commit", "-m", "Empty"])

        assert result.exit_code == 1
        assert "nothing to commit" in result.stdout.lower()

    def test_commit_unchanged_is_suppressed(
        self, runner: CliRunner, initialized_repo: Path
    ) -> None:
        (initialized_repo / "a.txt").write_text("hello")
        runner.invoke(app, ["add", "a.txt"])
        runner.invoke(app, ["commit", "-m", "first"])
        head = (initialized_repo / ROOT_DIR / "HEAD").read_text()

        runner.invoke(app, ["add", "a.txt"])
        result = runner.invoke(app, ["commit", "-m", "second"])

        assert result.exit_code == 1
        assert "nothing changed" in result.stdout.lower()
        assert (initialized_repo / ROOT_DIR / "HEAD").read_text() == head
