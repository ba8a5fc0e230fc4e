"""Integration tests for delta commit command."""

import json
from pathlib import Path

from typer.testing import CliRunner

from deltavcs.cli.main import app
from deltavcs.constants import DEFAULT_COMMIT_MESSAGE, DELTA_DIR, EXIT_DATA_ERROR
from deltavcs.context import RepositoryContext
from deltavcs.core import Repository

runner = CliRunner()


class TestCommitCommand:
    """Test delta commit command."""

    def test_commit_basic(self, in_tmp_dir: Path) -> None:
        """Test basic commit workflow."""
        runner.invoke(app, ["init", "--quiet"])
        (in_tmp_dir / "f.txt").write_text("hello")

        result_add = runner.invoke(app, ["add", "f.txt"])
        assert result_add.exit_code == 0

        result = runner.invoke(app, ["commit", "-m", "Initial commit"])

        assert result.exit_code == 0
        assert "Committed" in result.stdout
        assert "Initial commit" in result.stdout

        # Verify HEAD was updated
        commit_hash = (in_tmp_dir / DELTA_DIR / "HEAD").read_text().strip()
        assert len(commit_hash) == 40
        assert commit_hash in result.stdout

        # Verify staging area was cleared
        index_data = json.loads((in_tmp_dir / DELTA_DIR / "index").read_text())
        assert index_data == []

    def test_commit_positional_message(self, in_tmp_dir: Path) -> None:
        runner.invoke(app, ["init", "--quiet"])
        (in_tmp_dir / "f.txt").write_text("hello")
        runner.invoke(app, ["add", "f.txt"])

        result = runner.invoke(app, ["commit", "positional message"])

        assert result.exit_code == 0
        head = Repository.open(in_tmp_dir).log()
        assert next(head).message == "positional message"

    def test_commit_default_message(self, in_tmp_dir: Path) -> None:
        """Test that a missing message falls back to the placeholder."""
        runner.invoke(app, ["init", "--quiet"])
        (in_tmp_dir / "f.txt").write_text("hello")
        runner.invoke(app, ["add", "f.txt"])

        result = runner.invoke(app, ["commit"])

        assert result.exit_code == 0
        assert next(Repository.open(in_tmp_dir).log()).message == DEFAULT_COMMIT_MESSAGE

    def test_commit_explicit_empty_message(self, in_tmp_dir: Path) -> None:
        """Test that an explicit empty message is stored as given."""
        runner.invoke(app, ["init", "--quiet"])
        (in_tmp_dir / "f.txt").write_text("hello")
        runner.invoke(app, ["add", "f.txt"])

        result = runner.invoke(app, ["commit", "-m", ""])

        assert result.exit_code == 0
        assert next(Repository.open(in_tmp_dir).log()).message == ""

    def test_commit_empty_staging_reports(self, in_tmp_dir: Path) -> None:
        """Test that an empty commit is reported, not treated as a crash."""
        runner.invoke(app, ["init", "--quiet"])

        result = runner.invoke(app, ["commit", "-m", "Empty"])

        assert result.exit_code == 0
        assert "nothing to commit" in result.stdout.lower()
        assert (in_tmp_dir / DELTA_DIR / "HEAD").read_text() == ""
        assert list((in_tmp_dir / DELTA_DIR / "objects").iterdir()) == []

    def test_commit_not_initialized(self, in_tmp_dir: Path) -> None:
        result = runner.invoke(app, ["commit", "-m", "nope"])

        assert result.exit_code == 1
        assert "Not a delta repository" in result.stdout

    def test_commit_corrupt_index(self, in_tmp_dir: Path) -> None:
        """Test that a corrupt index aborts with the data error code."""
        runner.invoke(app, ["init", "--quiet"])
        (in_tmp_dir / DELTA_DIR / "index").write_text("{broken")

        result = runner.invoke(app, ["commit", "-m", "broken"])

        assert result.exit_code == EXIT_DATA_ERROR
        assert "Corrupted index file" in result.stdout

    def test_commit_twice_chains_parents(self, in_tmp_dir: Path) -> None:
        runner.invoke(app, ["init", "--quiet"])
        for name in ("one", "two"):
            (in_tmp_dir / f"{name}.txt").write_text(name)
            runner.invoke(app, ["add", f"{name}.txt"])
            runner.invoke(app, ["commit", "-m", name])

        second, first = list(Repository(RepositoryContext.at(in_tmp_dir)).log())
        assert second.parent == first.fingerprint
        assert first.parent is None
