"""Fixtures for integration tests."""

import subprocess
import sys

import pytest


def _run_delta(*args, cwd):
    return subprocess.run(
        [sys.executable, "-m", "deltavcs.cli.main", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
    )


@pytest.fixture
def initialized_repo(tmp_path):
    """Create a temporary directory with an initialized delta repository.

    Returns:
        Path: Path to the workspace root
    """
    workspace = tmp_path / "test_workspace"
    workspace.mkdir()

    result = _run_delta("init", "--quiet", cwd=workspace)

    if result.returncode != 0:
        raise RuntimeError(f"Failed to initialize repo: {result.stdout}\n{result.stderr}")

    return workspace


@pytest.fixture
def run_delta():
    """Run the delta CLI in a subprocess, as a user would."""
    return _run_delta
