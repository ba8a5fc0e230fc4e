"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

import pytest

from deltavcs.context import RepositoryContext
from deltavcs.core import Repository, init_repository


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def ctx(tmp_path: Path) -> RepositoryContext:
    """Create an initialized repository and return its context."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return init_repository(workspace)


@pytest.fixture
def repo(ctx: RepositoryContext) -> Repository:
    """Wire the components of the initialized repository."""
    return Repository(ctx)


@pytest.fixture
def in_tmp_dir(tmp_path: Path):
    """Run the test with tmp_path as the working directory."""
    original_cwd = Path.cwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)
