"""Core engine layer for deltavcs.

This module provides the version control operations built on the object
store: staging, commit creation and history traversal.
"""

from deltavcs.core.commit_graph import CommitGraph
from deltavcs.core.history import HistoryWalker
from deltavcs.core.repository import Repository, init_repository
from deltavcs.core.staging import StagingIndex, stage_file, stage_files

__all__ = [
    "CommitGraph",
    "HistoryWalker",
    "Repository",
    "StagingIndex",
    "init_repository",
    "stage_file",
    "stage_files",
]
