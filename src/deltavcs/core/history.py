"""Walking the commit chain from HEAD back to the root commit."""

import logging
from typing import Iterator, Optional

from deltavcs.core.commit_graph import CommitGraph
from deltavcs.models import Commit

logger = logging.getLogger(__name__)


class HistoryWalker:
    """Lazily yields commits newest first.

    Each call to :meth:`walk` re-reads HEAD and starts a fresh traversal, so
    walkers hold no cursor state between calls.

    Example:
        >>> for commit in HistoryWalker(graph).walk():
        ...     print(commit.fingerprint, commit.message)
    """

    def __init__(self, graph: CommitGraph) -> None:
        self.graph = graph

    def walk(self, limit: Optional[int] = None) -> Iterator[Commit]:
        """Yield commits from HEAD to the root.

        Args:
            limit: Stop after this many commits (None for all)

        Raises:
            ObjectNotFound: If a parent link points at a missing object
            CorruptCommit: If a commit on the chain does not parse
        """
        current = self.graph.get_head()
        count = 0

        while current is not None:
            if limit is not None and count >= limit:
                break
            commit = self.graph.get_commit(current)
            yield commit
            count += 1
            current = commit.parent

        logger.debug("Walked %d commit(s)", count)
