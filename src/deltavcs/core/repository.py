"""Repository bootstrap and component wiring."""

import logging
import shutil
from pathlib import Path
from typing import Iterator, List, Optional, Union

from deltavcs.constants import DELTA_DIR, TEXT_ENCODING
from deltavcs.context import RepositoryContext
from deltavcs.core.commit_graph import CommitGraph
from deltavcs.core.history import HistoryWalker
from deltavcs.core.staging import StagingIndex, stage_files
from deltavcs.errors import AlreadyInitialized, DirectoryExists, StorageIOError
from deltavcs.models import Commit, StagingEntry
from deltavcs.storage import ObjectStore

logger = logging.getLogger(__name__)


def init_repository(
    base_dir: Union[str, Path], dir_name: Optional[str] = None
) -> RepositoryContext:
    """Create the .delta layout in ``base_dir`` or in a new subdirectory.

    Args:
        base_dir: Directory the command runs in
        dir_name: If given, create ``base_dir/dir_name`` and initialize there

    Returns:
        Context of the new repository

    Raises:
        DirectoryExists: If ``dir_name`` is given and already exists
        AlreadyInitialized: If the target already holds a .delta directory
        StorageIOError: If the layout cannot be created; partial work is removed
    """
    target = Path(base_dir)
    created_dir = False

    if dir_name:
        target = target / dir_name
        if target.exists():
            raise DirectoryExists(f"Directory already exists: {target}")
        try:
            target.mkdir(parents=True)
        except OSError as e:
            raise StorageIOError(f"Failed to create directory {target}: {e}") from e
        created_dir = True

    ctx = RepositoryContext.at(target)
    if ctx.delta_dir.exists():
        raise AlreadyInitialized(f"Repository already initialized in {ctx.root}")

    try:
        ctx.delta_dir.mkdir()
        ctx.objects_dir.mkdir()
        ctx.index_path.write_text("[]", encoding=TEXT_ENCODING)
        ctx.head_path.write_text("", encoding=TEXT_ENCODING)
    except OSError as e:
        # Clean up partial initialization
        shutil.rmtree(ctx.delta_dir, ignore_errors=True)
        if created_dir:
            shutil.rmtree(ctx.root, ignore_errors=True)
        raise StorageIOError(f"Failed to initialize {DELTA_DIR} in {ctx.root}: {e}") from e

    logger.debug("Initialized repository at %s", ctx.root)
    return ctx


class Repository:
    """The store, index, graph and walker of one repository, wired together.

    Attributes:
        ctx: Resolved repository locations
        objects: Content store
        index: Staging index
        graph: Commit graph
        history: History walker
    """

    def __init__(self, ctx: RepositoryContext) -> None:
        self.ctx = ctx
        self.objects = ObjectStore(ctx)
        self.index = StagingIndex(ctx)
        self.graph = CommitGraph(ctx, self.objects, self.index)
        self.history = HistoryWalker(self.graph)

    @classmethod
    def open(cls, root: Union[str, Path]) -> "Repository":
        """Open the initialized repository at ``root``.

        Raises:
            NotARepository: If ``root`` has no .delta directory
        """
        return cls(RepositoryContext.open(root))

    def add(self, *paths: Union[str, Path]) -> List[StagingEntry]:
        """Stage files. Repeated paths produce repeated entries."""
        return stage_files(self.ctx, paths, self.objects, self.index)

    stage = add

    def commit(self, message: str) -> str:
        """Commit everything currently staged.

        Raises:
            NothingToCommit: If nothing is staged
        """
        return self.graph.commit(message, self.index.load())

    def log(self, limit: Optional[int] = None) -> Iterator[Commit]:
        return self.history.walk(limit=limit)
