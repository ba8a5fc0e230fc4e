"""Staging area management for deltavcs.

The staging index is an ordered list of (path, fingerprint) entries queued
for the next commit, persisted as a JSON array:

    [
        {"filePath": "src/app.py", "fileHash": "<sha1>"},
        ...
    ]

Entries are appended in staging order and are not deduplicated by path:
staging the same file twice leaves two entries.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

from deltavcs.constants import TEXT_ENCODING
from deltavcs.context import RepositoryContext
from deltavcs.errors import (
    CorruptIndex,
    FileNotFound,
    PathOutsideRepository,
    StorageIOError,
)
from deltavcs.models import StagingEntry
from deltavcs.storage import ObjectStore
from deltavcs.storage.atomic import atomic_write

logger = logging.getLogger(__name__)


class StagingIndex:
    """Persistent, ordered queue of pending changes.

    Every mutation is a full read-modify-write of the index file with no
    locking; two processes appending at once can lose an entry.

    Attributes:
        index_path: Path to the index file (.delta/index)
    """

    def __init__(self, ctx: RepositoryContext) -> None:
        self.ctx = ctx
        self.index_path = ctx.index_path

    def load(self) -> List[StagingEntry]:
        """Read the staged entries in staging order.

        A missing or empty index file yields an empty list.

        Raises:
            CorruptIndex: If the file is not a JSON array of entries
            StorageIOError: If the file cannot be read
        """
        try:
            raw = self.index_path.read_text(encoding=TEXT_ENCODING)
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as e:
            raise CorruptIndex(f"Corrupted index file: {e}") from e
        except OSError as e:
            raise StorageIOError(f"Failed to read index {self.index_path}: {e}") from e

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptIndex(f"Corrupted index file: {e}") from e

        if not isinstance(data, list):
            raise CorruptIndex(
                f"Corrupted index file: expected a list, got {type(data).__name__}"
            )

        try:
            return [StagingEntry.from_dict(item) for item in data]
        except ValueError as e:
            raise CorruptIndex(f"Corrupted index file: {e}") from e

    def append(self, entry: StagingEntry) -> None:
        """Append ``entry`` and persist the full sequence."""
        entries = self.load()
        entries.append(entry)
        self._save(entries)
        logger.debug("Staged %s -> %s", entry.path, entry.fingerprint)

    def clear(self) -> None:
        """Persist an empty index."""
        self._save([])
        logger.debug("Cleared staging index")

    def is_empty(self) -> bool:
        return not self.load()

    def _save(self, entries: List[StagingEntry]) -> None:
        data = json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)
        try:
            atomic_write(
                self.index_path, data.encode(TEXT_ENCODING), prefix=".tmp_index_"
            )
        except OSError as e:
            raise StorageIOError(f"Failed to write index {self.index_path}: {e}") from e


def stage_file(
    ctx: RepositoryContext,
    path: Union[str, Path],
    object_store: ObjectStore,
    index: StagingIndex,
) -> StagingEntry:
    """Store the file at ``path`` as a blob and append it to the index.

    Relative paths are resolved against the repository root. The entry's path
    is recorded relative to the root in POSIX form.

    Args:
        ctx: Repository to stage into
        path: File to stage
        object_store: Store receiving the blob
        index: Index receiving the entry

    Returns:
        The appended entry

    Raises:
        FileNotFound: If ``path`` is missing, not a regular file, or unreadable
        PathOutsideRepository: If ``path`` is outside the repository root or
            inside its .delta directory
        StorageIOError: If the blob or index cannot be written
    """
    path = Path(path)
    abs_path = path if path.is_absolute() else ctx.root / path
    rel_path = ctx.relative_path(abs_path)

    # Skip .delta directory itself
    if ctx.is_metadata_path(rel_path):
        raise PathOutsideRepository(f"{path}: cannot stage repository metadata")

    if not abs_path.is_file():
        raise FileNotFound(f"{path}: file not found")

    try:
        content = abs_path.read_bytes()
    except OSError as e:
        raise FileNotFound(f"{path}: cannot read file: {e}") from e

    entry = StagingEntry(path=rel_path, fingerprint=object_store.put(content))
    index.append(entry)
    return entry


def stage_files(
    ctx: RepositoryContext,
    paths: Iterable[Union[str, Path]],
    object_store: ObjectStore,
    index: StagingIndex,
) -> List[StagingEntry]:
    """Stage several files in order, stopping at the first failure."""
    return [stage_file(ctx, p, object_store, index) for p in paths]
