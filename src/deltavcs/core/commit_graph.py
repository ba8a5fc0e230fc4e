"""Commit creation and lookup.

A commit is a JSON record stored in the object store like any blob, so its
fingerprint is the digest of its canonical serialization:

    {"createdAt":"...","files":[{"fileHash":"...","filePath":"..."}],
     "message":"...","parent":null}

Commits link backwards through ``parent``; the HEAD file names the newest.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from deltavcs.constants import TEXT_ENCODING
from deltavcs.context import RepositoryContext
from deltavcs.core.staging import StagingIndex
from deltavcs.errors import (
    CorruptCommit,
    InvalidFingerprint,
    NothingToCommit,
    StorageIOError,
)
from deltavcs.models import Commit, StagingEntry
from deltavcs.storage import ObjectStore
from deltavcs.storage.atomic import atomic_write
from deltavcs.storage.object_store import validate_fingerprint

logger = logging.getLogger(__name__)


def serialize_commit(commit: Commit) -> bytes:
    """Serialize ``commit`` canonically (sorted keys, no whitespace)."""
    canonical_json = json.dumps(
        commit.to_dict(),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return canonical_json.encode("utf-8")


class CommitGraph:
    """Creates immutable commit records and advances HEAD.

    Attributes:
        head_path: Path to the HEAD file
        object_store: Store holding commit records
        index: Staging index cleared after each commit
    """

    def __init__(
        self,
        ctx: RepositoryContext,
        object_store: ObjectStore,
        index: StagingIndex,
    ) -> None:
        self.ctx = ctx
        self.head_path = ctx.head_path
        self.object_store = object_store
        self.index = index

    def commit(self, message: str, pending_entries: Sequence[StagingEntry]) -> str:
        """Record ``pending_entries`` as a new commit on top of HEAD.

        Writes happen in a fixed order: commit object, then HEAD, then the
        cleared index. HEAD therefore never names an unwritten object. A crash
        after HEAD moves but before the index is cleared leaves the entries
        staged, and committing again would record them twice.

        Args:
            message: Commit message
            pending_entries: Entries to record, in staging order

        Returns:
            Fingerprint of the new commit

        Raises:
            NothingToCommit: If ``pending_entries`` is empty
            StorageIOError: If any write fails
        """
        if not pending_entries:
            raise NothingToCommit("Nothing to commit (staging area is empty)")

        record = Commit(
            created_at=datetime.now(timezone.utc).isoformat(),
            message=message,
            files=tuple(pending_entries),
            parent=self.get_head(),
        )

        commit_fingerprint = self.object_store.put(serialize_commit(record))
        self._set_head(commit_fingerprint)
        self.index.clear()

        logger.debug(
            "Committed %s (%d file(s), parent %s)",
            commit_fingerprint,
            len(record.files),
            record.parent,
        )
        return commit_fingerprint

    def get_head(self) -> Optional[str]:
        """Return the HEAD fingerprint, or None before the first commit."""
        try:
            content = self.head_path.read_text(encoding=TEXT_ENCODING).strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageIOError(f"Failed to read HEAD {self.head_path}: {e}") from e
        return content or None

    def get_commit(self, fingerprint: str) -> Commit:
        """Load the commit stored under ``fingerprint``.

        Raises:
            ObjectNotFound: If no object exists for ``fingerprint``
            CorruptCommit: If the object is not a valid commit record
        """
        try:
            validate_fingerprint(fingerprint)
        except InvalidFingerprint as e:
            raise CorruptCommit(fingerprint, f"Corrupt commit reference: {e}") from e

        raw = self.object_store.get(fingerprint)

        try:
            record = Commit.from_dict(json.loads(raw.decode("utf-8")), fingerprint)
            if record.parent is not None:
                validate_fingerprint(record.parent)
        except (UnicodeDecodeError, ValueError, InvalidFingerprint) as e:
            # json.JSONDecodeError is a ValueError
            raise CorruptCommit(fingerprint, f"Corrupt commit {fingerprint}: {e}") from e

        return record

    def _set_head(self, fingerprint: str) -> None:
        try:
            atomic_write(
                self.head_path, fingerprint.encode(TEXT_ENCODING), prefix=".tmp_head_"
            )
        except OSError as e:
            raise StorageIOError(f"Failed to update HEAD: {e}") from e
        logger.debug("HEAD -> %s", fingerprint)
