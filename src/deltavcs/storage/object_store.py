"""Content-addressable object storage for deltavcs.

Blobs and commits share one flat namespace in .delta/objects/, each stored
under the SHA-1 fingerprint of its exact bytes. Writing the same content twice
is a no-op, and writes use tmp file + rename so existing objects are never
left half-written.
"""

import hashlib
import logging
from pathlib import Path

from deltavcs.constants import HASH_ALGORITHM, HASH_LENGTH
from deltavcs.context import RepositoryContext
from deltavcs.errors import (
    InvalidFingerprint,
    ObjectCorrupted,
    ObjectNotFound,
    StorageIOError,
)
from deltavcs.storage.atomic import atomic_write

logger = logging.getLogger(__name__)


def compute_fingerprint(content: bytes) -> str:
    """Return the hex SHA-1 digest of ``content``.

    Example:
        >>> compute_fingerprint(b"hello")
        'aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d'
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(content)
    return hasher.hexdigest()


def validate_fingerprint(fingerprint: str) -> None:
    """Check that ``fingerprint`` is a 40-character lowercase hex string.

    Raises:
        InvalidFingerprint: If it is not
    """
    if not isinstance(fingerprint, str) or len(fingerprint) != HASH_LENGTH:
        raise InvalidFingerprint(
            str(fingerprint),
            f"Fingerprint must be {HASH_LENGTH} hex characters, got {fingerprint!r}",
        )
    if any(c not in "0123456789abcdef" for c in fingerprint):
        raise InvalidFingerprint(
            fingerprint, f"Fingerprint must be lowercase hexadecimal: {fingerprint}"
        )


class ObjectStore:
    """Content-addressable storage for blobs and commit records.

    Storage layout:
        .delta/objects/<fingerprint>

    Attributes:
        objects_dir: Path to the objects directory

    Example:
        >>> store = ObjectStore(RepositoryContext.open(Path(".")))
        >>> fingerprint = store.put(b"hello")
        >>> store.get(fingerprint)
        b'hello'
    """

    def __init__(self, ctx: RepositoryContext) -> None:
        self.ctx = ctx
        self.objects_dir = ctx.objects_dir

    def fingerprint(self, content: bytes) -> str:
        """Compute the fingerprint ``put`` would assign, without writing."""
        return compute_fingerprint(content)

    def put(self, content: bytes) -> str:
        """Store ``content`` and return its fingerprint.

        If an object with the same fingerprint already exists nothing is
        written (deduplication).

        Args:
            content: Binary content to store, possibly empty

        Returns:
            SHA-1 fingerprint of the content (40 hex characters)

        Raises:
            StorageIOError: If the write fails (permissions, disk full, etc.)
        """
        fingerprint = compute_fingerprint(content)
        object_path = self._object_path(fingerprint)

        if object_path.exists():
            logger.debug("Object %s already stored", fingerprint)
            return fingerprint

        try:
            self.objects_dir.mkdir(parents=True, exist_ok=True)
            atomic_write(object_path, content, prefix=".tmp_object_")
        except OSError as e:
            raise StorageIOError(f"Failed to write object {fingerprint}: {e}") from e

        logger.debug("Stored object %s (%d bytes)", fingerprint, len(content))
        return fingerprint

    def get(self, fingerprint: str, verify: bool = False) -> bytes:
        """Read the object stored under ``fingerprint``.

        Args:
            fingerprint: SHA-1 fingerprint (40 hex characters)
            verify: Recompute the digest and compare it to ``fingerprint``

        Returns:
            The stored bytes

        Raises:
            InvalidFingerprint: If ``fingerprint`` is malformed
            ObjectNotFound: If no object exists for ``fingerprint``
            ObjectCorrupted: If ``verify`` is set and the digest differs
            StorageIOError: If the read fails
        """
        validate_fingerprint(fingerprint)
        object_path = self._object_path(fingerprint)

        try:
            content = object_path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFound(fingerprint) from None
        except OSError as e:
            raise StorageIOError(f"Failed to read object {fingerprint}: {e}") from e

        if verify:
            actual = compute_fingerprint(content)
            if actual != fingerprint:
                raise ObjectCorrupted(
                    fingerprint,
                    f"Object corrupted: expected {fingerprint}, got {actual}",
                )

        return content

    def exists(self, fingerprint: str) -> bool:
        """Check whether an object is stored under ``fingerprint``.

        Malformed fingerprints are reported as absent.
        """
        try:
            validate_fingerprint(fingerprint)
        except InvalidFingerprint:
            return False
        return self._object_path(fingerprint).is_file()

    def _object_path(self, fingerprint: str) -> Path:
        return self.objects_dir / fingerprint
