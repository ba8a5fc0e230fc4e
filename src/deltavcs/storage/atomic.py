"""Atomic file replacement shared by the object store, index and HEAD."""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write(path: Path, data: bytes, prefix: str = ".tmp_") -> None:
    """Write ``data`` to ``path`` via a temp file in the same directory.

    The temp file is fsynced and then renamed over ``path``, so readers see
    either the old content or the new content, never a partial write.

    Raises:
        OSError: If the write or rename fails. The temp file is removed.
    """
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=prefix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, path)

    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(tmp_path)
        except OSError:
            logger.debug("Could not remove temp file %s", tmp_path)
        raise
