"""deltavcs error types.

Every error raised by the core derives from :class:`DeltaError`. The core
never terminates the process; the command layer decides how each error maps
to an exit status.
"""

from typing import Optional


class DeltaError(Exception):
    """Base class for all deltavcs errors."""


class NotARepository(DeltaError):
    """Raised when no .delta directory exists at the repository root."""


class AlreadyInitialized(DeltaError):
    """Raised by init when the target already holds a .delta directory."""


class DirectoryExists(DeltaError):
    """Raised by init when the requested new directory already exists."""


class FileNotFound(DeltaError):
    """Raised when a file passed to add/stage is missing or unreadable."""


class PathOutsideRepository(DeltaError):
    """Raised when a path to stage resolves outside the repository root."""


class StorageIOError(DeltaError):
    """Raised when reading or writing repository metadata fails."""


class CorruptIndex(DeltaError):
    """Raised when the staging index does not hold a valid entry list."""


class NothingToCommit(DeltaError):
    """Raised when a commit is requested with no staged entries.

    This is an expected condition; callers report it rather than abort.
    """


class FingerprintError(DeltaError):
    """Base for errors tied to a single object fingerprint.

    Attributes:
        fingerprint: The fingerprint that failed.
    """

    default_message = "Object error"

    def __init__(self, fingerprint: str, message: Optional[str] = None) -> None:
        self.fingerprint = fingerprint
        super().__init__(message or f"{self.default_message}: {fingerprint}")


class InvalidFingerprint(FingerprintError):
    """Raised when a fingerprint is not a 40-character hex string."""

    default_message = "Invalid fingerprint"


class ObjectNotFound(FingerprintError):
    """Raised when no object exists for a fingerprint."""

    default_message = "Object not found"


class ObjectCorrupted(FingerprintError):
    """Raised when an object's content no longer matches its fingerprint."""

    default_message = "Object corrupted"


class CorruptCommit(FingerprintError):
    """Raised when an object does not parse as a commit record."""

    default_message = "Corrupt commit"
