"""Record types shared by the staging index and the commit graph."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class StagingEntry:
    """A pending (path, fingerprint) pair awaiting the next commit."""

    path: str
    fingerprint: str

    def to_dict(self) -> Dict[str, str]:
        return {"filePath": self.path, "fileHash": self.fingerprint}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StagingEntry":
        """Parse the persisted ``{filePath, fileHash}`` form.

        Raises:
            ValueError: If either field is missing or not a string
        """
        if not isinstance(data, dict):
            raise ValueError(f"entry must be an object, got {type(data).__name__}")
        path = data.get("filePath")
        fingerprint = data.get("fileHash")
        if not isinstance(path, str) or not isinstance(fingerprint, str):
            raise ValueError(f"entry needs string filePath and fileHash: {data!r}")
        return cls(path=path, fingerprint=fingerprint)


@dataclass(frozen=True)
class Commit:
    """An immutable snapshot of staged entries plus a parent link.

    Attributes:
        created_at: ISO-8601 timestamp (UTC)
        message: Commit message
        files: Staged entries in staging order
        parent: Fingerprint of the parent commit, None for the root commit
        fingerprint: Fingerprint the record was stored under, once known
    """

    created_at: str
    message: str
    files: Tuple[StagingEntry, ...]
    parent: Optional[str] = None
    fingerprint: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def to_dict(self) -> Dict[str, Any]:
        """Return the persisted form (without ``fingerprint``)."""
        return {
            "createdAt": self.created_at,
            "message": self.message,
            "files": [entry.to_dict() for entry in self.files],
            "parent": self.parent,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], fingerprint: Optional[str] = None) -> "Commit":
        """Parse the persisted form.

        Raises:
            ValueError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"commit must be an object, got {type(data).__name__}")

        created_at = data.get("createdAt")
        message = data.get("message")
        files = data.get("files")
        parent = data.get("parent")

        if not isinstance(created_at, str):
            raise ValueError("createdAt must be a string")
        if not isinstance(message, str):
            raise ValueError("message must be a string")
        if not isinstance(files, list):
            raise ValueError("files must be a list")
        if "parent" not in data or not (parent is None or isinstance(parent, str)):
            raise ValueError("parent must be a string or null")

        return cls(
            created_at=created_at,
            message=message,
            files=tuple(StagingEntry.from_dict(f) for f in files),
            parent=parent,
            fingerprint=fingerprint,
        )
