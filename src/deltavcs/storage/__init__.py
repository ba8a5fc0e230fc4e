"""Storage layer for deltavcs.

This module provides the content-addressable object store shared by blobs
and commit records.
"""

from deltavcs.storage.object_store import ObjectStore, compute_fingerprint

__all__ = [
    "ObjectStore",
    "compute_fingerprint",
]
