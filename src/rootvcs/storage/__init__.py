"""Storage layer for RootVCS.

This module provides content hashing, the content-addressable object store,
and the commit graph built on top of it.
"""

from rootvcs.storage.commit_graph import CommitGraph
from rootvcs.storage.hashing import hash_content, is_valid_digest
from rootvcs.storage.object_store import ObjectStore

__all__ = [
    "ObjectStore",
    "CommitGraph",
    "hash_content",
    "is_valid_digest",
]
