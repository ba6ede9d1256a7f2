"""Commit creation and history traversal.

Commits are serialized records stored in the object store like any blob.
Each one names its parent, forming a backward-linked list whose tip is
recorded in .root/HEAD.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Sequence, Tuple

from rootvcs.constants import HEAD_FILE
from rootvcs.errors import CommitNotFoundError, CorruptionError, ObjectNotFoundError
from rootvcs.models import Commit, CommitResult, CommitStatus, StagingEntry
from rootvcs.storage.fileio import atomic_write_bytes
from rootvcs.storage.hashing import hash_content, is_valid_digest
from rootvcs.storage.object_store import ObjectStore


class CommitGraph:
    """Linear commit history rooted at HEAD.

    Attributes:
        repo_dir: Path to .root directory
        head_path: Path to the HEAD file
        object_store: ObjectStore holding commit records
    """

    def __init__(self, repo_dir: Path, object_store: ObjectStore) -> None:
        self.repo_dir = Path(repo_dir)
        self.head_path = self.repo_dir / HEAD_FILE
        self.object_store = object_store

    def head(self) -> Optional[str]:
        """Return the tip commit digest, or None before the first commit.

        Raises:
            CorruptionError: If HEAD holds something other than a digest
        """
        if not self.head_path.exists():
            return None

        try:
            content = self.head_path.read_text(encoding="utf-8").strip()
        except UnicodeDecodeError as e:
            raise CorruptionError(f"HEAD is not valid UTF-8: {e}") from e

        if not content:
            return None

        if not is_valid_digest(content):
            raise CorruptionError(f"HEAD is not a valid digest: {content!r}")

        return content

    def append(
        self,
        message: str,
        entries: Sequence[StagingEntry],
        parent: Optional[str],
        timestamp: Optional[str] = None,
    ) -> CommitResult:
        """Create a commit on top of ``parent`` and move HEAD to it.

        An empty ``entries`` list aborts before any hashing or storage. If the
        parent's file list equals ``entries`` the commit is suppressed and
        neither the object store nor HEAD is touched.

        HEAD is rewritten only after the commit object is stored, so an
        interrupted commit leaves HEAD at the previous tip.

        Args:
            message: Commit message
            entries: Files to record, in order
            parent: Digest of the parent commit, or None for the root commit
            timestamp: ISO-8601 timestamp; defaults to the current UTC time

        Returns:
            CommitResult describing what happened

        Raises:
            CorruptionError: If parent doesn't reference a stored commit
        """
        files = tuple(entries)
        if not files:
            return CommitResult(status=CommitStatus.NOTHING_STAGED, parent=parent)

        if parent is not None:
            parent_commit = self.read_linked(parent)
            if parent_commit.files == files:
                return CommitResult(
                    status=CommitStatus.UNCHANGED, digest=parent, parent=parent, files=files
                )

        commit = Commit(
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
            message=message,
            files=files,
            parent=parent,
        )

        data = commit.serialize()
        digest = hash_content(data)
        self.object_store.put(digest, data)

        self._write_head(digest)

        return CommitResult(
            status=CommitStatus.CREATED, digest=digest, parent=parent, files=files
        )

    def read(self, digest: str) -> Commit:
        """Load a commit record.

        Raises:
            CommitNotFoundError: If no object exists for digest
            CorruptionError: If the object isn't a valid commit record
        """
        try:
            data = self.object_store.get(digest)
        except ObjectNotFoundError as e:
            raise CommitNotFoundError(f"Commit not found: {digest}", digest=digest) from e

        return Commit.deserialize(data)

    def read_linked(self, digest: str) -> Commit:
        """Load a commit reached through HEAD or a parent link.

        Such a reference must always resolve, so a missing object means the
        repository is damaged.

        Raises:
            CorruptionError: If the commit is missing or unreadable
        """
        try:
            return self.read(digest)
        except CommitNotFoundError as e:
            raise CorruptionError(
                f"History is broken: commit {digest} is missing",
                digest=digest,
            ) from e

    def iter_history(self) -> Iterator[Tuple[str, Commit]]:
        """Yield ``(digest, commit)`` pairs from HEAD back to the root commit.

        Each call starts a fresh walk from the current HEAD.

        Raises:
            CorruptionError: If a commit along the chain is missing
        """
        digest = self.head()
        while digest is not None:
            commit = self.read_linked(digest)
            yield digest, commit
            digest = commit.parent

    def _write_head(self, digest: str) -> None:
        atomic_write_bytes(self.head_path, digest.encode("utf-8"), prefix=".tmp_head_")
