"""Content-addressable object storage for RootVCS.

Objects (file blobs and serialized commits) are stored in .root/objects/
under their SHA-256 digest. Objects are write-once: storing a digest that
already exists is a no-op.
"""

import os
import tempfile
from pathlib import Path

from rootvcs.constants import OBJECTS_DIR, SHARD_LENGTH
from rootvcs.errors import (
    CorruptionError,
    InvalidArgumentError,
    ObjectNotFoundError,
    RepositoryNotFoundError,
)
from rootvcs.storage.hashing import hash_content, is_valid_digest


class ObjectStore:
    """Content-addressable storage for blobs and commit records.

    Storage layout:
        .root/objects/<hash[:2]>/<hash[2:]>

    Attributes:
        repo_dir: Path to the .root directory
        objects_dir: Path to the objects directory

    Example:
        >>> store = ObjectStore(Path(".root"))
        >>> digest = store.write(b"hello")
        >>> assert store.get(digest) == b"hello"
    """

    def __init__(self, repo_dir: Path) -> None:
        """Initialize the object store.

        Args:
            repo_dir: Path to .root directory

        Raises:
            RepositoryNotFoundError: If repo_dir doesn't exist
        """
        self.repo_dir = Path(repo_dir)
        self.objects_dir = self.repo_dir / OBJECTS_DIR

        if not self.repo_dir.exists():
            raise RepositoryNotFoundError(
                f"Repository directory not found: {repo_dir}",
                repo_dir=str(repo_dir),
            )

    def write(self, content: bytes) -> str:
        """Hash ``content``, store it, and return its digest."""
        digest = hash_content(content)
        self.put(digest, content)
        return digest

    def put(self, digest: str, content: bytes) -> None:
        """Store ``content`` under ``digest``.

        If the object already exists nothing is written. New objects go to a
        temp file in the shard directory and are renamed into place.

        Args:
            digest: SHA-256 digest of content
            content: Raw object bytes

        Raises:
            InvalidArgumentError: If digest is malformed or doesn't match content
            OSError: If write fails (permissions, disk full, etc.)
        """
        self._validate_digest(digest)

        if self.exists(digest):
            return

        actual = hash_content(content)
        if actual != digest:
            raise InvalidArgumentError(
                f"Digest mismatch: expected {digest}, content hashes to {actual}",
                digest=digest,
            )

        object_path = self._get_object_path(digest)
        object_path.parent.mkdir(parents=True, exist_ok=True)

        tmp_fd, tmp_path = tempfile.mkstemp(
            dir=object_path.parent,
            prefix=".tmp_",
            suffix=".obj",
        )
        try:
            with os.fdopen(tmp_fd, "wb") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            try:
                os.replace(tmp_path, object_path)
            except OSError:
                # Another process created it first
                if object_path.exists():
                    os.unlink(tmp_path)
                    return
                raise

        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get(self, digest: str) -> bytes:
        """Read an object and verify it still matches its digest.

        Raises:
            InvalidArgumentError: If digest is malformed
            ObjectNotFoundError: If the object doesn't exist
            CorruptionError: If the stored bytes no longer hash to digest
        """
        self._validate_digest(digest)

        object_path = self._get_object_path(digest)
        if not object_path.exists():
            raise ObjectNotFoundError(f"Object not found: {digest}", digest=digest)

        content = object_path.read_bytes()

        actual = hash_content(content)
        if actual != digest:
            raise CorruptionError(
                f"Object corrupted: expected {digest}, got {actual}",
                digest=digest,
            )

        return content

    def exists(self, digest: str) -> bool:
        """Check whether an object is stored. Malformed digests return False."""
        if not is_valid_digest(digest):
            return False
        return self._get_object_path(digest).exists()

    def _get_object_path(self, digest: str) -> Path:
        """Map a digest to objects/<hash[:2]>/<hash[2:]>."""
        return self.objects_dir / digest[:SHARD_LENGTH] / digest[SHARD_LENGTH:]

    def _validate_digest(self, digest: str) -> None:
        if not is_valid_digest(digest):
            raise InvalidArgumentError(f"Invalid digest: {digest!r}", digest=digest)
