"""Record types shared by the storage, core and CLI layers.

Staging entries and commits have a fixed schema. Parsing goes through
``from_dict`` so that format drift surfaces as a :class:`CorruptionError`
instead of a ``KeyError`` deep inside a command.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from rootvcs.constants import HASH_LENGTH
from rootvcs.errors import CorruptionError

_HEX_DIGITS = frozenset("0123456789abcdef")


def _is_digest(value: Any) -> bool:
    return (
        isinstance(value, str)
        and len(value) == HASH_LENGTH
        and set(value) <= _HEX_DIGITS
    )


@dataclass(frozen=True)
class StagingEntry:
    """A file queued for the next commit.

    Attributes:
        path: Workspace-relative POSIX path
        digest: SHA-256 digest of the file content
    """

    path: str
    digest: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "hash": self.digest}

    @classmethod
    def from_dict(cls, data: Any) -> "StagingEntry":
        if not isinstance(data, dict):
            raise CorruptionError(f"Invalid file entry: {data!r}")
        path = data.get("path")
        digest = data.get("hash")
        if not isinstance(path, str) or not isinstance(digest, str):
            raise CorruptionError(f"Invalid file entry: {data!r}")
        return cls(path=path, digest=digest)


@dataclass(frozen=True)
class Commit:
    """An immutable snapshot of the staging area.

    The serialized form is what gets hashed, so the key order of
    :meth:`to_record` is part of the on-disk format and must not change.
    """

    timestamp: str
    message: str
    files: Tuple[StagingEntry, ...]
    parent: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "message": self.message,
            "files": [entry.to_dict() for entry in self.files],
            "parent": self.parent,
        }

    def serialize(self) -> bytes:
        """Return the canonical bytes addressed by the commit digest."""
        return json.dumps(
            self.to_record(),
            separators=(",", ":"),
            ensure_ascii=False,
        ).encode("utf-8")

    @classmethod
    def from_record(cls, record: Any) -> "Commit":
        if not isinstance(record, dict):
            raise CorruptionError("Commit record is not an object")

        timestamp = record.get("timestamp")
        message = record.get("message")
        files = record.get("files")
        parent = record.get("parent")

        if not isinstance(timestamp, str) or not isinstance(message, str):
            raise CorruptionError("Commit record missing timestamp or message")
        if not isinstance(files, list):
            raise CorruptionError("Commit record missing file list")
        if parent is not None and not _is_digest(parent):
            raise CorruptionError(f"Invalid parent reference: {parent!r}")

        return cls(
            timestamp=timestamp,
            message=message,
            files=tuple(StagingEntry.from_dict(item) for item in files),
            parent=parent,
        )

    @classmethod
    def deserialize(cls, data: bytes) -> "Commit":
        try:
            record = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptionError(f"Unreadable commit record: {e}") from e
        return cls.from_record(record)


class CommitStatus(str, Enum):
    """Outcome of a commit attempt."""

    CREATED = "created"
    NOTHING_STAGED = "nothing_staged"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class CommitResult:
    status: CommitStatus
    digest: Optional[str] = None
    parent: Optional[str] = None
    files: Tuple[StagingEntry, ...] = ()

    @property
    def created(self) -> bool:
        return self.status is CommitStatus.CREATED


@dataclass(frozen=True)
class LogEntry:
    """One line of history as shown by ``log``."""

    digest: str
    timestamp: str
    message: str
    parent: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commit_hash": self.digest,
            "timestamp": self.timestamp,
            "message": self.message,
            "parent_hash": self.parent,
        }


@dataclass(frozen=True)
class InitResult:
    repo_dir: str
    created: bool


@dataclass(frozen=True)
class AddResult:
    path: str
    digest: str
    staged: bool


@dataclass(frozen=True)
class ResetResult:
    path: str
    removed: bool


@dataclass(frozen=True)
class StatusReport:
    head: Optional[str]
    entries: List[StagingEntry] = field(default_factory=list)


@dataclass(frozen=True)
class PushResult:
    remote: str
    commit_hash: str
    status_code: int
