"""Staging area management for RootVCS.

The staging area (index) is the ordered list of files that will go into the
next commit. It is persisted as JSON in .root/index and rewritten atomically
on every change.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from rootvcs.constants import INDEX_FILE, INDEX_VERSION
from rootvcs.errors import CorruptionError, RepositoryNotFoundError
from rootvcs.models import StagingEntry
from rootvcs.storage.fileio import atomic_write_json


class StagingArea:
    """Ordered, persisted list of staged files.

    Index format (JSON):
    {
        "version": 1,
        "entries": [
            {"path": "relative/path/to/file", "hash": "sha256..."},
            ...
        ]
    }

    Entries keep add order and are not deduplicated by path.

    Attributes:
        repo_dir: Path to the .root directory
        index_path: Path to the index file (.root/index)
    """

    def __init__(self, repo_dir: Path) -> None:
        self.repo_dir = Path(repo_dir)
        self.index_path = self.repo_dir / INDEX_FILE

        if not self.repo_dir.exists():
            raise RepositoryNotFoundError(
                f"Repository directory not found: {repo_dir}",
                repo_dir=str(repo_dir),
            )

    def list(self) -> List[StagingEntry]:
        """Return all staged entries in add order."""
        return self._load_entries()

    def append(self, entry: StagingEntry, working_path: Path) -> bool:
        """Stage ``entry`` if ``working_path`` still exists.

        A file deleted after it was hashed is skipped rather than staged.

        Returns:
            True if the entry was recorded
        """
        if not Path(working_path).exists():
            return False

        entries = self._load_entries()
        entries.append(entry)
        self._save_entries(entries)
        return True

    def remove_by_path(self, path: str) -> bool:
        """Unstage every entry recorded for ``path``.

        Returns:
            True if at least one entry was removed
        """
        entries = self._load_entries()
        kept = [entry for entry in entries if entry.path != path]

        if len(kept) == len(entries):
            return False

        self._save_entries(kept)
        return True

    def clear(self) -> None:
        """Clear all staged files."""
        self._save_entries([])

    def is_empty(self) -> bool:
        return not self._load_entries()

    def _load_entries(self) -> List[StagingEntry]:
        """Load index from disk."""
        if not self.index_path.exists():
            return []

        try:
            with open(self.index_path, "r", encoding="utf-8") as f:
                index = json.load(f)
        except json.JSONDecodeError as e:
            raise CorruptionError(f"Corrupted index file: {e}") from e

        if not isinstance(index, dict):
            raise CorruptionError("Corrupted index file: expected an object")

        if index.get("version") != INDEX_VERSION:
            raise CorruptionError(f"Unsupported index version: {index.get('version')}")

        raw_entries = index.get("entries")
        if not isinstance(raw_entries, list):
            raise CorruptionError("Corrupted index file: entries must be a list")

        return [StagingEntry.from_dict(item) for item in raw_entries]

    def _save_entries(self, entries: List[StagingEntry]) -> None:
        """Save index to disk."""
        index: Dict[str, Any] = {
            "version": INDEX_VERSION,
            "entries": [entry.to_dict() for entry in entries],
        }
        atomic_write_json(self.index_path, index, prefix=".tmp_index_")
