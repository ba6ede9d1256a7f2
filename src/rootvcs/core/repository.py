"""Repository coordinator.

A :class:`Repository` is the handle every command goes through. It owns the
object store, staging area, commit graph and config of one workspace and
returns plain result records for the CLI to render.
"""

from functools import cached_property
from pathlib import Path
from typing import Dict, List, Optional, Union

from rootvcs.constants import DEFAULT_PUSH_TIMEOUT, OBJECTS_DIR, ROOT_DIR
from rootvcs.core.config import DEFAULT_CONFIG, RepositoryConfig
from rootvcs.core.remote import build_push_payload, send_push
from rootvcs.core.staging import StagingArea
from rootvcs.errors import (
    InvalidArgumentError,
    NoRemoteConfiguredError,
    NotFoundError,
    RepositoryNotFoundError,
    WorkingFileNotFoundError,
    WorkingFileReadError,
)
from rootvcs.models import (
    AddResult,
    CommitResult,
    InitResult,
    LogEntry,
    PushResult,
    ResetResult,
    StagingEntry,
    StatusReport,
)
from rootvcs.storage import CommitGraph, ObjectStore, hash_content
from rootvcs.storage.fileio import atomic_write_bytes, atomic_write_json

PathLike = Union[str, Path]


def collapse_entries(entries: List[StagingEntry]) -> List[StagingEntry]:
    """Reduce entries to one per path, keeping the most recently added digest.

    Paths stay at the position where they were first staged.
    """
    latest: Dict[str, StagingEntry] = {}
    for entry in entries:
        latest[entry.path] = entry
    return list(latest.values())


class Repository:
    """A RootVCS repository rooted at ``workspace_root``.

    Attributes:
        workspace_root: Directory containing the working files
        repo_dir: The .root/ directory inside it
    """

    def __init__(self, workspace_root: PathLike) -> None:
        self.workspace_root = Path(workspace_root).resolve()
        self.repo_dir = self.workspace_root / ROOT_DIR

    @classmethod
    def open(cls, workspace_root: PathLike) -> "Repository":
        """Open an existing repository.

        Raises:
            RepositoryNotFoundError: If workspace_root has no .root/ directory
        """
        repo = cls(workspace_root)
        if not repo.repo_dir.is_dir():
            raise RepositoryNotFoundError(
                f"Not a RootVCS repository (no {ROOT_DIR}/ found in {repo.workspace_root})",
                workspace_root=str(repo.workspace_root),
            )
        return repo

    def is_initialized(self) -> bool:
        return self.repo_dir.is_dir()

    @cached_property
    def object_store(self) -> ObjectStore:
        return ObjectStore(self.repo_dir)

    @cached_property
    def staging(self) -> StagingArea:
        return StagingArea(self.repo_dir)

    @cached_property
    def graph(self) -> CommitGraph:
        return CommitGraph(self.repo_dir, self.object_store)

    @cached_property
    def config(self) -> RepositoryConfig:
        return RepositoryConfig(self.repo_dir)

    def init(self) -> InitResult:
        """Create the repository layout.

        Calling this on an existing repository changes nothing and reports
        ``created=False``.
        """
        if self.repo_dir.exists():
            return InitResult(repo_dir=str(self.repo_dir), created=False)

        self.repo_dir.mkdir(parents=True)
        (self.repo_dir / OBJECTS_DIR).mkdir()

        atomic_write_bytes(self.graph.head_path, b"", prefix=".tmp_head_")
        self.staging.clear()
        atomic_write_json(self.config.config_path, dict(DEFAULT_CONFIG), prefix=".tmp_config_")

        return InitResult(repo_dir=str(self.repo_dir), created=True)

    def add(self, path: PathLike) -> AddResult:
        """Store a working file as a blob and stage it.

        Raises:
            InvalidArgumentError: If path is empty, a directory, or outside the workspace
            WorkingFileNotFoundError: If the file doesn't exist
            WorkingFileReadError: If the file exists but can't be read
        """
        abs_path = self._resolve_path(path)
        rel_path = abs_path.relative_to(self.workspace_root).as_posix()

        if abs_path.is_dir():
            raise InvalidArgumentError(f"{rel_path} is a directory", path=rel_path)

        try:
            content = abs_path.read_bytes()
        except FileNotFoundError as e:
            raise WorkingFileNotFoundError(
                f"{rel_path}: file not found", path=rel_path
            ) from e
        except OSError as e:
            raise WorkingFileReadError(
                f"{rel_path}: cannot read file: {e.strerror or e}", path=rel_path
            ) from e

        digest = hash_content(content)
        self.object_store.put(digest, content)

        staged = self.staging.append(StagingEntry(path=rel_path, digest=digest), abs_path)
        return AddResult(path=rel_path, digest=digest, staged=staged)

    def commit(self, message: Optional[str]) -> CommitResult:
        """Commit the staging area.

        The staging area is cleared only when a new commit is created.

        Raises:
            InvalidArgumentError: If message is empty or whitespace
        """
        if message is None or not message.strip():
            raise InvalidArgumentError("Commit message is required")

        entries = collapse_entries(self.staging.list())
        result = self.graph.append(message, entries, self.graph.head())

        if result.created:
            self.staging.clear()

        return result

    def status(self) -> StatusReport:
        return StatusReport(head=self.graph.head(), entries=self.staging.list())

    def reset(self, path: PathLike) -> ResetResult:
        """Unstage ``path``; reports whether it was staged at all."""
        abs_path = self._resolve_path(path)
        rel_path = abs_path.relative_to(self.workspace_root).as_posix()
        return ResetResult(path=rel_path, removed=self.staging.remove_by_path(rel_path))

    def log(self, max_count: Optional[int] = None) -> List[LogEntry]:
        """Return history from HEAD backwards, most recent first."""
        entries: List[LogEntry] = []
        if max_count is not None and max_count <= 0:
            return entries

        for digest, commit in self.graph.iter_history():
            entries.append(
                LogEntry(
                    digest=digest,
                    timestamp=commit.timestamp,
                    message=commit.message,
                    parent=commit.parent,
                )
            )
            if max_count is not None and len(entries) >= max_count:
                break
        return entries

    def get_remote(self) -> Optional[str]:
        return self.config.remote

    def set_remote(self, url: Optional[str]) -> None:
        self.config.set_remote(url)

    def push(self, timeout: float = DEFAULT_PUSH_TIMEOUT) -> PushResult:
        """Send the HEAD commit to the configured remote.

        Local state is only read, never modified.

        Raises:
            NoRemoteConfiguredError: If no remote is set
            NotFoundError: If there are no commits yet
            CorruptionError: If HEAD names a commit that is missing
            TransportError: If the request fails or is rejected
        """
        remote = self.config.remote
        if remote is None:
            raise NoRemoteConfiguredError("No remote configured")

        head = self.graph.head()
        if head is None:
            raise NotFoundError("Nothing to push (no commits yet)")

        commit = self.graph.read_linked(head)
        status_code = send_push(remote, build_push_payload(head, commit), timeout=timeout)
        return PushResult(remote=remote, commit_hash=head, status_code=status_code)

    def _resolve_path(self, path: PathLike) -> Path:
        """Resolve path to absolute path within the workspace."""
        if path is None or not str(path).strip():
            raise InvalidArgumentError("A path is required")

        path = Path(path)
        if path.is_absolute():
            abs_path = path.resolve()
        else:
            abs_path = (self.workspace_root / path).resolve()

        try:
            abs_path.relative_to(self.workspace_root)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Path {path} is outside workspace root {self.workspace_root}",
                path=str(path),
            ) from e

        if abs_path == self.repo_dir or self.repo_dir in abs_path.parents:
            raise InvalidArgumentError(
                f"Path {path} is inside the {ROOT_DIR}/ directory", path=str(path)
            )

        return abs_path
