"""Exception hierarchy for RootVCS.

Every failure the core reports derives from :class:`RootVCSError`. Each error
carries a machine-readable ``kind`` and a ``context`` dictionary so that the
presentation layer can render it without parsing messages.
"""

from typing import Any, Dict, Optional


class RootVCSError(Exception):
    """Base exception for all RootVCS errors.

    Attributes:
        kind: Stable identifier of the error category
        context: Extra details (paths, digests, URLs) for reporting
    """

    kind = "error"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.context: Dict[str, Any] = context


class NotFoundError(RootVCSError):
    """Raised when a requested object, commit or repository does not exist."""

    kind = "not_found"


class ObjectNotFoundError(NotFoundError):
    """Raised when a digest has no object in the object store."""


class CommitNotFoundError(NotFoundError):
    """Raised when a commit digest has no stored commit object."""


class RepositoryNotFoundError(NotFoundError):
    """Raised when no .root/ directory exists in the workspace."""


class WorkingFileNotFoundError(RootVCSError):
    """Raised when a working-tree file to be added does not exist."""

    kind = "file_not_found"


class WorkingFileReadError(RootVCSError):
    """Raised when a working-tree file exists but cannot be read."""

    kind = "file_unreadable"


class InvalidArgumentError(RootVCSError):
    """Raised for empty commit messages, malformed digests or bad paths."""

    kind = "invalid_argument"


class NoRemoteConfiguredError(RootVCSError):
    """Raised when push is requested without a configured remote."""

    kind = "no_remote"


class TransportError(RootVCSError):
    """Raised when the push request fails or is rejected by the remote."""

    kind = "transport_failure"

    def __init__(
        self, message: str, status_code: Optional[int] = None, **context: Any
    ) -> None:
        super().__init__(message, status_code=status_code, **context)
        self.status_code = status_code


class CorruptionError(RootVCSError):
    """Raised when on-disk repository state is inconsistent.

    Covers objects whose content no longer matches their digest, unreadable
    index or commit records, and commit-graph links that point nowhere.
    """

    kind = "corruption"
