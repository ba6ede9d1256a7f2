"""Core engine layer for RootVCS.

This module provides the staging area, repository configuration, the push
transport and the repository coordinator that ties them together.
"""

from rootvcs.core.config import RepositoryConfig
from rootvcs.core.repository import Repository
from rootvcs.core.staging import StagingArea

__all__ = [
    "Repository",
    "RepositoryConfig",
    "StagingArea",
]
