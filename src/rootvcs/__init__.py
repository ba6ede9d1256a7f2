"""RootVCS - a minimal content-addressed version control engine.

RootVCS stores file contents in a content-addressable object store, tracks
pending changes in a staging area, and links snapshots into a linear commit
history identified by SHA-256 digest.
"""

__version__ = "0.1.0"
__author__ = "RootVCS Contributors"

__all__ = ["__version__", "__author__"]
