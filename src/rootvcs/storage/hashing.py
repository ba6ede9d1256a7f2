"""Content hashing for RootVCS objects."""

import hashlib
import re

from rootvcs.constants import HASH_ALGORITHM, HASH_LENGTH

_DIGEST_RE = re.compile(rf"^[0-9a-f]{{{HASH_LENGTH}}}$")


def hash_content(content: bytes) -> str:
    """Compute the SHA-256 digest of ``content`` as 64 lowercase hex chars.

    Used for both blobs and serialized commits, so byte-identical commit
    records always collapse to the same digest.
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(content)
    return hasher.hexdigest()


def is_valid_digest(digest: object) -> bool:
    """Return True if ``digest`` is a well-formed lowercase hex digest."""
    return isinstance(digest, str) and _DIGEST_RE.match(digest) is not None
