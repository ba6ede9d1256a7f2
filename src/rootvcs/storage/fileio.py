"""Atomic file replacement helpers."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def atomic_write_bytes(path: Path, data: bytes, prefix: str = ".tmp_") -> None:
    """Write ``data`` to ``path`` via a temp file in the same directory.

    The temp file is fsynced and then renamed over the target, so readers see
    either the old content or the new content, never a partial write.

    Raises:
        OSError: If the write or rename fails
    """
    path = Path(path)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=prefix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, path)

    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def atomic_write_json(path: Path, obj: Any, prefix: str = ".tmp_") -> None:
    """Serialize ``obj`` as indented JSON and write it atomically."""
    text = json.dumps(obj, indent=2, ensure_ascii=False)
    atomic_write_bytes(path, text.encode("utf-8"), prefix=prefix)
