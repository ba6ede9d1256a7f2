"""Per-repository configuration stored in .root/config."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from rootvcs.constants import CONFIG_FILE
from rootvcs.errors import CorruptionError, InvalidArgumentError
from rootvcs.storage.fileio import atomic_write_json

DEFAULT_CONFIG: Dict[str, Any] = {"remote": None}


class RepositoryConfig:
    """JSON-backed repository settings.

    Keys this class doesn't know about are kept as-is when saving.
    """

    def __init__(self, repo_dir: Path) -> None:
        self.repo_dir = Path(repo_dir)
        self.config_path = self.repo_dir / CONFIG_FILE

    def load(self) -> Dict[str, Any]:
        """Read config, falling back to defaults if the file is absent."""
        if not self.config_path.exists():
            return dict(DEFAULT_CONFIG)

        try:
            data = json.loads(self.config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise CorruptionError(f"Corrupted config file: {e}") from e

        if not isinstance(data, dict):
            raise CorruptionError("Corrupted config file: expected an object")

        merged = dict(DEFAULT_CONFIG)
        merged.update(data)
        return merged

    def save(self, data: Dict[str, Any]) -> None:
        atomic_write_json(self.config_path, data, prefix=".tmp_config_")

    @property
    def remote(self) -> Optional[str]:
        value = self.load().get("remote")
        if value is not None and not isinstance(value, str):
            raise CorruptionError(f"Invalid remote in config: {value!r}")
        return value or None

    def set_remote(self, url: Optional[str]) -> None:
        """Set the push endpoint, or clear it with None."""
        if url is not None:
            url = url.strip()
            if not url.startswith(("http://", "https://")):
                raise InvalidArgumentError(
                    f"Remote URL must start with http:// or https://: {url!r}",
                    url=url,
                )

        data = self.load()
        data["remote"] = url
        self.save(data)
