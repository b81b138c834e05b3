"""Persisted list of folders the collector scans."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FolderStore:
    """JSON-backed, de-duplicated, insertion-ordered list of folder paths."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> list[str]:
        if not self.path.exists():
            return []
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return [str(p) for p in data.get("folders", [])]

    def save(self, folders: list[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"folders": folders}, indent=2), encoding="utf-8")

    def add(self, *paths: str | Path) -> list[str]:
        """Add absolute paths, keeping existing order and dropping duplicates."""
        folders = self.load()
        for path in paths:
            resolved = str(Path(path).expanduser().resolve())
            if resolved not in folders:
                folders.append(resolved)
        self.save(folders)
        return folders

    def clear(self) -> None:
        self.save([])
        logger.info(f"Cleared folder list at {self.path}")
