"""Scratch directory for downloaded repository archives."""

import logging
from pathlib import Path

from skill_fetch.config import settings

logger = logging.getLogger("skill-fetch.cache")


class ArchiveCache:
    """Process-local archive store keyed by ``{owner}-{repo}``.

    The directory is created on first use. Entries are never evicted; a
    repeat download of the same repository overwrites its file.
    """

    def __init__(self, root: Path | str | None = None):
        self.root = Path(root) if root is not None else settings.cache_dir
        self._ready = False

    def ensure(self) -> Path:
        if not self._ready:
            self.root.mkdir(parents=True, exist_ok=True)
            self._ready = True
            logger.debug("Archive cache ready: %s", self.root)
        return self.root

    def archive_path(self, owner: str, repo: str) -> Path:
        return self.ensure() / f"{owner}-{repo}.zip"

    def purge(self) -> int:
        """Remove all cached archives. Returns count removed."""
        if not self.root.exists():
            return 0

        removed = 0
        for f in self.root.glob("*.zip"):
            f.unlink(missing_ok=True)
            removed += 1

        if removed:
            logger.info("Purged %d cached archives from %s", removed, self.root)
        return removed

    def stats(self) -> dict:
        """Return cache directory stats."""
        if not self.root.exists():
            return {"entries": 0, "size_bytes": 0, "path": str(self.root)}

        files = list(self.root.glob("*.zip"))
        return {
            "entries": len(files),
            "size_bytes": sum(f.stat().st_size for f in files),
            "path": str(self.root),
        }
