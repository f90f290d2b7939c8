"""Selective extraction of one skill from a GitHub repository zipball."""

import logging
import shutil
import zipfile
from pathlib import Path, PurePosixPath

from skill_fetch.errors import ArchiveCorrupt, SkillNotFound
from skill_fetch.models import Skill

logger = logging.getLogger("skill-fetch.extractor")


def _strip_root(entry_name: str) -> str:
    """Drop the ``{owner}-{repo}-{commit}/`` folder GitHub prepends to every entry."""
    parts = entry_name.split("/", 1)
    if len(parts) < 2:
        return ""
    return parts[1]


def _relocate(internal_path: str, prefix: str) -> str | None:
    """Path relative to the destination, or None if the entry is out of scope."""
    if prefix:
        if not internal_path.startswith(prefix):
            return None
        internal_path = internal_path[len(prefix):]
    return internal_path.rstrip("/")


def _safe_target(destination: Path, relative: str) -> Path | None:
    """Resolve ``relative`` under ``destination``, rejecting traversal."""
    rel = PurePosixPath(relative)
    if rel.is_absolute() or ".." in rel.parts or "\\" in relative:
        return None
    target = destination.joinpath(*rel.parts)
    try:
        target.resolve().relative_to(destination.resolve())
    except ValueError:
        return None
    return target


def extract_skill(archive_path: Path, skill: Skill, destination: Path) -> list[Path]:
    """Write the files belonging to ``skill`` from the archive into ``destination``.

    Entries are matched after stripping the archive's root folder. When the
    skill has a ``skill_path`` only entries under it are kept and the prefix
    is removed, so ``<root>/skills/pdf/SKILL.md`` lands at
    ``destination/SKILL.md``. Existing files are overwritten.

    Not transactional: a failure partway leaves whatever was already written.

    Raises:
        SkillNotFound: no file matched.
        ArchiveCorrupt: the archive cannot be read.
    """
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    skill_path = (skill.skill_path or "").strip("/")
    prefix = f"{skill_path}/" if skill_path else ""

    written: list[Path] = []
    try:
        with zipfile.ZipFile(archive_path) as zf:
            for info in zf.infolist():
                relative = _relocate(_strip_root(info.filename), prefix)
                if not relative:
                    continue

                target = _safe_target(destination, relative)
                if target is None:
                    logger.warning("Skipping unsafe archive entry: %s", info.filename)
                    continue

                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, target.open("wb") as dst:
                    shutil.copyfileobj(src, dst)
                written.append(target)
    except zipfile.BadZipFile as e:
        raise ArchiveCorrupt(str(archive_path), str(e)) from e

    if not written:
        raise SkillNotFound(skill_path or None)

    logger.info("Extracted %d files for '%s' → %s", len(written), skill.name, destination)
    return written
