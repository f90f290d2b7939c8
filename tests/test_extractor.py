"""Archive extractor tests using in-test zipballs."""

import sys
import zipfile
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from skill_fetch.core.extractor import extract_skill
from skill_fetch.errors import ArchiveCorrupt, SkillNotFound
from skill_fetch.models import Skill

ROOT = "org-repo-abc123/"


def _zipball(path: Path, entries: dict[str, bytes | None]) -> Path:
    """Write a zip; a None value marks a directory entry."""
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            if data is None:
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, data)
    return path


def _skill(skill_path: str | None = None) -> Skill:
    return Skill(
        name="react",
        description="React helpers",
        repo_url="https://github.com/org/repo",
        skill_path=skill_path,
        source="url-import",
    )


def _files(root: Path) -> dict[str, bytes]:
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()}


def test_extracts_only_the_skill_folder(tmp_path):
    """skills/react is re-rooted; skills/other is left out."""
    archive = _zipball(
        tmp_path / "a.zip",
        {
            ROOT: None,
            ROOT + "skills/": None,
            ROOT + "skills/react/": None,
            ROOT + "skills/react/SKILL.md": b"# React\n",
            ROOT + "skills/other/X": b"other",
        },
    )
    dest = tmp_path / "out"
    written = extract_skill(archive, _skill("skills/react"), dest)

    assert written == [dest / "SKILL.md"]
    assert _files(dest) == {"SKILL.md": b"# React\n"}


def test_nested_files_and_directories(tmp_path):
    archive = _zipball(
        tmp_path / "a.zip",
        {
            ROOT + "skills/react/SKILL.md": b"skill",
            ROOT + "skills/react/scripts/": None,
            ROOT + "skills/react/scripts/run.sh": b"#!/bin/sh\n",
            ROOT + "skills/react/empty/": None,
            ROOT + "skills/reactive/SKILL.md": b"not me",
        },
    )
    dest = tmp_path / "out"
    extract_skill(archive, _skill("/skills/react/"), dest)

    assert _files(dest) == {"SKILL.md": b"skill", "scripts/run.sh": b"#!/bin/sh\n"}
    assert (dest / "empty").is_dir()


def test_whole_archive_when_no_skill_path(tmp_path):
    """Without a skill path every entry below the root folder is written."""
    archive = _zipball(
        tmp_path / "a.zip",
        {
            ROOT: None,
            ROOT + "README.md": b"readme",
            ROOT + "SKILL.md": b"skill",
            ROOT + "src/main.py": b"print(1)\n",
        },
    )
    dest = tmp_path / "out"
    written = extract_skill(archive, _skill(), dest)

    assert len(written) == 3
    assert _files(dest) == {"README.md": b"readme", "SKILL.md": b"skill", "src/main.py": b"print(1)\n"}


def test_missing_skill_path_raises_and_writes_nothing(tmp_path):
    archive = _zipball(tmp_path / "a.zip", {ROOT + "skills/other/SKILL.md": b"x"})
    dest = tmp_path / "out"

    with pytest.raises(SkillNotFound) as exc:
        extract_skill(archive, _skill("skills/react"), dest)

    assert exc.value.skill_path == "skills/react"
    assert _files(dest) == {}


def test_empty_archive_raises(tmp_path):
    archive = _zipball(tmp_path / "a.zip", {ROOT: None})
    with pytest.raises(SkillNotFound) as exc:
        extract_skill(archive, _skill(), tmp_path / "out")
    assert exc.value.skill_path is None


def test_extraction_is_idempotent(tmp_path):
    archive = _zipball(
        tmp_path / "a.zip",
        {ROOT + "skills/react/SKILL.md": b"v1", ROOT + "skills/react/lib/a.txt": b"a"},
    )
    dest = tmp_path / "out"
    extract_skill(archive, _skill("skills/react"), dest)
    first = _files(dest)

    (dest / "SKILL.md").write_bytes(b"locally edited")
    extract_skill(archive, _skill("skills/react"), dest)
    assert _files(dest) == first


def test_traversal_entries_are_skipped(tmp_path):
    archive = _zipball(
        tmp_path / "a.zip",
        {
            ROOT + "../../escape.txt": b"evil",
            ROOT + "ok.txt": b"fine",
        },
    )
    dest = tmp_path / "out"
    extract_skill(archive, _skill(), dest)

    assert _files(dest) == {"ok.txt": b"fine"}
    assert not (tmp_path / "escape.txt").exists()


def test_corrupt_archive(tmp_path):
    bad = tmp_path / "bad.zip"
    bad.write_bytes(b"this is not a zip")
    with pytest.raises(ArchiveCorrupt):
        extract_skill(bad, _skill(), tmp_path / "out")
