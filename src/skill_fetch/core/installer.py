"""Skill retrieval pipeline: resolve, download, extract, configure."""

import asyncio
import logging
from pathlib import Path

import httpx
from pydantic import BaseModel, Field

from skill_fetch.config import settings
from skill_fetch.core import config_gen
from skill_fetch.core.cache import ArchiveCache
from skill_fetch.core.extractor import extract_skill
from skill_fetch.core.fetcher import download_archive
from skill_fetch.core.urls import parse_repo_url
from skill_fetch.models import Skill

logger = logging.getLogger("skill-fetch.installer")


class Materialized(BaseModel):
    """Files produced by a successful download."""

    destination: Path
    files: list[Path] = Field(default_factory=list)
    config_path: Path | None = None


async def download_skill(
    skill: Skill,
    destination: Path,
    cache: ArchiveCache,
    client: httpx.AsyncClient | None = None,
    generate_config: bool = True,
) -> Materialized:
    """Materialize ``skill`` under ``destination``.

    Pipeline:
    1. Resolve owner/repo from ``skill.repo_url``
    2. Stream the repository zipball into the archive cache
    3. Extract the files under ``skill.skill_path``
    4. Optionally write the agent config next to SKILL.md

    The archive is always fetched from the configured default branch.

    Raises:
        InvalidRepoUrl, DownloadFailed, TransportError, SkillNotFound,
        ArchiveCorrupt, OSError
    """
    ref = parse_repo_url(skill.repo_url)
    destination = Path(destination)

    archive = cache.archive_path(ref.owner, ref.repo)
    await download_archive(settings.archive_url(ref.owner, ref.repo), archive, client)

    files = await asyncio.to_thread(extract_skill, archive, skill, destination)

    config_path = None
    if generate_config:
        config_path = await asyncio.to_thread(config_gen.generate_config, destination, skill)

    logger.info("Materialized '%s' → %s (%d files)", skill.name, destination, len(files))
    return Materialized(destination=destination, files=files, config_path=config_path)
