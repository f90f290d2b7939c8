"""Install tool: materialize a skill into a directory."""

import logging
from pathlib import Path

import httpx

from skill_fetch.core.cache import ArchiveCache
from skill_fetch.core.installer import download_skill
from skill_fetch.errors import SkillFetchError
from skill_fetch.models import InstallResult, Skill

logger = logging.getLogger("skill-fetch.install")


async def install_skill(
    skill: Skill,
    destination: str | Path,
    cache: ArchiveCache,
    generate_config: bool = True,
    client: httpx.AsyncClient | None = None,
) -> InstallResult:
    """Download a skill's files into ``destination``.

    Pipeline: resolve -> download zipball -> extract skill folder -> write agent config.

    Args:
        skill: Skill to materialize (from a search or a URL import)
        destination: Directory that receives the skill's files
        cache: Archive cache used for the repository download
        generate_config: Also generate the agent config from SKILL.md

    Returns:
        InstallResult; on failure ``error_code`` names the failure kind.
    """
    destination = Path(destination).expanduser()
    try:
        done = await download_skill(skill, destination, cache, client=client, generate_config=generate_config)
    except SkillFetchError as e:
        logger.error("Installation failed for '%s': %s", skill.name, e)
        return InstallResult(
            skill_name=skill.name,
            success=False,
            destination=str(destination),
            error_code=e.code,
            errors=[str(e)],
        )
    except OSError as e:
        logger.error("Filesystem error installing '%s': %s", skill.name, e)
        return InstallResult(
            skill_name=skill.name,
            success=False,
            destination=str(destination),
            error_code="filesystem_error",
            errors=[str(e)],
        )

    return InstallResult(
        skill_name=skill.name,
        success=True,
        destination=str(done.destination),
        files_written=len(done.files),
        config_path=str(done.config_path) if done.config_path else None,
    )
