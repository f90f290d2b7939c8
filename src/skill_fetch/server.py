"""skill-fetch MCP server.

Provides tools for finding and materializing agent skills:
- search_skills: Keyword / semantic search of the SkillsMP marketplace
- browse_skills: Popular marketplace skills, by stars
- list_official_skills: Skills in the official skills repository
- import_skill_url: Turn a GitHub repo or tree URL into a skill record
- install_skill: Download a skill's folder into a directory and write its agent config
- cache_info: Archive cache stats (or purge)
"""

import json
import logging

from mcp.server.fastmcp import FastMCP

from skill_fetch.config import settings
from skill_fetch.core.cache import ArchiveCache

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

mcp = FastMCP(
    "skill-fetch",
    instructions=(
        "Skill Fetch finds agent skills and downloads them into a directory. "
        "Use search_skills (mode='keyword' or 'semantic') or list_official_skills to find one, "
        "or import_skill_url for a GitHub link. Then call install_skill with the chosen "
        "skill's repo_url and skill_path to write its files and an agent config."
    ),
)

archive_cache = ArchiveCache(settings.cache_dir)


@mcp.tool()
async def search_skills(query: str, mode: str = "keyword", page: int = 1, limit: int = 20) -> str:
    """Search the SkillsMP marketplace.

    Args:
        query: What you want to do (e.g. "pdf", "react testing")
        mode: "keyword", "semantic", or "all" (both, de-duplicated)
        page: 1-based page number
        limit: Results per page
    """
    from skill_fetch.tools.search import search_skills as _search

    result = await _search(query=query, mode=mode, page=page, limit=limit)
    return result.model_dump_json(indent=2)


@mcp.tool()
async def browse_skills(page: int = 1, limit: int = 20) -> str:
    """Browse the most popular marketplace skills.

    Args:
        page: 1-based page number
        limit: Results per page
    """
    from skill_fetch.tools.search import search_skills as _search

    result = await _search(mode="browse", page=page, limit=limit)
    return result.model_dump_json(indent=2)


@mcp.tool()
async def list_official_skills(text: str = "") -> str:
    """List skills from the official skills repository (one per directory).

    Args:
        text: Optional case-insensitive text matched against name and description
    """
    from skill_fetch.tools.search import search_skills as _search

    result = await _search(query=text, mode="official")
    return result.model_dump_json(indent=2)


@mcp.tool()
async def import_skill_url(url: str) -> str:
    """Parse a GitHub URL (repo or tree/<branch>/<path>) into a skill record.

    Args:
        url: e.g. https://github.com/owner/repo/tree/main/skills/pdf
    """
    from skill_fetch.errors import InvalidRepoUrl
    from skill_fetch.tools.search import import_skill_url as _import

    try:
        skill = _import(url)
    except InvalidRepoUrl as e:
        return json.dumps({"error": e.code, "message": str(e)}, indent=2)
    return skill.model_dump_json(indent=2)


@mcp.tool()
async def install_skill(
    repo_url: str,
    destination: str,
    skill_path: str = "",
    name: str = "",
    description: str = "",
    generate_config: bool = True,
) -> str:
    """Download a skill's files into a directory.

    Pipeline: download zipball -> extract skill folder -> write agent config from SKILL.md.

    Args:
        repo_url: GitHub repository URL (a tree URL also works; its path becomes skill_path)
        destination: Directory that receives the skill's files
        skill_path: Folder inside the repository (empty = whole repository)
        name: Skill name (defaults to the last path segment or repo name)
        description: Skill description written into the agent config
        generate_config: Also write the agent config file
    """
    from skill_fetch.errors import InvalidRepoUrl
    from skill_fetch.tools.install import install_skill as _install
    from skill_fetch.tools.search import import_skill_url as _import

    try:
        skill = _import(repo_url)
    except InvalidRepoUrl as e:
        return json.dumps({"skill_name": name, "success": False, "error_code": e.code, "errors": [str(e)]}, indent=2)

    update: dict = {}
    if skill_path.strip("/"):
        update["skill_path"] = skill_path.strip("/")
        update["name"] = skill_path.strip("/").rsplit("/", 1)[-1]
    if name:
        update["name"] = name
    if description:
        update["description"] = description
    if update:
        skill = skill.model_copy(update=update)

    result = await _install(skill, destination, archive_cache, generate_config=generate_config)
    return result.model_dump_json(indent=2)


@mcp.tool()
async def cache_info(purge: bool = False) -> str:
    """Archive cache stats.

    Args:
        purge: Delete all cached archives first
    """
    removed = archive_cache.purge() if purge else 0
    stats = archive_cache.stats()
    stats["removed"] = removed
    return json.dumps(stats, indent=2)


def main():
    """Entry point for the MCP server."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
