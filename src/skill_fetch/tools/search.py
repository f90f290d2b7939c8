"""Search tools: find skills in the marketplace, the official repo, or by URL."""

from skill_fetch.core.sources import search, search_combined
from skill_fetch.core.urls import skill_from_url
from skill_fetch.models import SearchResult, Skill

MODES = {
    "keyword": "marketplace-keyword",
    "semantic": "marketplace-semantic",
    "browse": "marketplace-browse",
    "official": "github-directory",
}


async def search_skills(
    query: str = "",
    mode: str = "keyword",
    page: int = 1,
    limit: int = 20,
) -> SearchResult:
    """Search for skills.

    Args:
        query: What you want to do (e.g. "pdf", "react testing")
        mode: "keyword", "semantic", "all" (both, de-duplicated), "browse" (popular,
            query ignored) or "official"
        page: 1-based page number
        limit: Results per page

    Returns:
        One page of normalized skills. Empty if the source is unavailable.
    """
    if mode == "all":
        return await search_combined(query, page=page, limit=limit)

    if mode not in MODES:
        raise ValueError(f"Unknown mode '{mode}' (expected one of: all, {', '.join(MODES)})")
    return await search(MODES[mode], query or None, page=page, limit=limit)


def import_skill_url(url: str) -> Skill:
    """Create a skill from a GitHub repo or tree URL. Raises InvalidRepoUrl."""
    return skill_from_url(url)
