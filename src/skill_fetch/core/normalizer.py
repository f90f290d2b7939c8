"""Map provider-shaped records onto the canonical Skill model."""

import logging

from skill_fetch.core.urls import parse_repo_url
from skill_fetch.errors import InvalidRepoUrl
from skill_fetch.models import GitHubContentEntry, MarketplaceSkill, Skill, SkillSource

logger = logging.getLogger("skill-fetch.normalizer")

UNKNOWN_AUTHOR = "unknown"


def normalize_marketplace(
    record: MarketplaceSkill,
    source: SkillSource = "marketplace-keyword",
) -> Skill | None:
    """Normalize one SkillsMP record.

    Tree-style URLs (``.../tree/<branch>/<path>``) are split so that
    ``repo_url`` is the bare repository and ``skill_path`` the subdirectory.
    Returns None when the record does not point at a GitHub repository.
    """
    try:
        ref = parse_repo_url(record.github_url)
    except InvalidRepoUrl:
        logger.debug("Dropping marketplace record '%s': no GitHub URL (%r)", record.name, record.github_url)
        return None

    return Skill(
        name=record.name,
        description=record.description or f"Skill from {record.author or 'community'}",
        repo_url=ref.repo_url,
        skill_path=ref.path,
        author=record.author or UNKNOWN_AUTHOR,
        category=record.category,
        stars=record.stars,
        source=source,
    )


def normalize_directory_entry(
    entry: GitHubContentEntry,
    owner: str,
    repo: str,
    author: str | None = None,
) -> Skill:
    """Normalize one directory of a GitHub contents listing into a skill."""
    author = author or UNKNOWN_AUTHOR
    return Skill(
        name=entry.name,
        description=f"Official skill from {author}",
        repo_url=f"https://github.com/{owner}/{repo}",
        skill_path=entry.path.strip("/") or None,
        author=author,
        source="directory-listing",
    )


def summarize_readme(text: str, max_len: int = 150) -> str | None:
    """First line of a README that is neither a heading nor an image."""
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith(("#", "!")):
            return stripped[:max_len]
    return None
