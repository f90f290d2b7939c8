"""Source adapters for skill discovery.

Sources:
1. SkillsMP keyword search   (skillsmp.com /skills/search)
2. SkillsMP semantic search  (skillsmp.com /skills/ai-search)
3. SkillsMP browse popular   (keyword endpoint, q=*, sorted by stars)
4. GitHub directory listing  (one skill per directory of a fixed repo)
5. URL import                (no network; parses a user-typed GitHub URL)

Network failures never escape an adapter: ``search()`` logs them and
returns an empty page so callers can keep going with other sources.
"""

import asyncio
import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from skill_fetch.config import settings
from skill_fetch.core.http import github_headers, marketplace_headers, use_client
from skill_fetch.core.normalizer import (
    normalize_directory_entry,
    normalize_marketplace,
    summarize_readme,
)
from skill_fetch.core.urls import parse_repo_url, skill_from_url
from skill_fetch.errors import SourceUnavailable
from skill_fetch.models import (
    GitHubContentEntry,
    MarketplaceResponse,
    Pagination,
    SearchResult,
    Skill,
    SkillSource,
)

logger = logging.getLogger("skill-fetch.sources")

_contents_adapter = TypeAdapter(list[GitHubContentEntry])


async def _get_json(
    client: httpx.AsyncClient,
    source: str,
    url: str,
    params: dict | None = None,
    headers: dict | None = None,
):
    """GET a JSON document, mapping every failure to SourceUnavailable."""
    try:
        resp = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as e:
        raise SourceUnavailable(source, f"request failed: {e}") from e

    if resp.status_code >= 400:
        raise SourceUnavailable(source, f"HTTP {resp.status_code}")

    try:
        return resp.json()
    except ValueError as e:
        raise SourceUnavailable(source, f"invalid JSON: {e}") from e


class SourceAdapter:
    """Base class: one remote (or local) source of skills."""

    kind: str = ""

    async def search(
        self,
        query: str | None = None,
        page: int = 1,
        limit: int | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> SearchResult:
        """Query the source. Returns an empty page if the source is unavailable."""
        if limit is None:
            limit = settings.default_limit
        if page < 1 or limit < 1:
            raise ValueError(f"page and limit must be positive (page={page}, limit={limit})")

        try:
            async with use_client(client) as http:
                result = await self._fetch(http, query, page, limit)
        except SourceUnavailable as e:
            logger.warning("%s", e)
            return SearchResult.empty(page, limit)

        logger.info(
            "%s: %d skills for %r (page %d)", self.kind, len(result.skills), query, page
        )
        return result

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        query: str | None,
        page: int,
        limit: int,
    ) -> SearchResult:
        raise NotImplementedError


# ─── SkillsMP marketplace ──────────────────────────────────────────────────


class MarketplaceAdapter(SourceAdapter):
    """SkillsMP search endpoint with a fixed sort order and result source tag."""

    def __init__(
        self,
        kind: str,
        endpoint: str,
        sort_by: str,
        source: SkillSource,
        fixed_query: str | None = None,
    ):
        self.kind = kind
        self.endpoint = endpoint
        self.sort_by = sort_by
        self.source = source
        self.fixed_query = fixed_query

    async def _fetch(self, client, query, page, limit) -> SearchResult:
        q = self.fixed_query or (query or "").strip() or "*"
        data = await _get_json(
            client,
            self.kind,
            f"{settings.marketplace_api_url}{self.endpoint}",
            params={"q": q, "page": page, "limit": limit, "sortBy": self.sort_by},
            headers=marketplace_headers(),
        )

        try:
            envelope = MarketplaceResponse.model_validate(data)
        except ValidationError as e:
            raise SourceUnavailable(self.kind, f"unexpected response shape: {e.error_count()} errors") from e

        if not envelope.success:
            err = envelope.error
            reason = f"{err.code}: {err.message}" if err else "success=false"
            raise SourceUnavailable(self.kind, reason)

        raw = envelope.data.skills if envelope.data else []
        skills = [s for s in (normalize_marketplace(r, self.source) for r in raw) if s is not None]

        if envelope.data and envelope.data.pagination:
            total = envelope.data.pagination.total
        else:
            total = (page - 1) * limit + len(skills)

        return SearchResult(skills=skills, pagination=Pagination(page=page, limit=limit, total=total))


# ─── GitHub directory listing ──────────────────────────────────────────────


class GitHubDirectoryAdapter(SourceAdapter):
    """Treat every directory under ``owner/repo/path`` as a skill.

    Not paginated. A query, when given, filters the listing by name and
    description.
    """

    kind = "github-directory"

    def __init__(
        self,
        owner: str | None = None,
        repo: str | None = None,
        path: str | None = None,
        author: str | None = None,
        enrich: bool = True,
    ):
        self.owner = owner or settings.official_owner
        self.repo = repo or settings.official_repo_name
        self.path = (path if path is not None else settings.official_path).strip("/")
        self.author = author or settings.official_author
        self.enrich = enrich

    async def _fetch(self, client, query, page, limit) -> SearchResult:
        data = await _get_json(
            client,
            self.kind,
            settings.contents_url(self.owner, self.repo, self.path),
            headers=github_headers(),
        )

        if not isinstance(data, list):
            raise SourceUnavailable(self.kind, "expected a directory listing")
        try:
            entries = _contents_adapter.validate_python(data)
        except ValidationError as e:
            raise SourceUnavailable(self.kind, f"unexpected listing shape: {e.error_count()} errors") from e

        skills = [
            normalize_directory_entry(entry, self.owner, self.repo, self.author)
            for entry in entries
            if entry.type == "dir"
        ]

        if self.enrich:
            skills = await enrich_descriptions(skills, client)
        if query and query.strip() != "*":
            skills = filter_skills(skills, query)

        total = len(skills)
        return SearchResult(
            skills=skills,
            pagination=Pagination(page=1, limit=max(total, 1), total=total),
        )


async def _readme_summary(client: httpx.AsyncClient, skill: Skill) -> str | None:
    ref = parse_repo_url(skill.repo_url)
    resp = await client.get(
        settings.readme_url(ref.owner, ref.repo, skill.skill_path or ""),
        headers={"User-Agent": settings.user_agent},
    )
    resp.raise_for_status()
    return summarize_readme(resp.text)


async def enrich_descriptions(skills: list[Skill], client: httpx.AsyncClient) -> list[Skill]:
    """Replace default descriptions with each skill's README summary.

    README fetches run in parallel; a failed fetch keeps the default.
    """
    summaries = await asyncio.gather(
        *(_readme_summary(client, s) for s in skills),
        return_exceptions=True,
    )

    enriched: list[Skill] = []
    for skill, summary in zip(skills, summaries):
        if isinstance(summary, BaseException):
            logger.debug("README unavailable for '%s': %s", skill.name, summary)
            enriched.append(skill)
        elif summary:
            enriched.append(skill.model_copy(update={"description": summary}))
        else:
            enriched.append(skill)
    return enriched


# ─── URL import ────────────────────────────────────────────────────────────


class UrlImportAdapter(SourceAdapter):
    """Parse a GitHub URL into a single skill. InvalidRepoUrl reaches the caller."""

    kind = "url-import"

    async def search(self, query=None, page=1, limit=None, client=None) -> SearchResult:
        if not query:
            return SearchResult.empty(1, 1)
        skill = skill_from_url(query)
        return SearchResult(skills=[skill], pagination=Pagination(page=1, limit=1, total=1))


# ─── Registry ──────────────────────────────────────────────────────────────


ADAPTERS: dict[str, SourceAdapter] = {
    "marketplace-keyword": MarketplaceAdapter(
        "marketplace-keyword", "/skills/search", "relevance", "marketplace-keyword"
    ),
    "marketplace-semantic": MarketplaceAdapter(
        "marketplace-semantic", "/skills/ai-search", "stars", "marketplace-semantic"
    ),
    "marketplace-browse": MarketplaceAdapter(
        "marketplace-browse", "/skills/search", "stars", "marketplace-keyword", fixed_query="*"
    ),
    "github-directory": GitHubDirectoryAdapter(),
    "url-import": UrlImportAdapter(),
}


def get_adapter(kind: str) -> SourceAdapter:
    try:
        return ADAPTERS[kind]
    except KeyError:
        raise ValueError(f"Unknown source '{kind}' (expected one of: {', '.join(ADAPTERS)})") from None


async def search(
    kind: str,
    query: str | None = None,
    page: int = 1,
    limit: int | None = None,
    client: httpx.AsyncClient | None = None,
) -> SearchResult:
    """Query a single source by kind."""
    return await get_adapter(kind).search(query, page=page, limit=limit, client=client)


async def search_combined(
    query: str,
    kinds: tuple[str, ...] = ("marketplace-keyword", "marketplace-semantic"),
    page: int = 1,
    limit: int | None = None,
    client: httpx.AsyncClient | None = None,
) -> SearchResult:
    """Query several sources in parallel and de-duplicate by repo and path.

    Results keep adapter order; the first occurrence of a skill wins. Each
    source contributes up to ``limit`` skills to the page. The merged total is
    the largest total any source reported, so ``has_next`` stays true while
    any source has more pages.
    """
    if limit is None:
        limit = settings.default_limit
    pages = await asyncio.gather(
        *(search(kind, query, page=page, limit=limit, client=client) for kind in kinds),
        return_exceptions=True,
    )

    seen: set[tuple[str, str | None]] = set()
    unique: list[Skill] = []
    total = 0
    for kind, result_or_error in zip(kinds, pages):
        if isinstance(result_or_error, BaseException):
            logger.warning("Source %s failed: %s", kind, result_or_error)
            continue
        total = max(total, result_or_error.pagination.total)
        for skill in result_or_error.skills:
            key = (skill.repo_url, skill.skill_path)
            if key not in seen:
                seen.add(key)
                unique.append(skill)

    return SearchResult(skills=unique, pagination=Pagination(page=page, limit=limit, total=total))


def filter_skills(skills: list[Skill], text: str) -> list[Skill]:
    """Case-insensitive substring match on name or description."""
    needle = text.strip().lower()
    if not needle:
        return list(skills)
    return [s for s in skills if needle in s.name.lower() or needle in s.description.lower()]
