"""GitHub URL parsing: locate a skill's repository and subdirectory."""

import re

from skill_fetch.errors import InvalidRepoUrl
from skill_fetch.models import RepoRef, Skill

_HOST = r"^(?:https?://)?(?:www\.)?github\.com/"

# github.com/{owner}/{repo}[.git][/]
_BARE_RE = re.compile(_HOST + r"([^/\s]+)/([^/\s]+?)(?:\.git)?/?$")
# github.com/{owner}/{repo}/tree/{branch}[/{path...}]
_TREE_RE = re.compile(_HOST + r"([^/\s]+)/([^/\s]+?)(?:\.git)?/tree/([^/\s]+)(?:/(.*))?$")


def _clean(url: str) -> str:
    """Drop surrounding whitespace, query string and fragment."""
    url = url.strip()
    for sep in ("#", "?"):
        url = url.split(sep, 1)[0]
    return url


def parse_repo_url(url: str) -> RepoRef:
    """Parse a bare-repo or tree-form GitHub URL.

    Examples:
        "https://github.com/org/repo.git" → RepoRef(owner="org", repo="repo")
        "https://github.com/org/repo/tree/dev/skills/pdf"
            → RepoRef(owner="org", repo="repo", path="skills/pdf", ref="dev")

    Raises:
        InvalidRepoUrl: if neither form matches.
    """
    cleaned = _clean(url)

    bare = _BARE_RE.match(cleaned)
    if bare:
        owner, repo = bare.groups()
        return RepoRef(owner=owner, repo=repo)

    tree = _TREE_RE.match(cleaned)
    if tree:
        owner, repo, ref, path = tree.groups()
        path = (path or "").strip("/") or None
        return RepoRef(owner=owner, repo=repo, path=path, ref=ref)

    raise InvalidRepoUrl(url)


def is_github_url(url: str) -> bool:
    try:
        parse_repo_url(url)
    except InvalidRepoUrl:
        return False
    return True


def skill_name_for(ref: RepoRef) -> str:
    """Final path segment, or the repo name for a repository-root skill."""
    if ref.path:
        return ref.path.rsplit("/", 1)[-1]
    return ref.repo


def skill_from_url(url: str) -> Skill:
    """Build a skill stub from a user-supplied GitHub URL (no network call)."""
    ref = parse_repo_url(url)
    return Skill(
        name=skill_name_for(ref),
        description=f"Custom skill from {ref.owner}/{ref.repo}",
        repo_url=ref.repo_url,
        skill_path=ref.path,
        author=ref.owner,
        source="url-import",
    )
