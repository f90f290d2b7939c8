"""Data models for skill-fetch."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

SkillSource = Literal[
    "marketplace-keyword",
    "marketplace-semantic",
    "directory-listing",
    "url-import",
]


class Skill(BaseModel):
    """A skill located in a GitHub repository, optionally under a subdirectory."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    repo_url: str  # https://github.com/{owner}/{repo}
    skill_path: str | None = None  # relative, no leading/trailing slash
    author: str = "unknown"
    category: str | None = None
    stars: int | None = None
    source: SkillSource

    @field_validator("skill_path")
    @classmethod
    def _strip_slashes(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip("/") or None


class RepoRef(BaseModel):
    """Owner/repo (and optional subdirectory) parsed from a GitHub URL."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    path: str | None = None
    ref: str | None = None  # branch named in a tree URL; informational only

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


class Pagination(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)
    total: int = Field(default=0, ge=0)

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total


class SearchResult(BaseModel):
    """One page of skills returned by a source adapter."""

    skills: list[Skill] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @classmethod
    def empty(cls, page: int = 1, limit: int = 20) -> "SearchResult":
        return cls(pagination=Pagination(page=page, limit=limit, total=0))


class InstallResult(BaseModel):
    """Result of materializing a skill into a destination directory."""

    skill_name: str
    success: bool
    destination: str = ""
    files_written: int = 0
    config_path: str | None = None
    error_code: str | None = None
    errors: list[str] = Field(default_factory=list)


# ─── SkillsMP wire format ──────────────────────────────────────────────────


class MarketplaceSkill(BaseModel):
    """A skill record as returned by the SkillsMP API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | int | None = None
    name: str
    description: str | None = None
    github_url: str = Field(default="", alias="githubUrl")
    skill_url: str | None = Field(default=None, alias="skillUrl")
    category: str | None = None
    stars: int | None = None
    author: str | None = None
    updated_at: int | None = Field(default=None, alias="updatedAt")


class MarketplacePagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: int = Field(default=0, alias="totalPages")
    has_next: bool = Field(default=False, alias="hasNext")
    has_prev: bool = Field(default=False, alias="hasPrev")


class MarketplaceData(BaseModel):
    skills: list[MarketplaceSkill] = Field(default_factory=list)
    pagination: MarketplacePagination | None = None


class MarketplaceError(BaseModel):
    code: str = ""
    message: str = ""


class MarketplaceResponse(BaseModel):
    """Envelope wrapping every SkillsMP response."""

    success: bool
    data: MarketplaceData | None = None
    error: MarketplaceError | None = None


class GitHubContentEntry(BaseModel):
    """One item of a GitHub contents API directory listing."""

    model_config = ConfigDict(extra="ignore")

    name: str
    path: str
    type: str
