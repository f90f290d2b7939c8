"""Configuration for skill-fetch."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Skill-fetch configuration loaded from environment and .env file."""

    # SkillsMP marketplace; the read-only search key comes from the environment,
    # without it no Authorization header is sent
    marketplace_api_url: str = "https://skillsmp.com/api/v1"
    marketplace_api_key: str = ""

    # GitHub endpoints
    github_api_url: str = "https://api.github.com"
    github_raw_url: str = "https://raw.githubusercontent.com"
    default_branch: str = "main"

    # Repository listed by the "official skills" directory adapter
    official_repo: str = "anthropics/claude-code-skills"
    official_path: str = "skills"
    official_author: str = "Anthropic"

    # Sent on every outbound request
    user_agent: str = "skill-fetch"

    # Network settings
    search_timeout: float = 15.0
    download_timeout: float = 120.0
    default_limit: int = 20

    # Archive cache (process-local scratch area)
    cache_dir: Path = Path.home() / ".cache" / "skill-fetch"

    # Materialized skill layout
    instruction_file: str = "SKILL.md"
    config_file: str = "hector.yaml"
    config_version: str = "0.0.1"
    agent_model: str = "claude-3-5-sonnet-latest"

    model_config = {"env_prefix": "SKILL_FETCH_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def official_owner(self) -> str:
        return self.official_repo.split("/", 1)[0]

    @property
    def official_repo_name(self) -> str:
        return self.official_repo.split("/", 1)[-1]

    def archive_url(self, owner: str, repo: str) -> str:
        """Return the zipball URL for a repository's default branch."""
        return f"{self.github_api_url}/repos/{owner}/{repo}/zipball/{self.default_branch}"

    def contents_url(self, owner: str, repo: str, path: str = "") -> str:
        return f"{self.github_api_url}/repos/{owner}/{repo}/contents/{path}"

    def readme_url(self, owner: str, repo: str, path: str) -> str:
        return f"{self.github_raw_url}/{owner}/{repo}/{self.default_branch}/{path}/README.md"


settings = Settings()
