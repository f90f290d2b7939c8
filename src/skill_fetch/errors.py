"""Typed failures raised by the retrieval pipeline.

Every error carries a stable ``code`` so callers can render a specific
message instead of a generic failure.
"""


class SkillFetchError(Exception):
    """Base class for all skill-fetch errors."""

    code = "error"


class SourceUnavailable(SkillFetchError):
    """A remote source could not be queried or returned an unusable body."""

    code = "source_unavailable"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source} unavailable: {reason}")


class InvalidRepoUrl(SkillFetchError):
    code = "invalid_repo_url"

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid GitHub URL: {url}")


class DownloadFailed(SkillFetchError):
    """The archive server answered with an HTTP error status."""

    code = "download_failed"

    def __init__(self, status: int, url: str = ""):
        self.status = status
        self.url = url
        super().__init__(f"Failed to download {url}: HTTP {status}")


class TransportError(SkillFetchError):
    """Connection-level failure while talking to a remote host."""

    code = "transport_error"

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Transport error for {url}: {reason}")


class SkillNotFound(SkillFetchError):
    """Extraction matched zero files."""

    code = "skill_not_found"

    def __init__(self, skill_path: str | None):
        self.skill_path = skill_path
        if skill_path:
            msg = f"No files found under '{skill_path}' in repository archive"
        else:
            msg = "No files found in repository archive"
        super().__init__(msg)


class ArchiveCorrupt(SkillFetchError):
    code = "archive_corrupt"

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt archive {path}: {reason}" if reason else f"Corrupt archive {path}")
