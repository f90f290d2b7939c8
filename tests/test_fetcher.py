"""Archive fetcher and cache tests."""

import asyncio
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from skill_fetch.core.cache import ArchiveCache
from skill_fetch.core.fetcher import download_archive
from skill_fetch.errors import DownloadFailed, TransportError

URL = "https://api.github.com/repos/org/repo/zipball/main"


def _download(handler, dest: Path) -> Path:
    async def _go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await download_archive(URL, dest, client)

    return asyncio.run(_go())


def test_download_writes_body_and_overwrites(tmp_path):
    dest = tmp_path / "nested" / "org-repo.zip"
    dest.parent.mkdir()
    dest.write_bytes(b"stale content that is longer than the new body")

    body = bytes(range(256)) * 1000
    result = _download(lambda r: httpx.Response(200, content=body), dest)

    assert result == dest
    assert dest.read_bytes() == body


def test_http_error_creates_no_file(tmp_path):
    dest = tmp_path / "org-repo.zip"
    with pytest.raises(DownloadFailed) as exc:
        _download(lambda r: httpx.Response(404, text="Not Found"), dest)

    assert exc.value.status == 404
    assert exc.value.url == URL
    assert not dest.exists()


def test_connection_error_is_transport_error(tmp_path):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    dest = tmp_path / "org-repo.zip"
    with pytest.raises(TransportError):
        _download(handler, dest)
    assert not dest.exists()


class _DroppedStream(httpx.AsyncByteStream):
    async def __aiter__(self):
        yield b"partial"
        raise httpx.ReadError("connection reset")


def test_dropped_connection_removes_partial_file(tmp_path):
    """A read error after the first chunk leaves no archive behind."""
    dest = tmp_path / "org-repo.zip"
    with pytest.raises(TransportError):
        _download(lambda r: httpx.Response(200, stream=_DroppedStream()), dest)
    assert not dest.exists()


def test_cache_is_lazy_and_keyed_by_repo(tmp_path):
    cache = ArchiveCache(tmp_path / "cache")
    assert not cache.root.exists()
    assert cache.stats()["entries"] == 0

    path = cache.archive_path("org", "repo")
    assert path == tmp_path / "cache" / "org-repo.zip"
    assert cache.root.is_dir()

    path.write_bytes(b"zip")
    assert cache.stats() == {"entries": 1, "size_bytes": 3, "path": str(cache.root)}
    assert cache.purge() == 1
    assert cache.stats()["entries"] == 0
