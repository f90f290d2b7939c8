"""Streaming download of repository archives."""

import asyncio
import logging
from pathlib import Path

import httpx

from skill_fetch.config import settings
from skill_fetch.core.http import use_client
from skill_fetch.errors import DownloadFailed, TransportError

logger = logging.getLogger("skill-fetch.fetcher")


async def download_archive(
    url: str,
    destination: Path,
    client: httpx.AsyncClient | None = None,
) -> Path:
    """Stream ``url`` to ``destination``, overwriting any existing file.

    The output file is only opened once the response status is known to be
    good, so an HTTP error never leaves a file behind. A connection failure
    mid-body removes the partial file. Disk writes run in a worker thread so
    each chunk yields to the event loop.

    Raises:
        DownloadFailed: the server answered with status >= 400.
        TransportError: connection-level failure.
    """
    destination = Path(destination)
    written = 0
    opened = False

    try:
        async with use_client(client, timeout=settings.download_timeout) as http:
            async with http.stream("GET", url, headers={"User-Agent": settings.user_agent}) as response:
                if response.status_code >= 400:
                    raise DownloadFailed(response.status_code, url)

                destination.parent.mkdir(parents=True, exist_ok=True)
                opened = True
                with destination.open("wb") as fh:
                    async for chunk in response.aiter_bytes():
                        await asyncio.to_thread(fh.write, chunk)
                        written += len(chunk)
    except httpx.HTTPError as e:
        if opened:
            destination.unlink(missing_ok=True)
        raise TransportError(url, str(e) or type(e).__name__) from e

    logger.info("Downloaded: %s → %s (%d bytes)", url, destination, written)
    return destination
