from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import unquote, urlsplit

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0
CHUNK_SIZE = 64 * 1024

SUPPORTED_SCHEMES = {"http", "https", "file"}


class DownloadError(OSError):
    """A single URL could not be fetched to local storage."""


def local_filename(url: str) -> str:
    """Last segment of the URL path: .../pkgs/sample.eloinst -> sample.eloinst."""

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise DownloadError(f"Malformed or unsupported URL: {url!r}") from e
    if parts.scheme.lower() not in SUPPORTED_SCHEMES:
        raise DownloadError(f"Malformed or unsupported URL: {url!r}")
    name = PurePosixPath(parts.path).name
    if not name:
        raise DownloadError(f"URL has no file name in its path: {url!r}")
    return name


def build_client(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.Client:
    return httpx.Client(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={"User-Agent": "elo-bs-manager"},
    )


def _fetch_http(client: httpx.Client, url: str, destination: Path) -> int:
    written = 0
    with client.stream("GET", url) as r:
        r.raise_for_status()
        with destination.open("wb") as fh:
            for chunk in r.iter_bytes(CHUNK_SIZE):
                fh.write(chunk)
                written += len(chunk)
    return written


def _fetch_file(url: str, destination: Path) -> int:
    source = Path(unquote(urlsplit(url).path))
    shutil.copyfile(source, destination)
    return destination.stat().st_size


def download_to_file(
    url: str,
    destination: Path | str,
    *,
    client: Optional[httpx.Client] = None,
) -> Path:
    """Blocking copy of ``url`` to ``destination``.

    Parent directories are created and an existing file is overwritten.
    Every failure (bad URL, transport, HTTP status, local write) surfaces
    as ``DownloadError``.
    """

    dest = Path(destination)
    local_filename(url)
    scheme = urlsplit(url).scheme.lower()

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        if scheme == "file":
            size = _fetch_file(url, dest)
        elif client is not None:
            size = _fetch_http(client, url, dest)
        else:
            with build_client() as own:
                size = _fetch_http(own, url, dest)
    except httpx.HTTPStatusError as e:
        raise DownloadError(f"HTTP {e.response.status_code} for {url}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise DownloadError(f"{type(e).__name__}: {e}") from e
    except OSError as e:
        raise DownloadError(str(e)) from e

    logger.debug("Fetched %d bytes from %s to %s", size, url, dest)
    return dest
