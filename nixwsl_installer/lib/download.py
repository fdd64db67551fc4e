from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Optional

import requests

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class DownloadError(RuntimeError):
    pass


def _part_path(dest: Path) -> Path:
    return dest.with_name(dest.name + ".part")


def download_once(url: str, dest: Path, *, session: Any, timeout: float = 60.0) -> int:
    """Stream url into dest via a .part file. Returns the number of bytes written."""

    tmp = _part_path(dest)
    tmp.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    try:
        with session.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(tmp, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if not chunk:
                        continue
                    f.write(chunk)
                    written += len(chunk)
        os.replace(tmp, dest)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return written


def download_with_retry(
    url: str,
    dest: Path,
    *,
    attempts: int = 3,
    backoff: float = 5.0,
    session: Optional[Any] = None,
    sleep: Callable[[float], None] = time.sleep,
    timeout: float = 60.0,
) -> int:
    """Download with bounded retry; delay before retry n+1 is backoff * n.

    Returns the attempt number that succeeded. Raises DownloadError once all
    attempts have failed.
    """

    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    if session is None:
        with requests.Session() as s:
            return _retry(url, dest, attempts=attempts, backoff=backoff, session=s, sleep=sleep, timeout=timeout)
    return _retry(url, dest, attempts=attempts, backoff=backoff, session=session, sleep=sleep, timeout=timeout)


def _retry(url: str, dest: Path, *, attempts: int, backoff: float, session: Any, sleep: Callable[[float], None], timeout: float) -> int:
    last: Optional[Exception] = None

    for attempt in range(1, attempts + 1):
        try:
            logger.info("Downloading %s (attempt %d/%d)", url, attempt, attempts)
            size = download_once(url, dest, session=session, timeout=timeout)
            logger.info("Downloaded %s (%d bytes)", dest, size)
            return attempt
        except (requests.RequestException, OSError) as e:
            last = e
            if attempt < attempts:
                delay = backoff * attempt
                logger.warning(
                    "Download failed (attempt %d/%d): %s. Retrying in %.0fs",
                    attempt,
                    attempts,
                    e,
                    delay,
                )
                sleep(delay)

    raise DownloadError(f"Download failed after {attempts} attempts: {last}") from last
