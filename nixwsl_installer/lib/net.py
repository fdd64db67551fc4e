from __future__ import annotations

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


def is_reachable(url: str, *, session: Optional[Any] = None, timeout: float = 10.0) -> bool:
    """Best-effort reachability check: any HTTP response counts as reachable."""

    if session is None:
        with requests.Session() as s:
            return _head(url, s, timeout)
    return _head(url, session, timeout)


def _head(url: str, session: Any, timeout: float) -> bool:
    try:
        r = session.head(url, timeout=timeout, allow_redirects=True)
        logger.debug("HEAD %s -> %s", url, getattr(r, "status_code", "?"))
        return True
    except requests.RequestException as e:
        logger.warning("Unable to reach %s: %s", url, e)
        return False
