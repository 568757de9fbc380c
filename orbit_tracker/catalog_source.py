"""
Catalog Source

Fetches catalog text over HTTP without blocking the event loop. The fetch is
an ordinary awaitable returning a FetchResult; it never touches engine state.
The caller applies the text in one synchronous step once the await completes.
"""

import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from orbit_tracker.config import CELESTRAK_BASE, FETCH_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

CATALOG_GROUPS = (
    "active",
    "stations",
    "science",
    "weather",
    "gps-ops",
    "cosmos-2251-debris",
    "starlink",
)


def celestrak_url(group: str, base: str = CELESTRAK_BASE) -> str:
    """CelesTrak GP query URL for a catalog group, in TLE format."""
    if group not in CATALOG_GROUPS:
        raise ValueError(f"Unknown catalog group: {group}")
    return f"{base}/NORAD/elements/gp.php?GROUP={group}&FORMAT=tle"


@dataclass(frozen=True)
class FetchResult:
    url: str
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


def _download(url: str, timeout: float) -> str:
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.text


async def fetch_catalog(url: str, timeout: float = FETCH_TIMEOUT_SECONDS) -> FetchResult:
    """
    Download catalog text.

    Args:
        url: Catalog URL
        timeout: Request timeout in seconds

    Returns:
        FetchResult with either text or an error message
    """
    loop = asyncio.get_running_loop()
    try:
        text = await loop.run_in_executor(None, functools.partial(_download, url, timeout))
    except requests.RequestException as e:
        logger.error(f"Catalog fetch failed for {url}: {e}")
        return FetchResult(url, error=str(e))

    logger.info(f"Fetched {len(text)} bytes from {url}")
    return FetchResult(url, text=text)
