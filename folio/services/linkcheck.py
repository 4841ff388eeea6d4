"""Online check of the external links a site points to (socials, project URLs)."""

import asyncio
import logging
from typing import Iterable, List, Optional
from urllib.parse import urlparse

import httpx

from folio.models.entry import Entry
from folio.models.report import LinkResult

logger = logging.getLogger(__name__)

TIMEOUT = 10  # seconds
MAX_REDIRECTS = 10
MAX_CONCURRENCY = 8
ALLOWED_SCHEMES = {"http", "https"}

# Servers that refuse HEAD answer with one of these; retry with GET
_HEAD_UNSUPPORTED = {405, 501}

_USER_AGENT = "folio-linkcheck/1.0"


def _validate_url(url: str) -> None:
    """Raise ValueError if *url* is not an absolute http(s) URL."""
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")
    if not parsed.hostname:
        raise ValueError("URL must have a valid hostname.")


def external_links(socials, projects: Iterable[Entry]) -> List[str]:
    """Return the deduplicated, sorted external URLs referenced by the site."""
    urls = {str(s.HREF) for s in socials}
    for project in projects:
        for attr in ("demoURL", "repoURL"):
            value = getattr(project.data, attr, None)
            if value:
                urls.add(str(value))
    return sorted(urls)


async def check_url(client: httpx.AsyncClient, url: str) -> LinkResult:
    """Probe *url*; a final status below 400 counts as reachable."""
    try:
        _validate_url(url)
    except ValueError as exc:
        return LinkResult(url=url, ok=False, error=str(exc))

    try:
        response = await client.head(url)
        if response.status_code in _HEAD_UNSUPPORTED:
            response = await client.get(url)
    except httpx.TimeoutException:
        logger.warning("Timeout checking %s", url)
        return LinkResult(url=url, ok=False, error="timeout")
    except httpx.HTTPError as exc:
        logger.warning("Error checking %s: %s", url, exc)
        return LinkResult(url=url, ok=False, error=str(exc) or exc.__class__.__name__)

    ok = response.status_code < 400
    if not ok:
        logger.warning("Broken link %s (HTTP %d)", url, response.status_code)
    return LinkResult(url=url, ok=ok, status=response.status_code)


async def check_links(
    urls: Iterable[str],
    client: Optional[httpx.AsyncClient] = None,
) -> List[LinkResult]:
    """Check every URL with bounded concurrency; results keep the input order."""
    urls = list(urls)
    semaphore = asyncio.Semaphore(MAX_CONCURRENCY)

    async def _bounded(c: httpx.AsyncClient, url: str) -> LinkResult:
        async with semaphore:
            return await check_url(c, url)

    if client is not None:
        return list(await asyncio.gather(*(_bounded(client, u) for u in urls)))

    async with httpx.AsyncClient(
        follow_redirects=True,
        max_redirects=MAX_REDIRECTS,
        timeout=TIMEOUT,
        headers={"User-Agent": _USER_AGENT},
    ) as owned:
        return list(await asyncio.gather(*(_bounded(owned, u) for u in urls)))
