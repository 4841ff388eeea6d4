"""URL normalisation utilities: slug generation, site-relative and absolute URLs."""

import re
import unicodedata
from urllib.parse import urljoin, urlparse

from folio.config import SiteConfig


def generate_slug(text: str, fallback: str = "page") -> str:
    """Generate a clean URL slug from *text* (a file stem or heading).

    The slug is lowercased, ASCII-only, and uses hyphens as separators.
    """
    # Normalise unicode, keep only ASCII
    slug = unicodedata.normalize("NFKD", text)
    slug = slug.encode("ascii", "ignore").decode("ascii")

    # Lowercase and replace runs of non-alphanumeric chars with a single hyphen
    slug = re.sub(r"[^a-z0-9]+", "-", slug.lower())
    slug = slug.strip("-")

    return slug or fallback


def page_path(*segments: str, trailing_slash: bool = True) -> str:
    """Join *segments* into a root-relative page path such as ``/blog/my-post/``.

    With no segments the site root ``/`` is returned.
    """
    parts = [s.strip("/") for s in segments if s and s.strip("/")]
    if not parts:
        return "/"
    path = "/" + "/".join(parts)
    if trailing_slash and not _has_extension(parts[-1]):
        path += "/"
    return path


def site_url(config: SiteConfig, path: str = "/") -> str:
    """Return *path* prefixed with the configured base path."""
    if _is_external(path):
        return path
    base = config.base.rstrip("/")
    if path.startswith(config.base) or (base and path == base):
        return path
    return base + "/" + path.lstrip("/")


def absolute_url(config: SiteConfig, path: str = "/") -> str:
    """Return the public, absolute URL of *path* (origin + base + path)."""
    if _is_external(path):
        return path
    return urljoin(str(config.site), site_url(config, path))


def output_file(path: str) -> str:
    """Map a root-relative page path to the file it is written to.

    ``/blog/x/`` -> ``blog/x/index.html``; ``/404.html`` -> ``404.html``.
    """
    rel = path.strip("/")
    if not rel:
        return "index.html"
    if _has_extension(rel.split("/")[-1]):
        return rel
    return f"{rel}/index.html"


def _has_extension(segment: str) -> bool:
    return bool(re.search(r"\.[a-z0-9]+$", segment, re.IGNORECASE))


def _is_external(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme) or url.startswith("//")
