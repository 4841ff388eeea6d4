"""Sitemap integration: ``sitemap-index.xml``, ``sitemap-0.xml`` and ``robots.txt``."""

import logging
from datetime import date
from pathlib import Path
from typing import List, NamedTuple, Optional
from xml.etree import ElementTree

from folio.config import SiteConfig
from folio.services.normalizer import absolute_url

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

INDEX_FILE = "sitemap-index.xml"

# Maximum URLs per urlset file (sitemaps.org protocol limit)
_MAX_URLS_PER_FILE = 45000

# Pages that must never be listed
_EXCLUDED_PATHS = {"/404.html"}


class SitemapEntry(NamedTuple):
    path: str
    lastmod: Optional[date] = None


def _serialize(root: ElementTree.Element) -> bytes:
    ElementTree.indent(root)
    return ElementTree.tostring(root, encoding="utf-8", xml_declaration=True) + b"\n"


def build_urlset(config: SiteConfig, entries: List[SitemapEntry]) -> bytes:
    """Return a ``<urlset>`` document listing *entries* in sorted order."""
    root = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    for entry in sorted(entries, key=lambda e: e.path):
        url = ElementTree.SubElement(root, "url")
        ElementTree.SubElement(url, "loc").text = absolute_url(config, entry.path)
        if entry.lastmod is not None:
            ElementTree.SubElement(url, "lastmod").text = entry.lastmod.isoformat()
    return _serialize(root)


def build_index(config: SiteConfig, filenames: List[str]) -> bytes:
    root = ElementTree.Element("sitemapindex", xmlns=SITEMAP_NS)
    for name in filenames:
        sitemap = ElementTree.SubElement(root, "sitemap")
        ElementTree.SubElement(sitemap, "loc").text = absolute_url(config, f"/{name}")
    return _serialize(root)


def parse_sitemap(xml_text: str | bytes) -> List[str]:
    """Extract all ``<loc>`` values from a sitemap or sitemap-index XML."""
    urls: List[str] = []
    try:
        root = ElementTree.fromstring(xml_text)
        ns = root.tag.split("}")[0] + "}" if root.tag.startswith("{") else ""
        for elem in root.iter(f"{ns}loc"):
            if elem.text:
                urls.append(elem.text.strip())
    except ElementTree.ParseError as exc:
        logger.warning("Failed to parse sitemap XML: %s", exc)
    return urls


def robots_txt(config: SiteConfig) -> str:
    return "\n".join(
        [
            "User-agent: *",
            "Allow: /",
            "",
            f"Sitemap: {absolute_url(config, '/' + INDEX_FILE)}",
            "",
        ]
    )


def write_sitemap(config: SiteConfig, out_dir: Path, entries: List[SitemapEntry]) -> List[Path]:
    """Write the sitemap files and ``robots.txt`` under *out_dir*.

    Returns the written paths.
    """
    listed = [e for e in entries if e.path not in _EXCLUDED_PATHS]
    listed.sort(key=lambda e: e.path)

    chunks = [
        listed[i:i + _MAX_URLS_PER_FILE] for i in range(0, len(listed), _MAX_URLS_PER_FILE)
    ] or [[]]

    written: List[Path] = []
    names: List[str] = []
    for i, chunk in enumerate(chunks):
        name = f"sitemap-{i}.xml"
        path = out_dir / name
        path.write_bytes(build_urlset(config, chunk))
        names.append(name)
        written.append(path)

    index_path = out_dir / INDEX_FILE
    index_path.write_bytes(build_index(config, names))
    written.append(index_path)

    robots_path = out_dir / "robots.txt"
    robots_path.write_text(robots_txt(config), encoding="utf-8")
    written.append(robots_path)

    logger.info("Sitemap written", extra={"urls": len(listed), "files": len(names)})
    return written
