"""Post-processing of rendered Markdown bodies.

Article bodies are documentation: snippets about rate limiters or shaders are
shown, never run.  This pass removes live elements, anchors headings for the
table of contents and rewrites links so the site works under its base path.
"""

import re
from typing import List, Tuple
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment, Tag

from folio.models.entry import Heading
from folio.services.normalizer import generate_slug

# Tags whose entire subtree is dropped from article bodies
_REMOVE_TAGS = {"script", "iframe", "object", "embed", "applet"}

_ANCHORED_HEADINGS = ("h2", "h3", "h4")

_URL_ATTRS = ("href", "src")

_EXTERNAL_REL = "noopener noreferrer"

# Event-handler attributes (onclick, onload, ...)
_EVENT_ATTR = re.compile(r"^on\w+$", re.IGNORECASE)


def prefix_base(url: str, base: str) -> str:
    """Prefix a root-relative *url* with *base*; leave everything else untouched."""
    if base == "/" or not url.startswith("/") or url.startswith("//"):
        return url
    if url.startswith(base) or url == base.rstrip("/"):
        return url
    return base.rstrip("/") + url


def _is_external(url: str) -> bool:
    return urlparse(url).scheme in ("http", "https")


def _strip_live_elements(soup: BeautifulSoup) -> None:
    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    for tag in soup.find_all(True):
        junk = [attr for attr in tag.attrs if _EVENT_ATTR.match(attr)]
        for attr in junk:
            del tag[attr]


def _rewrite_links(soup: BeautifulSoup, base: str) -> None:
    for tag in soup.find_all(True):
        for attr in _URL_ATTRS:
            value = tag.get(attr)
            if not value:
                continue
            value = str(value).strip()
            tag[attr] = prefix_base(value, base)
            if tag.name == "a" and attr == "href" and _is_external(value):
                tag["target"] = "_blank"
                tag["rel"] = _EXTERNAL_REL


def _anchor_headings(soup: BeautifulSoup) -> List[Heading]:
    headings: List[Heading] = []
    used: set = {str(t["id"]) for t in soup.find_all(id=True)}
    for tag in soup.find_all(_ANCHORED_HEADINGS):
        if not isinstance(tag, Tag):
            continue
        text = tag.get_text(" ", strip=True)
        anchor = tag.get("id")
        if not anchor:
            candidate = generate_slug(text, fallback="section")
            anchor = candidate
            n = 1
            while anchor in used:
                anchor = f"{candidate}-{n}"
                n += 1
            tag["id"] = anchor
            used.add(anchor)
        headings.append(Heading(level=int(tag.name[1]), text=text, anchor=str(anchor)))
    return headings


def process_html(html: str, base: str = "/") -> Tuple[str, List[Heading]]:
    """Clean a rendered body fragment and return ``(html, headings)``."""
    soup = BeautifulSoup(html, "lxml")
    _strip_live_elements(soup)
    _rewrite_links(soup, base)
    headings = _anchor_headings(soup)
    root = soup.body if soup.body is not None else soup
    return root.decode_contents().strip(), headings
