"""RSS integration: an RSS 2.0 feed of published blog posts."""

from datetime import datetime, time, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import List
from xml.etree import ElementTree

from folio.config import SiteConfig
from folio.consts import BLOG, SITE
from folio.models.entry import Entry
from folio.services.content import published, sort_by_date
from folio.services.normalizer import absolute_url, page_path

FEED_FILE = "rss.xml"

# Items beyond this are dropped from the feed (not from the site)
FEED_LIMIT = 20


def _rfc822(value) -> str:
    return format_datetime(datetime.combine(value, time.min, tzinfo=timezone.utc))


def build_feed(config: SiteConfig, posts: List[Entry]) -> bytes:
    """Return the feed document; output depends only on *config* and *posts*."""
    rss = ElementTree.Element("rss", version="2.0")
    channel = ElementTree.SubElement(rss, "channel")
    ElementTree.SubElement(channel, "title").text = SITE.NAME
    ElementTree.SubElement(channel, "link").text = absolute_url(config, "/")
    ElementTree.SubElement(channel, "description").text = BLOG.DESCRIPTION

    items = sort_by_date(published(posts))[:FEED_LIMIT]
    for post in items:
        link = absolute_url(config, page_path("blog", post.slug, trailing_slash=config.trailing_slash))
        item = ElementTree.SubElement(channel, "item")
        ElementTree.SubElement(item, "title").text = post.data.title
        ElementTree.SubElement(item, "link").text = link
        ElementTree.SubElement(item, "guid", isPermaLink="true").text = link
        ElementTree.SubElement(item, "description").text = post.data.description
        ElementTree.SubElement(item, "pubDate").text = _rfc822(post.data.date)

    ElementTree.indent(rss)
    return ElementTree.tostring(rss, encoding="utf-8", xml_declaration=True) + b"\n"


def write_feed(config: SiteConfig, out_dir: Path, posts: List[Entry]) -> Path:
    path = out_dir / FEED_FILE
    path.write_bytes(build_feed(config, posts))
    return path
