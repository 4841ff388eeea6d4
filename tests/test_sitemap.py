"""Tests for the sitemap integration."""

from datetime import date

from folio.config import SiteConfig
from folio.services.sitemap import (
    SitemapEntry,
    build_index,
    build_urlset,
    parse_sitemap,
    robots_txt,
    write_sitemap,
)

_CONFIG = SiteConfig(site="https://twillecke.github.io/", base="/site/")


class TestBuildUrlset:
    def test_lists_absolute_urls_sorted(self):
        xml = build_urlset(_CONFIG, [SitemapEntry("/blog/"), SitemapEntry("/")])
        assert parse_sitemap(xml) == [
            "https://twillecke.github.io/site/",
            "https://twillecke.github.io/site/blog/",
        ]

    def test_lastmod_when_known(self):
        xml = build_urlset(_CONFIG, [SitemapEntry("/blog/x/", date(2024, 3, 4))])
        assert b"<lastmod>2024-03-04</lastmod>" in xml

    def test_declares_namespace(self):
        xml = build_urlset(_CONFIG, [])
        assert b'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' in xml


class TestBuildIndex:
    def test_references_sitemaps(self):
        xml = build_index(_CONFIG, ["sitemap-0.xml"])
        assert parse_sitemap(xml) == ["https://twillecke.github.io/site/sitemap-0.xml"]


class TestParseSitemap:
    def test_invalid_xml_returns_empty(self):
        assert parse_sitemap("<urlset><url>") == []

    def test_without_namespace(self):
        xml = "<urlset><url><loc> https://a.example/ </loc></url></urlset>"
        assert parse_sitemap(xml) == ["https://a.example/"]


class TestRobotsTxt:
    def test_points_to_index(self):
        assert "Sitemap: https://twillecke.github.io/site/sitemap-index.xml" in robots_txt(_CONFIG)


class TestWriteSitemap:
    def test_writes_files_and_skips_404(self, tmp_path):
        entries = [SitemapEntry("/"), SitemapEntry("/404.html"), SitemapEntry("/work/")]
        written = write_sitemap(_CONFIG, tmp_path, entries)
        assert sorted(p.name for p in written) == ["robots.txt", "sitemap-0.xml", "sitemap-index.xml"]
        urls = parse_sitemap((tmp_path / "sitemap-0.xml").read_bytes())
        assert "https://twillecke.github.io/site/404.html" not in urls
        assert len(urls) == 2

    def test_output_is_stable(self, tmp_path):
        entries = [SitemapEntry("/b/"), SitemapEntry("/a/")]
        write_sitemap(_CONFIG, tmp_path, entries)
        first = (tmp_path / "sitemap-0.xml").read_bytes()
        write_sitemap(_CONFIG, tmp_path, list(reversed(entries)))
        assert (tmp_path / "sitemap-0.xml").read_bytes() == first
