"""Tests for folio.services.normalizer."""

from folio.config import SiteConfig
from folio.services.normalizer import absolute_url, generate_slug, output_file, page_path, site_url

_CONFIG = SiteConfig(site="https://twillecke.github.io/", base="/site/")


class TestGenerateSlug:
    def test_lowercases_and_hyphenates(self):
        assert generate_slug("Polling vs Event Listeners") == "polling-vs-event-listeners"

    def test_strips_accents(self):
        assert generate_slug("Café Résumé") == "cafe-resume"

    def test_collapses_punctuation(self):
        assert generate_slug("  A -- first!! shader ") == "a-first-shader"

    def test_empty_falls_back(self):
        assert generate_slug("!!!") == "page"
        assert generate_slug("", fallback="section") == "section"


class TestPagePath:
    def test_root(self):
        assert page_path() == "/"

    def test_nested_with_trailing_slash(self):
        assert page_path("blog", "my-post") == "/blog/my-post/"

    def test_without_trailing_slash(self):
        assert page_path("blog", trailing_slash=False) == "/blog"

    def test_file_keeps_extension(self):
        assert page_path("rss.xml") == "/rss.xml"


class TestSiteUrl:
    def test_prefixes_base(self):
        assert site_url(_CONFIG, "/blog/") == "/site/blog/"

    def test_root_maps_to_base(self):
        assert site_url(_CONFIG, "/") == "/site/"

    def test_already_prefixed_unchanged(self):
        assert site_url(_CONFIG, "/site/blog/") == "/site/blog/"

    def test_external_unchanged(self):
        assert site_url(_CONFIG, "https://github.com/x") == "https://github.com/x"

    def test_similar_prefix_is_still_prefixed(self):
        assert site_url(_CONFIG, "/sitemap-index.xml") == "/site/sitemap-index.xml"

    def test_root_base(self):
        config = SiteConfig(base="/")
        assert site_url(config, "/blog/") == "/blog/"


class TestAbsoluteUrl:
    def test_joins_origin_base_and_path(self):
        assert absolute_url(_CONFIG, "/blog/x/") == "https://twillecke.github.io/site/blog/x/"

    def test_root(self):
        assert absolute_url(_CONFIG) == "https://twillecke.github.io/site/"


class TestOutputFile:
    def test_root(self):
        assert output_file("/") == "index.html"

    def test_directory_page(self):
        assert output_file("/blog/x/") == "blog/x/index.html"

    def test_file_page(self):
        assert output_file("/404.html") == "404.html"
