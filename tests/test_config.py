"""Tests for folio.config."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from folio.config import ConfigError, SiteConfig, load_config


class TestSiteConfig:
    def test_defaults_match_published_site(self):
        config = SiteConfig()
        assert str(config.site) == "https://twillecke.github.io/"
        assert config.base == "/site/"
        assert config.integrations == ["mdx", "sitemap", "utility-css", "rss"]

    @pytest.mark.parametrize("base", ["", "site/", "/site", "site"])
    def test_rejects_bad_base(self, base):
        with pytest.raises(ValidationError):
            SiteConfig(base=base)

    def test_accepts_root_base(self):
        assert SiteConfig(base="/").base == "/"

    def test_rejects_unknown_integration(self):
        with pytest.raises(ValidationError):
            SiteConfig(integrations=["webpack"])

    def test_rejects_duplicate_integrations(self):
        with pytest.raises(ValidationError):
            SiteConfig(integrations=["sitemap", "sitemap"])

    def test_rejects_relative_site(self):
        with pytest.raises(ValidationError):
            SiteConfig(site="/not-absolute")

    def test_enabled(self):
        config = SiteConfig(integrations=["sitemap"])
        assert config.enabled("sitemap")
        assert not config.enabled("rss")


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "site.yaml")
        assert config.base == "/site/"
        assert config.content_dir == tmp_path.resolve() / "content"

    def test_reads_yaml_and_resolves_dirs(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text(
            "site: https://example.org/\nbase: /blog/\nintegrations: [sitemap]\nout_dir: public_html\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert str(config.site) == "https://example.org/"
        assert config.base == "/blog/"
        assert config.integrations == ["sitemap"]
        assert config.out_dir == tmp_path.resolve() / "public_html"

    def test_absolute_dirs_kept(self, tmp_path):
        path = tmp_path / "site.yaml"
        target = tmp_path / "elsewhere"
        path.write_text(f"out_dir: {target}\n", encoding="utf-8")
        assert load_config(path).out_dir == target

    def test_invalid_value_raises_config_error(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("base: nope\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="base"):
            load_config(path)

    def test_invalid_yaml_raises_config_error(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("base: [unterminated\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_mapping_raises_config_error(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_env_var_is_used(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("base: /custom/\n", encoding="utf-8")
        monkeypatch.setenv("FOLIO_CONFIG", str(path))
        assert load_config().base == "/custom/"

    def test_repository_config_is_valid(self):
        root = Path(__file__).resolve().parent.parent
        config = load_config(root / "site.yaml")
        assert config.base == "/site/"
        assert config.content_dir == root / "content"
