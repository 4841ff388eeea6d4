"""Build configuration: public origin, base path, integrations and directories.

The configuration lives in a YAML file (``site.yaml`` by default) next to the
content.  Every key is optional; a missing file yields the defaults below.
"""

import logging
import os
from pathlib import Path
from typing import List, Literal

import yaml
from pydantic import BaseModel, Field, HttpUrl, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "site.yaml"
CONFIG_ENV_VAR = "FOLIO_CONFIG"

Integration = Literal["mdx", "sitemap", "utility-css", "rss"]

DEFAULT_INTEGRATIONS: List[Integration] = ["mdx", "sitemap", "utility-css", "rss"]


class ConfigError(ValueError):
    """Raised when the configuration file is unreadable or invalid."""


class SiteConfig(BaseModel):
    site: HttpUrl = Field(default="https://twillecke.github.io/", validate_default=True)
    base: str = "/site/"
    integrations: List[Integration] = Field(default_factory=lambda: list(DEFAULT_INTEGRATIONS))
    content_dir: Path = Path("content")
    public_dir: Path = Path("public")
    out_dir: Path = Path("dist")
    trailing_slash: bool = True

    @field_validator("base")
    @classmethod
    def check_base(cls, value: str) -> str:
        if not value or not value.startswith("/") or not value.endswith("/"):
            raise ValueError("base must be a non-empty path that starts and ends with '/'")
        return value

    @field_validator("integrations")
    @classmethod
    def check_integrations(cls, value: List[str]) -> List[str]:
        if len(set(value)) != len(value):
            raise ValueError("integrations must not contain duplicates")
        return value

    def enabled(self, integration: str) -> bool:
        return integration in self.integrations

    def resolve_paths(self, root: Path) -> "SiteConfig":
        """Return a copy whose relative directories are anchored at *root*."""
        updates = {}
        for name in ("content_dir", "public_dir", "out_dir"):
            path = getattr(self, name)
            if not path.is_absolute():
                updates[name] = root / path
        return self.model_copy(update=updates)


def load_config(path: str | Path | None = None) -> SiteConfig:
    """Load and validate the configuration file at *path*.

    When *path* is ``None`` the ``FOLIO_CONFIG`` environment variable is
    consulted, then ``site.yaml`` in the working directory.  Relative
    directories are resolved against the config file's directory.

    Raises:
        ConfigError: if the file is not valid YAML or fails validation.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)
    path = Path(path)

    if not path.exists():
        logger.info("No config file at %s – using defaults", path)
        return SiteConfig().resolve_paths(path.parent.resolve())

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")

    try:
        config = SiteConfig(**raw)
    except ValidationError as exc:
        raise ConfigError(f"{path}: {exc}") from exc

    return config.resolve_paths(path.parent.resolve())
