"""Jinja2 environment and page rendering."""

from datetime import date
from functools import partial
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from folio import consts
from folio.config import SiteConfig
from folio.services.normalizer import absolute_url, page_path, site_url

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def fmt_date(value: date) -> str:
    """Locale-independent date label, e.g. ``Mar 04, 2024``."""
    months = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
    return f"{months[value.month - 1]} {value.day:02d}, {value.year}"


def make_environment(config: SiteConfig) -> Environment:
    """Return an environment whose globals are bound to *config*."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["fmt_date"] = fmt_date
    env.globals.update(
        config=config,
        url=partial(site_url, config),
        absolute=partial(absolute_url, config),
        page_path=partial(page_path, trailing_slash=config.trailing_slash),
        SITE=consts.SITE,
        HOME=consts.HOME,
        SOCIALS=consts.SOCIALS,
    )
    return env


def render_page(env: Environment, template: str, **context) -> str:
    return env.get_template(template).render(**context)
