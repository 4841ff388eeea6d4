"""Site build orchestration.

A build reads configuration, constants and content, writes every page and
then runs the enabled integrations (sitemap, rss, utility-css) in that order.
Nothing in the output depends on the wall clock or on filesystem iteration
order, so rebuilding unchanged inputs yields a byte-identical tree.
"""

import hashlib
import logging
import shutil
import time
from pathlib import Path
from typing import Dict, List, Tuple

from folio import consts
from folio.config import SiteConfig
from folio.models.entry import Entry
from folio.models.report import BuildReport, Issue
from folio.services.content import group_by_year, latest, neighbours, published, sort_by_date, sort_work
from folio.services.feed import write_feed
from folio.services.integrity import check_site, load_collections
from folio.services.markdown import render_entry
from folio.services.normalizer import output_file, page_path
from folio.services.sitemap import SitemapEntry, write_sitemap
from folio.services.templates import make_environment, render_page
from folio.services.utility_css import write_stylesheet

logger = logging.getLogger(__name__)

NOT_FOUND_PATH = "/404.html"


class BuildError(RuntimeError):
    """Raised when integrity errors prevent a build."""

    def __init__(self, issues: List[Issue]) -> None:
        self.issues = issues
        summary = "; ".join(f"{i.source or '-'}: {i.message}" for i in issues)
        super().__init__(f"Build aborted with {len(issues)} error(s): {summary}")


def _prepare_out_dir(config: SiteConfig) -> Path:
    out_dir = Path(config.out_dir).resolve()
    if out_dir == Path(out_dir.anchor):
        raise ValueError(f"Refusing to use {out_dir} as output directory.")
    for label, source in (("content", config.content_dir), ("public", config.public_dir)):
        source = Path(source).resolve()
        if out_dir == source or out_dir in source.parents:
            raise ValueError(f"Refusing to use {out_dir} as output directory: it contains the {label} files.")
    if out_dir.exists():
        shutil.rmtree(out_dir)
    out_dir.mkdir(parents=True)
    return out_dir


def _copy_public(config: SiteConfig, out_dir: Path) -> int:
    public = Path(config.public_dir)
    if not public.is_dir():
        return 0
    copied = 0
    for src in sorted(public.rglob("*")):
        if src.is_file():
            dest = out_dir / src.relative_to(public)
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, dest)
            copied += 1
    return copied


def tree_digest(out_dir: Path) -> Tuple[str, int]:
    """Return (sha256 hex digest, file count) over the tree under *out_dir*."""
    digest = hashlib.sha256()
    files = sorted(p for p in out_dir.rglob("*") if p.is_file())
    for path in files:
        digest.update(path.relative_to(out_dir).as_posix().encode("utf-8"))
        digest.update(b"\0")
        digest.update(path.read_bytes())
        digest.update(b"\0")
    return digest.hexdigest(), len(files)


def render_pages(config: SiteConfig, collections: Dict[str, List[Entry]]) -> Dict[str, Tuple[str, SitemapEntry]]:
    """Render every page; returns ``{path: (html, sitemap entry)}``."""
    env = make_environment(config)
    slash = config.trailing_slash
    site = consts.SITE

    rendered = {
        name: [render_entry(e, config.base) for e in published(entries)]
        for name, entries in collections.items()
    }
    posts = rendered.get("blog", [])
    projects = rendered.get("projects", [])
    works = sort_work(rendered.get("work", []))

    dated = [e.data.date for entries in rendered.values() for e in entries]
    year = max(dated).year if dated else None

    pages: Dict[str, Tuple[str, SitemapEntry]] = {}

    def add(path: str, template: str, lastmod=None, **context) -> None:
        html = render_page(env, template, path=path, year=year, **context)
        pages[path] = (html, SitemapEntry(path, lastmod))

    add(
        "/",
        "home.html",
        title=consts.HOME.TITLE,
        description=consts.HOME.DESCRIPTION,
        posts=latest(posts, site.NUM_POSTS_ON_HOMEPAGE),
        works=works[: site.NUM_WORKS_ON_HOMEPAGE],
        projects=latest(projects, site.NUM_PROJECTS_ON_HOMEPAGE),
    )

    for section, meta, entries in (
        ("blog", consts.BLOG, posts),
        ("projects", consts.PROJECTS, projects),
    ):
        add(
            page_path(section, trailing_slash=slash),
            "collection_index.html",
            title=meta.TITLE,
            description=meta.DESCRIPTION,
            years=group_by_year(entries),
            section=section,
        )
        for entry in sort_by_date(entries):
            newer, older = neighbours(entries, entry)
            add(
                page_path(section, entry.slug, trailing_slash=slash),
                "entry.html",
                lastmod=entry.data.date,
                title=entry.data.title,
                description=entry.data.description,
                entry=entry,
                section=section,
                newer=newer,
                older=older,
            )

    add(
        page_path("work", trailing_slash=slash),
        "work.html",
        title=consts.WORK.TITLE,
        description=consts.WORK.DESCRIPTION,
        works=works,
    )
    add(NOT_FOUND_PATH, "404.html", title="404", description="Page not found.")
    return pages


def build_site(config: SiteConfig) -> BuildReport:
    """Build the whole site into ``config.out_dir``.

    Raises:
        BuildError: if the integrity check reports errors.
        ValueError: if the output directory would overwrite the content.
    """
    started = time.perf_counter()

    collections, load_issues = load_collections(config)
    report = check_site(config, consts, collections)
    issues = load_issues + report.issues
    errors = [i for i in issues if i.level == "error"]
    if errors:
        logger.error("Build aborted", extra={"errors": len(errors)})
        raise BuildError(errors)

    pages = render_pages(config, collections)

    out_dir = _prepare_out_dir(config)
    copied = _copy_public(config, out_dir)

    for path in sorted(pages):
        html, _ = pages[path]
        target = out_dir / output_file(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")

    if config.enabled("sitemap"):
        write_sitemap(config, out_dir, [entry for _, entry in pages.values()])
    if config.enabled("rss"):
        write_feed(config, out_dir, collections.get("blog", []))
    if config.enabled("utility-css"):
        write_stylesheet(out_dir)

    digest, files = tree_digest(out_dir)
    duration_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        "Build finished",
        extra={"pages": len(pages), "files": files, "public": copied, "duration_ms": duration_ms},
    )
    return BuildReport(
        out_dir=str(out_dir),
        pages=sorted(pages),
        files=files,
        digest=digest,
        duration_ms=duration_ms,
        warnings=[i for i in issues if i.level == "warning"],
    )
