"""Data-integrity checks over configuration, site constants and content.

Checks never raise; every finding becomes an :class:`Issue` so the CLI and
the preview service can report all problems at once.
"""

import logging
from pathlib import Path
from types import ModuleType
from typing import Dict, List, Optional
from urllib.parse import urlparse

from folio.config import SiteConfig
from folio.models.entry import Entry
from folio.models.report import IntegrityReport, Issue
from folio.services.content import COLLECTIONS, ContentError, load_collection, published

logger = logging.getLogger(__name__)

# Homepage count field -> collection it selects from
HOMEPAGE_COUNTS = {
    "NUM_POSTS_ON_HOMEPAGE": "blog",
    "NUM_WORKS_ON_HOMEPAGE": "work",
    "NUM_PROJECTS_ON_HOMEPAGE": "projects",
}


def _error(code: str, message: str, source: Optional[str] = None) -> Issue:
    return Issue(level="error", code=code, message=message, source=source)


def _warning(code: str, message: str, source: Optional[str] = None) -> Issue:
    return Issue(level="warning", code=code, message=message, source=source)


def check_base_path(base: str) -> List[Issue]:
    if not base or not base.startswith("/") or not base.endswith("/"):
        return [_error("invalid-base", f"base path {base!r} must start and end with '/'", "config")]
    return []


def check_socials(socials) -> List[Issue]:
    issues: List[Issue] = []
    for social in socials:
        href = str(social.HREF)
        parsed = urlparse(href)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            issues.append(
                _error("invalid-social-url", f"{social.NAME}: {href!r} is not an absolute URL", "SOCIALS")
            )
    return issues


def check_homepage_counts(site, collections: Dict[str, List[Entry]]) -> List[Issue]:
    issues: List[Issue] = []
    for field, collection in HOMEPAGE_COUNTS.items():
        count = getattr(site, field)
        available = len(published(collections.get(collection, [])))
        if not isinstance(count, int) or count < 0:
            issues.append(_error("invalid-count", f"{field} must be a non-negative integer", "SITE"))
        elif count > available:
            issues.append(
                _error(
                    "count-exceeds-items",
                    f"{field} is {count} but only {available} published {collection} entries exist",
                    "SITE",
                )
            )
    return issues


def check_entries(entries: List[Entry]) -> List[Issue]:
    issues: List[Issue] = []
    for entry in entries:
        source = str(entry.source)
        if entry.collection == "work":
            end = entry.data.dateEnd
            if end is not None and end < entry.data.dateStart:
                issues.append(_error("invalid-date-range", "dateEnd is before dateStart", source))
            continue
        if not entry.data.draft and not entry.data.description.strip():
            issues.append(_warning("empty-description", "published entry has no description", source))
        if not entry.body.strip():
            issues.append(_warning("empty-body", "entry has no body text", source))
    return issues


def load_collections(config: SiteConfig) -> tuple[Dict[str, List[Entry]], List[Issue]]:
    """Load every collection, turning content errors into issues."""
    collections: Dict[str, List[Entry]] = {}
    issues: List[Issue] = []
    for name in COLLECTIONS:
        try:
            collections[name] = load_collection(config, name)
        except ContentError as exc:
            logger.warning("Invalid content in %s: %s", name, exc)
            issues.append(_error("invalid-frontmatter", exc.message, exc.path))
            collections[name] = []
    return collections, issues


def check_site(
    config: SiteConfig,
    consts: ModuleType,
    collections: Optional[Dict[str, List[Entry]]] = None,
) -> IntegrityReport:
    """Run every check and return the combined report.

    *consts* is the module holding ``SITE`` and ``SOCIALS``.  When
    *collections* is ``None`` they are loaded from ``config.content_dir``.
    """
    issues: List[Issue] = []
    if collections is None:
        collections, load_issues = load_collections(config)
        issues.extend(load_issues)

    issues.extend(check_base_path(config.base))
    issues.extend(check_socials(consts.SOCIALS))
    issues.extend(check_homepage_counts(consts.SITE, collections))
    for name in sorted(collections):
        issues.extend(check_entries(collections[name]))

    if not Path(config.content_dir).is_dir():
        issues.append(_warning("missing-content-dir", f"{config.content_dir} does not exist", "config"))

    report = IntegrityReport(issues=issues)
    logger.info(
        "Integrity check finished",
        extra={"errors": len(report.errors), "warnings": len(report.warnings)},
    )
    return report
