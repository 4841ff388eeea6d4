"""Content collections: read documents, validate front-matter, query entries."""

import logging
from collections import defaultdict
from datetime import date
from pathlib import Path
from typing import Dict, List, Tuple

import yaml
from pydantic import ValidationError

from folio.config import SiteConfig
from folio.models.entry import Entry
from folio.models.frontmatter import SCHEMAS
from folio.services.normalizer import generate_slug

logger = logging.getLogger(__name__)

COLLECTIONS = ("blog", "projects", "work")

_FENCE = "---"


class ContentError(ValueError):
    """Raised when a content document cannot be parsed or validated."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = str(path)
        self.message = message
        super().__init__(f"{path}: {message}")


def split_frontmatter(text: str, path: Path | str = "<string>") -> Tuple[dict, str]:
    """Split *text* into its YAML front-matter mapping and the body.

    The document must open with a ``---`` line and close the block with a
    second ``---`` line.

    Raises:
        ContentError: when the block is missing, unterminated or not a mapping.
    """
    clean = text.lstrip("\ufeff")
    lines = clean.splitlines()
    if not lines or lines[0].strip() != _FENCE:
        raise ContentError(path, "document does not start with a front-matter block")

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == _FENCE:
            end = i
            break
    if end is None:
        raise ContentError(path, "front-matter block is not terminated")

    try:
        meta = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as exc:
        raise ContentError(path, f"invalid YAML in front-matter: {exc}") from exc

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise ContentError(path, "front-matter must be a mapping")

    body = "\n".join(lines[end + 1:]).strip("\n")
    return meta, body


def load_entry(path: Path, collection: str) -> Entry:
    """Read and validate one document of *collection*."""
    schema = SCHEMAS[collection]
    meta, body = split_frontmatter(path.read_text(encoding="utf-8"), path)
    try:
        data = schema(**meta)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'frontmatter'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ContentError(path, details) from exc
    return Entry(
        collection=collection,
        slug=generate_slug(path.stem),
        source=path,
        data=data,
        body=body,
    )


def source_files(config: SiteConfig, collection: str) -> List[Path]:
    """Return the source files of *collection* in deterministic order."""
    directory = config.content_dir / collection
    if not directory.is_dir():
        return []
    suffixes = {".md", ".mdx"} if config.enabled("mdx") else {".md"}
    files = [p for p in directory.iterdir() if p.is_file() and p.suffix in suffixes]
    return sorted(files, key=lambda p: p.name)


def load_collection(config: SiteConfig, collection: str) -> List[Entry]:
    """Load every document of *collection*, drafts included.

    Raises:
        ContentError: on the first invalid document or a duplicate slug.
    """
    if collection not in SCHEMAS:
        raise ValueError(f"Unknown collection '{collection}'.")

    entries: List[Entry] = []
    seen: Dict[str, Path] = {}
    for path in source_files(config, collection):
        entry = load_entry(path, collection)
        if entry.slug in seen:
            raise ContentError(path, f"duplicate slug '{entry.slug}' (also {seen[entry.slug].name})")
        seen[entry.slug] = path
        entries.append(entry)

    logger.info("Loaded %d %s entries", len(entries), collection)
    return entries


def load_all(config: SiteConfig) -> Dict[str, List[Entry]]:
    return {name: load_collection(config, name) for name in COLLECTIONS}


def published(entries: List[Entry]) -> List[Entry]:
    """Drop draft documents."""
    return [e for e in entries if not e.data.draft]


def sort_by_date(entries: List[Entry]) -> List[Entry]:
    """Sort newest first; slugs break ties so the order is stable across builds."""
    by_slug = sorted(entries, key=lambda e: e.slug)
    return sorted(by_slug, key=lambda e: e.data.date, reverse=True)


def sort_work(entries: List[Entry]) -> List[Entry]:
    """Sort work entries: ongoing roles first, then by end date, then start date."""

    def key(entry: Entry):
        end = entry.data.dateEnd or date.max
        return (end, entry.data.dateStart)

    by_slug = sorted(entries, key=lambda e: e.slug)
    return sorted(by_slug, key=key, reverse=True)


def latest(entries: List[Entry], count: int) -> List[Entry]:
    """Return the *count* newest published entries."""
    if count <= 0:
        return []
    return sort_by_date(published(entries))[:count]


def group_by_year(entries: List[Entry]) -> List[Tuple[int, List[Entry]]]:
    """Group published entries by year, newest year first."""
    groups: Dict[int, List[Entry]] = defaultdict(list)
    for entry in sort_by_date(published(entries)):
        groups[entry.data.date.year].append(entry)
    return sorted(groups.items(), key=lambda item: item[0], reverse=True)


def neighbours(entries: List[Entry], entry: Entry) -> Tuple[Entry | None, Entry | None]:
    """Return the (newer, older) published neighbours of *entry*."""
    ordered = sort_by_date(published(entries))
    slugs = [e.slug for e in ordered]
    if entry.slug not in slugs:
        return None, None
    i = slugs.index(entry.slug)
    newer = ordered[i - 1] if i > 0 else None
    older = ordered[i + 1] if i + 1 < len(ordered) else None
    return newer, older
