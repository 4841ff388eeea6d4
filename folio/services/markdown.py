"""Markdown / MDX body rendering."""

import math
import re

import markdown

from folio.models.entry import Entry
from folio.services.postprocess import process_html

WORDS_PER_MINUTE = 200

_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

# Opening or closing code fence (``` or ~~~, three or more)
_FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})")

# Top-level ESM statements that MDX allows but plain Markdown would print
_ESM_RE = re.compile(r"^(import|export)\s")


def strip_esm(text: str) -> str:
    """Remove MDX ``import``/``export`` blocks that sit outside code fences.

    A line is ESM only when it opens a block (first line, or after a blank
    line); the block then runs to the next blank line, so multi-line exports
    go with it.  ``import``/``export`` in the middle of a paragraph is prose.
    """
    out = []
    fence = ""
    block_start = True
    in_esm = False
    for line in text.splitlines():
        match = _FENCE_RE.match(line)
        if match or fence:
            if match:
                marker = match.group(1)
                if not fence:
                    fence = marker[0] * 3
                elif marker.startswith(fence):
                    fence = ""
            block_start = in_esm = False
            out.append(line)
            continue
        if not line.strip():
            block_start, in_esm = True, False
            out.append(line)
            continue
        if in_esm or (block_start and _ESM_RE.match(line)):
            in_esm = True
            block_start = False
            continue
        block_start = False
        out.append(line)
    return "\n".join(out)


def render_markdown(text: str, mdx: bool = False) -> str:
    """Return the HTML rendering of a Markdown body."""
    if mdx:
        text = strip_esm(text)
    return markdown.markdown(text, extensions=_EXTENSIONS, output_format="html")


def reading_time(text: str) -> int:
    """Estimated reading time in whole minutes (at least one)."""
    words = len(re.findall(r"\S+", text))
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def render_entry(entry: Entry, base: str) -> Entry:
    """Return a copy of *entry* with ``html``, ``headings`` and ``reading_time`` filled in."""
    raw_html = render_markdown(entry.body, mdx=entry.source.suffix == ".mdx")
    html, headings = process_html(raw_html, base)
    return entry.model_copy(
        update={
            "html": html,
            "headings": headings,
            "reading_time": reading_time(entry.body),
        }
    )
