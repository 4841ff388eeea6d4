"""Utility-class stylesheet integration.

Pages are styled with small single-purpose classes (``px-5``, ``flex``,
``text-neutral-500``, ``sm:flex-row``, ``dark:bg-neutral-900`` ...).  After
all pages are written, every ``class`` attribute in the output is scanned and
``styles.css`` is generated with rules for exactly the classes in use.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

STYLESHEET = "styles.css"

SCREENS = {"sm": "640px", "md": "768px", "lg": "1024px"}

PSEUDO_VARIANTS = {"hover": ":hover", "focus": ":focus"}

DARK_QUERY = "(prefers-color-scheme: dark)"

PALETTE = {
    "white": "#ffffff",
    "black": "#000000",
    "neutral-50": "#fafafa",
    "neutral-100": "#f5f5f5",
    "neutral-200": "#e5e5e5",
    "neutral-300": "#d4d4d4",
    "neutral-400": "#a3a3a3",
    "neutral-500": "#737373",
    "neutral-600": "#525252",
    "neutral-700": "#404040",
    "neutral-800": "#262626",
    "neutral-900": "#171717",
    "neutral-950": "#0a0a0a",
}

STATIC = {
    "block": "display: block",
    "inline-block": "display: inline-block",
    "flex": "display: flex",
    "grid": "display: grid",
    "hidden": "display: none",
    "flex-row": "flex-direction: row",
    "flex-col": "flex-direction: column",
    "flex-wrap": "flex-wrap: wrap",
    "flex-1": "flex: 1 1 0%",
    "items-start": "align-items: flex-start",
    "items-center": "align-items: center",
    "justify-between": "justify-content: space-between",
    "justify-center": "justify-content: center",
    "w-full": "width: 100%",
    "min-h-screen": "min-height: 100vh",
    "max-w-screen-sm": "max-width: 640px",
    "max-w-screen-md": "max-width: 768px",
    "mx-auto": "margin-left: auto; margin-right: auto",
    "font-sans": "font-family: ui-sans-serif, system-ui, -apple-system, 'Segoe UI', sans-serif",
    "font-mono": "font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace",
    "font-semibold": "font-weight: 600",
    "font-bold": "font-weight: 700",
    "antialiased": "-webkit-font-smoothing: antialiased; -moz-osx-font-smoothing: grayscale",
    "text-xs": "font-size: 0.75rem; line-height: 1rem",
    "text-sm": "font-size: 0.875rem; line-height: 1.25rem",
    "text-base": "font-size: 1rem; line-height: 1.5rem",
    "text-lg": "font-size: 1.125rem; line-height: 1.75rem",
    "text-xl": "font-size: 1.25rem; line-height: 1.75rem",
    "text-2xl": "font-size: 1.5rem; line-height: 2rem",
    "text-left": "text-align: left",
    "text-center": "text-align: center",
    "text-right": "text-align: right",
    "underline": "text-decoration-line: underline",
    "no-underline": "text-decoration-line: none",
    "border": "border-width: 1px; border-style: solid",
    "border-t": "border-top-width: 1px; border-top-style: solid",
    "border-b": "border-bottom-width: 1px; border-bottom-style: solid",
    "rounded": "border-radius: 0.25rem",
    "rounded-lg": "border-radius: 0.5rem",
}

_SPACING_PROPS = {
    "p": ("padding",),
    "px": ("padding-left", "padding-right"),
    "py": ("padding-top", "padding-bottom"),
    "pt": ("padding-top",),
    "pr": ("padding-right",),
    "pb": ("padding-bottom",),
    "pl": ("padding-left",),
    "m": ("margin",),
    "mx": ("margin-left", "margin-right"),
    "my": ("margin-top", "margin-bottom"),
    "mt": ("margin-top",),
    "mr": ("margin-right",),
    "mb": ("margin-bottom",),
    "ml": ("margin-left",),
    "gap": ("gap",),
    "gap-x": ("column-gap",),
    "gap-y": ("row-gap",),
}

_SPACING_RE = re.compile(r"^(gap-x|gap-y|gap|p[xytrbl]?|m[xytrbl]?)-(\d+(?:\.5)?)$")
_COLOR_RE = re.compile(r"^(text|bg|border)-([a-z]+(?:-\d+)?)$")
_GRID_COLS_RE = re.compile(r"^grid-cols-(\d+)$")
_COL_START_RE = re.compile(r"^col-start-(\d+)$")

_COLOR_PROPS = {"text": "color", "bg": "background-color", "border": "border-color"}

# Long-form article styling; emitted before utilities so utilities win
PROSE_RULES: List[Tuple[str, str]] = [
    ("", "line-height: 1.75"),
    (" > * + *", "margin-top: 1.25em"),
    (" h2", "font-size: 1.25rem; font-weight: 600; margin-top: 2em"),
    (" h3", "font-size: 1.125rem; font-weight: 600; margin-top: 1.6em"),
    (" h4", "font-weight: 600; margin-top: 1.5em"),
    (" a", "text-decoration-line: underline; text-underline-offset: 2px"),
    (" ul", "list-style-type: disc; padding-left: 1.5em"),
    (" ol", "list-style-type: decimal; padding-left: 1.5em"),
    (" blockquote", "border-left: 3px solid rgba(127, 127, 127, 0.4); padding-left: 1em; font-style: italic"),
    (" code", "font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace; font-size: 0.875em"),
    (" :not(pre) > code", "background-color: rgba(127, 127, 127, 0.15); border-radius: 0.25rem; padding: 0.1em 0.3em"),
    (" pre", "overflow-x: auto; padding: 1em; border-radius: 0.5rem; background-color: rgba(127, 127, 127, 0.12)"),
    (" table", "width: 100%; border-collapse: collapse; font-size: 0.875em"),
    (" th, .prose td", "border: 1px solid rgba(127, 127, 127, 0.3); padding: 0.4em 0.6em"),
    (" img", "max-width: 100%; height: auto"),
]

COMPONENTS: Dict[str, List[Tuple[str, str]]] = {"prose": PROSE_RULES}


def _spacing(value: str) -> str:
    rem = float(value) * 0.25
    if rem == 0:
        return "0px"
    return f"{rem:g}rem"


def resolve_utility(name: str) -> Optional[str]:
    """Return the CSS declarations for a bare utility *name*, or ``None``."""
    if name in STATIC:
        return STATIC[name]

    match = _SPACING_RE.match(name)
    if match:
        prefix, value = match.groups()
        size = _spacing(value)
        return "; ".join(f"{prop}: {size}" for prop in _SPACING_PROPS[prefix])

    match = _COLOR_RE.match(name)
    if match:
        kind, color = match.groups()
        if color in PALETTE:
            return f"{_COLOR_PROPS[kind]}: {PALETTE[color]}"
        return None

    match = _GRID_COLS_RE.match(name)
    if match:
        return f"grid-template-columns: repeat({match.group(1)}, minmax(0, 1fr))"

    match = _COL_START_RE.match(name)
    if match:
        return f"grid-column-start: {match.group(1)}"

    return None


def escape_class(name: str) -> str:
    """Escape a class name for use in a CSS selector (``sm:p-4`` -> ``sm\\:p-4``)."""
    return re.sub(r"([^a-zA-Z0-9_-])", r"\\\1", name)


def _parse_variants(cls: str) -> Optional[Tuple[Optional[str], bool, List[str], str]]:
    """Split ``dark:sm:hover:p-4`` into (screen, dark, pseudos, utility)."""
    *variants, utility = cls.split(":")
    screen = None
    dark = False
    pseudos: List[str] = []
    for variant in variants:
        if variant in SCREENS and screen is None:
            screen = variant
        elif variant == "dark":
            dark = True
        elif variant in PSEUDO_VARIANTS:
            pseudos.append(PSEUDO_VARIANTS[variant])
        else:
            return None
    return screen, dark, pseudos, utility


def _media_query(screen: Optional[str], dark: bool) -> str:
    parts = []
    if dark:
        parts.append(DARK_QUERY)
    if screen:
        parts.append(f"(min-width: {SCREENS[screen]})")
    return " and ".join(parts)


def _media_rank(screen: Optional[str], dark: bool) -> Tuple[int, int]:
    screen_rank = 0 if screen is None else list(SCREENS).index(screen) + 1
    return screen_rank, int(dark)


def compile_css(classes: Iterable[str]) -> str:
    """Return a stylesheet covering every known class in *classes*.

    Output is deterministic: rules are grouped by media query (base first,
    then dark mode, then breakpoints from small to large) and sorted by class
    name inside each group, with pseudo-class variants last.
    """
    groups: Dict[Tuple[int, int], Dict[str, List[Tuple[int, str, str]]]] = {}
    components: List[str] = []
    unknown: List[str] = []

    for cls in sorted(set(classes)):
        if cls in COMPONENTS:
            components.append(cls)
            continue
        parsed = _parse_variants(cls)
        if parsed is None:
            unknown.append(cls)
            continue
        screen, dark, pseudos, utility = parsed
        declarations = resolve_utility(utility)
        if declarations is None:
            unknown.append(cls)
            continue
        selector = "." + escape_class(cls) + "".join(pseudos)
        rank = _media_rank(screen, dark)
        query = _media_query(screen, dark)
        groups.setdefault(rank, {}).setdefault(query, []).append(
            (len(pseudos), selector, declarations)
        )

    if unknown:
        logger.debug("Ignoring unknown utility classes: %s", ", ".join(unknown))

    blocks: List[str] = []
    for name in components:
        for suffix, declarations in COMPONENTS[name]:
            blocks.append(f".{name}{suffix} {{ {declarations}; }}")

    for rank in sorted(groups):
        for query, rules in sorted(groups[rank].items()):
            lines = [
                f"{selector} {{ {declarations}; }}"
                for _, selector, declarations in sorted(rules)
            ]
            if query:
                body = "\n".join("  " + line for line in lines)
                blocks.append(f"@media {query} {{\n{body}\n}}")
            else:
                blocks.extend(lines)

    return "\n".join(blocks) + "\n"


def collect_classes(documents: Iterable[str]) -> Set[str]:
    """Return every class name used in the given HTML *documents*."""
    classes: Set[str] = set()
    for html in documents:
        soup = BeautifulSoup(html, "lxml")
        for tag in soup.find_all(class_=True):
            value = tag.get("class", [])
            if isinstance(value, str):
                value = value.split()
            classes.update(value)
    return classes


def write_stylesheet(out_dir: Path) -> Path:
    """Scan every HTML file under *out_dir* and write the stylesheet."""
    pages = sorted(out_dir.rglob("*.html"))
    classes = collect_classes(p.read_text(encoding="utf-8") for p in pages)
    path = out_dir / STYLESHEET
    path.write_text(compile_css(classes), encoding="utf-8")
    logger.info("Stylesheet written", extra={"classes": len(classes), "pages": len(pages)})
    return path
