from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from pathlib import Path
import re
from typing import Iterable, Mapping, Sequence

logger = logging.getLogger(__name__)

STYLESHEET_SUFFIX = ".css"
MINIFIED_SUFFIX = ".min.css"
THEME_SUFFIX_PATTERN = re.compile(r"\.min\.css$|\.css$")
LIGHT_THEME_PATTERN = re.compile(r"light|lite|bright|white", re.IGNORECASE)
DARK_THEME_PATTERN = re.compile(r"dark|night|black", re.IGNORECASE)


class ThemeCategory(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    UNKNOWN = "unknown"


CATEGORY_ORDER: tuple[ThemeCategory, ...] = (
    ThemeCategory.LIGHT,
    ThemeCategory.DARK,
    ThemeCategory.UNKNOWN,
)


class ThemeDirectoryError(OSError):
    """Raised when the themes directory cannot be listed."""


class ThemeResourceMissing(LookupError):
    """Raised when neither stylesheet variant exists for a discovered theme."""

    def __init__(self, theme: str) -> None:
        super().__init__(f"No stylesheet found for theme {theme!r}.")
        self.theme = theme


@dataclass(frozen=True)
class ThemeCatalog:
    themes: tuple[str, ...]
    light: tuple[str, ...]
    dark: tuple[str, ...]
    unknown: tuple[str, ...]

    def category_of(self, theme: str) -> ThemeCategory:
        if theme in self.light:
            return ThemeCategory.LIGHT
        if theme in self.dark:
            return ThemeCategory.DARK
        if theme in self.unknown:
            return ThemeCategory.UNKNOWN
        raise KeyError(theme)

    def names_in(self, category: ThemeCategory) -> tuple[str, ...]:
        return getattr(self, category.value)

    def as_category_lists(self) -> dict[str, list[str]]:
        return {category.value: list(self.names_in(category)) for category in CATEGORY_ORDER}


def strip_theme_suffix(filename: str) -> str:
    return THEME_SUFFIX_PATTERN.sub("", filename, count=1)


def classify_theme(name: str) -> ThemeCategory:
    if LIGHT_THEME_PATTERN.search(name):
        return ThemeCategory.LIGHT
    if DARK_THEME_PATTERN.search(name):
        return ThemeCategory.DARK
    return ThemeCategory.UNKNOWN


def _unique(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        ordered.append(name)
    return ordered


def discover_theme_names(themes_dir: Path) -> list[str]:
    try:
        entries = sorted(themes_dir.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise ThemeDirectoryError(f"Cannot list themes directory {themes_dir}: {exc}") from exc

    return _unique(
        strip_theme_suffix(entry.name)
        for entry in entries
        if entry.name.endswith(STYLESHEET_SUFFIX) and entry.is_file()
    )


def build_catalog(names: Sequence[str]) -> ThemeCatalog:
    themes = tuple(_unique(names))
    partition: dict[ThemeCategory, list[str]] = {category: [] for category in CATEGORY_ORDER}
    for theme in themes:
        partition[classify_theme(theme)].append(theme)
    return ThemeCatalog(
        themes=themes,
        light=tuple(partition[ThemeCategory.LIGHT]),
        dark=tuple(partition[ThemeCategory.DARK]),
        unknown=tuple(partition[ThemeCategory.UNKNOWN]),
    )


def resolve_stylesheet(themes_dir: Path, theme: str) -> str:
    for filename in (f"{theme}{MINIFIED_SUFFIX}", f"{theme}{STYLESHEET_SUFFIX}"):
        try:
            return (themes_dir / filename).read_text(encoding="utf-8")
        except FileNotFoundError:
            continue
    raise ThemeResourceMissing(theme)


def load_theme_stylesheets(themes_dir: Path) -> tuple[ThemeCatalog, dict[str, str]]:
    stylesheets: dict[str, str] = {}
    for theme in discover_theme_names(themes_dir):
        try:
            stylesheets[theme] = resolve_stylesheet(themes_dir, theme)
        except ThemeResourceMissing:
            logger.warning(
                "themes.stylesheet_missing",
                extra={"event": "themes.stylesheet_missing", "theme": theme},
            )

    catalog = build_catalog(list(stylesheets))
    logger.debug(
        "themes.catalog_built",
        extra={
            "event": "themes.catalog_built",
            "themes_dir": str(themes_dir),
            "light_count": len(catalog.light),
            "dark_count": len(catalog.dark),
            "unknown_count": len(catalog.unknown),
        },
    )
    return catalog, stylesheets


def reassign_theme(
    categories: Mapping[str, Sequence[str]],
    theme: str,
    target: str,
) -> dict[str, list[str]]:
    """Move ``theme`` into ``target``, dropping it from every other category.

    Mirrors ``reassignTheme`` in the gallery page script.
    """
    target_category = ThemeCategory(target)
    reassigned = {
        category.value: [name for name in categories.get(category.value, ()) if name != theme]
        for category in CATEGORY_ORDER
    }
    reassigned[target_category.value].append(theme)
    return reassigned
