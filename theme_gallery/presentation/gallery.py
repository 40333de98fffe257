from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Mapping

from markupsafe import Markup

from theme_gallery.services.themes import CATEGORY_ORDER, ThemeCatalog

SUMMARY_SEPARATOR = ", "
DEFAULT_FILTER = "light"
CSS_IDENTIFIER_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]")
CATEGORY_LABELS: dict[str, str] = {
    "light": "Light Themes",
    "dark": "Dark Themes",
    "unknown": "Unknown Themes",
}


@dataclass(frozen=True)
class ThemeStyleViewModel:
    theme: str
    scope_selector: Markup
    css: Markup


@dataclass(frozen=True)
class CategorySummaryViewModel:
    category: str
    label: str
    element_id: str
    names_text: str


@dataclass(frozen=True)
class FilterOptionViewModel:
    value: str
    label: str
    checked: bool


@dataclass(frozen=True)
class ThemeDemoViewModel:
    theme: str
    category: str
    scope_class: str
    highlighted_html: Markup


@dataclass(frozen=True)
class GalleryViewModel:
    styles: list[ThemeStyleViewModel]
    summaries: list[CategorySummaryViewModel]
    filter_options: list[FilterOptionViewModel]
    demos: list[ThemeDemoViewModel]
    category_lists: dict[str, list[str]]


def css_escape_identifier(value: str) -> str:
    # CSS hex escapes: "&" becomes "\26 ".
    return CSS_IDENTIFIER_UNSAFE_RE.sub(lambda match: f"\\{ord(match.group(0)):x} ", value)


def theme_scope_class(theme: str) -> str:
    return f"theme-{theme}"


def build_gallery_view_model(
    *,
    catalog: ThemeCatalog,
    stylesheets: Mapping[str, str],
    highlighted_html: str,
) -> GalleryViewModel:
    # Stylesheets and pygments output are trusted local content.
    highlighted = Markup(highlighted_html)
    return GalleryViewModel(
        styles=[
            ThemeStyleViewModel(
                theme=theme,
                scope_selector=Markup(f".{css_escape_identifier(theme_scope_class(theme))}"),
                css=Markup(stylesheets[theme]),
            )
            for theme in catalog.themes
        ],
        summaries=[
            CategorySummaryViewModel(
                category=category.value,
                label=CATEGORY_LABELS[category.value],
                element_id=f"{category.value}ThemesList",
                names_text=SUMMARY_SEPARATOR.join(catalog.names_in(category)),
            )
            for category in CATEGORY_ORDER
        ],
        filter_options=[
            FilterOptionViewModel(
                value=category.value,
                label=CATEGORY_LABELS[category.value],
                checked=category.value == DEFAULT_FILTER,
            )
            for category in CATEGORY_ORDER
        ],
        demos=[
            ThemeDemoViewModel(
                theme=theme,
                category=catalog.category_of(theme).value,
                scope_class=theme_scope_class(theme),
                highlighted_html=highlighted,
            )
            for theme in catalog.themes
        ],
        category_lists=catalog.as_category_lists(),
    )
