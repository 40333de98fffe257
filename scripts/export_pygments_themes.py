from __future__ import annotations

import argparse
import logging
from pathlib import Path
import re

from pygments.formatters import HtmlFormatter
from pygments.styles import get_all_styles
from pygments.util import ClassNotFound

from theme_gallery.logging_config import configure_logging
from theme_gallery.services.highlight import HIGHLIGHT_CSS_CLASS
from theme_gallery.settings import settings

configure_logging(
    level=settings.log_level,
    log_format=settings.log_format,
)

logger = logging.getLogger(__name__)

_CSS_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_CSS_SPACE_RE = re.compile(r"\s+")
_CSS_PUNCTUATION_RE = re.compile(r"\s*([{};:,])\s*")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Write Pygments styles as theme stylesheets for the gallery."
    )
    parser.add_argument("--output-dir", type=Path, default=settings.themes_dir)
    parser.add_argument(
        "--style",
        action="append",
        dest="styles",
        help="Pygments style to export; repeatable. Defaults to every installed style.",
    )
    parser.add_argument(
        "--minify",
        action="store_true",
        help="Also write a <style>.min.css variant.",
    )
    return parser


def style_stylesheet(style_name: str) -> str:
    formatter = HtmlFormatter(style=style_name)
    return formatter.get_style_defs(f".{HIGHLIGHT_CSS_CLASS}") + "\n"


def minify_css(css: str) -> str:
    stripped = _CSS_COMMENT_RE.sub("", css)
    collapsed = _CSS_SPACE_RE.sub(" ", stripped)
    return _CSS_PUNCTUATION_RE.sub(r"\1", collapsed).strip()


def export_themes(*, output_dir: Path, styles: list[str] | None, minify: bool) -> int:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.exception(
            "themes.export_output_dir_failed",
            extra={"event": "themes.export_output_dir_failed", "output_dir": str(output_dir)},
        )
        return 1

    style_names = styles or sorted(get_all_styles())
    for style_name in style_names:
        try:
            css = style_stylesheet(style_name)
        except ClassNotFound:
            logger.error(
                "themes.export_unknown_style",
                extra={"event": "themes.export_unknown_style", "style": style_name},
            )
            return 1
        (output_dir / f"{style_name}.css").write_text(css, encoding="utf-8")
        if minify:
            (output_dir / f"{style_name}.min.css").write_text(minify_css(css), encoding="utf-8")

    logger.info(
        "themes.export_completed",
        extra={
            "event": "themes.export_completed",
            "output_dir": str(output_dir),
            "style_count": len(style_names),
            "minified": minify,
        },
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return export_themes(output_dir=args.output_dir, styles=args.styles, minify=args.minify)


if __name__ == "__main__":
    raise SystemExit(main())
