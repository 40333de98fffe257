from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from theme_gallery.presentation import gallery as gallery_presenter
from theme_gallery.services import highlight as highlight_service
from theme_gallery.services import themes as theme_service
from theme_gallery.settings import settings
from theme_gallery.web import common
from theme_gallery.web.middleware import record_theme_counts

router = APIRouter()


def get_themes_dir() -> Path:
    return settings.themes_dir


@router.get("/", response_class=HTMLResponse)
def gallery_page(
    request: Request,
    themes_dir: Path = Depends(get_themes_dir),
) -> HTMLResponse:
    catalog, stylesheets = theme_service.load_theme_stylesheets(themes_dir)
    record_theme_counts(
        request,
        {
            f"{category}_count": len(names)
            for category, names in catalog.as_category_lists().items()
        },
    )
    context = {
        "page_title": "Highlight Themes",
        "default_filter": gallery_presenter.DEFAULT_FILTER,
        "gallery": gallery_presenter.build_gallery_view_model(
            catalog=catalog,
            stylesheets=stylesheets,
            highlighted_html=highlight_service.highlight_sample(highlight_service.SAMPLE_CODE),
        ),
    }
    return common.templates.TemplateResponse(
        request=request,
        name="gallery.html",
        context=context,
    )
