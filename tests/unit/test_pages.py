from __future__ import annotations

from collections.abc import Iterator
import json
from pathlib import Path
import re

from fastapi.testclient import TestClient
import pytest

from theme_gallery.main import app
from theme_gallery.web.routers.gallery import get_themes_dir

SEED_PATTERN = re.compile(r"CategoryStore\.seed\((.*?)\);")


@pytest.fixture
def themes_dir(tmp_path: Path) -> Iterator[Path]:
    app.dependency_overrides[get_themes_dir] = lambda: tmp_path
    yield tmp_path
    app.dependency_overrides.pop(get_themes_dir, None)


def _write_themes(themes_dir: Path, *filenames: str) -> None:
    for filename in filenames:
        (themes_dir / filename).write_text(f"/* {filename} */", encoding="utf-8")


def _seeded_categories(html: str) -> dict[str, list[str]]:
    match = SEED_PATTERN.search(html)
    assert match is not None
    return json.loads(match.group(1))


def test_gallery_page_renders_one_style_and_demo_per_theme(themes_dir: Path) -> None:
    _write_themes(themes_dir, "github.css", "github-dark.css", "github-dark.min.css", "solarized-light.css")
    client = TestClient(app)

    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert html.count("<style") == 3
    assert html.count('class="theme-demo ') == 3
    assert html.count('<div class="highlight">') == 3
    assert ".theme-github-dark { /* github-dark.min.css */ }" in html
    assert "/* github-dark.css */" not in html
    assert 'class="theme-demo unknown-theme" style="display: none;" data-theme="github"' in html
    assert 'class="theme-demo dark-theme" style="display: none;" data-theme="github-dark"' in html
    assert 'class="theme-demo light-theme" style="display: none;" data-theme="solarized-light"' in html


def test_gallery_page_renders_category_summaries_and_filters(themes_dir: Path) -> None:
    _write_themes(themes_dir, "github.css", "github-dark.css", "solarized-light.css", "night-owl.css")
    client = TestClient(app)

    html = client.get("/").text

    assert '<p id="lightThemesList">solarized-light</p>' in html
    assert '<p id="darkThemesList">github-dark, night-owl</p>' in html
    assert '<p id="unknownThemesList">github</p>' in html
    assert '<input type="radio" name="themeFilter" value="light" checked>' in html
    assert '<input type="radio" name="themeFilter" value="dark">' in html
    assert '<input type="radio" name="themeFilter" value="unknown">' in html
    assert 'data-move-theme="github" data-target-category="light"' in html
    assert 'data-move-theme="github" data-target-category="dark"' in html


def test_gallery_page_seeds_session_store_with_server_categories(themes_dir: Path) -> None:
    _write_themes(themes_dir, "github.css", "github-dark.css", "solarized-light.css")
    client = TestClient(app)

    html = client.get("/").text

    assert _seeded_categories(html) == {
        "light": ["solarized-light"],
        "dark": ["github-dark"],
        "unknown": ["github"],
    }
    assert "sessionStorage.getItem(this.key)" in html
    assert "filterThemes('light');" in html


def test_gallery_page_reclassifies_from_filenames_on_every_request(themes_dir: Path) -> None:
    _write_themes(themes_dir, "github.css")
    client = TestClient(app)

    first = _seeded_categories(client.get("/").text)
    _write_themes(themes_dir, "github-dark.css")
    second = _seeded_categories(client.get("/").text)

    assert first == {"light": [], "dark": [], "unknown": ["github"]}
    assert second == {"light": [], "dark": ["github-dark"], "unknown": ["github"]}


def test_gallery_page_is_empty_for_empty_themes_directory(themes_dir: Path) -> None:
    client = TestClient(app)

    response = client.get("/")

    assert response.status_code == 200
    assert "<style" not in response.text
    assert 'class="theme-demo ' not in response.text
    assert _seeded_categories(response.text) == {"light": [], "dark": [], "unknown": []}


def test_gallery_page_escapes_theme_names_in_markup(themes_dir: Path) -> None:
    _write_themes(themes_dir, "a&b.css")
    client = TestClient(app)

    html = client.get("/").text

    assert 'data-theme="a&amp;b"' in html
    assert '<div class="theme-a&amp;b">' in html
    assert '.theme-a\\26 b { /* a&b.css */ }' in html
    assert _seeded_categories(html) == {"light": [], "dark": [], "unknown": ["a&b"]}


def test_gallery_page_fails_when_themes_directory_is_missing(tmp_path: Path) -> None:
    app.dependency_overrides[get_themes_dir] = lambda: tmp_path / "missing"
    client = TestClient(app, raise_server_exceptions=False)
    try:
        response = client.get("/")
    finally:
        app.dependency_overrides.pop(get_themes_dir, None)

    assert response.status_code == 500


def test_gallery_page_serves_bundled_themes() -> None:
    client = TestClient(app)

    html = client.get("/").text

    categories = _seeded_categories(html)
    assert "solarized-light" in categories["light"]
    assert "github-dark" in categories["dark"]
    assert "monokai" in categories["unknown"]
    assert html.count('data-theme="monokai"') == 1
    assert ".theme-monokai { .highlight{background:#272822;" in html


def test_only_the_gallery_route_is_exposed() -> None:
    client = TestClient(app)

    assert client.get("/docs").status_code == 404
    assert client.get("/openapi.json").status_code == 404
    assert client.post("/").status_code == 405
