"""Filesystem tests for :class:`nix_pages.build.SiteBuilder`.

Each test lays out a miniature site under ``tmp_path`` (config, layouts,
posts, pages and a ``public`` directory), runs the builder, and inspects the
written files with BeautifulSoup.

Usage
-----
Run ``pytest tests/test_build.py -v``.
"""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_mock import MockerFixture

from nix_pages.build import SiteBuilder, clean_output, read_sources, write_documents
from nix_pages.compiler import Document
from nix_pages.config import SiteConfigError, load_site_config
from nix_pages.errors import MarkdownConversionError

TODAY = dt.date(2030, 1, 2)


def _write(root: Path, relative: str, text: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Create a small site with two posts, two pages and a public asset."""
    root = tmp_path / "blog"
    _write(root, "_config.yml", "name: Bunny\nsrc: ./\ndest: ./build\n")
    _write(root, "_layouts/header.html", "<title>{{title}} | {{name}}</title>\n")
    _write(root, "_layouts/footer.html", "<footer>{{bytes}} bytes</footer>\n")
    _write(root, "posts/older.md", "# Older\n\n2020-10-15\n\nOld news.\n")
    _write(root, "posts/newer.md", "# Newer\n\n2021-10-21\n\nFresh.\n")
    _write(root, "pages/about.md", "# About\n\nAll about us.\n")
    _write(root, "pages/index.md", "Hello world\n")
    _write(root, "public/style.css", "body { color: red; }\n")
    return root


def _builder(root: Path, **kwargs: object) -> SiteBuilder:
    config = load_site_config(root / "_config.yml")
    return SiteBuilder(config, today=TODAY, **kwargs)  # type: ignore[arg-type]


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_read_sources_returns_virtual_paths(site_root: Path) -> None:
    """Sources are keyed by POSIX paths relative to the site root."""
    sources = read_sources(site_root, "posts/*.md")
    assert [source.virtual_path for source in sources] == [
        "posts/newer.md",
        "posts/older.md",
    ]
    assert sources[0].stem == "newer"


def test_run_writes_expected_tree(site_root: Path) -> None:
    """Every page, the stylesheet and the public directory are written."""
    written = _builder(site_root).run()
    build = site_root / "build"

    relative = sorted(path.relative_to(build).as_posix() for path in written)
    assert relative == [
        "about/index.html",
        "index.html",
        "posts/newer/index.html",
        "posts/older/index.html",
        "public",
        "public/highlight.css",
    ]
    assert (build / "public" / "style.css").read_text(encoding="utf-8").startswith(
        "body"
    )
    assert ".highlight" in (build / "public" / "highlight.css").read_text(
        encoding="utf-8"
    )


def test_pages_are_wrapped_and_substituted(site_root: Path) -> None:
    """Layouts wrap each page and placeholders are resolved per page."""
    _builder(site_root).run()
    soup = _soup(site_root / "build" / "posts" / "older" / "index.html")

    assert soup.title is not None
    assert soup.title.get_text() == "Older | Bunny"
    main = soup.select_one("main")
    assert main is not None
    assert main["class"] == ["post", "index"]
    footer = soup.select_one("footer")
    assert footer is not None
    assert footer.get_text().endswith(" bytes")
    assert footer.get_text().split()[0].isdigit()
    assert soup.select_one('link[href="/public/highlight.css"]') is not None


def test_index_lists_posts_newest_first(site_root: Path) -> None:
    """The home page lists posts by date with month/year labels."""
    _builder(site_root).run()
    soup = _soup(site_root / "build" / "index.html")

    assert soup.title is not None
    assert soup.title.get_text() == "Home | Bunny"
    items = soup.select("ul.list li")
    assert [li.select_one("a")["href"] for li in items] == [
        "/posts/newer",
        "/posts/older",
    ]
    assert [li.select_one("time").get_text(strip=True) for li in items] == [
        "Oct, 2021",
        "Oct, 2020",
    ]


def test_cli_variables_are_substituted(site_root: Path) -> None:
    """Overrides added to the config reach the templates."""
    config = load_site_config(site_root / "_config.yml").with_overrides(
        {"name": "Override"}
    )
    SiteBuilder(config, today=TODAY).run()
    soup = _soup(site_root / "build" / "about" / "index.html")
    assert soup.title is not None
    assert soup.title.get_text() == "About | Override"


def test_run_cleans_stale_output(site_root: Path) -> None:
    """Files from earlier builds are removed before writing."""
    stale = site_root / "build" / "old" / "index.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("stale", encoding="utf-8")
    _builder(site_root).run()
    assert not stale.exists()


def test_user_highlight_stylesheet_wins(site_root: Path) -> None:
    """A ``public/highlight.css`` in the sources replaces the generated one."""
    _write(site_root, "public/highlight.css", "/* mine */\n")
    _builder(site_root).run()
    css = (site_root / "build" / "public" / "highlight.css").read_text(
        encoding="utf-8"
    )
    assert css == "/* mine */\n"


def test_undated_post_warns_and_uses_today(
    site_root: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Posts without a date are built with the reference date and a warning."""
    _write(site_root, "posts/undated.md", "# Undated\n\nsoon\n\nBody\n")
    with caplog.at_level(logging.WARNING, logger="nix_pages.build"):
        _builder(site_root).run()

    assert any("posts/undated.md" in message for message in caplog.messages)
    soup = _soup(site_root / "build" / "index.html")
    dates = [time["datetime"] for time in soup.select("ul.list time")]
    assert dates[0] == TODAY.isoformat()


def test_post_named_index_is_skipped_with_warning(
    site_root: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """``posts/index.md`` is not built and the skip is logged."""
    _write(site_root, "posts/index.md", "# Index\n\n2022-01-01\n\nBody\n")
    with caplog.at_level(logging.WARNING, logger="nix_pages.build"):
        site = _builder(site_root).build_site()

    assert [post.source_path for post in site.posts] == [
        "posts/newer.md",
        "posts/older.md",
    ]
    assert any(
        "posts/index.md" in message and "skipped" in message
        for message in caplog.messages
    ), "expected a warning naming posts/index.md"


def test_conversion_failure_aborts_without_output(
    site_root: Path, mocker: MockerFixture
) -> None:
    """A failing page stops the build before anything is written."""
    builder = _builder(site_root)

    def _explode(text: str) -> str:
        if text.startswith("# About"):
            msg = "malformed"
            raise ValueError(msg)
        return f"<p>{text}</p>"

    mocker.patch.object(builder.renderer, "convert", side_effect=_explode)
    with pytest.raises(MarkdownConversionError, match=r"pages/about\.md"):
        builder.run()
    assert not (site_root / "build").exists()


def test_write_documents_skips_existing_without_force(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Existing files are kept when ``force`` is off."""
    target = tmp_path / "a" / "index.html"
    target.parent.mkdir(parents=True)
    target.write_text("keep", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="nix_pages.build"):
        written = write_documents(
            [Document("/a/index.html", "new"), Document("/b/index.html", "b")],
            tmp_path,
            force=False,
        )

    assert written == [tmp_path / "b" / "index.html"]
    assert target.read_text(encoding="utf-8") == "keep"
    assert any("skipped" in message for message in caplog.messages)


def test_clean_output_refuses_source_directory(tmp_path: Path) -> None:
    """The output directory may not be the source tree or contain it."""
    with pytest.raises(SiteConfigError):
        clean_output(tmp_path, tmp_path)
    with pytest.raises(SiteConfigError):
        clean_output(tmp_path, tmp_path / "site")
