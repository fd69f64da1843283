"""Unit tests for the page variants and their compile state machine.

The tests exercise output path shapes, title derivation, post date fallback,
the ``<main>`` wrapper and layout slots, placeholder substitution with the
per-page ``title``/``bytes`` entries, and the index listing order. A
``StubConverter`` stands in for Markdown rendering wherever the exact HTML
produced by python-markdown is irrelevant.

Usage
-----
Run ``pytest tests/test_pages.py -v``.
"""

from __future__ import annotations

import datetime as dt

import pytest
from bs4 import BeautifulSoup

from nix_pages.compiler import (
    HtmlContentRenderer,
    HtmlPage,
    IndexPage,
    Layout,
    MarkdownPage,
    NamedPage,
    PageKind,
    PageState,
    PostPage,
    RenderContext,
    SourceFile,
)
from nix_pages.compiler.substitution import count_bytes
from nix_pages.errors import MarkdownConversionError

TODAY = dt.date(2030, 6, 15)


class StubConverter:
    """Wrap Markdown text in a paragraph without parsing it."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def convert(self, text: str) -> str:
        self.calls.append(text)
        return f"<p>{text}</p>"


class FailingConverter:
    """Simulate a converter rejecting malformed input."""

    def convert(self, text: str) -> str:
        msg = f"cannot parse {text!r}"
        raise RuntimeError(msg)


def _post(name: str, date_line: str, title: str | None = None) -> PostPage:
    heading = title or name.title()
    source = SourceFile(f"posts/{name}.md", f"# {heading}\n\n{date_line}\n\nBody")
    return PostPage(source, converter=StubConverter(), today=TODAY)


def test_named_page_path_and_title() -> None:
    """Generic pages live in a directory named after their source stem."""
    page = NamedPage(SourceFile("pages/about.md", "# About us\n\nText"))
    assert page.path == "/about/index.html"
    assert page.title == "About us"
    assert page.kind is PageKind.PAGE


def test_named_page_title_fallback() -> None:
    """Sources without a leading ``# `` heading are titled ``Untitled``."""
    page = NamedPage(SourceFile("pages/notes.md", "Hello\n\n# Later"))
    assert page.title == "Untitled"


def test_html_page_title_defaults_to_basename() -> None:
    """Plain pages without a title fall back to their output filename."""
    page = HtmlPage("/feeds/list.html")
    assert page.title == "list.html"
    assert page.render(RenderContext.create([page])) == ""


def test_markdown_page_keeps_explicit_title() -> None:
    """An explicit title wins over the Markdown heading."""
    page = MarkdownPage("/x/index.html", "# Heading", title="Chosen")
    assert page.title == "Chosen"


def test_post_path_link_and_date() -> None:
    """Posts live under ``/posts`` and read their date from line three."""
    post = _post("hello", "2024-03-01")
    assert post.path == "/posts/hello/index.html"
    assert post.link == "/posts/hello"
    assert post.date == dt.date(2024, 3, 1)
    assert not post.date_is_fallback
    assert post.kind is PageKind.POST


@pytest.mark.parametrize(
    "date_line", ["Oct 21 2021", "October 21st, 2021", "Thu, 21 Oct 2021"]
)
def test_post_date_accepts_written_out_dates(date_line: str) -> None:
    """Dates written in prose form are read rather than replaced by today."""
    post = _post("prose", date_line)
    assert post.date == dt.date(2021, 10, 21)
    assert not post.date_is_fallback


@pytest.mark.parametrize("date_line", ["", "someday", "31-31-2024"])
def test_post_date_falls_back_to_today(date_line: str) -> None:
    """A missing or unparseable date becomes the reference date."""
    post = _post("undated", date_line)
    assert post.date == TODAY
    assert post.date_is_fallback


def test_post_date_fallback_for_short_source() -> None:
    """A post with fewer than three lines still gets a date."""
    post = PostPage(SourceFile("posts/tiny.md", "# Tiny"), today=TODAY)
    assert post.date == TODAY


def test_post_render_appends_stylesheet_link() -> None:
    """Post bodies end with the syntax highlighting stylesheet link."""
    post = _post("styled", "2024-01-01")
    body = post.render(RenderContext.create([post]))
    assert body.startswith("<p># Styled")
    assert body.endswith('<link rel="stylesheet" href="/public/highlight.css">')


def test_post_stylesheet_asset_is_emitted() -> None:
    """Posts given a stylesheet emit it as an extra document."""
    source = SourceFile("posts/a.md", "# A\n\n2024-01-01\n")
    post = PostPage(source, converter=StubConverter(), stylesheet=".highlight{}")
    documents = post.compile({}, RenderContext.create([post]))
    assert [doc.path for doc in documents] == [
        "/posts/a/index.html",
        "/public/highlight.css",
    ]
    assert documents[1].data == ".highlight{}"


def test_index_page_identity() -> None:
    """The index is always ``/index.html`` titled ``Home``."""
    index = IndexPage(SourceFile("pages/index.md", "# Welcome"))
    assert index.path == "/index.html"
    assert index.title == "Home"
    assert index.kind is PageKind.INDEX


def test_index_lists_posts_newest_first() -> None:
    """Posts are listed by date, newest first."""
    posts = [
        _post("first", "2024-01-01"),
        _post("second", "2023-05-05"),
        _post("third", "2025-12-31"),
    ]
    index = IndexPage(SourceFile("pages/index.md", "Hi"), converter=StubConverter())
    context = RenderContext.create([*posts, index])

    soup = BeautifulSoup(index.render(context), "html.parser")
    datetimes = [time["datetime"] for time in soup.select("ul.list li time")]
    assert datetimes == ["2025-12-31", "2024-01-01", "2023-05-05"]


def test_index_sort_is_stable_for_equal_dates() -> None:
    """Posts sharing a date keep their insertion order."""
    posts = [_post(name, "2024-02-02") for name in ("alpha", "beta", "gamma")]
    index = IndexPage(SourceFile("pages/index.md", ""), converter=StubConverter())
    soup = BeautifulSoup(
        index.render(RenderContext.create([index, *posts])), "html.parser"
    )
    links = [a["href"] for a in soup.select("ul.list a")]
    assert links == ["/posts/alpha", "/posts/beta", "/posts/gamma"]


def test_index_item_content() -> None:
    """Each item links to the post and shows its title and month/year."""
    post = _post("a", "2024-03-01", title="A")
    index = IndexPage(SourceFile("pages/index.md", ""), converter=StubConverter())
    soup = BeautifulSoup(
        index.render(RenderContext.create([post, index])), "html.parser"
    )
    item = soup.select_one("ul.list li")
    assert item is not None, "expected one list item"
    assert item.select_one("a")["href"] == "/posts/a"
    assert item.select_one("h3").get_text(strip=True) == "A"
    assert item.select_one("time").get_text(strip=True) == "Mar, 2024"


def test_index_without_posts_renders_empty_list() -> None:
    """Zero posts still produce an empty ``<ul>``."""
    pages = [NamedPage(SourceFile("pages/about.md", "# About"))]
    index = IndexPage(SourceFile("pages/index.md", ""), converter=StubConverter())
    soup = BeautifulSoup(
        index.render(RenderContext.create([*pages, index])), "html.parser"
    )
    listing = soup.select_one("ul.list")
    assert listing is not None, "expected the list element to be present"
    assert listing.select("li") == []


def test_compile_wraps_and_substitutes() -> None:
    """Compiled data is header, ``<main>`` body and footer with placeholders resolved."""
    page = NamedPage(
        SourceFile("pages/about.md", "# About"), converter=StubConverter()
    )
    layouts = {
        "header": Layout("header", "<title>{{title}} | {{name}}</title>"),
        "footer": Layout("footer", "<footer>{{bytes}} {{missing}}</footer>"),
    }
    context = RenderContext.create([page], {"name": "Blog"})
    page.compile(layouts, context)

    assert page.state is PageState.SUBSTITUTED
    assert page.data is not None
    assert page.data.startswith("<title>About | Blog</title>")
    assert '<main class="page index"><p># About</p></main>' in page.data
    assert "{{missing}}" in page.data

    wrapped = page.wrap("<p># About</p>", layouts)
    assert f"<footer>{count_bytes(wrapped)} " in page.data


def test_missing_layouts_render_as_empty() -> None:
    """Pages compile without header or footer layouts."""
    page = NamedPage(SourceFile("pages/bare.md", "x"), converter=StubConverter())
    page.compile({}, RenderContext.create([page]))
    assert page.data is not None
    assert page.data.strip() == '<main class="page index"><p>x</p></main>'


def test_compile_is_terminal() -> None:
    """A compiled page is not rendered a second time."""
    converter = StubConverter()
    page = NamedPage(SourceFile("pages/once.md", "# Once"), converter=converter)
    context = RenderContext.create([page])
    first = page.compile({}, context)
    data = page.data
    second = page.compile({}, RenderContext.create([page], {"title": "other"}))
    assert first == second
    assert page.data == data
    assert len(converter.calls) == 1


def test_conversion_failure_names_source() -> None:
    """Converter errors propagate as ``MarkdownConversionError``."""
    page = NamedPage(
        SourceFile("pages/broken.md", "# Broken"), converter=FailingConverter()
    )
    with pytest.raises(MarkdownConversionError) as excinfo:
        page.compile({}, RenderContext.create([page]))
    assert excinfo.value.source_path == "pages/broken.md"
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert page.state is PageState.CREATED


def test_render_context_is_read_only() -> None:
    """Pages cannot mutate the shared variables."""
    context = RenderContext.create([], {"name": "Blog"})
    with pytest.raises(TypeError):
        context.variables["name"] = "changed"  # type: ignore[index]


def test_real_renderer_highlights_code() -> None:
    """The default renderer produces highlighted blocks tagged with a language."""
    renderer = HtmlContentRenderer()
    html = renderer.convert("# T\n\n```python,ignore\nprint('hi')\n```\n")
    soup = BeautifulSoup(html, "html.parser")
    block = soup.select_one("div.highlight")
    assert block is not None, "expected a highlighted code block"
    assert block.get("data-language") == "python"
    assert soup.select_one("h1")["id"] == "t"
    assert ".highlight" in renderer.stylesheet
