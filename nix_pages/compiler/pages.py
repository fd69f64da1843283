"""Renderable page variants and their compile protocol.

Every page goes through the same steps when compiled: its variant-specific
``render`` produces a body fragment, the body is wrapped between the
``header`` and ``footer`` layouts inside a ``<main>`` element, and the wrapped
HTML has its ``{{placeholders}}`` substituted to become the page ``data``.

Variants differ only in where they are written, how they get their title, and
what they append to the rendered Markdown:

- ``HtmlPage``: a given path and an empty body.
- ``MarkdownPage``: a given path and a Markdown body.
- ``NamedPage``: ``/<stem>/index.html`` and a Markdown body.
- ``PostPage``: ``/posts/<stem>/index.html``, Markdown plus the highlight
  stylesheet link.
- ``IndexPage``: ``/index.html``, Markdown plus the list of posts.

Example
-------
>>> from nix_pages.compiler import Layout, NamedPage, RenderContext, SourceFile
>>> page = NamedPage(SourceFile("pages/about.md", "# About\\n\\nHi"))
>>> page.path, page.title
('/about/index.html', 'About')
>>> docs = page.compile({}, RenderContext.create([page]))  # doctest: +SKIP
"""

from __future__ import annotations

import datetime as dt
import functools
import typing as typ
from pathlib import PurePosixPath

from nix_pages._constants import (
    FOOTER_SLOT,
    HEADER_SLOT,
    HIGHLIGHT_STYLESHEET_LINK,
    HIGHLIGHT_STYLESHEET_PATH,
    HOME_TITLE,
    INDEX_PATH,
    PAGE_PATH_TEMPLATE,
    POST_LINK_TEMPLATE,
    POST_PATH_TEMPLATE,
)
from nix_pages.errors import MarkdownConversionError
from nix_pages.markdown_parser import extract_title, parse_post_date

from .listing import PostListRenderer
from .models import Document, PageKind, PageState, RenderContext, SourceFile
from .renderer import HtmlContentRenderer, MarkdownConverter
from .substitution import page_variables, substitute

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import Layout


@functools.cache
def _default_converter() -> HtmlContentRenderer:
    return HtmlContentRenderer()


@functools.cache
def _default_listing() -> PostListRenderer:
    return PostListRenderer()


class HtmlPage(Document):
    """A page with a title that is wrapped in layouts and substituted.

    The base variant renders an empty body; subclasses override ``render``.
    """

    kind: typ.ClassVar[PageKind] = PageKind.PAGE

    def __init__(
        self,
        path: str,
        *,
        title: str | None = None,
        source_path: str | None = None,
        assets: cabc.Iterable[Document] = (),
    ) -> None:
        super().__init__(path)
        self.title = title or PurePosixPath(self.path).name
        self.source_path = source_path or self.path
        self.assets: tuple[Document, ...] = tuple(assets)
        self.state = PageState.CREATED

    def render(self, context: RenderContext) -> str:  # noqa: ARG002
        """Return the body fragment placed inside ``<main>``."""
        return ""

    def wrap(self, body: str, layouts: cabc.Mapping[str, Layout]) -> str:
        """Surround ``body`` with the header and footer layouts."""
        header = str(layouts.get(HEADER_SLOT, ""))
        footer = str(layouts.get(FOOTER_SLOT, ""))
        return (
            f"{header}\n"
            f'<main class="{self.kind.value} {self.name}">{body}</main>\n'
            f"{footer}\n"
        )

    def compile(
        self, layouts: cabc.Mapping[str, Layout], context: RenderContext
    ) -> list[Document]:
        """Render, wrap, and substitute this page, storing the result in ``data``.

        Parameters
        ----------
        layouts : Mapping[str, Layout]
            Layouts keyed by name; only ``header`` and ``footer`` are used.
        context : RenderContext
            Sibling pages and site variables.

        Returns
        -------
        list[Document]
            This page followed by its asset documents.

        Raises
        ------
        MarkdownConversionError
            If the page body cannot be converted to HTML.
        """
        if self.state is PageState.SUBSTITUTED:
            return [self, *self.assets]

        body = self.render(context)
        self.state = PageState.RENDERED

        html = self.wrap(body, layouts)
        self.state = PageState.WRAPPED

        variables = page_variables(context.variables, title=self.title, html=html)
        self.data = substitute(html, variables)
        self.state = PageState.SUBSTITUTED
        return [self, *self.assets]


class MarkdownPage(HtmlPage):
    """A page whose body is rendered from Markdown source."""

    def __init__(
        self,
        path: str,
        markdown: str,
        *,
        title: str | None = None,
        source_path: str | None = None,
        converter: MarkdownConverter | None = None,
        assets: cabc.Iterable[Document] = (),
    ) -> None:
        super().__init__(
            path,
            title=title or extract_title(markdown),
            source_path=source_path,
            assets=assets,
        )
        self.markdown = markdown
        self.converter = converter or _default_converter()

    def render_markdown(self) -> str:
        """Convert the page source to HTML, naming the source on failure."""
        try:
            return self.converter.convert(self.markdown)
        except Exception as exc:
            raise MarkdownConversionError(self.source_path) from exc

    def render(self, context: RenderContext) -> str:  # noqa: ARG002
        """Return the converted Markdown body."""
        return self.render_markdown()


class NamedPage(MarkdownPage):
    """A standalone page written to ``/<stem>/index.html``."""

    def __init__(
        self, source: SourceFile, *, converter: MarkdownConverter | None = None
    ) -> None:
        super().__init__(
            PAGE_PATH_TEMPLATE.format(stem=source.stem),
            source.text,
            source_path=source.virtual_path,
            converter=converter,
        )


class PostPage(MarkdownPage):
    """A dated blog post written to ``/posts/<stem>/index.html``.

    Attributes
    ----------
    date : datetime.date
        Date read from the third source line, or ``today`` when missing or
        unparseable.
    date_is_fallback : bool
        ``True`` when ``date`` was not read from the source.
    link : str
        URL of the post directory, used by the index listing.
    """

    kind: typ.ClassVar[PageKind] = PageKind.POST

    def __init__(
        self,
        source: SourceFile,
        *,
        converter: MarkdownConverter | None = None,
        today: dt.date | None = None,
        stylesheet: str | None = None,
    ) -> None:
        assets: tuple[Document, ...] = ()
        if stylesheet is not None:
            assets = (Document(HIGHLIGHT_STYLESHEET_PATH, stylesheet),)
        super().__init__(
            POST_PATH_TEMPLATE.format(stem=source.stem),
            source.text,
            source_path=source.virtual_path,
            converter=converter,
            assets=assets,
        )
        parsed = parse_post_date(source.text)
        self.date_is_fallback = parsed is None
        self.date: dt.date = parsed or today or dt.date.today()
        self.link = POST_LINK_TEMPLATE.format(stem=source.stem)

    def render(self, context: RenderContext) -> str:  # noqa: ARG002
        """Return the Markdown body followed by the highlight stylesheet link."""
        return self.render_markdown() + HIGHLIGHT_STYLESHEET_LINK


class IndexPage(MarkdownPage):
    """The site home page: lead Markdown followed by a list of every post."""

    kind: typ.ClassVar[PageKind] = PageKind.INDEX

    def __init__(
        self,
        source: SourceFile,
        *,
        converter: MarkdownConverter | None = None,
        listing: PostListRenderer | None = None,
    ) -> None:
        super().__init__(
            INDEX_PATH,
            source.text,
            title=HOME_TITLE,
            source_path=source.virtual_path,
            converter=converter,
        )
        self.listing = listing or _default_listing()

    def render(self, context: RenderContext) -> str:
        """Return the Markdown body followed by the newest-first post list."""
        posts = typ.cast("list[PostPage]", context.posts())
        return self.render_markdown() + self.listing.render(posts)


__all__ = ["HtmlPage", "IndexPage", "MarkdownPage", "NamedPage", "PostPage"]
