"""Aggregate layouts and pages and compile them into unique output documents.

:class:`Site` is the single owner of everything compiled in one build. It
renders every page against the same read-only :class:`RenderContext`, flattens
each page's assets into the output, and then keeps only the first document
for every output path.

Example
-------
>>> from nix_pages.compiler import Layout, NamedPage, Site, SourceFile
>>> site = Site([Layout("header", "<h1>{{title}}</h1>")])
>>> _ = site.add(NamedPage(SourceFile("pages/about.md", "# About")))
>>> [doc.path for doc in site.compile({})]  # doctest: +SKIP
['/about/index.html']
"""

from __future__ import annotations

import logging
import typing as typ

from .models import Document, Layout, RenderContext
from .pages import HtmlPage

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)


def deduplicate(documents: cabc.Iterable[Document]) -> list[Document]:
    """Keep the first document for each output path, preserving order."""
    seen: dict[str, Document] = {}
    for document in documents:
        if document.path in seen:
            logger.debug("dropping duplicate output %s", document.path)
            continue
        seen[document.path] = document
    return list(seen.values())


class Site:
    """Collection of layouts and documents compiled together."""

    def __init__(self, layouts: cabc.Iterable[Layout] = ()) -> None:
        """Index ``layouts`` by name; a later layout replaces an earlier namesake."""
        self.layouts: dict[str, Layout] = {layout.name: layout for layout in layouts}
        self._documents: list[Document] = []

    def add(self, documents: Document | cabc.Iterable[Document]) -> Site:
        """Append one document or many, keeping duplicates until compile time."""
        if isinstance(documents, Document):
            self._documents.append(documents)
        else:
            self._documents.extend(documents)
        return self

    @property
    def documents(self) -> list[Document]:
        """Return every added document in insertion order."""
        return list(self._documents)

    @property
    def pages(self) -> list[HtmlPage]:
        """Return the added documents that are pages."""
        return [doc for doc in self._documents if isinstance(doc, HtmlPage)]

    @property
    def posts(self) -> list[HtmlPage]:
        """Return the pages tagged as posts."""
        return RenderContext.create(self.pages).posts()

    def compile(
        self, variables: cabc.Mapping[str, object] | None = None
    ) -> list[Document]:
        """Compile every page and return unique documents in insertion order.

        Parameters
        ----------
        variables : Mapping[str, object], optional
            Site variables substituted into every page.

        Returns
        -------
        list[Document]
            Compiled pages and their assets; for paths that occur more than once
            only the first document added survives.

        Raises
        ------
        MarkdownConversionError
            If any page fails to render. No partial output is returned.
        """
        context = RenderContext.create(self.pages, variables)
        compiled: list[Document] = []
        for document in self._documents:
            if isinstance(document, HtmlPage):
                compiled.extend(document.compile(self.layouts, context))
            else:
                compiled.append(document)
        return deduplicate(compiled)


__all__ = ["Site", "deduplicate"]
