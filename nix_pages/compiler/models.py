"""Shared value types used by the page compiler.

The compiler works on already-loaded text. Source files arrive as
:class:`SourceFile` pairs, layouts become :class:`Layout` fragments, and every
compiled artefact is a :class:`Document` keyed by its output path.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from pathlib import PurePosixPath
from types import MappingProxyType

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .pages import HtmlPage


class PageKind(enum.Enum):
    """Variant tag carried by every page; the value doubles as its CSS class."""

    PAGE = "page"
    POST = "post"
    INDEX = "index"


class PageState(enum.Enum):
    """Compile progress of a single page."""

    CREATED = "created"
    RENDERED = "rendered"
    WRAPPED = "wrapped"
    SUBSTITUTED = "substituted"


@dc.dataclass(frozen=True, slots=True)
class SourceFile:
    """Raw text handed to the compiler by a source reader.

    Attributes
    ----------
    virtual_path : str
        Site-relative POSIX path such as ``posts/hello.md``.
    text : str
        File contents.
    """

    virtual_path: str
    text: str

    @property
    def stem(self) -> str:
        """Return the filename without directory or extension."""
        return PurePosixPath(self.virtual_path).stem


@dc.dataclass(frozen=True, slots=True)
class Layout:
    """Named HTML fragment used to wrap page bodies."""

    name: str
    html: str

    @classmethod
    def from_source(cls, source: SourceFile) -> Layout:
        """Build a layout named after the source file stem."""
        return cls(name=source.stem, html=source.text)

    def __str__(self) -> str:
        return self.html


class Document:
    """An output artefact identified by its site-relative path."""

    def __init__(self, path: str, data: str | None = None) -> None:
        if not path.startswith("/"):
            path = f"/{path}"
        self.path = path
        self.data = data

    @property
    def name(self) -> str:
        """Return the stem of the output path (``index`` for ``/a/index.html``)."""
        return PurePosixPath(self.path).stem

    def to_entry(self) -> tuple[str, str]:
        """Return the ``(path, data)`` pair consumed by writers."""
        return self.path, self.data or ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r})"


@dc.dataclass(frozen=True, slots=True)
class RenderContext:
    """Read-only view of the site handed to every ``render`` call.

    Attributes
    ----------
    pages : tuple[HtmlPage, ...]
        Every page in the site, in insertion order and before deduplication.
    variables : Mapping[str, object]
        Site variables; wrapped in a read-only mapping proxy.
    """

    pages: tuple[HtmlPage, ...]
    variables: cabc.Mapping[str, object]

    @classmethod
    def create(
        cls,
        pages: cabc.Iterable[HtmlPage],
        variables: cabc.Mapping[str, object] | None = None,
    ) -> RenderContext:
        """Freeze ``pages`` and ``variables`` into a new context."""
        return cls(
            pages=tuple(pages),
            variables=MappingProxyType(dict(variables or {})),
        )

    def posts(self) -> list[HtmlPage]:
        """Return pages tagged as posts, preserving insertion order."""
        return [page for page in self.pages if page.kind is PageKind.POST]


__all__ = [
    "Document",
    "Layout",
    "PageKind",
    "PageState",
    "RenderContext",
    "SourceFile",
]
