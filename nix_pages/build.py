"""Read a nix site from disk, compile it, and write the output directory.

This module is the filesystem boundary around :mod:`nix_pages.compiler`. It
exposes :class:`SiteBuilder`, which consumes a
:class:`~nix_pages.config.SiteConfig`, reads layouts, posts and pages into
:class:`~nix_pages.compiler.SourceFile` values, instantiates the page variants,
and writes every compiled document below ``config.dest``. The ``public/``
directory is copied verbatim afterwards.

Example
-------
>>> from pathlib import Path
>>> from nix_pages.config import load_site_config
>>> from nix_pages.build import SiteBuilder
>>> config = load_site_config(Path("_config.yml"))  # doctest: +SKIP
>>> SiteBuilder(config).run()  # doctest: +SKIP
[PosixPath('build/posts/first-post/index.html'), ...]
"""

from __future__ import annotations

import datetime as dt
import logging
import shutil
import typing as typ
from pathlib import Path

from ._constants import (
    INDEX_SOURCE,
    LAYOUTS_GLOB,
    PAGES_GLOB,
    POSTS_GLOB,
    PUBLIC_DIR,
)
from .compiler import (
    HtmlContentRenderer,
    IndexPage,
    Layout,
    NamedPage,
    PostPage,
    Site,
    SourceFile,
)
from .compiler.substitution import find_placeholders
from .config import SiteConfigError
from .markdown_parser import check_post_format

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .compiler import Document
    from .config import SiteConfig

logger = logging.getLogger(__name__)


def read_sources(root: Path, pattern: str) -> list[SourceFile]:
    """Return files under ``root`` matching ``pattern``, sorted by path."""
    sources: list[SourceFile] = []
    for path in sorted(root.glob(pattern)):
        if not path.is_file():
            continue
        virtual_path = path.relative_to(root).as_posix()
        sources.append(SourceFile(virtual_path, path.read_text(encoding="utf-8")))
    return sources


def write_documents(
    documents: cabc.Iterable[Document], dest: Path, *, force: bool = True
) -> list[Path]:
    """Write each document to ``dest`` joined with its output path.

    Parameters
    ----------
    documents : Iterable[Document]
        Compiled documents with unique, ``/``-prefixed paths.
    dest : Path
        Output root directory.
    force : bool, optional
        Overwrite existing files. When ``False`` existing files are skipped
        with a warning.

    Returns
    -------
    list[Path]
        Paths actually written, in document order.
    """
    written: list[Path] = []
    for document in documents:
        relative, data = document.to_entry()
        target = dest / relative.lstrip("/")
        if target.exists() and not force:
            logger.warning("skipped %s: already exists", target)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(data, encoding="utf-8")
        logger.debug("wrote %s", target)
        written.append(target)
    return written


def _copy_if_missing(src: str, dst: str) -> str:
    """Copy like :func:`shutil.copy2` but keep a file that already exists."""
    if Path(dst).exists():
        logger.warning("skipped %s: already exists", dst)
        return dst
    return shutil.copy2(src, dst)


def clean_output(dest: Path, src: Path) -> None:
    """Remove the contents of ``dest``, refusing to touch the source tree.

    Raises
    ------
    SiteConfigError
        If ``dest`` is the source directory or one of its ancestors.
    """
    resolved_dest = dest.resolve()
    resolved_src = src.resolve()
    if resolved_dest == resolved_src or resolved_dest in resolved_src.parents:
        msg = f"Refusing to clean '{dest}': it contains the site sources."
        raise SiteConfigError(msg)
    if not dest.exists():
        return
    for child in dest.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


class SiteBuilder:
    """Compile the sources named by a site configuration into HTML files."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        renderer: HtmlContentRenderer | None = None,
        today: dt.date | None = None,
        force: bool = True,
        clean: bool = True,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : SiteConfig
            Resolved site configuration.
        renderer : HtmlContentRenderer, optional
            Markdown converter; defaults to one using ``config.pygments_style``.
        today : datetime.date, optional
            Reference date for posts without a readable date. Defaults to the
            current date.
        force : bool, optional
            Overwrite existing output files.
        clean : bool, optional
            Empty the output directory before writing.
        """
        self.config = config
        self.renderer = renderer or HtmlContentRenderer(config.pygments_style)
        self.today = today or dt.date.today()
        self.force = force
        self.clean = clean

    def build_site(self) -> Site:
        """Read every source file and return a populated :class:`Site`."""
        src = self.config.src
        layouts = [
            Layout.from_source(source) for source in read_sources(src, LAYOUTS_GLOB)
        ]
        stylesheet = self.renderer.stylesheet

        posts: list[PostPage] = []
        for source in read_sources(src, POSTS_GLOB):
            if source.stem == "index":
                logger.warning(
                    "skipped %s: posts may not be named 'index'",
                    source.virtual_path,
                )
                continue
            posts.append(
                PostPage(
                    source,
                    converter=self.renderer,
                    today=self.today,
                    stylesheet=stylesheet,
                )
            )
        pages = [
            NamedPage(source, converter=self.renderer)
            for source in read_sources(src, PAGES_GLOB)
            if source.virtual_path != INDEX_SOURCE
        ]
        index = [
            IndexPage(source, converter=self.renderer)
            for source in read_sources(src, INDEX_SOURCE)
        ]

        for post in posts:
            problems = check_post_format(post.markdown)
            if problems:
                logger.warning(
                    "%s is not formatted as a post: %s",
                    post.source_path,
                    "; ".join(problems),
                )
            if post.date_is_fallback:
                logger.warning(
                    "%s has no readable date; using %s",
                    post.source_path,
                    post.date.isoformat(),
                )

        logger.debug(
            "read %d layouts, %d posts, %d pages, %d index",
            len(layouts),
            len(posts),
            len(pages),
            len(index),
        )
        return Site(layouts).add(posts).add(pages).add(index)

    def run(self) -> list[Path]:
        """Compile the site and write it to ``config.dest``.

        Returns
        -------
        list[Path]
            Paths of the written documents, followed by the copied ``public``
            directory when present.

        Raises
        ------
        MarkdownConversionError
            If any page fails to convert; nothing is written in that case.
        SiteConfigError
            If the output directory would overlap the sources.
        """
        site = self.build_site()
        documents = site.compile(self.config.variables)
        for document in documents:
            leftover = find_placeholders(document.data or "")
            if leftover and document.path.endswith(".html"):
                logger.debug(
                    "%s keeps unresolved placeholders: %s",
                    document.path,
                    ", ".join(leftover),
                )

        dest = self.config.dest
        if self.clean:
            clean_output(dest, self.config.src)
        dest.mkdir(parents=True, exist_ok=True)
        written = write_documents(documents, dest, force=self.force)

        public = self.config.src / PUBLIC_DIR
        if public.is_dir():
            target = dest / PUBLIC_DIR
            copy = shutil.copy2 if self.force else _copy_if_missing
            shutil.copytree(public, target, copy_function=copy, dirs_exist_ok=True)
            logger.debug("copied %s to %s", public, target)
            written.append(target)
        return written


__all__ = ["SiteBuilder", "clean_output", "read_sources", "write_documents"]
