"""Render the post listing shown on the index page.

The listing is a Jinja template so the markup lives next to the other package
templates; the compiler only decides which posts appear and in which order.
"""

from __future__ import annotations

import operator
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from nix_pages._constants import LISTING_DATE_FORMAT

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .pages import PostPage

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def sort_posts(posts: cabc.Iterable[PostPage]) -> list[PostPage]:
    """Return ``posts`` newest first; posts sharing a date keep their order."""
    return sorted(posts, key=operator.attrgetter("date"), reverse=True)


class PostListRenderer:
    """Render an ``<ul>`` linking to every post."""

    def __init__(
        self,
        *,
        templates_dir: Path | None = None,
        date_format: str = LISTING_DATE_FORMAT,
    ) -> None:
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.date_format = date_format
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("post_list.jinja")

    def render(self, posts: cabc.Iterable[PostPage]) -> str:
        """Render ``posts`` sorted newest first; no posts gives an empty list."""
        return self.template.render(
            posts=sort_posts(posts), date_format=self.date_format
        )


__all__ = ["PostListRenderer", "sort_posts"]
