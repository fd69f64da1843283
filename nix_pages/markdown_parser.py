r"""Read page metadata out of Markdown source text.

Pages and posts carry their metadata inline rather than in front matter: the
first line is an ``# `` heading holding the title, and posts put their
publication date on the third line::

    # My thoughts on FooBar

    2022-11-22

    Lorem ipsum dolor sit amet...

Example
-------
>>> from nix_pages.markdown_parser import extract_title, parse_post_date
>>> extract_title("# Hello\n\nBody")
'Hello'
>>> parse_post_date("# Hello\n\n2024-03-01\n")
datetime.date(2024, 3, 1)
"""

from __future__ import annotations

import datetime as dt
import typing as typ

from dateutil import parser as date_parser

from ._constants import UNTITLED

TITLE_PREFIX = "# "
DATE_LINE_INDEX = 2

# Tried in order; ISO first, then free-form text with day-first numerals.
DATE_PARSING_STRATEGIES: tuple[typ.Callable[[str], dt.datetime], ...] = (
    date_parser.isoparse,
    lambda text: date_parser.parse(text, dayfirst=True),
    lambda text: date_parser.parse(text, dayfirst=False),
)


def _source_lines(markdown_text: str) -> list[str]:
    return markdown_text.splitlines()


def extract_title(markdown_text: str, fallback: str = UNTITLED) -> str:
    """Return the text of a leading ``# `` heading, or ``fallback``.

    Only the very first line is considered. A heading with no text also yields
    ``fallback`` so titles are never empty.
    """
    lines = _source_lines(markdown_text)
    if not lines or not lines[0].startswith(TITLE_PREFIX):
        return fallback
    title = lines[0][len(TITLE_PREFIX) :].strip()
    return title or fallback


def parse_date(value: str) -> dt.date | None:
    """Parse a free-form date such as ``2024-03-01`` or ``Thu, 21 Oct 2021``.

    Returns ``None`` when the value is blank or no strategy understands it.
    Fields missing from the text (for example the day in ``March 2024``) are
    filled from the current date by :func:`dateutil.parser.parse`.
    """
    text = value.strip()
    if not text:
        return None
    for strategy in DATE_PARSING_STRATEGIES:
        try:
            return strategy(text).date()
        except (ValueError, OverflowError):
            continue
    return None


def parse_post_date(markdown_text: str) -> dt.date | None:
    """Return the date written on the third line of a post, if any."""
    lines = _source_lines(markdown_text)
    if len(lines) <= DATE_LINE_INDEX:
        return None
    return parse_date(lines[DATE_LINE_INDEX])


def check_post_format(markdown_text: str) -> list[str]:
    """Describe deviations from the expected post layout.

    Returns
    -------
    list[str]
        Human-readable problems; empty when line 1 is a heading, line 2 is
        blank, and line 3 holds a parseable date.
    """
    lines = _source_lines(markdown_text)
    problems: list[str] = []
    if not lines or not lines[0].startswith(TITLE_PREFIX):
        problems.append("line 1 must be a '# <title>' heading")
    if len(lines) > 1 and lines[1].strip():
        problems.append("line 2 must be empty")
    if parse_post_date(markdown_text) is None:
        problems.append("line 3 must hold a date such as 2024-01-31")
    return problems


__all__ = [
    "DATE_PARSING_STRATEGIES",
    "check_post_format",
    "extract_title",
    "parse_date",
    "parse_post_date",
]
