r"""Resolve ``{{name}}`` placeholders in compiled HTML.

Placeholders are literal, case-sensitive tokens. Every known key is replaced
wherever it occurs; unknown tokens are left untouched so templates can carry
placeholders meant for a later stage.

Examples
--------
>>> substitute("<h1>{{title}}</h1>{{missing}}", {"title": "Hi"})
'<h1>Hi</h1>{{missing}}'
>>> count_bytes("  <p>Hi</p>  ")
9
"""

from __future__ import annotations

import re
import typing as typ

from nix_pages._constants import PLACEHOLDER_TEMPLATE

if typ.TYPE_CHECKING:
    import collections.abc as cabc

WHITESPACE_PATTERN = re.compile(r"\s+")
PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_.-]+)\}\}")


def substitute(html: str, variables: cabc.Mapping[str, object]) -> str:
    """Replace every ``{{key}}`` token in ``html`` with ``str(value)``.

    Parameters
    ----------
    html : str
        Template text containing placeholder tokens.
    variables : Mapping[str, object]
        Placeholder names and their values, applied in iteration order.

    Returns
    -------
    str
        ``html`` with known placeholders replaced and unknown ones preserved.

    Notes
    -----
    Replacement is sequential, not simultaneous. A value that itself contains
    a ``{{key}}`` token is resolved only if that key comes later in
    ``variables``. A post titled ``About {{name}}`` therefore keeps the token
    where its own header shows ``{{title}}`` (``title`` is applied after
    ``name``) while the index, which embeds the title in its body, shows it
    resolved.
    """
    for key, value in variables.items():
        html = html.replace(PLACEHOLDER_TEMPLATE.format(name=key), str(value))
    return html


def count_bytes(html: str) -> int:
    """Return the UTF-8 size of ``html`` once all whitespace runs are removed."""
    return len(WHITESPACE_PATTERN.sub("", html).encode("utf-8"))


def page_variables(
    variables: cabc.Mapping[str, object], *, title: str, html: str
) -> dict[str, object]:
    """Merge site variables with the per-page ``title`` and ``bytes`` entries.

    The computed entries win over configuration keys of the same name. ``bytes``
    is measured on ``html`` as given, so callers pass the wrapped page before
    any substitution happens.
    """
    return {**variables, "title": title, "bytes": str(count_bytes(html))}


def find_placeholders(html: str) -> list[str]:
    """Return the distinct placeholder names left in ``html``, in order."""
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(html)))


__all__ = [
    "PLACEHOLDER_PATTERN",
    "count_bytes",
    "find_placeholders",
    "page_variables",
    "substitute",
]
