"""Markdown to HTML conversion with Pygments syntax highlighting."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from nix_pages._constants import HIGHLIGHT_CSS_CLASS

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
HIGHLIGHT_OPEN_TAG = re.compile(rf'<div class="{HIGHLIGHT_CSS_CLASS}">')


class MarkdownConverter(typ.Protocol):
    """Anything that turns Markdown text into an HTML fragment."""

    def convert(self, text: str) -> str:
        """Return ``text`` rendered as HTML."""
        ...


class HtmlContentRenderer:
    """Render GitHub-flavoured Markdown with consistent code highlighting."""

    def __init__(
        self,
        pygments_style: str = "default",
        extra_extensions: typ.Sequence[Extension | str] = (),
    ) -> None:
        """Initialize a renderer with a Pygments style and optional extensions.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"default"``.
        extra_extensions : Sequence[Extension | str], optional
            Additional Markdown extensions appended to the built-in set.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(
            style=pygments_style, cssclass=HIGHLIGHT_CSS_CLASS
        )
        self._extra_extensions = list(extra_extensions)

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(f".{HIGHLIGHT_CSS_CLASS}")

    def convert(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "footnotes",
            "toc",
            *self._extra_extensions,
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": HIGHLIGHT_CSS_CLASS,
                    "pygments_style": self.pygments_style,
                },
            },
        )
        html = md.convert(normalized)
        return self._annotate_languages(html, normalized)

    def _annotate_languages(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="{HIGHLIGHT_CSS_CLASS}" '
                f'data-language="{escape(lang, quote=True)}">'
            )

        return HIGHLIGHT_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer", "MarkdownConverter"]
