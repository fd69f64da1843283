"""Exception hierarchy shared by the nix_pages compiler and build pipeline."""

from __future__ import annotations


class NixPagesError(Exception):
    """Base class for errors raised by nix_pages."""


class MarkdownConversionError(NixPagesError):
    """Raised when a page's Markdown source cannot be converted to HTML.

    Attributes
    ----------
    source_path : str
        Virtual path of the source document that failed to convert.
    """

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path
        super().__init__(f"Failed to convert Markdown in '{source_path}'.")


__all__ = ["MarkdownConversionError", "NixPagesError"]
