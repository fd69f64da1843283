"""Page model, layout wrapping, and placeholder substitution for nix sites."""

from .listing import PostListRenderer, sort_posts
from .models import Document, Layout, PageKind, PageState, RenderContext, SourceFile
from .pages import HtmlPage, IndexPage, MarkdownPage, NamedPage, PostPage
from .renderer import HtmlContentRenderer, MarkdownConverter
from .site import Site, deduplicate
from .substitution import count_bytes, page_variables, substitute

__all__ = [
    "Document",
    "HtmlContentRenderer",
    "HtmlPage",
    "IndexPage",
    "Layout",
    "MarkdownConverter",
    "MarkdownPage",
    "NamedPage",
    "PageKind",
    "PageState",
    "PostListRenderer",
    "PostPage",
    "RenderContext",
    "Site",
    "SourceFile",
    "count_bytes",
    "deduplicate",
    "page_variables",
    "sort_posts",
    "substitute",
]
