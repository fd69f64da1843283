"""Create a sample nix site to start from.

``init_site`` writes a small but complete site: configuration, header and
footer layouts, two posts, a home page, an about page and the stylesheets.
The file set can also be fetched from a URL serving a JSON array of
``[path, contents]`` pairs, which lets a shared starter site be kept outside
this package.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path, PurePosixPath

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .build import write_documents
from .compiler import Document, HtmlContentRenderer
from .errors import NixPagesError

logger = logging.getLogger(__name__)


class ScaffoldError(NixPagesError):
    """Raised when a sample site cannot be created."""


SAMPLE_CONFIG = """\
name: A bunny blog
author: John Doe
favicon: "🐇"

src: ./
dest: ./build
pygments_style: default
"""

SAMPLE_HEADER = """\
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="author" content="{{author}}">
  <link rel="icon" href="data:image/svg+xml,<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 16 16'><text x='0' y='14'>{{favicon}}</text></svg>">
  <link rel="stylesheet" href="/public/style.css">
  <title>{{title}} | {{name}}</title>
</head>
<body>
<nav>
  <ul>
    <li><a href="/">posts</a></li>
    <li><a href="/about">about</a></li>
  </ul>
</nav>
"""

SAMPLE_FOOTER = """\
<footer>
  <small>{{name}} by {{author}}, {{bytes}} bytes</small>
</footer>
</body>
</html>
"""

SAMPLE_FIRST_POST = """\
# What is this?

2021-10-21

You're viewing a sample post.

This site is generated by a **minimal** static site generator which renders
posts and pages from Markdown.

> I have made this longer than usual, only because I have not had the time
> to make it shorter.

A list:

- apples
- oranges

And some code:

```python
def greet(name):
    return f"hello {name}"
```
"""

SAMPLE_SECOND_POST = """\
# Just another post

2020-10-15

This is just another post, because the first one might be lonely.
"""

SAMPLE_INDEX = """\
Hello world :)
"""

SAMPLE_ABOUT = """\
# About

A sample about page. Nothing special.
"""

SAMPLE_STYLE = """\
:root {
  --bg-color: #fafafa;
  --primary-color: #00695c;
  --font-color: #555;
  --font-color-lighter: #777;
  --font-color-lightest: #ccc;
}

@media (prefers-color-scheme: dark) {
  :root {
    --bg-color: #222;
    --primary-color: #0097a7;
    --font-color: #ccc;
    --font-color-lighter: #aaa;
    --font-color-lightest: #666;
  }
}

* { font-family: monospace; font-weight: normal; text-decoration: none; }

body {
  max-width: 110ex; margin: 1em auto; padding: 0 1em;
  background: var(--bg-color); color: var(--font-color);
}

a { color: var(--primary-color); }
blockquote { border-left: 2px solid var(--font-color-lightest); padding-left: 1em; }
h1, h2, h3 { margin: 1.5em 0 1em 0; }
main img { max-width: 100%; }

nav ul, footer ul { padding-left: 0; }
nav li { display: inline-block; margin-right: 2em; }

ul.list { list-style-type: none; padding-left: 0; }
ul.list li { margin: 1em 0; }
ul.list h3 { margin: 0; }
ul.list small { color: var(--font-color-lighter); }
"""


def sample_files(pygments_style: str = "default") -> list[tuple[str, str]]:
    """Return the bundled sample site as ``(relative path, contents)`` pairs."""
    stylesheet = HtmlContentRenderer(pygments_style).stylesheet
    return [
        ("_config.yml", SAMPLE_CONFIG),
        ("_layouts/header.html", SAMPLE_HEADER),
        ("_layouts/footer.html", SAMPLE_FOOTER),
        ("posts/first-post.md", SAMPLE_FIRST_POST),
        ("posts/another-post.md", SAMPLE_SECOND_POST),
        ("pages/index.md", SAMPLE_INDEX),
        ("pages/about.md", SAMPLE_ABOUT),
        ("public/style.css", SAMPLE_STYLE),
        ("public/highlight.css", stylesheet),
    ]


def fetch_sample_files(url: str, *, timeout: int = 30) -> list[tuple[str, str]]:
    """Download a sample site from ``url``.

    The response must be a JSON array of ``[path, contents]`` string pairs.

    Raises
    ------
    requests.HTTPError
        If the server responds with an error status.
    ScaffoldError
        If the payload does not have the expected shape.
    """
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    try:
        logger.info("fetching sample site from %s", url)
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
        try:
            payload = resp.json()
        except ValueError as exc:
            msg = f"Sample site at '{url}' is not valid JSON."
            raise ScaffoldError(msg) from exc
    finally:
        session.close()
    return _validate_entries(payload, url)


def _validate_entries(payload: object, origin: str) -> list[tuple[str, str]]:
    """Check that ``payload`` is a list of safe ``[path, contents]`` pairs."""
    if not isinstance(payload, list):
        msg = f"Sample site at '{origin}' must be a JSON array."
        raise ScaffoldError(msg)
    entries: list[tuple[str, str]] = []
    for item in payload:
        match item:
            case [str() as path, str() as contents]:
                pass
            case _:
                msg = f"Invalid entry in sample site at '{origin}': {item!r}"
                raise ScaffoldError(msg)
        pure = PurePosixPath(path)
        if pure.is_absolute() or ".." in pure.parts or not pure.parts:
            msg = f"Refusing to write '{path}' outside the target directory."
            raise ScaffoldError(msg)
        entries.append((pure.as_posix(), contents))
    return entries


def init_site(
    directory: Path,
    *,
    source_url: str | None = None,
    force: bool = False,
) -> list[Path]:
    """Write a sample site into ``directory``.

    Parameters
    ----------
    directory : Path
        Target directory; created when missing.
    source_url : str, optional
        Fetch the file set from this URL instead of using the bundled sample.
    force : bool, optional
        Overwrite files that already exist.

    Returns
    -------
    list[Path]
        Paths written.
    """
    entries = fetch_sample_files(source_url) if source_url else sample_files()
    directory.mkdir(parents=True, exist_ok=True)
    documents = [Document(path, contents) for path, contents in entries]
    return write_documents(documents, directory, force=force)


__all__ = [
    "ScaffoldError",
    "fetch_sample_files",
    "init_site",
    "sample_files",
]
