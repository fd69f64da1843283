"""Common literal values used across nix_pages.

These constants keep slot names, fallback titles, and source locations
centralized so pages, the build pipeline, and tests can import the same values
without drifting. Intended for internal use within the nix_pages package.

Examples
--------
>>> from nix_pages import _constants
>>> _constants.POST_PATH_TEMPLATE.format(stem="hello")
'/posts/hello/index.html'
>>> _constants.PLACEHOLDER_TEMPLATE.format(name="title")
'{{title}}'
"""

HEADER_SLOT = "header"
FOOTER_SLOT = "footer"

UNTITLED = "Untitled"
HOME_TITLE = "Home"

INDEX_PATH = "/index.html"
PAGE_PATH_TEMPLATE = "/{stem}/index.html"
POST_PATH_TEMPLATE = "/posts/{stem}/index.html"
POST_LINK_TEMPLATE = "/posts/{stem}"

HIGHLIGHT_STYLESHEET_PATH = "/public/highlight.css"
HIGHLIGHT_STYLESHEET_LINK = f'<link rel="stylesheet" href="{HIGHLIGHT_STYLESHEET_PATH}">'
HIGHLIGHT_CSS_CLASS = "highlight"

PLACEHOLDER_TEMPLATE = "{{{{{name}}}}}"
LISTING_DATE_FORMAT = "%b, %Y"

CONFIG_FILENAME = "_config.yml"
LAYOUTS_GLOB = "_layouts/*.html"
POSTS_GLOB = "posts/*.md"
PAGES_GLOB = "pages/*.md"
INDEX_SOURCE = "pages/index.md"
PUBLIC_DIR = "public"
