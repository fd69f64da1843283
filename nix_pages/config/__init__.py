"""Load and validate the ``_config.yml`` file of a nix site.

This subpackage parses the site configuration, resolves the source and
destination directories against the config file location, and collects the
top-level scalar entries as placeholder variables (``{{name}}``,
``{{author}}``...). The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from nix_pages.config import load_site_config
>>> site = load_site_config(Path("_config.yml"))  # doctest: +SKIP
>>> site.dest.name  # doctest: +SKIP
'build'
"""

from .helpers import parse_overrides
from .loader import load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = [
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
    "parse_overrides",
]
