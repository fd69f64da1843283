"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _collect_variables, _resolve_dir, _stringify
from .models import SiteConfig, SiteConfigError

DEFAULT_SRC = "."
DEFAULT_DEST = "./build"
DEFAULT_PYGMENTS_STYLE = "default"


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing a nix site.

    Parameters
    ----------
    path : Path
        Filesystem path to the site configuration file (usually
        ``_config.yml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with ``src``/``dest`` resolved against the
        directory holding ``path`` and every top-level scalar exposed as a
        placeholder variable.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level YAML structure is not a mapping.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from nix_pages.config import load_site_config
    >>> config = load_site_config(Path("_config.yml"))  # doctest: +SKIP
    >>> config.variables["name"]  # doctest: +SKIP
    'A bunny blog'
    """
    if not path.exists():
        msg = (
            f"Configuration file '{path}' not found. "
            "If you have not created a site yet, run `nix init`."
        )
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    root = path.resolve().parent
    style = _stringify(raw.get("pygments_style")) or DEFAULT_PYGMENTS_STYLE

    return SiteConfig(
        root=root,
        src=_resolve_dir(root, raw.get("src"), DEFAULT_SRC),
        dest=_resolve_dir(root, raw.get("dest"), DEFAULT_DEST),
        pygments_style=style,
        variables=_collect_variables(raw),
    )


__all__ = ["load_site_config"]
