"""Typed dataclasses describing nix site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from nix_pages.errors import NixPagesError


class SiteConfigError(NixPagesError, ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site definition sourced from ``_config.yml``.

    Attributes
    ----------
    root : Path
        Directory containing the configuration file.
    src : Path
        Directory holding ``_layouts/``, ``posts/``, ``pages/`` and ``public/``.
    dest : Path
        Directory the compiled site is written to.
    pygments_style : str
        Pygments style used for highlighted code and ``highlight.css``.
    variables : dict[str, str]
        Placeholder values, in file order.
    """

    root: Path
    src: Path
    dest: Path
    pygments_style: str = "default"
    variables: dict[str, str] = dc.field(default_factory=dict)

    def with_overrides(self, overrides: dict[str, str] | None) -> SiteConfig:
        """Return a copy whose variables include ``overrides``."""
        if not overrides:
            return self
        return dc.replace(self, variables={**self.variables, **overrides})


__all__ = ["SiteConfig", "SiteConfigError"]
