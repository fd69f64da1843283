"""Utility helpers shared by the nix configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from .models import SiteConfigError


def _stringify(value: object) -> str | None:
    """Return the placeholder form of a scalar, or None for nested values."""
    match value:
        case bool():
            return "true" if value else "false"
        case None:
            return ""
        case str():
            return value
        case int() | float():
            return str(value)
        case cabc.Mapping() | list() | tuple():
            return None
        case _:
            return str(value)


def _collect_variables(raw: typ.Mapping[str, typ.Any]) -> dict[str, str]:
    """Return every top-level scalar entry as a string, preserving order."""
    variables: dict[str, str] = {}
    for key, value in raw.items():
        text = _stringify(value)
        if text is not None:
            variables[str(key)] = text
    return variables


def _resolve_dir(root: Path, value: object, default: str) -> Path:
    """Resolve a configured directory relative to the config root."""
    text = _stringify(value) if value is not None else default
    if not text:
        text = default
    path = Path(text).expanduser()
    if not path.is_absolute():
        path = root / path
    return path


def parse_overrides(pairs: cabc.Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings into a variables mapping.

    Raises
    ------
    SiteConfigError
        If an entry has no ``=`` or an empty key.
    """
    overrides: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            msg = f"Invalid variable override '{pair}'; expected KEY=VALUE."
            raise SiteConfigError(msg)
        overrides[key] = value
    return overrides


__all__ = ["parse_overrides"]
