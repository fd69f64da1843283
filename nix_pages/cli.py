"""Cyclopts CLI entrypoint for building, scaffolding and previewing nix sites.

The ``nix`` console script defined here compiles the site described by
``_config.yml`` into static HTML, creates a sample site to start from, and
serves the built output locally. Typical usage is ``nix init blog`` once,
then ``nix build`` after every edit and ``nix serve`` to preview.

Examples
--------
Build the site in the current directory:

>>> from nix_pages.cli import main
>>> main()  # doctest: +SKIP

Build with an extra placeholder value:

>>> from nix_pages.cli import app
>>> app.run(["build", "--var", "env=staging"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CONFIG_FILENAME
from .build import SiteBuilder
from .config import load_site_config, parse_overrides
from .scaffold import init_site
from .serve import serve as serve_directory

DEFAULT_CONFIG = Path(CONFIG_FILENAME)

app = App(
    name="nix",
    config=cyclopts.config.Env("NIX_PAGES_", command=False),  # type: ignore[unknown-argument]
)


def _configure_logging(verbose: bool) -> None:
    """Configure package logging for CLI runs."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("MARKDOWN").setLevel(logging.WARNING)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _build(
    config_path: Path,
    overrides: list[str] | None,
    *,
    force: bool,
    clean: bool = True,
) -> Path:
    site_config = load_site_config(config_path)
    site_config = site_config.with_overrides(parse_overrides(overrides or []))
    # --no-force implies --no-clean.
    builder = SiteBuilder(site_config, force=force, clean=clean and force)
    written = builder.run()
    for path in written:
        print(f"wrote {_format_path(path)}")
    print(f"build:ok, output: {_format_path(site_config.dest)}")
    return site_config.dest


@app.command(help="Compile the site into static HTML.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the site config", env_var="NIX_PAGES_CONFIG")
    ] = DEFAULT_CONFIG,
    var: typ.Annotated[
        list[str] | None,
        Parameter(help="Extra placeholder value as KEY=VALUE; repeatable"),
    ] = None,
    force: typ.Annotated[
        bool, Parameter(help="Overwrite files that already exist in the output")
    ] = True,
    clean: typ.Annotated[
        bool, Parameter(help="Empty the output directory before writing")
    ] = True,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Site configuration file; defaults to ``_config.yml`` in the current
        directory (overridable via ``NIX_PAGES_CONFIG``).
    var : list[str] or None, optional
        ``KEY=VALUE`` placeholder overrides applied on top of the config.
    force : bool, optional
        Overwrite existing output files (default ``True``). ``--no-force``
        keeps every file already in the output and implies ``--no-clean``.
    clean : bool, optional
        Remove stale files from the output directory first (default ``True``).
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist.
    MarkdownConversionError
        If a page cannot be rendered; the message names the source file.
    """
    _configure_logging(verbose)
    _build(config, var, force=force, clean=clean)


@app.command(help="Create a sample site to start from.")
def init(
    directory: typ.Annotated[
        Path, Parameter(help="Where to create the site")
    ] = Path(),
    *,
    source_url: typ.Annotated[
        str | None,
        Parameter(help="Fetch the sample files from a JSON URL instead"),
    ] = None,
    force: typ.Annotated[
        bool, Parameter(help="Overwrite files that already exist")
    ] = False,
) -> None:
    """Write the sample site into ``directory`` and list the created files."""
    _configure_logging(verbose=False)
    written = init_site(directory, source_url=source_url, force=force)
    for path in written:
        print(f"wrote {_format_path(path)}")
    print(f"init:ok, output: {_format_path(directory)}")


@app.command(help="Serve the built site locally.")
def serve(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the site config", env_var="NIX_PAGES_CONFIG")
    ] = DEFAULT_CONFIG,
    port: typ.Annotated[int, Parameter(help="Port to listen on")] = 8080,
    host: typ.Annotated[str, Parameter(help="Interface to bind")] = "127.0.0.1",
    rebuild: typ.Annotated[
        bool, Parameter(help="Build the site before serving")
    ] = True,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Optionally build, then serve the output directory until Ctrl-C."""
    _configure_logging(verbose)
    if rebuild:
        dest = _build(config, None, force=True)
    else:
        dest = load_site_config(config).dest
    serve_directory(dest, port=port, host=host)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``nix`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
