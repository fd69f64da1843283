"""Serve a built site over HTTP for local previewing."""

from __future__ import annotations

import functools
import logging
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

logger = logging.getLogger(__name__)


def make_server(
    directory: Path, *, port: int = 8080, host: str = "127.0.0.1"
) -> ThreadingHTTPServer:
    """Return an HTTP server bound to ``host:port`` serving ``directory``.

    Raises
    ------
    FileNotFoundError
        If ``directory`` does not exist; build the site first.
    """
    if not directory.is_dir():
        msg = f"Output directory '{directory}' not found; run `nix build` first."
        raise FileNotFoundError(msg)
    handler = functools.partial(SimpleHTTPRequestHandler, directory=str(directory))
    return ThreadingHTTPServer((host, port), handler)


def serve(directory: Path, *, port: int = 8080, host: str = "127.0.0.1") -> None:
    """Serve ``directory`` until interrupted with Ctrl-C."""
    server = make_server(directory, port=port, host=host)
    bound_host, bound_port = server.server_address[:2]
    logger.info("serving %s at http://%s:%s", directory, bound_host, bound_port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        server.server_close()


__all__ = ["make_server", "serve"]
