"""Command line entry point: `python -m shadcn_mcp` or `shadcn-mcp`.

Flags override the corresponding environment settings.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .foundation.config import ServerSettings, get_settings
from .runtime.observability.logging import configure_logging
from .server import create_app


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="shadcn-mcp", description="MCP server for shadcn/ui docs and source")
    parser.add_argument("--transport", choices=["stdio", "sse"], help="stdio (default) or sse")
    parser.add_argument("--host", help="Bind address for the sse transport")
    parser.add_argument("--port", type=int, help="Listen port for the sse transport (env: PORT)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    parser.add_argument("--log-format", choices=["console", "json", "none"])
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace, base: ServerSettings | None = None) -> ServerSettings:
    """Settings with any flags given on the command line applied on top."""
    settings = base or get_settings()
    top = {k: v for k, v in {"transport": args.transport, "host": args.host, "port": args.port}.items() if v is not None}
    logging = {k: v for k, v in {"level": args.log_level, "format": args.log_format}.items() if v is not None}
    if logging:
        top["logging"] = settings.logging.model_copy(update=logging)
    return settings.model_copy(update=top) if top else settings


def main(argv: Sequence[str] | None = None) -> None:
    settings = settings_from_args(parse_args(argv))
    configure_logging(settings.logging.format, settings.logging.level)
    create_app(settings).run()


if __name__ == "__main__":
    main()
