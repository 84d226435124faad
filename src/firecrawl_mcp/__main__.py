"""Main entry point for the Firecrawl MCP server."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace

from firecrawl_mcp.config import ConfigError, Settings
from firecrawl_mcp.server import run_server


def parse_args(argv: list[str], settings: Settings) -> Settings:
    """Apply positional ``[transport] [host] [port]`` overrides to ``settings``."""
    overrides = {}
    if len(argv) > 0:
        overrides["transport"] = argv[0].lower()
    if len(argv) > 1:
        overrides["host"] = argv[1]
    if len(argv) > 2:
        try:
            overrides["port"] = int(argv[2])
        except ValueError as e:
            raise ConfigError(f"Port must be a number, got {argv[2]!r}") from e
    return replace(settings, **overrides)


def main() -> None:
    """Main entry point."""
    try:
        settings = parse_args(sys.argv[1:], Settings.from_env())
    except ConfigError as e:
        print(f"firecrawl-mcp: {e}", file=sys.stderr)
        sys.exit(2)

    # stdout carries the stdio protocol, so logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    run_server(settings)


if __name__ == "__main__":
    main()
