"""CLI entry point for schema-bridge.

This module provides the command-line interface for starting the server.
It can be invoked as `schema-bridge` (via the script entry point) or
`python -m schema_bridge`.
"""

import argparse
import logging
import sys

import uvicorn

from schema_bridge import __version__, create_app
from schema_bridge.config import SchemaBridgeSettings


def main() -> None:
    """Main entry point for the schema-bridge CLI.

    Parses command-line arguments and starts the uvicorn server with the
    FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="schema-bridge",
        description="Bridges MCP tools to constrained generation with local LLMs",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"schema-bridge {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via SCHEMA_BRIDGE_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via SCHEMA_BRIDGE_PORT)",
    )

    parser.add_argument(
        "--ollama-host",
        type=str,
        default=None,
        help="Ollama server URL (default: http://localhost:11434, can be set via SCHEMA_BRIDGE_OLLAMA_HOST)",
    )

    parser.add_argument(
        "--mcp-url",
        type=str,
        default=None,
        help="MCP server URL providing the tools (can be set via SCHEMA_BRIDGE_MCP_SERVER_URL)",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Default chat model (default: llama3.2:latest, can be set via SCHEMA_BRIDGE_DEFAULT_MODEL)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via SCHEMA_BRIDGE_LOG_LEVEL)",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development (uvicorn --reload)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.ollama_host is not None:
        settings_kwargs["ollama_host"] = args.ollama_host
    if args.mcp_url is not None:
        settings_kwargs["mcp_server_url"] = args.mcp_url
    if args.model is not None:
        settings_kwargs["default_model"] = args.model
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = SchemaBridgeSettings(**settings_kwargs)

    logging.basicConfig(level=settings.log_level.upper())
    logging.getLogger("schema_bridge").setLevel(settings.log_level.upper())

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=args.reload,
    )


if __name__ == "__main__":
    sys.exit(main())
