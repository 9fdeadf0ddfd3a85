"""Command-line interface for apiservice."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from . import __version__
from .endpoints import Route
from .errors import APIError
from .http.client import APIService
from .logging_config import setup_logging
from .models.config import ServiceConfig

METHODS = ("get", "post", "put", "delete")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="apiservice",
        description="Call a JSON REST endpoint and print the response",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # GET with a bearer token
  apiservice get /users/42 --base-url https://api.example.com --token abc

  # POST a JSON body
  apiservice post /users --data '{"name": "Ann"}'

  # Read the body from a file and settings from YAML
  apiservice put /users/42 --data @user.json --config service.yaml
        """,
    )

    parser.add_argument("method", choices=METHODS, help="HTTP method")
    parser.add_argument("path", help="Endpoint path resolved against the base URL")

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--data",
        "-d",
        default=None,
        help="JSON request body for post/put, or @file to read it from a file",
    )

    service_group = parser.add_argument_group("service settings")
    service_group.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML config file (base_url, token, request_timeout, log_level)",
    )
    service_group.add_argument("--base-url", default=None, help="Base URL of the API")
    service_group.add_argument(
        "--token",
        default=None,
        help="Bearer token ($VAR and ${VAR} are expanded from the environment)",
    )
    service_group.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")

    output_group = parser.add_argument_group("output")
    output_group.add_argument("--verbose", "-v", action="store_true", help="Log requests and responses")
    output_group.add_argument("--quiet", "-q", action="store_true", help="Only log errors")

    return parser


def _load_body(data: str) -> Any:
    if data.startswith("@"):
        data = Path(data[1:]).read_text(encoding="utf-8")
    return json.loads(data)


def _build_config(args: argparse.Namespace) -> ServiceConfig:
    config = ServiceConfig.from_yaml_file(args.config) if args.config else ServiceConfig.from_env()
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.token:
        overrides["token"] = args.token
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    elif args.quiet:
        overrides["log_level"] = "ERROR"
    if not overrides:
        return config
    return ServiceConfig.model_validate({**config.model_dump(), **overrides})


def run_request(args: argparse.Namespace) -> int:
    """Run one request described by parsed arguments."""
    console = Console()
    error_console = Console(stderr=True)

    try:
        config = _build_config(args)
    except Exception as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(config.log_level, str(config.log_file) if config.log_file else None)

    body: Any = None
    if args.method in ("post", "put"):
        if args.data is None:
            error_console.print(f"[red]Error:[/red] {args.method} requires --data")
            return 1
        try:
            body = _load_body(args.data)
        except (OSError, ValueError) as e:
            error_console.print(f"[red]Invalid --data:[/red] {e}")
            return 1

    endpoint = Route(args.path)

    async def run() -> Any:
        async with APIService.from_config(config) as api:
            if args.method == "get":
                return await api.get_json(endpoint)
            if args.method == "post":
                return await api.post_json(endpoint, body)
            if args.method == "put":
                return await api.put_json(endpoint, body)
            return await api.delete_json(endpoint)

    try:
        result = asyncio.run(run())
    except APIError as e:
        error_console.print(f"[red]{e.kind.value}:[/red] {e.message}")
        return 1

    console.print_json(data=result)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_request(args)


if __name__ == "__main__":
    sys.exit(main())
