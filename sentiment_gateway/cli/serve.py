"""Command-line entry point that runs the HTTP server.

Usage::

    python -m sentiment_gateway.cli
    python -m sentiment_gateway.cli --listen 127.0.0.1:9000 --timeout 2s
    sentiment-gateway --cache-max-size-mb 128 --cache-entry-ttl 30m

Flags override every other configuration source (YAML, .env, environment).
Uvicorn handles SIGINT/SIGTERM and drains in-flight requests for up to a
minute before exiting; the app lifespan then closes the outbound HTTP
client.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

import uvicorn

from sentiment_gateway.config.loader import load_settings
from sentiment_gateway.config.settings import Settings
from sentiment_gateway.utils.durations import parse_duration
from sentiment_gateway.utils.errors import ConfigurationError

_GRACEFUL_SHUTDOWN_SECONDS = 60
_ALL_INTERFACES = "0.0.0.0"


def _duration(value: str) -> float:
    try:
        seconds = parse_duration(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"duration must be positive: {value!r}")
    return seconds


def parse_listen(value: str) -> tuple[str, int]:
    """Split a ``host:port`` listen address; an empty host binds all interfaces.

    ``":8080"`` -> ``("0.0.0.0", 8080)``, ``"[::1]:8080"`` -> ``("::1", 8080)``.
    """
    host, sep, port_text = value.rpartition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"listen address must be host:port, got {value!r}")
    try:
        port = int(port_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid port in {value!r}") from exc
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"port out of range in {value!r}")
    host = host.strip("[]") or _ALL_INTERFACES
    return host, port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sentiment-gateway",
        description="Serve the cached sentiment-analysis HTTP API.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML config file (default: %(default)s; missing file is ignored)",
    )
    parser.add_argument(
        "--listen",
        type=parse_listen,
        default=None,
        help="Listen address as host:port, e.g. :8080",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument(
        "--timeout",
        type=_duration,
        default=None,
        help="Timeout for each remote sentiment request, e.g. 1s",
    )
    parser.add_argument(
        "--cache-entry-ttl",
        type=_duration,
        default=None,
        help="Lifetime of cache entries, e.g. 10m",
    )
    parser.add_argument(
        "--cache-max-size-mb",
        type=int,
        default=None,
        help="Maximum cache size in megabytes (0 = unbounded)",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Resolve Settings with any flags the operator actually passed on top."""
    overrides: dict[str, Any] = {}
    if args.listen is not None:
        overrides["app_host"], overrides["app_port"] = args.listen
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    if args.cache_entry_ttl is not None:
        overrides["cache_entry_ttl"] = args.cache_entry_ttl
    if args.cache_max_size_mb is not None:
        overrides["cache_max_size_mb"] = args.cache_max_size_mb
    return load_settings(args.config, **overrides)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ConfigurationError as exc:
        print(f"sentiment-gateway: {exc}", file=sys.stderr)
        return 2

    # Deferred: importing main configures logging from the environment, which
    # is then re-done below with the flag-resolved level.
    from sentiment_gateway.main import create_app
    from sentiment_gateway.utils.logging import configure_logging, get_logger

    configure_logging(
        log_level=settings.log_level,
        json_output=(settings.app_env == "production"),
    )
    get_logger(__name__).info(
        "starting_http_server", host=settings.app_host, port=settings.app_port
    )

    uvicorn.run(
        create_app(settings),
        host=settings.app_host,
        port=settings.app_port,
        timeout_keep_alive=int(settings.http_timeout),
        timeout_graceful_shutdown=_GRACEFUL_SHUTDOWN_SECONDS,
        # Keep the structlog bridge installed by configure_logging().
        log_config=None,
    )
    return 0
