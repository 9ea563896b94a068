"""Server configuration, wire constants and CLI argument parsing."""

import argparse
import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value is not None else default


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


DEFAULT_DIRECTORY = _env_str("WEBSERVER_DIRECTORY", ".")
DEFAULT_HOST = _env_str("WEBSERVER_HOST", "localhost")
DEFAULT_PORT = _env_int("WEBSERVER_PORT", 8080)
DEFAULT_SOCKET_TIMEOUT = _env_int("WEBSERVER_SOCKET_TIMEOUT", 60)
DEFAULT_SHUTDOWN_GRACE_SECONDS = _env_int("WEBSERVER_SHUTDOWN_GRACE_SECONDS", 30)

SERVER_IDENTIFIER = "Avery's very own server"
TEMPLATE_SERVER_NAME = "Avery's Server"
DATE_TOKEN = b"<cs371date>"
SERVER_TOKEN = b"<cs371server>"

MAX_REQUEST_LINE_BYTES = 65536
STREAM_CHUNK_SIZE = 65536

# Unread request bytes left at close make the kernel reset the connection.
DRAIN_TIMEOUT_SECONDS = 1.0
DRAIN_MAX_BYTES = 1024 * 1024

SYNTHETIC_PAGE = (
    b"<html><head></head><body>\n"
    b"<h3>My web server works!</h3>\n"
    b"</body></html>\n"
)


@dataclass
class ServerConfig:
    """Per-connection timeout and shutdown settings."""

    socket_timeout: int
    shutdown_grace_seconds: int


def parse_cli_args(argv: list[str]) -> argparse.Namespace:
    """Return parsed CLI arguments for server configuration."""
    parser = argparse.ArgumentParser(description="Simple web server")
    parser.add_argument(
        "--directory",
        default=DEFAULT_DIRECTORY,
        help="Document root requested paths are resolved against",
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    default_log_level = os.getenv("WEBSERVER_LOG_LEVEL", "INFO").upper()
    default_destination = os.getenv("WEBSERVER_LOG_DESTINATION", "stdout")
    default_log_format = os.getenv("WEBSERVER_LOG_FORMAT", "json").lower()
    parser.add_argument(
        "--log-level",
        default=default_log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument(
        "--log-destination",
        default=default_destination,
        help="stdout or a file path",
    )
    parser.add_argument(
        "--log-format",
        default=default_log_format,
        choices=["json", "text"],
        type=str.lower,
    )
    parser.add_argument(
        "--socket-timeout",
        type=int,
        default=DEFAULT_SOCKET_TIMEOUT,
        help="Socket timeout in seconds while reading a request",
    )
    parser.add_argument(
        "--shutdown-grace-seconds",
        type=int,
        default=DEFAULT_SHUTDOWN_GRACE_SECONDS,
        help="Grace period in seconds for in-flight connections on shutdown",
    )
    return parser.parse_args(argv)
