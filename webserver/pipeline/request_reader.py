"""Reading the request header block from a connection."""

import logging
from typing import BinaryIO

from webserver.bootstrap.config import MAX_REQUEST_LINE_BYTES
from webserver.domain.connection_id import ConnectionLoggerAdapter
from webserver.domain.errors import RequestReadError
from webserver.domain.resource import ParsedRequest

READER_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("webserver.pipeline.reader"), {}
)

GET_PREFIX_LENGTH = len("GET /")
VERSION_SUFFIX_LENGTH = len(" HTTP/1.1")


def read_request_line(rfile: BinaryIO) -> str:
    """Block until one full line is available and return it without its terminator."""
    raw_line = rfile.readline(MAX_REQUEST_LINE_BYTES + 1)
    if not raw_line:
        raise RequestReadError("Connection closed before end of request")
    if len(raw_line) > MAX_REQUEST_LINE_BYTES:
        raise RequestReadError("Request line exceeds maximum length")
    return raw_line.decode(errors="replace").rstrip("\r\n")


def extract_requested_path(line: str) -> str:
    """Strip the ``GET /`` prefix and the ``HTTP/x.x`` suffix positionally.

    No URL parsing is applied, so ``GET / HTTP/1.1`` yields an empty path and
    malformed lines yield whatever sits between the two fixed-width tokens.
    """
    if len(line) < GET_PREFIX_LENGTH + VERSION_SUFFIX_LENGTH:
        raise RequestReadError(f"GET line too short: {line!r}")
    return line[GET_PREFIX_LENGTH:-VERSION_SUFFIX_LENGTH]


def read_request(rfile: BinaryIO) -> ParsedRequest:
    """Consume request lines up to the blank line and capture the GET path.

    Read failures end the loop and are never raised; the path captured so far
    (possibly None) is returned.
    """
    requested_path = None
    while True:
        try:
            line = read_request_line(rfile)
            if READER_LOGGER.logger.isEnabledFor(logging.DEBUG):
                READER_LOGGER.debug(
                    "Request line read",
                    extra={"event": "request_line_read", "request_line": line},
                )
            if requested_path is None and "GET" in line:
                requested_path = extract_requested_path(line)
        except (RequestReadError, OSError) as error:
            READER_LOGGER.warning(
                "Request read aborted",
                extra={
                    "event": "request_read_error",
                    "error_type": type(error).__name__,
                    "error": str(error),
                },
            )
            break
        if not line:
            break

    READER_LOGGER.debug(
        "Request parsed",
        extra={"event": "request_parsed", "route": requested_path},
    )
    return ParsedRequest(requested_path)
