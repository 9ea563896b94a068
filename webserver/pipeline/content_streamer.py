"""Response body transfer: templated text, raw bytes or the synthetic page."""

import logging
from datetime import date
from typing import BinaryIO, Iterator, Optional

from webserver.bootstrap.config import (
    DATE_TOKEN,
    SERVER_TOKEN,
    STREAM_CHUNK_SIZE,
    SYNTHETIC_PAGE,
    TEMPLATE_SERVER_NAME,
)
from webserver.domain.connection_id import ConnectionLoggerAdapter
from webserver.domain.errors import StreamError
from webserver.domain.resource import ResourceResolution, TransferMode

STREAM_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("webserver.pipeline.streamer"), {}
)


def substitute_tokens(line: bytes, today: Optional[date] = None) -> bytes:
    """Replace every template token in a line of served text."""
    current_date = today if today is not None else date.today()
    line = line.replace(DATE_TOKEN, current_date.isoformat().encode())
    return line.replace(SERVER_TOKEN, TEMPLATE_SERVER_NAME.encode())


def iter_text_lines(handle: BinaryIO, today: Optional[date] = None) -> Iterator[bytes]:
    """Yield substituted lines, each keeping the terminator it had on disk."""
    for line in handle:
        yield substitute_tokens(line, today)


def iter_binary_chunks(
    handle: BinaryIO, chunk_size: int = STREAM_CHUNK_SIZE
) -> Iterator[bytes]:
    """Yield file contents unmodified in fixed-size chunks."""
    while True:
        chunk = handle.read(chunk_size)
        if not chunk:
            break
        yield chunk


def _transfer(wfile: BinaryIO, chunks: Iterator[bytes]) -> int:
    bytes_out = 0
    try:
        for chunk in chunks:
            wfile.write(chunk)
            bytes_out += len(chunk)
    except OSError as error:
        raise StreamError(f"Body transfer failed after {bytes_out} bytes") from error
    return bytes_out


def stream_content(
    wfile: BinaryIO,
    resolution: ResourceResolution,
    handle: Optional[BinaryIO],
) -> None:
    """Write the response body for a resolved resource.

    Missing resources get no body. Transfer errors are logged and end the
    body early since the header has already been sent. The handle is always
    closed.
    """
    if resolution.mode is TransferMode.SYNTHETIC:
        wfile.write(SYNTHETIC_PAGE)
        return

    if handle is None:
        if STREAM_LOGGER.logger.isEnabledFor(logging.DEBUG):
            STREAM_LOGGER.debug(
                "No body for missing resource",
                extra={"event": "body_skipped", "mime_type": resolution.mime_type},
            )
        return

    with handle:
        if resolution.mode is TransferMode.TEXT:
            chunks = iter_text_lines(handle)
        else:
            chunks = iter_binary_chunks(handle)
        try:
            bytes_out = _transfer(wfile, chunks)
        except StreamError as error:
            STREAM_LOGGER.warning(
                "Body transfer aborted",
                extra={
                    "event": "stream_error",
                    "error_type": type(error.__cause__).__name__,
                    "error": str(error),
                },
            )
            return

    STREAM_LOGGER.debug(
        "Body transfer complete",
        extra={
            "event": "stream_complete",
            "mode": resolution.mode.value,
            "bytes_out": bytes_out,
        },
    )
