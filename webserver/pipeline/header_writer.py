"""Resource opening and response header serialization."""

import logging
from email.utils import formatdate
from typing import BinaryIO, Optional

from webserver.bootstrap.config import SERVER_IDENTIFIER
from webserver.domain.connection_id import ConnectionLoggerAdapter
from webserver.domain.resource import ResourceResolution, TransferMode
from webserver.domain.sandbox import resolve_document_path

HEADER_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("webserver.pipeline.header"), {}
)


def open_resource(directory: str, requested_path: str) -> Optional[BinaryIO]:
    """Open the requested file for reading, or return None when it cannot be opened.

    The returned handle is the one the body is streamed from, so existence and
    content come from a single open.
    """
    resolved_path = resolve_document_path(directory, requested_path)
    if resolved_path is None:
        _log_not_found(requested_path, "OutsideDocumentRoot")
        return None
    try:
        handle = open(resolved_path, "rb")  # pylint: disable=consider-using-with
    except OSError as error:
        _log_not_found(requested_path, type(error).__name__)
        return None
    return handle


def _log_not_found(requested_path: str, error_type: str) -> None:
    HEADER_LOGGER.info(
        "Resource not found",
        extra={
            "event": "resource_not_found",
            "route": requested_path,
            "error_type": error_type,
        },
    )


def resolve_resource(
    directory: str, requested_path: str, mime_type: str, mode: TransferMode
) -> tuple[ResourceResolution, Optional[BinaryIO]]:
    """Build the resolution for a classified path along with its open handle."""
    if mode is TransferMode.SYNTHETIC:
        return ResourceResolution(mime_type, mode, True), None
    handle = open_resource(directory, requested_path)
    return ResourceResolution(mime_type, mode, handle is not None), handle


def render_header(resolution: ResourceResolution, now: Optional[float] = None) -> bytes:
    """Serialize the full header block, blank terminator included."""
    lines = [
        resolution.status_line,
        f"Date: {formatdate(now, usegmt=True)}",
        f"Server: {SERVER_IDENTIFIER}",
        "Connection: close",
        f"Content-Type: {resolution.mime_type}",
        "",
    ]
    return "".join(f"{line}\n" for line in lines).encode()


def write_header(wfile: BinaryIO, resolution: ResourceResolution) -> None:
    """Write the header block; no body bytes are written here."""
    wfile.write(render_header(resolution))
    HEADER_LOGGER.debug(
        "Header written",
        extra={
            "event": "header_written",
            "status": resolution.status_line,
            "mime_type": resolution.mime_type,
        },
    )
