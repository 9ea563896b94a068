"""Worker thread logic for servicing a single client connection."""

import logging
import socket
import threading
from dataclasses import dataclass
from typing import BinaryIO, Optional

from webserver.bootstrap.config import (
    DRAIN_MAX_BYTES,
    DRAIN_TIMEOUT_SECONDS,
    STREAM_CHUNK_SIZE,
)
from webserver.domain.connection_id import (
    ConnectionLoggerAdapter,
    clear_connection_id,
    generate_connection_id,
    set_connection_id,
)
from webserver.domain.errors import UnsupportedResource
from webserver.domain.resource import ResourceResolution
from webserver.lifecycle.state import ServerLifecycle
from webserver.pipeline.classifier import classify
from webserver.pipeline.content_streamer import stream_content
from webserver.pipeline.header_writer import resolve_resource, write_header
from webserver.pipeline.request_reader import read_request
from webserver.transport.context import WorkerContext

WORKER_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("webserver.transport.worker"), {}
)


def serve_connection(
    rfile: BinaryIO, wfile: BinaryIO, directory: str
) -> Optional[ResourceResolution]:
    """Read one request and write its response.

    Returns the resolution that was served, or None when the request was
    dropped without writing a single byte.
    """
    request = read_request(rfile)
    try:
        mime_type, mode = classify(request.requested_path)
    except UnsupportedResource as error:
        WORKER_LOGGER.info(
            "Unsupported resource dropped",
            extra={"event": "resource_unsupported", "route": error.requested_path},
        )
        return None

    resolution, handle = resolve_resource(
        directory, request.requested_path, mime_type, mode
    )
    try:
        write_header(wfile, resolution)
        stream_content(wfile, resolution, handle)
    finally:
        if handle is not None:
            handle.close()
    return resolution


def _prepare_worker(
    context: WorkerContext,
    client_socket: socket.socket,
    current_thread: threading.Thread,
) -> Optional[ServerLifecycle]:
    lifecycle = context.lifecycle
    if lifecycle is not None:
        lifecycle.register_worker(current_thread)
    if context.config is not None:
        client_socket.settimeout(context.config.socket_timeout)
    return lifecycle


@dataclass
class _WorkerResources:
    thread: threading.Thread
    client_socket: socket.socket
    client_addr_str: str


def _drain_input(client_socket: socket.socket) -> None:
    """Discard request bytes the reader left unread until the client closes."""
    client_socket.settimeout(DRAIN_TIMEOUT_SECONDS)
    drained = 0
    while drained < DRAIN_MAX_BYTES:
        data = client_socket.recv(STREAM_CHUNK_SIZE)
        if not data:
            break
        drained += len(data)


def _cleanup_worker(
    lifecycle: Optional[ServerLifecycle], resources: _WorkerResources
) -> None:
    if lifecycle is not None:
        lifecycle.cleanup_worker(resources.thread)

    try:
        resources.client_socket.shutdown(socket.SHUT_WR)
        _drain_input(resources.client_socket)
    except OSError:
        pass
    resources.client_socket.close()

    WORKER_LOGGER.debug(
        "Socket closed",
        extra={"event": "socket_closed", "client": resources.client_addr_str},
    )
    clear_connection_id()


def handle_client(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> None:
    """Service exactly one request on the socket, then close it."""
    set_connection_id(generate_connection_id())
    current_thread = threading.current_thread()
    lifecycle = _prepare_worker(context, client_socket, current_thread)
    client_addr_str = f"{client_address[0]}:{client_address[1]}"
    resources = _WorkerResources(current_thread, client_socket, client_addr_str)

    WORKER_LOGGER.debug(
        "Connection processing started",
        extra={"event": "connection_started", "client": client_addr_str},
    )

    try:
        rfile = client_socket.makefile("rb")
        wfile = client_socket.makefile("wb")
        with rfile, wfile:
            resolution = serve_connection(rfile, wfile, context.directory)
            wfile.flush()

        if resolution is not None:
            WORKER_LOGGER.info(
                "Request served",
                extra={
                    "event": "request_complete",
                    "client": client_addr_str,
                    "status": resolution.status_line,
                    "mime_type": resolution.mime_type,
                },
            )
    except (ConnectionError, TimeoutError, OSError) as error:
        WORKER_LOGGER.error(
            "Error handling client connection",
            extra={
                "event": "connection_error",
                "client": client_addr_str,
                "error_type": type(error).__name__,
            },
        )
    except Exception as error:  # pylint: disable=broad-except
        WORKER_LOGGER.error(
            "Unexpected error in worker",
            extra={
                "event": "worker_error",
                "client": client_addr_str,
                "error_type": type(error).__name__,
                "error": str(error),
            },
            exc_info=True,
        )
    finally:
        _cleanup_worker(lifecycle, resources)
