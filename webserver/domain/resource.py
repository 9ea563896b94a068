"""Shared request and resource type definitions."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TransferMode(Enum):
    """How a resource body is transferred to the client."""

    TEXT = "text"
    BINARY = "binary"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True)
class ParsedRequest:
    """Result of reading one request; ``requested_path`` is None without a GET line."""

    requested_path: Optional[str]


@dataclass(frozen=True)
class ResourceResolution:
    """Content type, transfer mode and existence of the requested resource."""

    mime_type: str
    mode: TransferMode
    exists: bool

    @property
    def status_line(self) -> str:
        if self.exists:
            return "HTTP/1.1 200 OK"
        return "HTTP/1.0 404 Not Found"
