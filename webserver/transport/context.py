"""Context object handed to every worker thread."""

from dataclasses import dataclass
from typing import Optional

from webserver.bootstrap.config import ServerConfig
from webserver.lifecycle.state import ServerLifecycle


@dataclass
class WorkerContext:
    """Read-only settings shared by worker threads."""

    directory: str
    lifecycle: Optional[ServerLifecycle] = None
    config: Optional[ServerConfig] = None
