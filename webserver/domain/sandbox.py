"""Document root path resolution."""

from pathlib import Path
from typing import Optional


def resolve_document_path(directory: str, requested_path: str) -> Optional[Path]:
    """Resolve a requested path inside the document root.

    Returns None when the path is empty, contains a NUL byte or escapes the
    root; callers treat that the same as a file that cannot be opened.
    """
    if "\x00" in requested_path:
        return None

    directory_root = Path(directory).resolve()
    relative_part = requested_path.lstrip("/")
    if not relative_part:
        return None

    target = (directory_root / relative_part).resolve()
    if directory_root not in target.parents:
        return None

    return target
