"""Extension-based content classification."""

import logging
from dataclasses import dataclass
from typing import Optional

from webserver.domain.connection_id import ConnectionLoggerAdapter
from webserver.domain.errors import UnsupportedResource
from webserver.domain.resource import TransferMode

CLASSIFIER_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("webserver.pipeline.classifier"), {}
)


@dataclass(frozen=True)
class ExtensionRule:
    """One row of the classification table."""

    suffix: str
    case_sensitive: bool
    mime_type: str
    mode: TransferMode

    def matches(self, requested_path: str) -> bool:
        if self.case_sensitive:
            return requested_path.endswith(self.suffix)
        return requested_path.lower().endswith(self.suffix)


# Checked in order. Only .png and .jpeg match regardless of case.
EXTENSION_RULES = (
    ExtensionRule(".html", True, "text/html", TransferMode.TEXT),
    ExtensionRule(".gif", True, "image/gif", TransferMode.BINARY),
    ExtensionRule(".png", False, "image/png", TransferMode.BINARY),
    ExtensionRule(".jpg", True, "image/jpeg", TransferMode.BINARY),
    ExtensionRule(".jpeg", False, "image/jpeg", TransferMode.BINARY),
)

SYNTHETIC_MIME_TYPE = "text/html"


def classify(requested_path: Optional[str]) -> tuple[str, TransferMode]:
    """Return the MIME type and transfer mode for a requested path.

    Raises UnsupportedResource for a missing path or an unrecognised suffix.
    """
    if requested_path is None:
        raise UnsupportedResource(requested_path)

    for rule in EXTENSION_RULES:
        if rule.matches(requested_path):
            if CLASSIFIER_LOGGER.logger.isEnabledFor(logging.DEBUG):
                CLASSIFIER_LOGGER.debug(
                    "Resource classified",
                    extra={
                        "event": "resource_classified",
                        "route": requested_path,
                        "mime_type": rule.mime_type,
                        "mode": rule.mode.value,
                    },
                )
            return rule.mime_type, rule.mode

    if requested_path == "":
        return SYNTHETIC_MIME_TYPE, TransferMode.SYNTHETIC

    raise UnsupportedResource(requested_path)
