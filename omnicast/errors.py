# PURPOSE: Exception taxonomy shared by all Omnicast functions.
# CONTEXT: Raised anywhere in a handler pipeline and converted to a JSON error
#          envelope at the single outer boundary in omnicast.handlers.base.

from __future__ import annotations
from typing import Optional


class RelayError(Exception):
    """Base class for failures that map onto a known HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(RelayError):
    """A required secret or setting is missing from the environment."""

    status_code = 500


class RequestValidationError(RelayError):
    """The inbound envelope is missing a field or has the wrong shape."""

    status_code = 400


class UpstreamError(RelayError):
    """
    A third-party API answered with a non-success status.

    attributes:
    - upstream_status: int – status code returned by the upstream API.
    - upstream_body: str – raw response text, kept for diagnostics only.
    """

    status_code = 500

    def __init__(self, message: str, upstream_status: int, upstream_body: Optional[str] = None):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body or ""
