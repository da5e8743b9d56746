"""
Geonorge Lookup Exceptions

Errors raised by the upstream client and the ranking helpers. All of them are
recovered inside the lookup layer and folded into absent fields, dood!
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class GeonorgeError(Exception):
    """Base exception for all Geonorge lookup errors, dood!

    Attributes:
        message: Human-readable error message
        url: Upstream URL involved (if any)
    """

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        logger.debug(f"{type(self).__name__}: {message} (url: {url})")

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class UpstreamUnavailableError(GeonorgeError):
    """Network or transport failure calling an upstream service.

    Covers timeouts, connection errors and non-200 responses.
    """

    def __init__(self, message: str, url: Optional[str] = None, statusCode: Optional[int] = None) -> None:
        super().__init__(message, url)
        self.statusCode = statusCode


class MalformedResponseError(GeonorgeError):
    """Upstream returned data that does not match the expected shape"""

    pass


class EmptyResultSetError(GeonorgeError):
    """Upstream lookup returned zero records"""

    pass


class NoCandidatesError(EmptyResultSetError):
    """Proximity ranking was asked to pick from an empty candidate list"""

    pass
