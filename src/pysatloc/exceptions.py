"""Custom exception hierarchy for pysatloc."""

from __future__ import annotations

import errno as _errno


class SatLocError(Exception):
    """Base exception for all pysatloc errors."""


class SatLocConfigError(SatLocError):
    """Configuration value that cannot be interpreted."""


class SatLocTransportError(SatLocError):
    """Network-level failure while talking to the position service.

    Raised by fetchers when no response body could be obtained (DNS
    failure, refused connection, reset, timeout).  HTTP error statuses
    are *not* transport errors: their bodies are returned as-is.

    Parameters
    ----------
    message : str
        Human-readable description.
    errno : int or None
        OS-level error number of the underlying failure, when known.
    status_code : int or None
        HTTP status, when the failure happened after a status line.
    url : str
        Requested URL.
    """

    def __init__(
        self,
        message: str,
        *,
        errno: int | None = None,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.errno = errno
        self.status_code = status_code
        self.url = url
        super().__init__(message)

    @property
    def code(self) -> str | None:
        """Symbolic errno name (e.g. ``"ECONNREFUSED"``), when known."""
        if self.errno is None:
            return None
        return _errno.errorcode.get(self.errno)
