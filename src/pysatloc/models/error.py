"""Normalized failure record."""

from __future__ import annotations

from pysatloc.models._base import SatLocBaseModel


class ErrorRecord(SatLocBaseModel):
    """A failure surfaced to the consumer in place of a position.

    Parameters
    ----------
    error : int or str
        ``errno`` or HTTP status of the failure, ``"parse_error"`` for an
        undecodable body, or the generic ``"error"`` tag.
    message : str
        Human-readable description.
    detail : str or None
        Where the failure originated (remote service vs. connection).
    """

    error: int | str
    message: str
    detail: str | None = None
