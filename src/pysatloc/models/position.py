"""Satellite position record."""

from __future__ import annotations

from pydantic import ConfigDict

from pysatloc.models._base import SatLocBaseModel


class PositionRecord(SatLocBaseModel):
    """Position of a satellite as reported by the position service.

    Only ``timestamp``, ``latitude`` and ``longitude`` are validated. Every
    other field the service sends (``name``, ``id``, ``altitude``,
    ``velocity``, ``visibility``, ``solar_lat``, ...) is passed through
    untouched as an extra attribute, ``null`` values included.

    Parameters
    ----------
    timestamp : float
        Seconds since the epoch, as reported by the service.
    latitude : float
        Sub-satellite latitude in degrees.
    longitude : float
        Sub-satellite longitude in degrees.
    latitude_delta_per_second : float or None
        Latitude rate of change relative to the previous record.
    longitude_delta_per_second : float or None
        Longitude rate of change relative to the previous record.
    """

    model_config = ConfigDict(extra="allow")

    timestamp: float
    latitude: float
    longitude: float

    latitude_delta_per_second: float | None = None
    longitude_delta_per_second: float | None = None

    @property
    def has_change(self) -> bool:
        """Whether rate-of-change fields are attached."""
        return self.latitude_delta_per_second is not None and self.longitude_delta_per_second is not None

    def with_change(self, latitude_delta: float, longitude_delta: float) -> PositionRecord:
        """Return a copy augmented with per-second deltas."""
        return self.model_copy(
            update={
                "latitude_delta_per_second": latitude_delta,
                "longitude_delta_per_second": longitude_delta,
            }
        )
