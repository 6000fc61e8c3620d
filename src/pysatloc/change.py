"""Rate-of-change computation between two consecutive positions."""

from __future__ import annotations

from pysatloc.models.position import PositionRecord


def _same_hemisphere(a: float, b: float) -> bool:
    return (a > 0 and b > 0) or (a < 0 and b < 0)


def latitude_distance(current: float, previous: float) -> float:
    """Angular latitude distance travelled between two samples, in degrees.

    When the samples lie on opposite sides of the equator (or one sits on
    it) the path over the pole is considered as well and the shorter of
    the two is used.
    """
    direct = abs(current - previous)
    if _same_hemisphere(current, previous):
        return direct
    over_pole = (180 - abs(current)) + (180 - abs(previous))
    return min(over_pole, direct)


def compute_change(current: PositionRecord, previous: PositionRecord) -> tuple[float, float]:
    """Return ``(latitude_delta, longitude_delta)`` in degrees per second.

    Both deltas are ``0.0`` when the two records share a timestamp.
    """
    elapsed = current.timestamp - previous.timestamp
    if elapsed == 0:
        return 0.0, 0.0

    latitude_delta = latitude_distance(current.latitude, previous.latitude) / elapsed
    longitude_delta = abs(current.longitude - previous.longitude) / elapsed
    return latitude_delta, longitude_delta
