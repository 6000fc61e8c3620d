"""Records produced by the position stream."""

from pysatloc.models._base import SatLocBaseModel
from pysatloc.models.error import ErrorRecord
from pysatloc.models.position import PositionRecord
from pysatloc.models.stats import StreamStats

__all__ = [
    "ErrorRecord",
    "PositionRecord",
    "SatLocBaseModel",
    "StreamStats",
]
