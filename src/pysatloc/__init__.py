"""pysatloc - Async polling stream of satellite positions."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysatloc")
except PackageNotFoundError:
    __version__ = "0+local"
from pysatloc._transport import Fetcher, SatLocFetcher
from pysatloc.config import StreamConfig
from pysatloc.exceptions import SatLocConfigError, SatLocError, SatLocTransportError
from pysatloc.models import ErrorRecord, PositionRecord, StreamStats
from pysatloc.stream import SatLocStream, StreamState, adjust_for_lag

__all__ = [
    "__version__",
    "ErrorRecord",
    "Fetcher",
    "PositionRecord",
    "SatLocConfigError",
    "SatLocError",
    "SatLocFetcher",
    "SatLocStream",
    "SatLocTransportError",
    "StreamConfig",
    "StreamState",
    "StreamStats",
    "adjust_for_lag",
]
