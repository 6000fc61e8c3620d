"""Internal constants shared across the library."""

BASE_URL = "https://api.wheretheiss.at/v1/satellites"
USER_AGENT = "pysatloc/0 (+aiohttp)"

# ------------------------------------------------------------------
# Satellite catalog
# ------------------------------------------------------------------

# NORAD catalog numbers the remote service can track.
VALID_SATELLITE_IDS: tuple[str, ...] = ("25544",)
DEFAULT_SATELLITE_ID = "25544"

# ------------------------------------------------------------------
# Polling interval (milliseconds)
# ------------------------------------------------------------------

DEFAULT_INTERVAL_MS = 1000
INTERVAL_MIN_MS = 500

# ------------------------------------------------------------------
# Stream options
# ------------------------------------------------------------------

CALCULATE_CHANGE = "calculateChange"
SUPPORTED_OPTIONS: frozenset[str] = frozenset({CALCULATE_CHANGE})

# snake_case spellings accepted for option keys
OPTION_ALIASES: dict[str, str] = {
    "calculate_change": CALCULATE_CHANGE,
}
